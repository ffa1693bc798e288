from wbs.domain.task import Task
from wbs.services.store import WBSStore
from wbs.services.reporting import project_summary, format_summary


def sample_tasks():
    """Build the task records of the sample software project."""
    return [
        Task("1.0", "Project Start", start_date="2023-11-01", end_date="2023-11-15"),
        Task(
            "1.1",
            "Requirements",
            weight=5,
            progress=100,
            start_date="2023-11-01",
            end_date="2023-11-08",
        ),
        Task(
            "1.2",
            "Planning",
            weight=5,
            progress=100,
            start_date="2023-11-08",
            end_date="2023-11-15",
            dependencies=[{"predecessorId": "1.1", "type": "FS"}],
        ),
        Task("2.0", "Design", start_date="2023-11-16", end_date="2023-11-30"),
        Task(
            "2.1",
            "UI Mockups",
            weight=10,
            progress=100,
            start_date="2023-11-16",
            end_date="2023-11-23",
            dependencies=[{"predecessorId": "1.2", "type": "FS"}],
        ),
        Task(
            "2.2",
            "Database Schema",
            weight=10,
            progress=60,
            start_date="2023-11-23",
            end_date="2023-11-30",
            status="At Risk",
            dependencies=[{"predecessorId": "2.1", "type": "FS"}],
        ),
        Task("3.0", "Development", start_date="2023-12-01", end_date="2023-12-15"),
        Task(
            "3.1",
            "Frontend",
            weight=20,
            progress=30,
            start_date="2023-12-01",
            end_date="2023-12-15",
            status="On Going",
            dependencies=[{"predecessorId": "2.2", "type": "FS"}],
        ),
        Task(
            "3.2",
            "Backend",
            weight=20,
            progress=10,
            start_date="2023-12-01",
            end_date="2023-12-15",
            status="Delayed",
            dependencies=[{"predecessorId": "3.1", "type": "SS"}],
        ),
        Task(
            "4.0",
            "Testing",
            weight=20,
            progress=0,
            start_date="2023-12-16",
            end_date="2023-12-25",
            dependencies=[{"predecessorId": "3.0", "type": "FS"}],
        ),
        Task(
            "5.0",
            "Deployment",
            weight=10,
            progress=0,
            start_date="2023-12-26",
            end_date="2023-12-31",
            dependencies=[{"predecessorId": "4.0", "type": "FS"}],
        ),
    ]


def create_sample_project(store=None, verbose=True):
    """
    Load the sample project into a store and print its progress report.

    Args:
        store: Optional WBSStore to fill (default: in-memory store)
        verbose: Whether to print the report

    Returns:
        WBSStore: The store holding the sample project
    """
    if store is None:
        store = WBSStore(project_id="sample", persist=False)

    store.load_tasks(sample_tasks())
    store.update_project_info(
        name="Project Alpha", owner="John Doe", executor="Development Team A"
    )

    if verbose:
        summary = project_summary(
            store.tasks, project_info=store.project_info, flat=store.flat
        )
        print(format_summary(summary))

    return store


if __name__ == "__main__":
    create_sample_project()
