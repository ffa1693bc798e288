import matplotlib.pyplot as plt
import matplotlib.dates as mdates
import numpy as np
from datetime import date, timedelta
from matplotlib.patches import Patch

from wbs.config import config
from wbs.services.reporting import timeline_days
from wbs.utils.graph import build_dependency_graph

STATUS_COLORS = {
    "On Track": "#4ade80",
    "On Going": "#4ade80",
    "At Risk": "#fbbf24",
    "Delayed": "#f87171",
}

# Which end of the predecessor / successor bar each dependency type links
DEPENDENCY_ANCHORS = {
    "FS": ("end", "start"),
    "SS": ("start", "start"),
    "FF": ("end", "end"),
    "SF": ("start", "end"),
}


def _bar_dates(task):
    start = mdates.date2num(task.start_date)
    # End dates are inclusive, draw through the end of that day
    end = mdates.date2num(task.end_date + timedelta(days=1))
    if end <= start:
        end = start + 1  # Ensure minimum 1-day duration for visibility
    return start, end


def create_gantt_chart(
    tasks, filename=None, show=True, show_dependencies=True, today=None, title=None
):
    """
    Create a Gantt chart of the WBS timeline.

    Tasks are drawn in WBS order, names indented by level. Calculated
    (aggregate) tasks are drawn as thin summary bars. The completed part of
    each bar is filled in the status color.

    Args:
        tasks: Rolled-up task collection
        filename: Optional filename to save the chart
        show: Whether to display the chart (default: True)
        show_dependencies: Whether to draw dependency connectors
        today: Status date marked with a vertical line (default: current date)
        title: Optional chart title

    Returns:
        The matplotlib figure, or None if no task has both dates
    """
    tasks = list(tasks)
    dated_tasks = [task for task in tasks if task.start_date and task.end_date]
    if not dated_tasks:
        print("No tasks with start and end dates found. Nothing to draw.")
        return None

    today = today or date.today()

    fig, ax = plt.subplots(figsize=(14, max(4, 0.5 * len(dated_tasks) + 2)))

    rows = {task.id: i for i, task in enumerate(dated_tasks)}
    spans = {}

    for task in dated_tasks:
        i = rows[task.id]
        start, end = _bar_dates(task)
        spans[task.id] = (start, end)
        duration = end - start
        color = STATUS_COLORS.get(task.status, "#4ade80")
        height = 0.3 if task.is_calculated else 0.6

        # Planned window
        ax.barh(
            i,
            duration,
            left=start,
            height=height,
            color="#94a3b8",
            alpha=0.4,
            edgecolor="black" if task.is_calculated else None,
        )

        # Completed portion
        completed = duration * (task.progress / 100)
        if completed > 0:
            ax.barh(i, completed, left=start, height=height, color=color, alpha=0.9)

        ax.text(
            end + 0.5,
            i,
            f"{task.progress}% ({timeline_days(task)}d)",
            ha="left",
            va="center",
            color="black",
            fontsize=8,
        )

    if show_dependencies:
        graph = build_dependency_graph(dated_tasks)
        for predecessor_id, task_id, data in graph.edges(data=True):
            from_side, to_side = DEPENDENCY_ANCHORS[data["type"]]
            pred_start, pred_end = spans[predecessor_id]
            succ_start, succ_end = spans[task_id]
            x_from = pred_end if from_side == "end" else pred_start
            x_to = succ_start if to_side == "start" else succ_end
            ax.annotate(
                "",
                xy=(x_to, rows[task_id]),
                xytext=(x_from, rows[predecessor_id]),
                arrowprops=dict(
                    arrowstyle="->",
                    color="gray",
                    connectionstyle="angle,angleA=0,angleB=90,rad=5",
                    linewidth=1,
                ),
            )

    # Set up the axes
    ax.set_yticks(np.arange(len(dated_tasks)))
    ax.set_yticklabels(
        [f"{'    ' * task.level}{task.id} {task.name}" for task in dated_tasks]
    )
    ax.invert_yaxis()

    ax.xaxis_date()
    ax.xaxis.set_major_formatter(mdates.DateFormatter("%Y-%m-%d"))
    fig.autofmt_xdate()

    # Add vertical line for status date
    ax.axvline(x=mdates.date2num(today), color="#2563eb", linestyle="--", linewidth=2)

    ax.set_title(title or f"WBS Timeline (Status as of {today.strftime('%Y-%m-%d')})")
    ax.grid(axis="x", alpha=0.3)

    legend_elements = [
        Patch(facecolor="#4ade80", label="On Track / On Going"),
        Patch(facecolor="#fbbf24", label="At Risk"),
        Patch(facecolor="#f87171", label="Delayed"),
        Patch(facecolor="#94a3b8", alpha=0.4, label="Planned Window"),
        Patch(facecolor="#94a3b8", alpha=0.4, edgecolor="black", label="Calculated Task"),
    ]
    ax.legend(handles=legend_elements, loc="upper right", ncol=2, fontsize=8)

    # Adjust layout
    fig.tight_layout()

    # Save if filename provided
    if filename:
        fig.savefig(filename, dpi=config["chart_dpi"], bbox_inches="tight")

    # Show if requested
    if show:
        plt.show()

    return fig
