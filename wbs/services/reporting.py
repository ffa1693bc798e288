"""
Progress reporting derived from a rolled-up WBS.

Only top-level tasks enter the project-wide figures; their weight and
progress already include everything below them. A flat WBS (no rollup)
has no hierarchy, so every task counts as top-level there.
"""

from datetime import date
from typing import List, NamedTuple, Optional

from wbs.domain.task import TaskStatus
from wbs.services.rollup import round_half_up


class SCurvePoint(NamedTuple):
    """One point of the cumulative planned/actual progress series."""

    date: Optional[date]
    planned: int
    actual: int

    def to_dict(self):
        return {
            "date": self.date.isoformat() if self.date else None,
            "planned": self.planned,
            "actual": self.actual,
        }


class WeightValidation(NamedTuple):
    """Result of checking that top-level weights add up to 100."""

    total: int
    is_valid: bool


def top_level_tasks(tasks, flat=False):
    """Get the tasks without a derived parent (all tasks if flat), in input order"""
    if flat:
        return list(tasks)
    return [task for task in tasks if task.is_top_level()]


def overall_progress(tasks, flat=False) -> int:
    """
    Calculate the overall project progress.

    The result is the weight-averaged progress of the top-level tasks.

    Args:
        tasks: Rolled-up task collection
        flat: If True, every task counts as top-level

    Returns:
        int: Overall progress percentage, 0 when there are no top-level
        tasks or their weights sum to 0
    """
    main_tasks = top_level_tasks(tasks, flat=flat)
    if not main_tasks:
        return 0

    total_weight = sum(task.weight for task in main_tasks)
    if total_weight == 0:
        return 0

    weighted_sum = sum(task.progress * task.weight for task in main_tasks)
    return round_half_up(weighted_sum / total_weight)


def _end_date_key(task):
    # Undated tasks go last, keeping their relative order
    return (task.end_date is None, task.end_date or date.min)


def s_curve(tasks, today: Optional[date] = None, flat=False) -> List[SCurvePoint]:
    """
    Generate the cumulative planned vs. actual progress series (S-curve).

    Top-level tasks are ordered by end date; each contributes its weight to
    the planned series and its earned weight (progress * weight / 100) to
    the actual series.

    Args:
        tasks: Rolled-up task collection
        today: Date of the placeholder point used when there are no
            top-level tasks (default: current date)
        flat: If True, every task counts as top-level

    Returns:
        list: SCurvePoint entries, one per top-level task, both series
        non-decreasing
    """
    main_tasks = top_level_tasks(tasks, flat=flat)
    if not main_tasks:
        return [SCurvePoint(today or date.today(), 0, 0)]

    data = []
    cumulative_planned = 0
    earned = 0  # sum of progress * weight, i.e. 100x the actual percentage

    for task in sorted(main_tasks, key=_end_date_key):
        cumulative_planned += task.weight
        earned += task.progress * task.weight
        data.append(
            SCurvePoint(
                task.end_date,
                round_half_up(cumulative_planned),
                round_half_up(earned / 100),
            )
        )

    return data


def total_top_level_weight(tasks, flat=False) -> int:
    """Sum the weights of all top-level tasks"""
    return sum(task.weight for task in top_level_tasks(tasks, flat=flat))


def validate_weights(tasks, flat=False) -> WeightValidation:
    """
    Check that top-level weights add up to 100.

    The rollup never enforces this; it is reported so that the editing
    surface can warn about it.
    """
    total = total_top_level_weight(tasks, flat=flat)
    return WeightValidation(total, total == 100)


def timeline_days(task) -> Optional[int]:
    """
    Get the length of a task's planning window in whole days.

    Returns:
        int: Number of days between start and end date, or None if either
        date is missing
    """
    if task.start_date is None or task.end_date is None:
        return None
    return abs((task.end_date - task.start_date).days)


def status_counts(tasks):
    """
    Count tasks per status label.

    Returns:
        dict: Status value -> number of tasks, including zero counts
    """
    counts = {status.value: 0 for status in TaskStatus}
    for task in tasks:
        counts[task.status] = counts.get(task.status, 0) + 1
    return counts


def project_summary(
    tasks, project_info=None, today: Optional[date] = None, flat=False
):
    """
    Collect the figures shown on the printed project report.

    Args:
        tasks: Rolled-up task collection
        project_info: Optional ProjectInfo for the report header
        today: Status date of the report (default: current date)
        flat: If True, every task counts as top-level

    Returns:
        dict: Summary figures; dates are ``datetime.date`` objects
    """
    tasks = list(tasks)
    today = today or date.today()
    validation = validate_weights(tasks, flat=flat)
    start_dates = [task.start_date for task in tasks if task.start_date]
    end_dates = [task.end_date for task in tasks if task.end_date]
    aggregate_count = sum(1 for task in tasks if task.is_calculated)

    return {
        "project": project_info.to_dict() if project_info else None,
        "status_date": today,
        "overall_progress": overall_progress(tasks, flat=flat),
        "total_weight": validation.total,
        "weight_valid": validation.is_valid,
        "task_count": len(tasks),
        "top_level_count": len(top_level_tasks(tasks, flat=flat)),
        "aggregate_count": aggregate_count,
        "leaf_count": len(tasks) - aggregate_count,
        "status_counts": status_counts(tasks),
        "start_date": min(start_dates) if start_dates else None,
        "end_date": max(end_dates) if end_dates else None,
        "s_curve": s_curve(tasks, today=today, flat=flat),
    }


def format_summary(summary) -> str:
    """
    Render a project summary as printable text.

    Args:
        summary: Dictionary returned by ``project_summary``

    Returns:
        str: Multi-line report
    """
    lines = []
    project = summary.get("project")
    title = f"WBS Progress Report: {project['name']}" if project else "WBS Progress Report"
    lines.append(title)
    lines.append("=" * len(title))
    if project:
        if project.get("owner"):
            lines.append(f"Owner: {project['owner']}")
        if project.get("executor"):
            lines.append(f"Executor: {project['executor']}")
    lines.append(f"Status Date: {summary['status_date'].isoformat()}")
    if summary["start_date"] and summary["end_date"]:
        lines.append(
            f"Planned Window: {summary['start_date'].isoformat()} to "
            f"{summary['end_date'].isoformat()}"
        )
    lines.append(f"Overall Progress: {summary['overall_progress']}%")

    weight_note = "OK" if summary["weight_valid"] else "should be 100"
    lines.append(f"Top-Level Weight: {summary['total_weight']}% ({weight_note})")
    lines.append(
        f"Tasks: {summary['task_count']} "
        f"({summary['top_level_count']} top-level, "
        f"{summary['aggregate_count']} calculated, {summary['leaf_count']} manual)"
    )

    lines.append("\nStatus:")
    for status, count in summary["status_counts"].items():
        lines.append(f"  {status}: {count}")

    lines.append("\nS-Curve (cumulative %):")
    for point in summary["s_curve"]:
        date_str = point.date.isoformat() if point.date else "undated"
        lines.append(
            f"  {date_str}  planned {point.planned:>3}%  actual {point.actual:>3}%"
        )

    return "\n".join(lines)
