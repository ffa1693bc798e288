import matplotlib.pyplot as plt
import numpy as np
from datetime import date
from matplotlib.lines import Line2D

from wbs.config import config
from wbs.services.reporting import s_curve, overall_progress


def create_s_curve_chart(
    tasks, filename=None, show=True, project_name=None, today=None, flat=False
):
    """
    Generate the Target vs. Realization chart (S-curve) of a project.

    Args:
        tasks: Rolled-up task collection
        filename: Optional filename to save the chart
        show: Whether to display the chart (default: True)
        project_name: Optional project name for the chart title
        today: Status date used for the title and empty projects
        flat: If True, every task counts as top-level (WBS without rollup)

    Returns:
        The matplotlib figure
    """
    today = today or date.today()
    points = s_curve(tasks, today=today, flat=flat)

    fig, ax = plt.subplots(figsize=(10, 6))

    x = np.arange(len(points))
    planned = np.array([point.planned for point in points])
    actual = np.array([point.actual for point in points])

    # Target (planned) area
    ax.fill_between(x, 0, planned, color="#a78bfa", alpha=0.25)
    ax.plot(x, planned, color="#a78bfa", linewidth=2, marker="o")

    # Realization (actual) area
    ax.fill_between(x, 0, actual, color="#4ade80", alpha=0.25)
    ax.plot(x, actual, color="#4ade80", linewidth=2, marker="s")

    # Label the last point of both series
    ax.annotate(
        f"{planned[-1]}%",
        (x[-1], planned[-1]),
        xytext=(5, 5),
        textcoords="offset points",
        fontsize=9,
    )
    ax.annotate(
        f"{actual[-1]}%",
        (x[-1], actual[-1]),
        xytext=(5, -12),
        textcoords="offset points",
        fontsize=9,
    )

    # X ticks show the end date of each top-level task
    ax.set_xticks(x)
    ax.set_xticklabels(
        [
            point.date.strftime("%Y-%m-%d") if point.date else f"Week {i + 1}"
            for i, point in enumerate(points)
        ],
        rotation=45,
        ha="right",
    )

    ax.set_ylim(0, max(100, int(planned.max())) + 5)
    ax.set_yticks(np.arange(0, 101, 10))
    ax.set_ylabel("Cumulative Progress (%)", fontsize=12)
    ax.set_xlabel("Planned End Date", fontsize=12)

    progress = overall_progress(tasks, flat=flat)
    if project_name:
        title = f"Target vs Realization for {project_name} ({today.strftime('%Y-%m-%d')})"
    else:
        title = f"Target vs Realization ({today.strftime('%Y-%m-%d')})"
    ax.set_title(f"{title}\nOverall Progress: {progress}%", fontsize=14, weight="bold")

    legend_elements = [
        Line2D([0], [0], color="#a78bfa", marker="o", linewidth=2, label="Target (%)"),
        Line2D(
            [0], [0], color="#4ade80", marker="s", linewidth=2, label="Realization (%)"
        ),
    ]
    ax.legend(handles=legend_elements, loc="upper left", fontsize=10)

    ax.grid(True, linestyle="--", alpha=0.7)

    # Adjust layout
    fig.tight_layout()

    # Save if filename provided
    if filename:
        fig.savefig(filename, dpi=config["chart_dpi"], bbox_inches="tight")

    # Show if requested
    if show:
        plt.show()

    return fig
