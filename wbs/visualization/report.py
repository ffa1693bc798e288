import matplotlib.pyplot as plt
from datetime import date
from matplotlib.backends.backend_pdf import PdfPages

from wbs.services.reporting import project_summary, format_summary
from wbs.visualization.gantt import create_gantt_chart
from wbs.visualization.s_curve import create_s_curve_chart


def create_summary_page(summary):
    """Render the text project summary onto an A4 portrait figure"""
    fig = plt.figure(figsize=(8.27, 11.69))
    fig.text(
        0.08,
        0.95,
        format_summary(summary),
        ha="left",
        va="top",
        family="monospace",
        fontsize=10,
    )
    return fig


def export_pdf_report(tasks, filename, project_info=None, today=None, flat=False):
    """
    Export the printable project report as a multi-page PDF.

    Pages: text summary, S-curve chart and, when any task is dated, the
    Gantt chart. All numbers come from the reporting functions unchanged.

    Args:
        tasks: Rolled-up task collection
        filename: Path of the PDF file to write
        project_info: Optional ProjectInfo for the report header
        today: Status date of the report (default: current date)
        flat: If True, every task counts as top-level (WBS without rollup)

    Returns:
        int: Number of pages written
    """
    tasks = list(tasks)
    today = today or date.today()
    summary = project_summary(
        tasks, project_info=project_info, today=today, flat=flat
    )
    project_name = project_info.name if project_info else None

    figures = [
        create_summary_page(summary),
        create_s_curve_chart(
            tasks, show=False, project_name=project_name, today=today, flat=flat
        ),
    ]
    gantt = create_gantt_chart(tasks, show=False, today=today)
    if gantt is not None:
        figures.append(gantt)

    with PdfPages(filename) as pdf:
        for fig in figures:
            pdf.savefig(fig)
            plt.close(fig)

    return len(figures)
