"""
WBS Visualization Package
=========================

Charts and printable reports built from a rolled-up task collection.

Available modules:
- s_curve: Target vs. Realization (S-curve) chart
- gantt: Gantt chart with dependency connectors
- report: multi-page PDF report
"""

from wbs.visualization.s_curve import create_s_curve_chart
from wbs.visualization.gantt import create_gantt_chart
from wbs.visualization.report import export_pdf_report

__all__ = [
    "create_s_curve_chart",
    "create_gantt_chart",
    "export_pdf_report",
]
