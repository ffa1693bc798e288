from wbs.services.rollup import recompute, classify, flatten
from wbs.services.reporting import (
    overall_progress,
    s_curve,
    validate_weights,
    project_summary,
    format_summary,
)
from wbs.services.store import WBSStore, StoreError

__all__ = [
    "recompute",
    "classify",
    "flatten",
    "overall_progress",
    "s_curve",
    "validate_weights",
    "project_summary",
    "format_summary",
    "WBSStore",
    "StoreError",
]
