"""
WBS Progress Tracker
====================

Work breakdown structure tracking with hierarchical rollup of weight and
progress, and S-curve progress reporting.

Available modules:
- domain: Task, Dependency and ProjectInfo
- services.rollup: bottom-up recompute of aggregate tasks
- services.reporting: overall progress, S-curve and project summary
- services.store: persisted project task collection
- visualization: S-curve, Gantt and PDF report rendering
"""

from wbs.domain.task import Task, TaskError, TaskStatus, Dependency, DependencyType
from wbs.domain.project import ProjectInfo
from wbs.services.rollup import recompute
from wbs.services.reporting import overall_progress, s_curve
from wbs.services.store import WBSStore, StoreError

__all__ = [
    "Task",
    "TaskError",
    "TaskStatus",
    "Dependency",
    "DependencyType",
    "ProjectInfo",
    "recompute",
    "overall_progress",
    "s_curve",
    "WBSStore",
    "StoreError",
]
