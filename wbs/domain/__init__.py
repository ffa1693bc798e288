from wbs.domain.task import (
    Task,
    TaskError,
    TaskStatus,
    Dependency,
    DependencyType,
)
from wbs.domain.project import ProjectInfo, ProjectInfoError

__all__ = [
    "Task",
    "TaskError",
    "TaskStatus",
    "Dependency",
    "DependencyType",
    "ProjectInfo",
    "ProjectInfoError",
]
