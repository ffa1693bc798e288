from datetime import date, datetime
from enum import Enum
from typing import List, Dict, Union, Optional, Any

from wbs.utils.hierarchy import TaskPath


class TaskStatus(Enum):
    """
    Enum representing the status label of a task.

    The status is a free-standing label chosen by the user; it is never
    derived from progress or dates.
    """

    ON_TRACK = "On Track"
    ON_GOING = "On Going"
    AT_RISK = "At Risk"
    DELAYED = "Delayed"


class DependencyType(Enum):
    """
    Enum representing the relationship type of a dependency.
    """

    FS = "FS"  # Finish-to-Start
    SS = "SS"  # Start-to-Start
    SF = "SF"  # Start-to-Finish
    FF = "FF"  # Finish-to-Finish


class TaskError(Exception):
    """Exception raised for errors in the Task class."""

    pass


def _parse_enum(enum_cls, value, label):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        pass
    if isinstance(value, str) and value.upper() in enum_cls.__members__:
        return enum_cls[value.upper()]
    valid_values = [member.value for member in enum_cls]
    raise TaskError(f"Invalid {label}: {value}. Must be one of {valid_values}")


def parse_date(value) -> Optional[date]:
    """
    Convert a date-like value to a ``datetime.date``.

    Args:
        value: A date, datetime, ISO formatted string (YYYY-MM-DD) or None

    Returns:
        The parsed date, or None for empty values

    Raises:
        TaskError: If the value cannot be interpreted as a date
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            raise TaskError(f"Invalid date: {value}. Expected YYYY-MM-DD")
    raise TaskError(f"Dates must be date objects or ISO strings, got {type(value)}")


class Dependency:
    """
    A predecessor reference attached to a task.

    Dependencies are display-only annotations: nothing in the rollup or the
    reports reads them, and a predecessor id that matches no task is kept
    as-is.
    """

    def __init__(self, predecessor_id: str, type: Union[str, DependencyType] = "FS"):
        if predecessor_id is None or str(predecessor_id).strip() == "":
            raise TaskError("Dependency predecessor ID cannot be None or empty")
        self.predecessor_id = str(predecessor_id)
        self._type = _parse_enum(DependencyType, type, "dependency type")

    @property
    def type(self) -> str:
        """Get the dependency type code (FS, SS, SF or FF)."""
        return self._type.value

    def to_dict(self) -> Dict[str, str]:
        return {"predecessorId": self.predecessor_id, "type": self.type}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Dependency":
        if "predecessorId" in data:
            predecessor_id = data["predecessorId"]
        else:
            predecessor_id = data.get("predecessor_id")
        return cls(predecessor_id, data.get("type", "FS"))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Dependency):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"Dependency({self.predecessor_id}, {self.type})"


class Task:
    """
    Represents a task in a Work Breakdown Structure (WBS).

    The position of a task in the hierarchy is encoded in its dotted id:
    "1.0" is a top-level task, "1.1" and "1.2" are its children and "1.1.1"
    is a child of "1.1". Leaf tasks carry user-entered weight and progress;
    tasks with children get both values from the rollup engine.
    """

    def __init__(
        self,
        id: str,
        name: str,
        weight: int = 0,
        progress: int = 0,
        level: Optional[int] = None,
        start_date: Union[date, str, None] = None,
        end_date: Union[date, str, None] = None,
        status: Union[str, TaskStatus] = TaskStatus.ON_TRACK,
        dependencies: Optional[List] = None,
        is_calculated: bool = False,
    ):
        """
        Initialize a new Task.

        Args:
            id: Dot-segmented hierarchical identifier, unique in the project
            name: Display label of the task
            weight: Share of the parent's total (0-100)
            progress: Percent complete (0-100)
            level: Nesting depth, derived from the id when omitted
            start_date: Planned start date
            end_date: Planned end date
            status: Status label (TaskStatus or its string value)
            dependencies: List of Dependency objects or dicts with
                predecessorId/type keys
            is_calculated: Whether the task is an aggregate; recomputed by
                the rollup engine and never trusted from input

        Raises:
            TaskError: If the id, name, status, dates or dependencies are malformed
        """
        if id is None or str(id).strip() == "":
            raise TaskError("Task ID cannot be None or empty")
        self.id = str(id)

        if not isinstance(name, str):
            raise TaskError("Task name must be a string")
        self.name = name

        # Numbers are not range checked here; that belongs to the editing surface
        self.weight = weight
        self.progress = progress

        self.level = level if level is not None else TaskPath.parse(self.id).depth

        self.start_date = parse_date(start_date)
        self.end_date = parse_date(end_date)

        self._status = _parse_enum(TaskStatus, status, "status")

        self.dependencies = []
        if dependencies:
            if not isinstance(dependencies, list):
                raise TaskError("Dependencies must be a list")
            for dependency in dependencies:
                if isinstance(dependency, Dependency):
                    self.dependencies.append(dependency)
                elif isinstance(dependency, dict):
                    self.dependencies.append(Dependency.from_dict(dependency))
                else:
                    # A bare predecessor id defaults to Finish-to-Start
                    self.dependencies.append(Dependency(dependency))

        self.is_calculated = bool(is_calculated)

    @property
    def status(self) -> str:
        """Get the status label of the task."""
        return self._status.value

    @status.setter
    def status(self, value: Union[str, TaskStatus]):
        """Set the status label of the task."""
        self._status = _parse_enum(TaskStatus, value, "status")

    @property
    def path(self) -> TaskPath:
        """Get the parsed hierarchical path of the task id."""
        return TaskPath.parse(self.id)

    @property
    def parent_id(self) -> Optional[str]:
        """Get the derived parent id, or None for a top-level task."""
        return self.path.parent_id

    def is_top_level(self) -> bool:
        """
        Check if this task has no derived parent.

        Returns:
            True if the task is top-level, False otherwise
        """
        return self.parent_id is None

    def predecessor_ids(self) -> List[str]:
        """
        Get the ids of all predecessors referenced by this task.

        Returns:
            List of predecessor task IDs, in declaration order
        """
        return [dependency.predecessor_id for dependency in self.dependencies]

    def copy(self, **changes) -> "Task":
        """
        Create an independent copy of this task, optionally with changed fields.

        Args:
            **changes: Field values to override in the copy

        Returns:
            Task: New task instance
        """
        fields = {
            "id": self.id,
            "name": self.name,
            "weight": self.weight,
            "progress": self.progress,
            "level": self.level,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "status": self._status,
            "dependencies": [
                Dependency(d.predecessor_id, d.type) for d in self.dependencies
            ],
            "is_calculated": self.is_calculated,
        }
        unknown = set(changes) - set(fields)
        if unknown:
            raise TaskError(f"Unknown task fields: {sorted(unknown)}")
        fields.update(changes)
        return Task(**fields)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert task to its storage representation.

        Returns:
            dict: Dictionary with camelCase keys and ISO formatted dates
        """
        return {
            "id": self.id,
            "name": self.name,
            "weight": self.weight,
            "progress": self.progress,
            "level": self.level,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "status": self.status,
            "dependencies": [d.to_dict() for d in self.dependencies],
            "isCalculated": self.is_calculated,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """
        Create a task from its storage representation.

        Both camelCase keys (as written by ``to_dict``) and snake_case keys
        are accepted.

        Args:
            data: Dictionary representation of the task

        Returns:
            Task: New task instance

        Raises:
            TaskError: If required keys are missing
        """
        if "id" not in data or "name" not in data:
            raise TaskError("Task records require 'id' and 'name'")

        def pick(camel, snake, default=None):
            if camel in data:
                return data[camel]
            return data.get(snake, default)

        return cls(
            id=data["id"],
            name=data["name"],
            weight=data.get("weight", 0),
            progress=data.get("progress", 0),
            level=data.get("level"),
            start_date=pick("startDate", "start_date"),
            end_date=pick("endDate", "end_date"),
            status=data.get("status", TaskStatus.ON_TRACK),
            dependencies=data.get("dependencies") or [],
            is_calculated=pick("isCalculated", "is_calculated", False),
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        kind = "aggregate" if self.is_calculated else "leaf"
        return (
            f"Task(id={self.id}, name={self.name}, weight={self.weight}, "
            f"progress={self.progress}%, {kind}, status={self.status})"
        )
