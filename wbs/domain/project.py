from typing import Dict, Any


class ProjectInfoError(Exception):
    """Exception raised for errors in the ProjectInfo class."""

    pass


class ProjectInfo:
    """
    Descriptive header of a project, shown on reports and charts.
    """

    def __init__(
        self,
        name: str = "Untitled Project",
        owner: str = "",
        executor: str = "",
    ):
        """
        Initialize project information.

        Args:
            name: Project name
            owner: Person or organisation that owns the project
            executor: Team carrying out the work

        Raises:
            ProjectInfoError: If the name is empty
        """
        if not name or not isinstance(name, str):
            raise ProjectInfoError("Project name must be a non-empty string")
        self.name = name
        self.owner = owner or ""
        self.executor = executor or ""

    def update(self, **fields) -> "ProjectInfo":
        """
        Return a new ProjectInfo with the given fields replaced.

        Raises:
            ProjectInfoError: If an unknown field is given or the name is empty
        """
        data = self.to_dict()
        unknown = set(fields) - set(data)
        if unknown:
            raise ProjectInfoError(f"Unknown project fields: {sorted(unknown)}")
        data.update({key: value for key, value in fields.items() if value is not None})
        return ProjectInfo.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "owner": self.owner, "executor": self.executor}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectInfo":
        return cls(
            name=data.get("name", "Untitled Project"),
            owner=data.get("owner", ""),
            executor=data.get("executor", ""),
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, ProjectInfo):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"ProjectInfo(name={self.name}, owner={self.owner}, executor={self.executor})"
