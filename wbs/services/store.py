import json
import logging
import os

from wbs.config import config
from wbs.domain.project import ProjectInfo
from wbs.domain.task import Task
from wbs.services.rollup import recompute, flatten
from wbs.utils.hierarchy import derive_level

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Exception raised for errors in the WBSStore class."""

    pass


class WBSStore:
    """
    Owns the task collection of one project.

    Every mutation runs the full rollup over the complete collection and
    then persists the result, so the stored data is always consistent.
    Callers only ever receive copies of the stored tasks.
    """

    def __init__(
        self,
        project_id=None,
        storage_dir=None,
        rollup=True,
        strict=False,
        persist=True,
    ):
        """
        Initialize a store and load any previously saved project.

        Args:
            project_id: Key under which the project is stored
                (default: configured default project)
            storage_dir: Directory holding the JSON files
                (default: configured storage directory)
            rollup: If True, aggregate tasks from their children; if False,
                keep every task flat and manually edited
            strict: If True, reject direct weight/progress edits on
                calculated tasks instead of letting the rollup overwrite them
            persist: If False, keep the project in memory only

        Raises:
            StoreError: If the stored file cannot be read
        """
        self.project_id = project_id or config["default_project"]
        self.storage_dir = storage_dir or config["storage_dir"]
        self.rollup = rollup
        self.strict = strict
        self.persist = persist

        self._tasks = []
        self._project_info = ProjectInfo(name=self.project_id)

        if self.persist and os.path.exists(self.path):
            self.load()

    @property
    def path(self):
        """Get the path of the JSON file backing this project."""
        return os.path.join(self.storage_dir, f"{self.project_id}.json")

    @property
    def tasks(self):
        """Get a copy of the current (recomputed) task collection."""
        return [task.copy() for task in self._tasks]

    @property
    def project_info(self):
        return self._project_info

    def get_task(self, task_id):
        """
        Get a copy of a single task.

        Raises:
            StoreError: If no task has the given id
        """
        return self._find(task_id).copy()

    def _find(self, task_id):
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise StoreError(f"Task {task_id} not found")

    @property
    def flat(self):
        """True if tasks are kept flat, so every task counts as top-level."""
        return not self.rollup

    def _recalculate(self, tasks):
        if self.rollup:
            return recompute(tasks)
        return flatten(tasks)

    def _commit(self, tasks):
        self._tasks = self._recalculate(tasks)
        if self.persist:
            self.save()
        return self.tasks

    def add_task(self, task):
        """
        Add a task and recompute the project.

        Args:
            task: Task object or dictionary with a full task record

        Returns:
            list: The recomputed task collection

        Raises:
            StoreError: If a task with the same id already exists
        """
        if isinstance(task, dict):
            task = Task.from_dict(task)
        if any(existing.id == task.id for existing in self._tasks):
            raise StoreError(f"Task {task.id} already exists")

        logger.info("Adding WBS item %s (%s)", task.id, task.name)
        return self._commit(self._tasks + [task.copy()])

    def update_task(self, task_id, **updates):
        """
        Update fields of a task and recompute the project.

        Weight and progress edits on a calculated task are accepted but
        overwritten by the rollup, unless the store is strict.

        Args:
            task_id: Id of the task to update
            **updates: Task fields to change (see ``Task.copy``)

        Returns:
            list: The recomputed task collection

        Raises:
            StoreError: If the task does not exist, the new id is taken, or
                a strict store receives a weight/progress edit for a
                calculated task
        """
        current = self._find(task_id)
        updates.pop("is_calculated", None)

        if self.strict and current.is_calculated:
            locked = sorted({"weight", "progress"} & set(updates))
            if locked:
                raise StoreError(
                    f"Task {task_id} is calculated from its children; "
                    f"cannot set {', '.join(locked)}"
                )

        new_id = updates.get("id", task_id)
        if new_id != task_id:
            if any(task.id == new_id for task in self._tasks):
                raise StoreError(f"Task {new_id} already exists")
            updates.setdefault("level", derive_level(new_id))

        updated = current.copy(**updates)
        logger.info("Updating WBS item %s: %s", task_id, sorted(updates))
        tasks = [updated if task is current else task for task in self._tasks]
        return self._commit(tasks)

    def delete_task(self, task_id):
        """
        Delete a task and recompute the project.

        Children of the deleted task are kept; they become orphans until a
        task with the parent id is added again.

        Returns:
            list: The recomputed task collection

        Raises:
            StoreError: If the task does not exist
        """
        current = self._find(task_id)
        logger.info("Deleting WBS item %s", task_id)
        tasks = [task for task in self._tasks if task is not current]
        result = self._commit(tasks)
        logger.debug("%d WBS items remaining after delete", len(result))
        return result

    def load_tasks(self, tasks):
        """
        Replace the whole task collection.

        Args:
            tasks: Iterable of Task objects or task dictionaries

        Returns:
            list: The recomputed task collection

        Raises:
            StoreError: If the ids are not unique
        """
        new_tasks = [
            Task.from_dict(task) if isinstance(task, dict) else task.copy()
            for task in tasks
        ]
        seen = set()
        for task in new_tasks:
            if task.id in seen:
                raise StoreError(f"Duplicate task id {task.id}")
            seen.add(task.id)

        logger.info("Loading %d WBS items", len(new_tasks))
        return self._commit(new_tasks)

    def reset(self):
        """Remove every task from the project."""
        logger.info("Clearing all WBS data for project %s", self.project_id)
        return self._commit([])

    def update_project_info(self, **fields):
        """
        Update the project header and persist it.

        Returns:
            ProjectInfo: The new project information
        """
        self._project_info = self._project_info.update(**fields)
        if self.persist:
            self.save()
        return self._project_info

    def to_dict(self):
        return {
            "project": self._project_info.to_dict(),
            "tasks": [task.to_dict() for task in self._tasks],
        }

    def save(self):
        """Write the project to its JSON file."""
        os.makedirs(self.storage_dir, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.debug("Saved project %s to %s", self.project_id, self.path)

    def load(self):
        """
        Read the project from its JSON file.

        The stored isCalculated flags and aggregate values are not trusted;
        the collection is recomputed after loading.

        Raises:
            StoreError: If the file is not valid project JSON
        """
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StoreError(f"Cannot read project file {self.path}: {e}") from e

        # Older files hold a bare list of tasks
        if isinstance(data, list):
            data = {"tasks": data}
        if not isinstance(data, dict):
            raise StoreError(f"Unexpected project file layout in {self.path}")

        if data.get("project"):
            self._project_info = ProjectInfo.from_dict(data["project"])
        self._tasks = self._recalculate(
            [Task.from_dict(record) for record in data.get("tasks", [])]
        )
        logger.debug("Loaded %d WBS items from %s", len(self._tasks), self.path)
        return self.tasks
