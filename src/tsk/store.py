"""Task store - the JSON-backed collection of tasks.

The whole file is read into memory at startup, one operation mutates it,
and the full mapping is written back. Tasks are never erased: removing a
task stamps ``deleted_at`` and keeps its id, so ids are never reused.
"""

from __future__ import annotations

import fcntl
import json
import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path
from typing import IO

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

logger = logging.getLogger(__name__)


class Status(IntEnum):
    """Task workflow status, stored as its integer value."""

    TODO = 0
    DOING = 1
    ONTEST = 2
    DONE = 3


class TaskError(Exception):
    """Base class for task store errors."""


class UserInputError(TaskError):
    """Raised when the user supplies an unusable value."""


class NotFoundError(TaskError):
    """Raised when a task id is missing or already deleted."""

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task [{task_id}] not found")


class StoreWriteError(TaskError):
    """Raised when the task file cannot be written."""


class Task(BaseModel):
    """A single task record."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="label")
    # Kept as a plain int so unknown values survive a load/save cycle
    status: int = int(Status.TODO)
    created_at: int = 0
    updated_at: int = 0
    deleted_at: int = 0

    @property
    def deleted(self) -> bool:
        return self.deleted_at != 0


def status_label(status: int) -> str:
    """Map a stored status value to its display label."""
    try:
        return Status(status).name
    except ValueError:
        return "UNKNOWN"


def _now() -> int:
    return int(time.time())


@contextmanager
def _locked(f: IO[str], operation: int, enabled: bool = True) -> Iterator[None]:
    """Hold an flock on an open file for the duration of the block."""
    if not enabled:
        yield
        return

    fcntl.flock(f.fileno(), operation)
    try:
        yield
    finally:
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)


class TaskStore(BaseModel):
    """All tasks, deleted ones included, keyed by numeric id."""

    tasks: dict[int, Task] = Field(default_factory=dict)

    _path: str = PrivateAttr(default="")
    _lock: bool = PrivateAttr(default=True)
    _from_file: bool = PrivateAttr(default=False)

    @classmethod
    def load(cls, path: str | Path, lock: bool = True) -> TaskStore:
        """Load tasks from file.

        A missing, empty or unparsable file yields an empty store.
        """
        try:
            with open(path) as f:
                with _locked(f, fcntl.LOCK_SH, lock):
                    content = f.read()
            store = cls.model_validate({"tasks": json.loads(content)})
            store._from_file = True
        except (OSError, ValueError) as e:
            logger.info("No tasks (%s: %s)", path, e)
            store = cls()

        store._path = str(path)
        store._lock = lock
        return store

    @property
    def path(self) -> str:
        return self._path

    @property
    def from_file(self) -> bool:
        """False when load fell back to an empty store."""
        return self._from_file

    def to_dict(self) -> dict[str, dict]:
        """Convert to the on-disk mapping of decimal-string ids to tasks."""
        return {
            str(task_id): task.model_dump(by_alias=True)
            for task_id, task in sorted(self.tasks.items())
        }

    def save(self, path: str | Path | None = None) -> bool:
        """Write the whole store to disk, replacing the file.

        Returns False without writing when there is nothing to save or
        nowhere to save it.
        """
        target = self._path if path is None else str(path)

        if not self.tasks or not target:
            logger.warning("Filename and tasks are required")
            return False

        try:
            with open(target, "w") as f:
                with _locked(f, fcntl.LOCK_EX, self._lock):
                    json.dump(self.to_dict(), f, indent=2)
        except OSError as e:
            raise StoreWriteError(f"Could not write {target}: {e}") from e

        logger.debug("Saved %d tasks to %s", len(self.tasks), target)
        return True

    def next_id(self) -> int:
        """Return the next unused task id."""
        return max(self.tasks, default=0) + 1

    def add(self, name: str) -> tuple[int, Task]:
        """Add a new TODO task and persist the store.

        Raises:
            UserInputError: If the name is empty or only whitespace.
        """
        name = name.strip()
        if not name:
            raise UserInputError("Task name is required")

        now = _now()
        task = Task(name=name, status=int(Status.TODO), created_at=now, updated_at=now)
        task_id = self.next_id()
        self.tasks[task_id] = task
        self.save()
        return task_id, task

    def remove(self, task_id: int) -> Task:
        """Soft-delete a task and persist the store.

        Raises:
            NotFoundError: If the id is unknown or the task is already deleted.
        """
        task = self.tasks.get(task_id)
        if task is None or task.deleted:
            raise NotFoundError(task_id)

        task.deleted_at = _now()
        self.save()
        return task

    def listing(self, show_deleted: bool = False) -> list[tuple[int, Task]]:
        """Get (id, task) pairs ordered by id, newest first."""
        return sorted(
            (
                (task_id, task)
                for task_id, task in self.tasks.items()
                if show_deleted or not task.deleted
            ),
            key=lambda item: item[0],
            reverse=True,
        )
