"""JSON file task storage.

The whole collection lives in a single file that is read and rewritten in full
on every operation. Each read-modify-write cycle runs under the store's lock,
so concurrent requests within one process cannot lose each other's updates.
"""

import logging
import os
import threading
import time
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from taskapi.errors import StorageError
from taskapi.models import Task, TaskList

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _timestamp() -> str:
    """Current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class TaskStore:
    """Task storage backed by a JSON file."""

    def __init__(self, path: str | Path) -> None:
        """Create a store over ``path``. Nothing is touched on disk yet."""
        self.path = Path(path)
        self._lock = threading.Lock()

    def initialize(self) -> None:
        """Create the data file holding an empty list if it does not exist."""
        with self._lock:
            if self.path.exists():
                return
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._write([])
            logger.info("Initialized empty task file at %s", self.path)

    def read_all(self) -> list[Task]:
        """Return all tasks in insertion order."""
        with self._lock:
            return self._read()

    def write_all(self, tasks: list[Task]) -> None:
        """Replace the stored collection with ``tasks``."""
        with self._lock:
            self._write(tasks)

    def create(self, text: str) -> Task:
        """Append a new task and return it."""
        with self._lock:
            tasks = self._read()
            last_id = max((t.id for t in tasks), default=0)
            task = Task(
                id=max(_now_ms(), last_id + 1),
                text=text,
                completed=False,
                created_at=_timestamp(),
            )
            tasks.append(task)
            self._write(tasks)
        logger.info("Created task %d", task.id)
        return task

    def toggle(self, task_id: int) -> Task | None:
        """Flip a task's completion state. Returns None if not found."""
        with self._lock:
            tasks = self._read()
            for index, task in enumerate(tasks):
                if task.id == task_id:
                    break
            else:
                return None
            toggled = task.model_copy(update={"completed": not task.completed})
            tasks[index] = toggled
            self._write(tasks)
        logger.debug("Toggled task %d to completed=%s", task_id, toggled.completed)
        return toggled

    def delete(self, task_id: int) -> bool:
        """Delete a task. Returns True if deleted, False if not found."""
        with self._lock:
            tasks = self._read()
            remaining = [t for t in tasks if t.id != task_id]
            if len(remaining) == len(tasks):
                return False
            self._write(remaining)
        logger.info("Deleted task %d", task_id)
        return True

    def clear_completed(self) -> int:
        """Delete every completed task in one write. Returns how many were removed."""
        with self._lock:
            tasks = self._read()
            remaining = [t for t in tasks if not t.completed]
            deleted = len(tasks) - len(remaining)
            if deleted:
                self._write(remaining)
        logger.info("Cleared %d completed task(s)", deleted)
        return deleted

    def _read(self) -> list[Task]:
        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError as exc:
            logger.exception("Error reading tasks from %s", self.path)
            raise StorageError(f"cannot read {self.path}") from exc
        try:
            return TaskList.validate_json(data)
        except ValidationError as exc:
            logger.exception("Corrupt task file %s", self.path)
            raise StorageError(f"corrupt task file {self.path}") from exc

    def _write(self, tasks: list[Task]) -> None:
        # Write a sibling file then rename it over the target.
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp.write_bytes(TaskList.dump_json(tasks, indent=2, by_alias=True))
            os.replace(tmp, self.path)
        except OSError as exc:
            logger.exception("Error writing tasks to %s", self.path)
            raise StorageError(f"cannot write {self.path}") from exc
