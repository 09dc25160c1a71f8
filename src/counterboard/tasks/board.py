"""Ordered in-memory task list."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable

from counterboard.core.exceptions import TaskNotFound
from counterboard.tasks.models import (
    ExtractedTask,
    Task,
    TaskPriority,
    TaskStatus,
    new_task_id,
)

logger = logging.getLogger(__name__)

BoardObserver = Callable[[tuple[Task, ...]], None]


class TaskBoard:
    """Holds tasks in insertion order.

    Tasks are frozen; every change swaps a whole task in the sequence. Ids are
    unique across the board. Mutations run under a lock, so the board can be
    shared between request threads.
    """

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: list[Task] = list(tasks)
        ids = [t.id for t in self._tasks]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate task ids: {', '.join(duplicates)}")

        self._observers: list[BoardObserver] = []
        self._lock = threading.RLock()

    @property
    def tasks(self) -> tuple[Task, ...]:
        with self._lock:
            return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, task_id: str) -> Task:
        with self._lock:
            return self._tasks[self._index(task_id)]

    def by_status(self, status: TaskStatus) -> list[Task]:
        return [t for t in self.tasks if t.status == status]

    def subscribe(self, observer: BoardObserver) -> Callable[[], None]:
        with self._lock:
            self._observers.append(observer)

        def unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def add_task(
        self,
        title: str,
        description: str = "",
        priority: TaskPriority = TaskPriority.MEDIUM,
        status: TaskStatus = TaskStatus.TODO,
    ) -> Task:
        with self._lock:
            task = Task(
                id=self._fresh_id(),
                title=title,
                description=description,
                priority=priority,
                status=status,
            )
            self._tasks.append(task)
            logger.info("Task added", extra={"task_id": task.id, "title": task.title})
            self._notify()
        return task

    def add_extracted(self, extracted: Iterable[ExtractedTask]) -> list[Task]:
        """Append extracted candidates as new TODO tasks with fresh ids."""
        added: list[Task] = []
        with self._lock:
            for item in extracted:
                task = Task.from_extracted(item, task_id=self._fresh_id())
                # Append one at a time so each fresh id also avoids the ones just added.
                self._tasks.append(task)
                added.append(task)
            if not added:
                return []
            logger.info(f"Added {len(added)} extracted tasks")
            self._notify()
        return added

    def replace(self, task: Task) -> Task:
        with self._lock:
            self._tasks[self._index(task.id)] = task
            self._notify()
        return task

    def set_status(self, task_id: str, status: TaskStatus) -> Task:
        with self._lock:
            current = self.get(task_id)
            return self.replace(current.model_copy(update={"status": status}))

    def delete(self, task_id: str) -> Task:
        with self._lock:
            removed = self._tasks.pop(self._index(task_id))
            logger.info("Task deleted", extra={"task_id": task_id})
            self._notify()
        return removed

    def _index(self, task_id: str) -> int:
        for idx, task in enumerate(self._tasks):
            if task.id == task_id:
                return idx
        raise TaskNotFound(task_id)

    def _fresh_id(self) -> str:
        existing = {t.id for t in self._tasks}
        task_id = new_task_id()
        while task_id in existing:
            task_id = new_task_id()
        return task_id

    def _notify(self) -> None:
        snapshot = tuple(self._tasks)
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception:
                logger.exception("Task board observer failed")
