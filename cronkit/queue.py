"""An ordered collection of tasks, optionally guarded by a lock."""

from __future__ import annotations

import threading
from contextlib import AbstractContextManager, nullcontext
from typing import Iterable, Iterator

from .task import Task


class TaskQueue:
    """Tasks kept in the order of their next run once sorted."""

    def __init__(self, thread_safe: bool = False) -> None:
        self._lock: AbstractContextManager = threading.RLock() if thread_safe else nullcontext()
        self._tasks: list[Task] = []

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def __getitem__(self, index: int) -> Task:
        return self._tasks[index]

    def push(self, task: Task) -> None:
        self._tasks.append(task)

    def extend(self, tasks: Iterable[Task]) -> None:
        self._tasks.extend(tasks)

    def top(self) -> Task:
        """The first task; raises IndexError when empty."""
        if not self._tasks:
            raise IndexError("task queue is empty")
        return self._tasks[0]

    def sort(self) -> None:
        self._tasks.sort()

    def clear(self) -> None:
        with self._lock:
            self._tasks.clear()

    def remove(self, name: str) -> None:
        """Remove the first task with `name`, if there is one."""
        with self._lock:
            for index, task in enumerate(self._tasks):
                if task.name == name:
                    del self._tasks[index]
                    break

    def locked(self) -> AbstractContextManager:
        """Context manager that holds the queue's lock."""
        return self._lock