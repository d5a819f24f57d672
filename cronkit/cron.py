"""The scheduler: runs tasks whose cron schedules have come due."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Callable, Iterable

from .clock import CronClock, LocalClock
from .data import CronData
from .queue import TaskQueue
from .schedule import CronSchedule
from .task import Task

ONE_SECOND = timedelta(seconds=1)
# Time changes at least this large are treated as clock or timezone corrections.
CLOCK_CORRECTION = timedelta(hours=3)


class Cron:
    """Holds tasks and runs them when `tick` finds them due.

    `tick` should be called at least once a second so no run is missed.
    """

    def __init__(self, clock: CronClock | None = None, *, thread_safe: bool = False) -> None:
        self.clock = clock if clock is not None else LocalClock()
        self._tasks = TaskQueue(thread_safe=thread_safe)
        self._first_tick = True
        self._last_tick = datetime.min

    def _make_task(self, name: str, schedule: str, work: Callable[[Task], object]) -> Task:
        data = CronData.create(schedule)
        if not data.valid:
            raise ValueError(f"invalid schedule {schedule!r} for task {name!r}")
        return Task(name, CronSchedule(data), work)

    def add_schedule(self, name: str, schedule: str, work: Callable[[Task], object]) -> None:
        """Add a task; raises ValueError if the schedule is invalid."""
        task = self._make_task(name, schedule, work)
        with self._tasks.locked():
            if task.calculate_next(self.clock.now()):
                self._tasks.push(task)
                self._tasks.sort()

    def add_schedules(self, schedules, work: Callable[[Task], object]) -> None:
        """Add one task per (name, schedule) pair, or none if any is invalid.

        `schedules` is a mapping or an iterable of pairs. Raises ValueError
        naming the first invalid schedule.
        """
        pairs: Iterable = schedules.items() if isinstance(schedules, Mapping) else schedules
        tasks = [self._make_task(name, schedule, work) for name, schedule in pairs]
        now = self.clock.now()
        to_add = [task for task in tasks if task.calculate_next(now)]
        if to_add:
            with self._tasks.locked():
                self._tasks.extend(to_add)
                self._tasks.sort()

    def clear_schedules(self) -> None:
        self._tasks.clear()

    def remove_schedule(self, name: str) -> None:
        self._tasks.remove(name)

    def count(self) -> int:
        return len(self._tasks)

    def tick(self, now: datetime | None = None) -> int:
        """Run every task that is due at `now` (default: the clock's time).

        Returns the number of tasks run.
        """
        if now is None:
            now = self.clock.now()

        with self._tasks.locked():
            if self._first_tick:
                self._first_tick = False
            else:
                # Time only flows once at least a second has passed, either way.
                if -ONE_SECOND < now - self._last_tick < ONE_SECOND:
                    now = self._last_tick
                if abs(now - self._last_tick) >= CLOCK_CORRECTION:
                    for task in self._tasks:
                        task.calculate_next(now)
                # Smaller changes leave the schedule alone: moving back will not
                # run tasks twice, moving forward runs what was missed.

            self._last_tick = now

            executed = 0
            for task in self._tasks:
                if task.is_expired(now):
                    task.execute(now)
                    if not task.calculate_next(now + ONE_SECOND):
                        self._tasks.remove(task.name)
                    executed += 1

            if executed:
                self._tasks.sort()
            return executed

    def time_until_next(self) -> timedelta:
        """Time until the earliest task is due; timedelta.max with no tasks."""
        if not len(self._tasks):
            return timedelta.max
        return self._tasks.top().time_until_expiry(self.clock.now())

    def recalculate_schedule(self) -> None:
        """Reschedule every task from just after the current time."""
        for task in self._tasks:
            task.calculate_next(self.clock.now() + ONE_SECOND)

    def time_until_expiry_for_tasks(self) -> list[tuple[str, timedelta]]:
        now = self.clock.now()
        return [(task.name, task.time_until_expiry(now)) for task in self._tasks]

    def __str__(self) -> str:
        return "".join(f"{task.status(self.clock.now())}\n" for task in self._tasks)