"""A named piece of work bound to a cron schedule."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable

from .schedule import CronSchedule

ONE_SECOND = timedelta(seconds=1)


@dataclass(eq=False)
class Task:
    """A callable run whenever its schedule fires.

    The callable receives the task itself, through which it can read
    `name` and `delay`.
    """

    name: str
    schedule: CronSchedule
    work: Callable[["Task"], object]
    next_schedule: datetime = field(default=datetime.min, init=False)
    delay: timedelta = field(default=timedelta(seconds=-1), init=False)
    valid: bool = field(default=False, init=False)
    last_run: datetime = field(default=datetime.min, init=False)

    def execute(self, now: datetime) -> None:
        """Run the work, recording how late it started."""
        self.delay = now - self.next_schedule
        self.last_run = now
        self.work(self)

    def calculate_next(self, start: datetime) -> bool:
        """Find the next run at or after `start`.

        Returns False, and the task stops expiring, when none can be found.
        """
        try:
            next_schedule = self.schedule.calculate_from(start)
        except ValueError:
            self.valid = False
            return False
        self.valid = True
        self.next_schedule = next_schedule
        # Make sure that the task is allowed to run.
        self.last_run = next_schedule - ONE_SECOND
        return True

    def is_expired(self, now: datetime) -> bool:
        return self.valid and now >= self.last_run and self.time_until_expiry(now) == timedelta(0)

    def time_until_expiry(self, now: datetime) -> timedelta:
        """Time left until the next run, never negative."""
        if now >= self.next_schedule:
            return timedelta(0)
        return self.next_schedule - now

    def status(self, now: datetime) -> str:
        """One-line description of when the task runs next."""
        ms = self.time_until_expiry(now) // timedelta(milliseconds=1)
        n = self.next_schedule
        return (
            f"'{self.name}' expires in {ms}ms => "
            f"{n.year}-{n.month}-{n.day} {n.hour}:{n.minute}:{n.second}"
        )

    def __lt__(self, other: Task) -> bool:
        return self.next_schedule < other.next_schedule

    def __gt__(self, other: Task) -> bool:
        return self.next_schedule > other.next_schedule