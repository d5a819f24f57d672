"""Calculation of the next point in time allowed by a parsed cron expression."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from .data import CronData, Field

# Upper bound on the number of search steps before giving up.
MAX_ITERATIONS = 65535


def _weekday(moment: datetime) -> int:
    """Day of week with Sunday as 0 and Saturday as 6."""
    return (moment.weekday() + 1) % 7


def _midnight(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


@dataclass(frozen=True)
class CronSchedule:
    """Finds the times at which a cron expression fires."""

    data: CronData

    def calculate_from(self, start: datetime) -> datetime:
        """Return the first allowed time at or after `start`, whole seconds only.

        Raises ValueError when no such time is found within the search limit.
        """
        current = start
        try:
            for _ in range(MAX_ITERATIONS - 1):
                following = self._advance(current)
                if following is None:
                    return current.replace(microsecond=0)
                current = following
        except OverflowError as exc:
            raise ValueError(f"no matching time found from {start}") from exc
        raise ValueError(f"no matching time found from {start}")

    def _advance(self, current: datetime) -> datetime | None:
        """Move one step towards an allowed time, or return None if `current` is allowed."""
        data = self.data

        if current.month not in data.months:
            years, month = divmod(current.month, 12)
            return _midnight(current).replace(year=current.year + years, month=month + 1, day=1)

        if len(data.day_of_month) != Field.DAY_OF_MONTH.last:
            if current.day not in data.day_of_month:
                return _midnight(current) + timedelta(days=1)
        elif _weekday(current) not in data.day_of_week:
            # All days of the month allowed, so the day of week decides.
            return _midnight(current) + timedelta(days=1)

        if current.hour not in data.hours:
            return current.replace(minute=0, second=0) + timedelta(hours=1)
        if current.minute not in data.minutes:
            return current.replace(second=0) + timedelta(minutes=1)
        if current.second not in data.seconds:
            return current + timedelta(seconds=1)
        return None