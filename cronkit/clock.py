"""Clocks that supply the current time to the scheduler."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class CronClock(ABC):
    """Source of the current time as a naive datetime."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time."""

    @abstractmethod
    def utc_offset(self, now: datetime) -> timedelta:
        """Return the offset from UTC in effect at the UTC time `now`."""


class UTCClock(CronClock):
    """Clock that reports UTC."""

    def now(self) -> datetime:
        return _utc_now()

    def utc_offset(self, now: datetime) -> timedelta:
        return timedelta(0)


class LocalClock(CronClock):
    """Clock that reports local time."""

    def now(self) -> datetime:
        now = _utc_now()
        return now + self.utc_offset(now)

    def utc_offset(self, now: datetime) -> timedelta:
        offset = now.replace(tzinfo=timezone.utc).astimezone().utcoffset()
        if offset is None:
            return timedelta(0)
        return timedelta(seconds=int(offset.total_seconds()))