"""Expansion of random ranges such as R(1-10) in cron expressions."""

from __future__ import annotations

import random
import re

from .data import FEBRUARY, MONTHS_WITH_31, CronData, Field, replace_names_with_numbers

_SPLIT = re.compile(r"\s*(.*?)\s+(.*?)\s+(.*?)\s+(.*?)\s+(.*?)\s+(.*?)\s*")
_RANDOM = re.compile(r"[rR]\(([0-9]+)-([0-9]+)\)")


class RandomizationError(ValueError):
    """Raised when a randomized cron expression cannot be expanded."""


def _day_limits(months) -> tuple[int, int]:
    """Day-of-month range possible in every one of `months`."""
    highest = Field.DAY_OF_MONTH.last
    for month in months:
        if month == FEBRUARY:
            # May delay the schedule until the next leap year.
            highest = min(highest, 29)
        elif month not in MONTHS_WITH_31:
            highest = min(highest, 30)
    return Field.DAY_OF_MONTH.first, highest


def _cap(value: int, lower: int, upper: int) -> int:
    return max(min(value, upper), lower)


class CronRandomization:
    """Turns expressions with R(a-b) parts into plain cron expressions."""

    def __init__(self, seed=None) -> None:
        self._random = random.Random(seed)

    def parse(self, cron_schedule: str) -> str:
        """Replace each R(a-b) section with one value picked at random.

        Raises RandomizationError when the expression cannot be expanded.
        """
        match = _SPLIT.fullmatch(cron_schedule)
        if match is None:
            raise RandomizationError(f"expected six fields: {cron_schedule!r}")

        seconds, minutes, hours, day_of_month, month, day_of_week = match.groups()
        month = replace_names_with_numbers(month, Field.MONTHS)
        day_of_week = replace_names_with_numbers(day_of_week, Field.DAY_OF_WEEK)

        second_text, _ = self._pick(Field.SECONDS, seconds)
        minute_text, _ = self._pick(Field.MINUTES, minutes)
        hour_text, _ = self._pick(Field.HOURS, hours)

        # Months first, so that the day of month can be capped to what they allow.
        month_text, selected_month = self._pick(Field.MONTHS, month)
        if selected_month is None:
            try:
                month_range = CronData.parse_field(Field.MONTHS, month)
            except ValueError as exc:
                raise RandomizationError(f"invalid month field: {month!r}") from exc
        else:
            month_range = frozenset({selected_month})

        dom_text, _ = self._pick(Field.DAY_OF_MONTH, day_of_month, _day_limits(month_range))
        dow_text, _ = self._pick(Field.DAY_OF_WEEK, day_of_week)

        return " ".join((second_text, minute_text, hour_text, dom_text, month_text, dow_text))

    def _pick(self, field: Field, section: str, limits: tuple[int, int] | None = None) -> tuple[str, int | None]:
        """Return the section text and the value chosen, or None if it was not random."""
        match = _RANDOM.fullmatch(section)
        if match is None:
            return section, None

        left, right = int(match[1]), int(match[2])
        if limits is not None:
            low, high = limits
            left = _cap(left, low, high)
            right = _cap(right, low, high)

        try:
            numbers = CronData.parse_field(field, f"{left}-{right}")
        except ValueError as exc:
            raise RandomizationError(f"invalid random {field.label} range: {section!r}") from exc

        if limits is not None:
            low, high = limits
            numbers = frozenset(n for n in numbers if low <= n <= high)

        if not numbers:
            raise RandomizationError(f"empty random {field.label} range: {section!r}")

        value = self._random.choice(sorted(numbers))
        return str(value), value