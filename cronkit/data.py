"""Parsing of six-field cron expressions into sets of allowed values."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

MONTH_NAMES = ("JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC")
DAY_NAMES = ("SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT")

# Months that have a 31st day.
MONTHS_WITH_31 = frozenset({1, 3, 5, 7, 8, 10, 12})

FEBRUARY = 2

_SHORTCUTS = (
    ("@yearly", "0 0 1 1 *"),
    ("@annually", "0 0 1 1 *"),
    ("@monthly", "0 0 1 * *"),
    ("@weekly", "0 0 * * 0"),
    ("@daily", "0 0 * * *"),
    ("@hourly", "0 * * * *"),
)

_SPLIT = re.compile(r"\s*(.*?)\s+(.*?)\s+(.*?)\s+(.*?)\s+(.*?)\s+(.*?)\s*")
_NUMBER = re.compile(r"[0-9]+")
_RANGE = re.compile(r"([0-9]+)-([0-9]+)")
_STEP = re.compile(r"([0-9]+|\*)/([0-9]+)")


class Field(Enum):
    """The six fields of a cron expression, in order, with their limits."""

    SECONDS = ("seconds", 0, 59)
    MINUTES = ("minutes", 0, 59)
    HOURS = ("hours", 0, 23)
    DAY_OF_MONTH = ("day of month", 1, 31)
    MONTHS = ("months", 1, 12)
    DAY_OF_WEEK = ("day of week", 0, 6)

    def __init__(self, label: str, first: int, last: int) -> None:
        self.label = label
        self.first = first
        self.last = last

    @property
    def names(self) -> tuple[str, ...]:
        """Symbolic names accepted by the field, first name meaning `first`."""
        if self is Field.MONTHS:
            return MONTH_NAMES
        if self is Field.DAY_OF_WEEK:
            return DAY_NAMES
        return ()

    @property
    def full_range(self) -> frozenset[int]:
        return frozenset(range(self.first, self.last + 1))

    def _in_limits(self, *values: int) -> bool:
        return all(self.first <= v <= self.last for v in values)


def replace_names_with_numbers(text: str, field: Field) -> str:
    """Replace month or weekday names in `text` with their numeric values."""
    names = field.names
    if not names:
        raise ValueError(f"field {field.label!r} has no symbolic names")
    for value, name in enumerate(names, start=field.first):
        text = re.sub(name, str(value), text, flags=re.IGNORECASE)
    return text


def has_any_in_range(values, low: int, high: int) -> bool:
    """Return True if any value in the inclusive range low..high is in `values`."""
    return any(v in values for v in range(low, high + 1))


def _parse_list(field: Field, text: str) -> tuple[frozenset[int], bool]:
    parts = text.split(",")
    # A single trailing separator is tolerated, matching the tokenizer semantics.
    if len(parts) > 1 and parts[-1] == "":
        parts.pop()

    values: set[int] = set()
    ok = True
    for part in parts:
        if field.names:
            part = replace_names_with_numbers(part, field)
        try:
            values |= CronData.parse_field(field, part)
        except ValueError:
            ok = False
    return frozenset(values), ok


def _check_dom_vs_dow(dom: str, dow: str) -> bool:
    # One of day-of-month and day-of-week must be '?' unless the other is
    # something other than '*'.
    return dom == "?" or dow == "?" or (dom == "*" and dow != "*") or (dow == "*" and dom != "*")


def _check_date_vs_months(day_of_month: frozenset[int], months: frozenset[int]) -> bool:
    if months == {FEBRUARY} and not has_any_in_range(day_of_month, 1, 29):
        return False
    if day_of_month == {Field.DAY_OF_MONTH.last}:
        return bool(months & MONTHS_WITH_31)
    return True


@dataclass(frozen=True)
class CronData:
    """The allowed values of each field of a parsed cron expression."""

    seconds: frozenset[int] = frozenset()
    minutes: frozenset[int] = frozenset()
    hours: frozenset[int] = frozenset()
    day_of_month: frozenset[int] = frozenset()
    months: frozenset[int] = frozenset()
    day_of_week: frozenset[int] = frozenset()
    valid: bool = False

    _cache: ClassVar[dict[str, CronData]] = {}

    @classmethod
    def create(cls, expression: str) -> CronData:
        """Parse `expression`, reusing an earlier result for the same text."""
        data = cls._cache.get(expression)
        if data is None:
            data = cls._parse(expression)
            cls._cache[expression] = data
        return data

    @classmethod
    def _parse(cls, expression: str) -> CronData:
        for shortcut, replacement in _SHORTCUTS:
            expression = expression.replace(shortcut, replacement)

        match = _SPLIT.fullmatch(expression)
        if match is None:
            return cls()

        texts = match.groups()
        parsed = {field: _parse_list(field, text) for field, text in zip(Field, texts)}
        values = {field: result[0] for field, result in parsed.items()}

        valid = all(ok for _, ok in parsed.values())
        valid = valid and _check_dom_vs_dow(texts[3], texts[5])
        valid = valid and _check_date_vs_months(values[Field.DAY_OF_MONTH], values[Field.MONTHS])

        return cls(
            seconds=values[Field.SECONDS],
            minutes=values[Field.MINUTES],
            hours=values[Field.HOURS],
            day_of_month=values[Field.DAY_OF_MONTH],
            months=values[Field.MONTHS],
            day_of_week=values[Field.DAY_OF_WEEK],
            valid=valid,
        )

    @staticmethod
    def parse_field(field: Field, text: str) -> frozenset[int]:
        """Parse one comma-free numeric part of a field.

        Accepts '*', '?', a number, a range 'a-b' (wrapping when a > b)
        or a step 'a/n' or '*/n'. Raises ValueError for anything else.
        """
        if text in ("*", "?"):
            return field.full_range

        if _NUMBER.fullmatch(text):
            number = int(text)
            if field._in_limits(number):
                return frozenset({number})
            raise ValueError(f"{field.label} value out of range: {text!r}")

        match = _RANGE.fullmatch(text)
        if match:
            left, right = int(match[1]), int(match[2])
            if field._in_limits(left, right):
                if left <= right:
                    return frozenset(range(left, right + 1))
                return frozenset(range(left, field.last + 1)) | frozenset(range(field.first, right + 1))
            raise ValueError(f"{field.label} range out of limits: {text!r}")

        match = _STEP.fullmatch(text)
        if match:
            start = field.first if match[1] == "*" else int(match[1])
            step = int(match[2])
            if field._in_limits(start) and step > 0:
                return frozenset(range(start, field.last + 1, step))
            raise ValueError(f"invalid {field.label} step: {text!r}")

        raise ValueError(f"invalid {field.label} value: {text!r}")