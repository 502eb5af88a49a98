"""Enumerations shared across the task model: filters, sort keys, priority and recurrence."""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from enum import StrEnum

from termcolor import colored


class StatusFilter(StrEnum):
    """Filters tasks by completion status."""

    PENDING = "pending"
    DONE = "done"
    ALL = "all"


class DueFilter(StrEnum):
    """Filters tasks by their due-date window."""

    OVERDUE = "overdue"
    SOON = "soon"
    WITH_DUE = "with-due"
    NO_DUE = "no-due"


class RecurrenceFilter(StrEnum):
    """Filters tasks by recurrence pattern."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    RECURRING = "recurring"
    NON_RECURRING = "non-recurring"


class SortBy(StrEnum):
    """Sort order for task listings."""

    PRIORITY = "priority"
    DUE = "due"
    CREATED = "created"


_PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}
_PRIORITY_LETTER = {"high": ("H", "red"), "medium": ("M", "yellow"), "low": ("L", "green")}


class Priority(StrEnum):
    """Priority level of a task."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    def order(self) -> int:
        """Sort rank: lower numbers mean higher priority."""
        return _PRIORITY_ORDER[self.value]

    def letter(self) -> str:
        """Single coloured letter for this priority (H red, M yellow, L green)."""
        text, color = _PRIORITY_LETTER[self.value]
        return colored(text, color)


def _add_one_month(day: date) -> date:
    """Add one calendar month, clamping to the last day of the target month."""
    if day.month == 12:
        year, month = day.year + 1, 1
    else:
        year, month = day.year, day.month + 1
    if year > date.max.year:
        return day
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


class Recurrence(StrEnum):
    """How often a task repeats once completed."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    def next_date(self, from_date: date) -> date:
        """Return the next occurrence date after ``from_date``."""
        if self is Recurrence.DAILY:
            return from_date + timedelta(days=1)
        if self is Recurrence.WEEKLY:
            return from_date + timedelta(days=7)
        return _add_one_month(from_date)