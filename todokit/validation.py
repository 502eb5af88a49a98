"""Validation of task data before it is stored."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime
from uuid import UUID

from todokit.enums import Recurrence
from todokit.task import Task

MAX_TASK_TEXT_LENGTH = 500
MAX_TAG_LENGTH = 50
MAX_PROJECT_NAME_LENGTH = 100


class TodoError(ValueError):
    """Base class for task validation errors."""


class InvalidTaskId(TodoError):
    """A 1-based task ID is zero or past the end of the list."""

    def __init__(self, task_id: int, maximum: int) -> None:
        self.task_id = task_id
        self.maximum = maximum
        super().__init__(f"Task ID {task_id} is invalid (valid range: 1-{maximum})")


class EmptyTaskText(TodoError):
    """Task text is empty or whitespace only."""

    def __init__(self) -> None:
        super().__init__("Task text cannot be empty")


class TaskTextTooLong(TodoError):
    """Task text exceeds the length limit."""

    def __init__(self, maximum: int, actual: int) -> None:
        self.maximum = maximum
        self.actual = actual
        super().__init__(f"Task text is too long ({actual} characters, maximum is {maximum})")


class EmptyTag(TodoError):
    """A tag is empty or whitespace only."""

    def __init__(self) -> None:
        super().__init__("Tag cannot be empty")


class TagTooLong(TodoError):
    """A tag exceeds the length limit."""

    def __init__(self, maximum: int, actual: int) -> None:
        self.maximum = maximum
        self.actual = actual
        super().__init__(f"Tag is too long ({actual} characters, maximum is {maximum})")


class InvalidTagFormat(TodoError):
    """A tag holds characters other than letters, digits, '-' and '_'."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(
            f"Invalid tag format: '{tag}' (only letters, numbers, hyphens and underscores are allowed)"
        )


class DuplicateTag(TodoError):
    """The same tag appears twice, ignoring case."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"Duplicate tag: '{tag}'")


class EmptyProjectName(TodoError):
    """A project name is empty or whitespace only."""

    def __init__(self) -> None:
        super().__init__("Project name cannot be empty")


class ProjectNameTooLong(TodoError):
    """A project name exceeds the length limit."""

    def __init__(self, maximum: int, actual: int) -> None:
        self.maximum = maximum
        self.actual = actual
        super().__init__(f"Project name is too long ({actual} characters, maximum is {maximum})")


class DueDateInPast(TodoError):
    """A new task was given a due date before today."""

    def __init__(self, due: date) -> None:
        self.date = due
        super().__init__(f"Due date {due.isoformat()} is in the past")


class RecurrenceRequiresDueDate(TodoError):
    """A recurrence pattern was set on a task without a due date."""

    def __init__(self) -> None:
        super().__init__("Recurring tasks must have a due date")


def _byte_length(text: str) -> int:
    return len(text.encode("utf-8"))


def resolve_uuid(task_id: int, tasks: Sequence[Task]) -> UUID:
    """Return the UUID of the task with the given 1-based ID."""
    validate_task_id(task_id, len(tasks))
    return tasks[task_id - 1].uuid


def validate_task_id(task_id: int, maximum: int) -> None:
    """Raise InvalidTaskId unless ``1 <= task_id <= maximum``."""
    if task_id <= 0 or task_id > maximum:
        raise InvalidTaskId(task_id, maximum)


def validate_task_text(text: str) -> None:
    """Require non-blank text of at most 500 bytes once trimmed."""
    trimmed = text.strip()
    if not trimmed:
        raise EmptyTaskText()
    length = _byte_length(trimmed)
    if length > MAX_TASK_TEXT_LENGTH:
        raise TaskTextTooLong(MAX_TASK_TEXT_LENGTH, length)


def validate_tags(tags: Sequence[str]) -> None:
    """Require non-blank, short, well-formed tags with no case-insensitive duplicates."""
    for tag in tags:
        trimmed = tag.strip()
        if not trimmed:
            raise EmptyTag()
        length = _byte_length(trimmed)
        if length > MAX_TAG_LENGTH:
            raise TagTooLong(MAX_TAG_LENGTH, length)
        if not all(ch.isalnum() or ch in "-_" for ch in trimmed):
            raise InvalidTagFormat(trimmed)

    seen: set[str] = set()
    for tag in tags:
        lowered = tag.lower()
        if lowered in seen:
            raise DuplicateTag(tag)
        seen.add(lowered)


def validate_project_name(name: str) -> None:
    """Require a non-blank project name of at most 100 bytes once trimmed."""
    trimmed = name.strip()
    if not trimmed:
        raise EmptyProjectName()
    length = _byte_length(trimmed)
    if length > MAX_PROJECT_NAME_LENGTH:
        raise ProjectNameTooLong(MAX_PROJECT_NAME_LENGTH, length)


def validate_due_date(due_date: date | None, allow_past: bool) -> None:
    """Reject a due date before today unless ``allow_past`` is set."""
    if due_date is not None and not allow_past and due_date < datetime.now().date():
        raise DueDateInPast(due_date)


def validate_recurrence(recurrence: Recurrence | None, due_date: date | None) -> None:
    """Require a due date whenever a recurrence is set."""
    if recurrence is not None and due_date is None:
        raise RecurrenceRequiresDueDate()


def validate_task(task: Task, is_new: bool) -> None:
    """Run every check on ``task``; past due dates are rejected only for new tasks."""
    validate_task_text(task.text)
    validate_tags(task.tags)
    validate_due_date(task.due_date, not is_new)
    validate_recurrence(task.recurrence, task.due_date)