"""The task model: a single todo item and helpers over task lists."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from todokit.enums import DueFilter, Priority, Recurrence, StatusFilter

NIL_UUID = UUID(int=0)

_FRACTION = re.compile(r"(\.\d{6})\d+")


def _today() -> date:
    return datetime.now().date()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _format_datetime(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _parse_datetime(value: str) -> datetime:
    # Timestamps may carry nanoseconds; keep microsecond precision.
    text = _FRACTION.sub(r"\1", value)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _parse_date(value: str | None) -> date | None:
    return None if value is None else date.fromisoformat(value)


class DependencyCycleError(ValueError):
    """Adding a dependency would create a cycle."""


@dataclass
class Task:
    """A single todo item with its metadata."""

    text: str
    priority: Priority = Priority.MEDIUM
    tags: list[str] = field(default_factory=list)
    project: str | None = None
    due_date: date | None = None
    recurrence: Recurrence | None = None
    uuid: UUID = field(default_factory=uuid4)
    completed: bool = False
    created_at: date = field(default_factory=_today)
    parent_id: UUID | None = None
    depends_on: list[UUID] = field(default_factory=list)
    completed_at: date | None = None
    updated_at: datetime | None = field(default_factory=_utc_now)

    @classmethod
    def create(
        cls,
        text: str,
        priority: Priority = Priority.MEDIUM,
        tags: Iterable[str] = (),
        project: str | None = None,
        due_date: date | None = None,
        recurrence: Recurrence | None = None,
    ) -> Task:
        """Create a new pending task with a fresh UUID, created today."""
        return cls(
            text=text,
            priority=priority,
            tags=list(tags),
            project=project,
            due_date=due_date,
            recurrence=recurrence,
        )

    def touch(self) -> None:
        """Set ``updated_at`` to the current UTC time."""
        self.updated_at = _utc_now()

    def mark_done(self) -> None:
        """Mark the task completed today."""
        self.completed = True
        self.completed_at = _today()
        self.touch()

    def mark_undone(self) -> None:
        """Mark the task pending again."""
        self.completed = False
        self.completed_at = None
        self.touch()

    def is_overdue(self) -> bool:
        """True if the task is pending and its due date is before today."""
        if self.due_date is None:
            return False
        return self.due_date < _today() and not self.completed

    def is_due_soon(self, days: int) -> bool:
        """True if the task is pending and due within ``days`` days from today."""
        if self.due_date is None:
            return False
        days_until = (self.due_date - _today()).days
        return 0 <= days_until <= days and not self.completed

    def matches_status(self, status: StatusFilter) -> bool:
        """Check the task against a completion-status filter."""
        if status is StatusFilter.PENDING:
            return not self.completed
        if status is StatusFilter.DONE:
            return self.completed
        return True

    def matches_due_filter(self, due_filter: DueFilter) -> bool:
        """Check the task against a due-date filter."""
        if due_filter is DueFilter.OVERDUE:
            return self.is_overdue()
        if due_filter is DueFilter.SOON:
            return self.is_due_soon(7)
        if due_filter is DueFilter.WITH_DUE:
            return self.due_date is not None
        return self.due_date is None

    def _is_pending_dependency(self, dep_uuid: UUID, all_tasks: Sequence[Task]) -> bool:
        found = next((t for t in all_tasks if t.uuid == dep_uuid), None)
        return found is not None and not found.completed

    def is_blocked(self, all_tasks: Sequence[Task]) -> bool:
        """True if any dependency is still pending."""
        return any(self._is_pending_dependency(dep, all_tasks) for dep in self.depends_on)

    def blocking_deps(self, all_tasks: Sequence[Task]) -> list[UUID]:
        """UUIDs of dependencies that are still pending."""
        return [dep for dep in self.depends_on if self._is_pending_dependency(dep, all_tasks)]

    def create_next_recurrence(self, parent_uuid: UUID) -> Task | None:
        """Build the next occurrence of a recurring task, or None if not recurring or undated."""
        if self.recurrence is None or self.due_date is None:
            return None
        next_task = Task.create(
            self.text,
            self.priority,
            self.tags,
            self.project,
            self.recurrence.next_date(self.due_date),
            self.recurrence,
        )
        # Dependencies are not carried over: each occurrence stands alone.
        return replace(next_task, parent_id=parent_uuid)

    def is_recurring(self) -> bool:
        """True if a recurrence pattern is set."""
        return self.recurrence is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-compatible dictionary."""
        return {
            "uuid": str(self.uuid),
            "text": self.text,
            "completed": self.completed,
            "priority": self.priority.value,
            "tags": list(self.tags),
            "project": self.project,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "created_at": self.created_at.isoformat(),
            "recurrence": self.recurrence.value if self.recurrence else None,
            "parent_id": str(self.parent_id) if self.parent_id else None,
            "depends_on": [str(dep) for dep in self.depends_on],
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "updated_at": _format_datetime(self.updated_at) if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        """Build a task from a dictionary produced by :meth:`to_dict`.

        Missing optional fields take their defaults; a missing UUID becomes the nil UUID.

        Raises:
            ValueError: if a required field is missing or a value is malformed.
        """
        missing = [key for key in ("text", "completed", "priority", "tags", "created_at") if key not in data]
        if missing:
            raise ValueError(f"missing field(s): {', '.join(missing)}")
        try:
            uuid_text = data.get("uuid")
            parent = data.get("parent_id")
            recurrence = data.get("recurrence")
            updated = data.get("updated_at")
            return cls(
                uuid=UUID(uuid_text) if uuid_text else NIL_UUID,
                text=str(data["text"]),
                completed=bool(data["completed"]),
                priority=Priority(data["priority"]),
                tags=[str(tag) for tag in data["tags"]],
                project=data.get("project"),
                due_date=_parse_date(data.get("due_date")),
                created_at=date.fromisoformat(data["created_at"]),
                recurrence=Recurrence(recurrence) if recurrence is not None else None,
                parent_id=UUID(parent) if parent else None,
                depends_on=[UUID(dep) for dep in data.get("depends_on") or []],
                completed_at=_parse_date(data.get("completed_at")),
                updated_at=_parse_datetime(updated) if updated else None,
            )
        except (TypeError, AttributeError) as exc:
            raise ValueError(f"malformed task data: {exc}") from exc


def count_by_project(tasks: Iterable[Task], project: str) -> tuple[int, int]:
    """Return (total, completed) for tasks in ``project``, compared case-insensitively."""
    project_lower = project.lower()
    matching = [t for t in tasks if t.project is not None and t.project.lower() == project_lower]
    return len(matching), sum(1 for t in matching if t.completed)


def detect_cycle(tasks: Sequence[Task], task_uuid: UUID, new_dep_uuid: UUID) -> None:
    """Raise DependencyCycleError if making ``task_uuid`` depend on ``new_dep_uuid`` creates a cycle."""
    by_uuid = {}
    for task in tasks:
        by_uuid.setdefault(task.uuid, task)
    visited: set[UUID] = set()
    stack = [new_dep_uuid]

    def number_of(uuid: UUID) -> int:
        return next((i for i, t in enumerate(tasks, start=1) if t.uuid == uuid), 0)

    while stack:
        current = stack.pop()
        if current == task_uuid:
            task_num = number_of(task_uuid)
            dep_num = number_of(new_dep_uuid)
            raise DependencyCycleError(
                "Adding this dependency would create a cycle: "
                f"task #{task_num} → task #{dep_num} → ... → task #{task_num}"
            )
        if current not in visited:
            visited.add(current)
            found = by_uuid.get(current)
            if found is not None:
                stack.extend(found.depends_on)