"""Task storage held entirely in memory, for tests and scratch use."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Sequence

from todokit.storage.base import Storage
from todokit.task import Task


class InMemoryStorage(Storage):
    """Keeps tasks in memory; loads and saves work on independent copies."""

    def __init__(self, tasks: Iterable[Task] | None = None) -> None:
        self._tasks: list[Task] = copy.deepcopy(list(tasks or ()))

    def load(self) -> list[Task]:
        return copy.deepcopy(self._tasks)

    def save(self, tasks: Sequence[Task]) -> None:
        self._tasks = copy.deepcopy(list(tasks))

    def location(self) -> str:
        return "memory"

    def __len__(self) -> int:
        return len(self._tasks)

    def is_empty(self) -> bool:
        """True if no tasks are stored."""
        return not self._tasks