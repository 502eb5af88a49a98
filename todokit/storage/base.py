"""The storage interface that all task persistence backends implement."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from todokit.task import Task


class Storage(ABC):
    """Loads and saves the full task list."""

    @abstractmethod
    def load(self) -> list[Task]:
        """Return all stored tasks; an empty list if nothing has been saved yet."""

    @abstractmethod
    def save(self, tasks: Sequence[Task]) -> None:
        """Replace the stored tasks with ``tasks``."""

    @abstractmethod
    def location(self) -> str:
        """Human-readable description of where tasks are kept."""