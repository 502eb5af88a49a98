"""Task storage in a pretty-printed JSON file.

Writes go to a ``.tmp`` sibling that is then renamed over the data file.
An exclusive lock on a ``.lock`` sibling is held for the whole write, so
concurrent processes cannot corrupt the file.
"""

from __future__ import annotations

import json
import os
from collections.abc import Sequence
from pathlib import Path
from uuid import uuid4

import platformdirs
from filelock import FileLock

from todokit.storage.base import Storage
from todokit.task import NIL_UUID, Task

APP_NAME = "todokit"
DATA_FILE_NAME = "todos.json"


class StorageError(Exception):
    """The task file could not be read, parsed or written."""


def get_data_file_path() -> Path:
    """Return the path of ``todos.json`` in the user data directory, creating the directory."""
    data_dir = Path(platformdirs.user_data_dir(APP_NAME, appauthor=False))
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageError(f"Failed to create data directory: {data_dir}") from exc
    return data_dir / DATA_FILE_NAME


class JsonStorage(Storage):
    """Keeps tasks as a JSON array in a single file."""

    def __init__(self, file_path: str | os.PathLike[str] | None = None) -> None:
        self.file_path = Path(file_path) if file_path is not None else get_data_file_path()

    def _sibling(self, extension: str) -> Path:
        return Path(f"{self.file_path}.{extension}")

    @property
    def lock_path(self) -> Path:
        """Path of the lock file guarding writes."""
        return self._sibling("lock")

    @property
    def tmp_path(self) -> Path:
        """Path of the temporary file used for atomic writes."""
        return self._sibling("tmp")

    def load(self) -> list[Task]:
        """Read all tasks; tasks without a UUID get one, and the file is rewritten."""
        try:
            content = self.file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise StorageError(f"Failed to read todos.json from: {self.file_path}") from exc

        try:
            raw = json.loads(content)
            if not isinstance(raw, list):
                raise ValueError("expected a JSON array of tasks")
            tasks = [Task.from_dict(item) for item in raw]
        except (ValueError, TypeError, KeyError) as exc:
            raise StorageError("Failed to parse todos.json - file may be corrupted") from exc

        modified = False
        for task in tasks:
            if task.uuid == NIL_UUID:
                task.uuid = uuid4()
                modified = True
        if modified:
            self.save(tasks)
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        """Write all tasks atomically under an exclusive file lock."""
        payload = json.dumps([task.to_dict() for task in tasks], indent=2, ensure_ascii=False)
        try:
            lock = FileLock(str(self.lock_path))
        except OSError as exc:
            raise StorageError("Failed to create lock file") from exc

        try:
            with lock:
                try:
                    self.tmp_path.write_text(payload, encoding="utf-8")
                except OSError as exc:
                    raise StorageError(
                        f"Failed to write to {self.tmp_path} - check file permissions"
                    ) from exc
                try:
                    os.replace(self.tmp_path, self.file_path)
                except OSError as exc:
                    raise StorageError(
                        f"Failed to rename {self.tmp_path} to {self.file_path}"
                    ) from exc
        except StorageError:
            raise
        except OSError as exc:
            raise StorageError("Failed to acquire lock") from exc

    def location(self) -> str:
        return str(self.file_path)