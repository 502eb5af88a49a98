"""Sync configuration kept in ``sync.toml`` next to the task file."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

import platformdirs
import tomli_w

APP_NAME = "todokit"
CONFIG_FILE_NAME = "sync.toml"


class SyncConfigError(Exception):
    """The sync configuration is missing, unreadable or malformed."""


@dataclass
class SyncConfig:
    """Settings for syncing the task file through a git remote."""

    remote: str

    def to_toml(self) -> str:
        """Serialise to TOML text."""
        return tomli_w.dumps({"remote": self.remote})

    @classmethod
    def from_toml(cls, content: str) -> SyncConfig:
        """Parse TOML text; raise SyncConfigError if it is invalid or lacks ``remote``."""
        message = "Failed to parse sync.toml — run `todo sync init <remote>` to reconfigure"
        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError as exc:
            raise SyncConfigError(message) from exc
        remote = data.get("remote")
        if not isinstance(remote, str):
            raise SyncConfigError(message)
        return cls(remote=remote)


def config_path() -> Path:
    """Return the path of ``sync.toml`` in the user data directory."""
    return Path(platformdirs.user_data_dir(APP_NAME, appauthor=False)) / CONFIG_FILE_NAME


def _resolve(path: str | os.PathLike[str] | None) -> Path:
    return Path(path) if path is not None else config_path()


def load(path: str | os.PathLike[str] | None = None) -> SyncConfig | None:
    """Load the configuration, or return None if the file does not exist."""
    target = _resolve(path)
    try:
        content = target.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise SyncConfigError(f"Failed to read {target}") from exc
    return SyncConfig.from_toml(content)


def require(path: str | os.PathLike[str] | None = None) -> SyncConfig:
    """Load the configuration, raising SyncConfigError if sync is not set up."""
    config = load(path)
    if config is None:
        raise SyncConfigError(
            "Sync is not configured. Run: todo sync init <remote>\n"
            "  Example: todo sync init git@example.com:user/tasks.git"
        )
    return config


def save(config: SyncConfig, path: str | os.PathLike[str] | None = None) -> None:
    """Write the configuration, creating the directory if needed."""
    target = _resolve(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SyncConfigError(f"Failed to create directory {target.parent}") from exc
    try:
        target.write_text(config.to_toml(), encoding="utf-8")
    except OSError as exc:
        raise SyncConfigError(f"Failed to write {target}") from exc