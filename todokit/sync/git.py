"""Git operations over the data directory that holds ``todos.json``.

Every operation runs the system ``git`` executable, so authentication and
configuration come from the user's own git setup.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

TASKS_FILE = "todos.json"
GITIGNORE_CONTENT = "sync.toml\n*.lock\n*.tmp\n"

PathLike = str | os.PathLike[str]


class GitError(Exception):
    """A git command could not be run or reported failure."""


def _run(directory: PathLike, *args: str) -> subprocess.CompletedProcess[str]:
    try:
        return subprocess.run(
            ["git", *args],
            cwd=Path(directory),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise GitError("Failed to run git — is it installed and on PATH?") from exc


def _git(directory: PathLike, *args: str) -> str:
    """Run git in ``directory`` and return its trimmed stdout."""
    result = _run(directory, *args)
    if result.returncode != 0:
        raise GitError(f"git {' '.join(args)} failed:\n{result.stderr.strip()}")
    return result.stdout.strip()


def check_git_available() -> str:
    """Return the output of ``git --version``; raise GitError if git cannot be run."""
    try:
        result = subprocess.run(
            ["git", "--version"], capture_output=True, text=True, check=False
        )
    except OSError as exc:
        raise GitError("git is not installed or not on PATH") from exc
    return result.stdout.strip()


def is_initialized(directory: PathLike) -> bool:
    """True if ``directory`` holds a git repository."""
    return (Path(directory) / ".git").exists()


def init(directory: PathLike) -> None:
    """Create a repository with a ``.gitignore`` unless one already exists."""
    if is_initialized(directory):
        return
    try:
        _git(directory, "init", "-b", "main")
    except GitError:
        try:
            _git(directory, "init")
        except GitError as exc:
            raise GitError(f"Failed to initialize git repository: {exc}") from exc
    try:
        (Path(directory) / ".gitignore").write_text(GITIGNORE_CONTENT, encoding="utf-8")
    except OSError as exc:
        raise GitError("Failed to create .gitignore") from exc


def add_remote(directory: PathLike, url: str) -> None:
    """Point the ``origin`` remote at ``url``, adding it if it does not exist."""
    remotes = _git(directory, "remote")
    if any(line.strip() == "origin" for line in remotes.splitlines()):
        _git(directory, "remote", "set-url", "origin", url)
    else:
        _git(directory, "remote", "add", "origin", url)


def initial_commit(directory: PathLike) -> None:
    """Commit ``todos.json`` (created empty if missing) when the repository has no commits."""
    try:
        has_commits = _run(directory, "rev-parse", "HEAD").returncode == 0
    except GitError:
        has_commits = False
    if has_commits:
        return

    tasks_path = Path(directory) / TASKS_FILE
    if not tasks_path.exists():
        try:
            tasks_path.write_text("[]\n", encoding="utf-8")
        except OSError as exc:
            raise GitError(f"Failed to create {TASKS_FILE}") from exc
    _git(directory, "add", TASKS_FILE)

    if not _git(directory, "status", "--porcelain", TASKS_FILE):
        return
    _git(directory, "commit", "-m", "sync: initial commit")


def commit(directory: PathLike, message: str) -> bool:
    """Stage and commit ``todos.json``; return False if it had no changes."""
    _git(directory, "add", TASKS_FILE)
    if not _git(directory, "status", "--porcelain", TASKS_FILE):
        return False
    result = _run(directory, "commit", "-m", message)
    if result.returncode != 0:
        raise GitError(f"git commit failed:\n{result.stderr.strip()}")
    return True


def last_committed_tasks_json(directory: PathLike) -> str | None:
    """Return ``todos.json`` as of the last commit, or None if unavailable."""
    try:
        return _git(directory, "show", f"HEAD:{TASKS_FILE}")
    except GitError:
        return None


def ahead_behind(directory: PathLike) -> tuple[int, int]:
    """Return (ahead, behind) commit counts against upstream; (0, 0) without one."""
    try:
        output = _git(directory, "rev-list", "--left-right", "--count", "HEAD...@{u}")
    except GitError:
        return 0, 0
    parts = output.split()

    def number(index: int) -> int:
        try:
            return int(parts[index])
        except (IndexError, ValueError):
            return 0

    return number(0), number(1)


def push(directory: PathLike) -> None:
    """Push the current branch to ``origin``, setting upstream if needed."""
    try:
        _git(directory, "push", "origin", "HEAD")
    except GitError:
        try:
            _git(directory, "push", "--set-upstream", "origin", "HEAD")
        except GitError as exc:
            raise GitError(f"Failed to push to remote: {exc}") from exc


def pull(directory: PathLike) -> str:
    """Pull from ``origin`` with rebase and return git's output."""
    try:
        return _git(directory, "pull", "--rebase", "origin", "HEAD")
    except GitError as exc:
        raise GitError(f"Failed to pull from remote: {exc}") from exc


def status(directory: PathLike) -> str:
    """Summarise branch, last commit, ahead/behind counts and ``todos.json`` state."""
    try:
        branch = _git(directory, "rev-parse", "--abbrev-ref", "HEAD")
    except GitError:
        branch = "unknown"
    try:
        last_commit = _git(directory, "log", "-1", "--format=%h %s (%cr)")
    except GitError:
        last_commit = "no commits yet"

    dirty = _git(directory, "status", "--porcelain")
    tasks_changed = any(TASKS_FILE in line for line in dirty.splitlines())
    ahead, behind = ahead_behind(directory)

    lines = [
        f"Branch:       {branch}",
        f"Last commit:  {last_commit}",
        f"Ahead/behind: ↑{ahead} ↓{behind}",
        "todos.json:   modified (not yet committed)" if tasks_changed else "todos.json:   clean",
    ]
    return "\n".join(lines)