# todokit

A small task-management library. It models todo items with a priority,
tags, an optional project, an optional due date, a recurrence pattern and
dependencies on other tasks, validates them, persists them as JSON, and can
keep the data directory in a git repository for syncing between machines.

## Tasks

```python
from datetime import date

from todokit.enums import Priority, Recurrence
from todokit.task import Task

review = Task.create(
    "Weekly review",
    Priority.HIGH,
    ["work"],
    "Backend",
    date(2030, 6, 1),
    Recurrence.WEEKLY,
)

review.mark_done()
following = review.create_next_recurrence(review.uuid)
# following.due_date == date(2030, 6, 8); following.parent_id == review.uuid
```

`todokit.task.Task` is a dataclass. Each task carries a UUID and an
`updated_at` UTC timestamp that is refreshed by `touch()`, `mark_done()` and
`mark_undone()`; `mark_done()` also records `completed_at` as today.

- `is_overdue()` and `is_due_soon(days)` compare the due date with today
  and are always false for completed tasks.
- `matches_status(StatusFilter...)` and `matches_due_filter(DueFilter...)`
  test a task against the filters in `todokit.enums` (`DueFilter.SOON`
  means due within 7 days).
- `is_blocked(all_tasks)` and `blocking_deps(all_tasks)` report dependencies
  (UUIDs in `depends_on`) that are still pending.
- `create_next_recurrence(parent_uuid)` returns the next occurrence, or
  `None` when the task has no recurrence or no due date. Dependencies are
  not carried over.
- `to_dict()` and `Task.from_dict(data)` convert to and from JSON-ready
  dictionaries.
- `detect_cycle(tasks, task_uuid, new_dep_uuid)` raises
  `DependencyCycleError` if making the task depend on `new_dep_uuid` would
  close a loop.
- `count_by_project(tasks, "work")` returns `(total, completed)`, matching
  project names case-insensitively.

`Recurrence.MONTHLY` clamps to the end of the month: a task due on
31 January recurs on 28 (or 29) February. `Priority.order()` ranks
high, medium, low as 0, 1, 2, and `Priority.letter()` returns a coloured
`H`, `M` or `L`.

## Validation

`todokit.validation` checks input and raises a subclass of `TodoError`
(itself a `ValueError`) on the first problem:

- task text must be non-blank and at most 500 bytes (UTF-8) once trimmed;
- tags must be non-blank, at most 50 bytes, made of letters, digits,
  `-` and `_`, and unique ignoring case;
- project names must be non-blank and at most 100 bytes once trimmed;
- a due date before today is rejected unless past dates are allowed;
- a recurring task must have a due date;
- task numbers are 1-based; `validate_task_id(task_id, maximum)` checks
  one and `resolve_uuid(task_id, tasks)` turns it into the task's UUID.

`validate_task(task, is_new)` runs the text, tag, due-date and recurrence
checks at once, rejecting past due dates only when `is_new` is true.

## Tag normalisation

```python
from todokit.tag_normalizer import normalize_tags

tags, messages = normalize_tags(["Rust", "fronteend", "python"], ["rust", "frontend"])
# tags == ["rust", "frontend", "python"]
# messages == ["'Rust' → 'rust'", "'fronteend' → 'frontend'"]
```

A tag that matches an existing one ignoring case, or lies within a small
edit distance of one (1 for tags of up to 4 bytes, 2 for longer ones), is
replaced by the existing tag. `normalize_tag` returns a `NormalizeResult`
for a single tag, and `collect_existing_tags(tasks)` gathers the distinct
tags of a task list in order of first use.

## Storage

```python
from todokit.storage.json_storage import JsonStorage
from todokit.storage.memory import InMemoryStorage

storage = JsonStorage()          # todos.json in the user data directory
tasks = storage.load()
tasks.append(review)
storage.save(tasks)
```

`JsonStorage(file_path)` writes a pretty-printed JSON array atomically (via
a `.tmp` file and rename) while holding an exclusive `.lock` file, and
assigns UUIDs to entries that lack one the first time they are loaded,
saving the file again. A missing file loads as an empty list; unreadable
or malformed files raise `StorageError`. Without a path it uses
`get_data_file_path()`, which creates the `todokit` user data directory.

`InMemoryStorage(tasks)` has the same interface, keeps copies of the tasks,
and supports `len()` and `is_empty()`. Custom back ends subclass
`todokit.storage.base.Storage` and implement `load()`, `save(tasks)` and
`location()`.

## Git sync

`todokit.sync.git` runs the system `git` executable inside a directory:
`init`, `add_remote`, `initial_commit`, `commit`, `push`, `pull`, `status`,
`ahead_behind`, `last_committed_tasks_json`, `is_initialized` and
`check_git_available`. `init` also writes a `.gitignore` excluding
`sync.toml`, lock and temporary files. Failures raise `GitError` carrying
git's error output.

The remote is remembered in `sync.toml`:

```python
from todokit.sync.config import SyncConfig, require, save

save(SyncConfig(remote="git@example.com:user/tasks.git"))
config = require()  # raises SyncConfigError if no sync.toml exists
```

`load`, `require` and `save` take an optional path and otherwise use
`config_path()` in the user data directory.

`todokit.sync.merge.merge(local, remote)` keeps the local task list as it
is, ignores the remote list, and reports every local task as kept.

## What it does not do

todokit is a library only. It has no command-line program: there are no
commands for adding, listing, editing or completing tasks, and no command
that chains the git functions into a sync workflow. Merging remote changes
into the local list is not implemented. `todokit.utils.confirm(message)`
is the only interactive helper: it prints a prompt and returns true for
`y` or `yes` read from standard input.