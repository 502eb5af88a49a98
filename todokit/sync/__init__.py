"""Syncing the data directory through git: git commands, sync.toml settings and task-list merging."""