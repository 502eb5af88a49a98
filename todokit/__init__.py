"""Task management library: task model, validation, tag normalisation, storage and git sync."""

__version__ = "2.16.0"