"""Terminal helpers."""

from __future__ import annotations

import sys

from termcolor import colored


def confirm(message: str) -> bool:
    """Ask a yes/no question on stdout; return True for 'y' or 'yes'."""
    print(colored(message, "yellow"), end=" ", flush=True)
    response = sys.stdin.readline().strip().lower()
    return response in {"y", "yes"}