"""Tag normalisation with fuzzy matching against tags already in use.

A new tag is compared with the existing ones: an exact match is kept,
a case-insensitive match or a close typo is replaced by the existing tag,
and anything else is accepted as new. Tags of at most 4 bytes tolerate an
edit distance of 1; longer tags tolerate 2.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum


class NormalizeKind(Enum):
    """What happened to a tag during normalisation."""

    UNCHANGED = "unchanged"
    NORMALIZED = "normalized"
    NEW = "new"


@dataclass(frozen=True)
class NormalizeResult:
    """Outcome of normalising one tag.

    ``original`` and ``normalized`` are set only when ``kind`` is NORMALIZED.
    """

    kind: NormalizeKind
    original: str | None = None
    normalized: str | None = None


def levenshtein(a: str, b: str) -> int:
    """Return the edit distance between two strings, counted in characters."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def normalize_tag(tag: str, existing_tags: Sequence[str]) -> NormalizeResult:
    """Normalise ``tag`` against ``existing_tags``."""
    if tag in existing_tags:
        return NormalizeResult(NormalizeKind.UNCHANGED)

    tag_lower = tag.lower()
    for existing in existing_tags:
        if existing.lower() == tag_lower:
            return NormalizeResult(NormalizeKind.NORMALIZED, tag, existing)

    threshold = 1 if len(tag.encode("utf-8")) <= 4 else 2
    candidates = [
        (existing, distance)
        for existing in existing_tags
        if (distance := levenshtein(tag_lower, existing.lower())) <= threshold
    ]
    if candidates:
        best, _ = min(candidates, key=lambda item: item[1])
        return NormalizeResult(NormalizeKind.NORMALIZED, tag, best)

    return NormalizeResult(NormalizeKind.NEW)


def normalize_tags(tags: Iterable[str], existing_tags: Sequence[str]) -> tuple[list[str], list[str]]:
    """Normalise each tag, returning the tags and a message per replacement."""
    normalized: list[str] = []
    messages: list[str] = []
    for tag in tags:
        result = normalize_tag(tag, existing_tags)
        if result.kind is NormalizeKind.NORMALIZED:
            messages.append(f"'{result.original}' → '{result.normalized}'")
            normalized.append(result.normalized)
        else:
            normalized.append(tag)
    return normalized, messages


def collect_existing_tags(tasks: Iterable) -> list[str]:
    """Return every distinct tag used by ``tasks``, in order of first appearance."""
    return list(dict.fromkeys(tag for task in tasks for tag in task.tags))