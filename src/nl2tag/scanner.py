"""Lexical tag scanning and the ledger of tags left open across lines.

Scanning is purely lexical: ``<name ...>`` and ``</name>`` shapes are
recognised case-insensitively, attributes and nesting are not validated.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field

from nl2tag.config import VOID_ELEMENTS

# Matches bare and explicitly self-closed opening tags alike
OPENING_TAG_RE = re.compile(r"<([a-z][a-z0-9\-]*)(?:\s*/?|\s[^<>]*)>", re.IGNORECASE)
CLOSING_TAG_RE = re.compile(r"</([a-z][a-z0-9\-]*)\s*>", re.IGNORECASE)


def extract_tags(fragment: str) -> tuple[list[str], list[str]]:
    """Return lower-cased opening and closing tag names in source order."""
    opening = [m.group(1).lower() for m in OPENING_TAG_RE.finditer(fragment)]
    closing = [m.group(1).lower() for m in CLOSING_TAG_RE.finditer(fragment)]
    return opening, closing


def drop_void(names: list[str]) -> list[str]:
    return [name for name in names if name not in VOID_ELEMENTS]


@dataclass
class TagCounts:
    """Unmatched opening and closing occurrences for one fragment."""

    opening: Counter = field(default_factory=Counter)
    closing: Counter = field(default_factory=Counter)

    @property
    def empty(self) -> bool:
        return not self.opening and not self.closing


def count_tags(fragment: str) -> TagCounts:
    """Count the tags of a fragment that it does not close by itself."""
    opening, closing = extract_tags(fragment)
    counts = TagCounts(Counter(drop_void(opening)), Counter(drop_void(closing)))
    # Matching opens and closes on the same fragment cancel out
    for name in list(counts.opening):
        matched = min(counts.opening[name], counts.closing.get(name, 0))
        if matched:
            counts.opening[name] -= matched
            counts.closing[name] -= matched
    counts.opening = +counts.opening
    counts.closing = +counts.closing
    return counts


class TagLedger:
    """Open counts for tags opened on earlier lines and not yet closed.

    Every entry is strictly positive; entries that drop to zero are removed.
    """

    def __init__(self) -> None:
        self._open: dict[str, int] = {}

    def __bool__(self) -> bool:
        return bool(self._open)

    def __contains__(self, name: str) -> bool:
        return name in self._open

    def __iter__(self):
        return iter(self._open)

    def __repr__(self) -> str:
        return f"TagLedger({self._open!r})"

    def as_dict(self) -> dict[str, int]:
        return dict(self._open)

    def reconcile(self, current: TagCounts) -> None:
        """Close carried-over tags with the current fragment's closing tags.

        Consumed closings are removed from ``current``.
        """
        for name in list(current.closing):
            if name not in self._open:
                continue
            self._open[name] -= current.closing.pop(name)
            if self._open[name] <= 0:
                del self._open[name]

    def merge_opens(self, current: TagCounts) -> None:
        for name, count in current.opening.items():
            self._open[name] = self._open.get(name, 0) + count

    def update(self, current: TagCounts) -> None:
        """Apply a fragment: closes first, then the fragment's own opens."""
        self.reconcile(current)
        self.merge_opens(current)

    def holds_any(self, names: frozenset[str]) -> bool:
        return any(name.lower() in names for name in self._open)
