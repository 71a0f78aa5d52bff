"""Content checks used to decide how a line may be wrapped."""

from __future__ import annotations

import re
import unicodedata

from nl2tag.scanner import OPENING_TAG_RE, TagLedger

# Numeric references and characters treated as line boundaries
NEW_LINES = (
    r"&#(?:10|11|12|13|133|8232|8233);"
    r"|\r\n|[\n\x0b\x0c\r\x85\u2028\u2029]"
)
NEW_LINES_RE = re.compile(NEW_LINES, re.IGNORECASE)

# Invisible characters that count as blank next to whitespace
INVISIBLE = r"\x00-\x1f\x7f-\x9f\u00ad\u200b-\u200f\u202a-\u202e\u2060-\u2064\ufeff"
BLANK = rf"(?:&#(?:10|11|12|13|133|8232|8233);|[\s{INVISIBLE}])"

_BLANK_RE = re.compile(rf"{BLANK}*", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^<>]*>")
_MARKER_RE = re.compile(r"^((?:<[^<>]+>)*)\s*[*+-]\s*(.*)$", re.DOTALL)

CHANGE = "*"
ADDITION = "+"
REMOVAL = "-"
GENERIC = "ul"

CHANGELOG_CLASSES = {
    CHANGE: "changelog_change",
    ADDITION: "changelog_addition",
    REMOVAL: "changelog_removal",
}


def has_new_lines(text: str) -> bool:
    return NEW_LINES_RE.search(text) is not None


def is_blank(fragment: str) -> bool:
    """True for fragments made only of line boundaries, whitespace or control characters."""
    return _BLANK_RE.fullmatch(fragment) is not None


def has_disallowed(fragment: str, allowed: frozenset[str], wrapper_tag: str) -> bool:
    """Check for opening tags that may not appear inside ``wrapper_tag``.

    Only opening tags count: an orphaned closing tag does not break the
    wrapper it ends up in.
    """
    for match in OPENING_TAG_RE.finditer(fragment):
        name = match.group(1).lower()
        if name != wrapper_tag and name not in allowed:
            return True
    return False


def _top_level_spans(text: str, tag: str) -> list[tuple[int, int]] | None:
    """Start and end offsets of the top-level ``tag`` elements, None if unbalanced."""
    spans = []
    depth = 0
    start = 0
    for match in re.finditer(rf"<(/?){tag}(?:\s[^<>]*)?>", text, re.IGNORECASE):
        if not match.group(1):
            if depth == 0:
                start = match.start()
            depth += 1
            continue
        depth -= 1
        if depth < 0:
            return None
        if depth == 0:
            spans.append((start, match.end()))
    return spans if depth == 0 else None


def is_wrapped(fragment: str, tag: str = "p") -> bool:
    """Check if the whole fragment is one ``<tag>`` element.

    ``<p>a</p> b <p>c</p>`` is not wrapped: its first ``<p>`` closes before the end.
    """
    text = fragment.strip()
    spans = _top_level_spans(text, tag)
    return spans is not None and spans == [(0, len(text))]


def is_wrapped_run(fragment: str, tag: str = "li") -> bool:
    """Check if the fragment holds nothing but consecutive ``<tag>`` elements."""
    text = fragment.strip()
    spans = _top_level_spans(text, tag)
    if not spans:
        return False
    position = 0
    for start, end in spans:
        if not is_blank(text[position:start]):
            return False
        position = end
    return position == len(text)


def changelog_marker(fragment: str) -> str:
    """Return the leading ``*``, ``+`` or ``-`` of a line, or ``GENERIC``."""
    text = _TAG_RE.sub("", fragment)
    for char in text:
        if char.isspace() or unicodedata.category(char).startswith("C"):
            continue
        if char in CHANGELOG_CLASSES:
            return char
        return GENERIC
    return GENERIC


def strip_changelog_marker(fragment: str) -> str:
    """Drop the marker character, keeping any tags in front of it."""
    return _MARKER_RE.sub(r"\1\2", fragment, count=1)


def has_open_tag_from(ledger: TagLedger, names: frozenset[str]) -> bool:
    return ledger.holds_any(names)
