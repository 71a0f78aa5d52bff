"""Regex clean-up of break markers around block boundaries.

Runs on the assembled output, after the list or paragraph wrappers are closed.
"""

from __future__ import annotations

import re

from nl2tag.classifier import BLANK, INVISIBLE, NEW_LINES

BR = r"</?br\s*/?\s*>"
_GAP = rf"{BLANK}*"
_BRS = rf"(?:{_GAP}{BR})*"

_FLAGS = re.IGNORECASE

_LEADING_NEW_LINES_RE = re.compile(rf"^(?:{NEW_LINES})+", _FLAGS)
_TRAILING_NEW_LINES_RE = re.compile(rf"(?:{NEW_LINES})+$", _FLAGS)
_LEADING_BRS_RE = re.compile(rf"^(?:{BR})+", _FLAGS)
_TRAILING_BRS_RE = re.compile(rf"(?:{BR})+$", _FLAGS)

_BR_RUN_RE = re.compile(rf"\s*{BR}(?:\s*{BR})*\s*", _FLAGS)
_BRS_IN_EMPTY_P_RE = re.compile(rf"(<p(?:\s[^<>]*)?>)\s*{BR}(?:\s*{BR})*\s*(</p\s*>)", _FLAGS)
_EMPTY_P_RE = re.compile(rf"\s*<p(?:\s[^<>]*)?>[\s{INVISIBLE}]*</p\s*>\s*", _FLAGS)
# Every \s character except the non-breaking space
_SPACE_NO_NBSP = r"\t\n\x0b\x0c\r\x1c-\x20\x85\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000"
_EMPTY_P_KEEP_NBSP_RE = re.compile(
    rf"\s*<p(?:\s[^<>]*)?>[{_SPACE_NO_NBSP}{INVISIBLE}]*</p\s*>\s*", _FLAGS
)

# (pattern, replacement) in application order
_BOUNDARY_RULES = [
    # between </p> or </li> and the next <p> or <li>
    (rf"(</(?:p|li)>){_BRS}({_GAP}<(?:p|li)(?:\s+|>))", r"\1\2"),
    # between </li> and the end of the list
    (rf"(</li>){_BRS}({_GAP}</(?:ul|ol|menu)\s*>)", r"\1\2"),
    # between the start of a list and its first <li>
    (rf"(<(?:ul|ol|menu)\b[^>]*>){_BRS}({_GAP}<li(?:\s+|>))", r"\1\2"),
    # between <details> and <summary>
    (rf"(<details\b[^>]*>){_BRS}({_GAP}<summary(?:\s+|>))", r"\1\2"),
    (rf"(<summary\b[^>]*>){_BRS}", r"\1"),
    (rf"(</summary>){_BRS}", r"\1"),
    (rf"(<blockquote\b[^>]*>){_BRS}", r"\1"),
    (rf"{_BRS}(</(?:blockquote|details|summary))", r"\1"),
]
_BOUNDARY_RES = [(re.compile(p, _FLAGS), r) for p, r in _BOUNDARY_RULES]


def trim_new_lines(text: str) -> str:
    return _TRAILING_NEW_LINES_RE.sub("", _LEADING_NEW_LINES_RE.sub("", text))


def trim_breaks(text: str) -> str:
    """Strip <br> markers from both ends of a string."""
    return _TRAILING_BRS_RE.sub("", _LEADING_BRS_RE.sub("", text))


def strip_wrapper_whitespace(text: str, wrapper_only: frozenset[str], inside_wrappers_only: frozenset[str]) -> str:
    """Remove whitespace between wrapper tags and the next tag.

    Applies after opening wrapper-only tags (``<table>``, ``<tr>``) and after
    closing inside-wrapper tags (``</td>``), which only hold source indentation.
    """
    closing = "|".join(re.escape(n) for n in sorted(inside_wrappers_only))
    opening = "|".join(re.escape(n) for n in sorted(wrapper_only))
    pattern = rf"(<(?:/(?:{closing})|(?:{opening}))\b[^>]*>){BLANK}*(?=<)"
    return re.sub(pattern, r"\1", text, flags=_FLAGS)


def collapse_breaks(text: str, preserve_non_breaking_space: bool = False) -> str:
    """Merge runs of <br> and delete paragraphs left empty."""
    text = _BR_RUN_RE.sub("<br>", text)
    text = _BRS_IN_EMPTY_P_RE.sub(r"\1\2", text)
    if preserve_non_breaking_space:
        return _EMPTY_P_KEEP_NBSP_RE.sub("", text)
    return _EMPTY_P_RE.sub("", text)


def trim_boundary_breaks(text: str) -> str:
    """Remove <br> markers sitting next to list, paragraph and details boundaries."""
    for regex, replacement in _BOUNDARY_RES:
        text = regex.sub(replacement, text)
    return text
