"""Convert new lines in HTML-bearing text into <br>, <p> or <li> markup.

Pipeline:
  1. Segment: split the text on line boundaries, keeping the boundaries
  2. Balance: carry tags left open on a line over to the following lines
  3. Emit: wrap every balanced unit according to the wrapper mode
  4. Clean up: collapse and trim <br> markers around block boundaries
  5. Normalize: restore literal new lines inside <pre>, <code> and friends

Lines that open a tag and close it on a later line are buffered and wrapped
together once all their tags are closed. Text whose tags never close is
passed through verbatim.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from nl2tag import classifier, cleanup
from nl2tag.config import ContentModel, Settings
from nl2tag.models import ConversionResult, Wrapper, WrapperMode
from nl2tag.normalizer import normalize
from nl2tag.scanner import TagLedger, count_tags

logger = logging.getLogger(__name__)

_SPLIT_RE = re.compile(rf"((?:{classifier.NEW_LINES})+)", re.IGNORECASE)


@dataclass
class ConversionState:
    """Accumulator threaded through the line loop of a single call."""

    ledger: TagLedger = field(default_factory=TagLedger)
    pending: str = ""
    disallowed: bool = False
    sublist_open: bool = False
    last_marker: str | None = None
    out: list[str] = field(default_factory=list)


def _allowed_set(mode: WrapperMode, model: ContentModel) -> frozenset[str] | None:
    """Content allowed inside a unit; None when nothing needs checking."""
    if mode.wrapper is Wrapper.BR:
        return None
    if mode.wrapper is Wrapper.P:
        return model.phrasing
    return model.flow


def _wrap_changelog(unit: str, state: ConversionState) -> str:
    marker = classifier.changelog_marker(unit)
    if marker == classifier.GENERIC:
        # A plain line names the sub-list that the marked lines after it fill
        prefix = "</ul>" if state.sublist_open else ""
        state.sublist_open = False
        state.last_marker = marker
        return f'{prefix}<li class="changelog_sublist_name">{cleanup.trim_breaks(unit)}</li>'

    prefix = ""
    if state.last_marker == classifier.GENERIC and not state.sublist_open:
        prefix = '<ul class="changelog_sublist">'
        state.sublist_open = True
    state.last_marker = marker
    content = cleanup.trim_breaks(classifier.strip_changelog_marker(cleanup.trim_breaks(unit)))
    css_class = classifier.CHANGELOG_CLASSES[marker]
    return f'{prefix}<li class="{css_class}">{content}</li>'


def _emit(unit: str, mode: WrapperMode, state: ConversionState) -> None:
    """Append one balanced unit (a line or a buffered group) to the output."""
    if state.disallowed:
        state.out.append(unit)
        return

    if mode.wrapper is Wrapper.BR:
        state.out.append(cleanup.trim_breaks(unit) + "<br>")
    elif mode.wrapper is Wrapper.P:
        if classifier.is_wrapped_run(unit, "p"):
            state.out.append(unit)
        else:
            state.out.append(f"<p>{cleanup.trim_breaks(unit)}</p>")
    elif mode.wrapper is Wrapper.LI:
        if classifier.is_wrapped_run(unit, "li"):
            state.out.append(unit)
        else:
            state.out.append(f"<li>{cleanup.trim_breaks(unit)}</li>")
    elif mode.wrapper is Wrapper.CHANGELOG:
        if classifier.is_wrapped_run(unit, "li"):
            state.out.append(unit)
        else:
            state.out.append(_wrap_changelog(unit, state))
    else:
        raise AssertionError(f"Unhandled wrapper {mode.wrapper!r}")


def _is_list_wrapped(text: str) -> bool:
    return any(classifier.is_wrapped(text, tag) for tag in ("ul", "ol", "menu"))


def _single_line(text: str, mode: WrapperMode, model: ContentModel) -> str | None:
    """Result for input without line boundaries, or None to run the line loop."""
    if mode.wrapper is Wrapper.BR:
        return text
    if mode.wrapper is Wrapper.P:
        if classifier.has_disallowed(text, model.phrasing, "p") or classifier.is_wrapped_run(text, "p"):
            return text
        return f"<p>{text}</p>"
    if classifier.has_disallowed(text, model.flow, "li") or _is_list_wrapped(text):
        return text
    if classifier.is_wrapped_run(text, "li"):
        return text
    if mode.wrapper is Wrapper.LI:
        return f"{mode.list_open}<li>{text}</li>{mode.list_close}"
    # Changelog lines still go through marker classification
    return None


def _already_wrapped(text: str, mode: WrapperMode) -> bool:
    if mode.wrapper is Wrapper.P:
        return classifier.is_wrapped(text, "p")
    if mode.is_list:
        return _is_list_wrapped(text)
    return False


def _segment(text: str, mode: WrapperMode, settings: Settings, model: ContentModel) -> tuple[str, bool]:
    """Run the line loop. Returns the emitted markup and whether all tags closed."""
    state = ConversionState()
    allowed = _allowed_set(mode, model)

    for part in _SPLIT_RE.split(text):
        if not part:
            continue
        if allowed is not None and not state.disallowed:
            state.disallowed = classifier.has_disallowed(part, allowed, mode.tag)

        counts = count_tags(part)
        if counts.empty and not state.ledger:
            # Boundaries between balanced lines are only separators
            if classifier.is_blank(part):
                continue
            _emit(part, mode, state)
            state.disallowed = False
            continue

        state.ledger.update(counts)
        if not state.ledger:
            logger.debug("Tags closed, emitting buffered group of %d chars", len(state.pending) + len(part))
            _emit(state.pending + part, mode, state)
            state.pending = ""
            state.disallowed = False
        elif classifier.is_blank(part):
            if classifier.has_open_tag_from(state.ledger, model.preserve_space):
                state.pending += part
            elif settings.situational_break and (
                not classifier.has_open_tag_from(state.ledger, model.wrapper_only)
                or classifier.has_open_tag_from(state.ledger, model.inside_wrappers_only)
            ):
                state.pending += "<br>"
        else:
            state.pending += part

    balanced = not state.ledger
    if not balanced:
        logger.warning(
            "Unclosed tags %s at end of input, passing %d chars through verbatim",
            sorted(state.ledger), len(state.pending),
        )
        state.out.append(state.pending)
    if state.sublist_open:
        state.out.append("</ul>")
    return "".join(state.out), balanced


def convert(
    text: str,
    wrapper: str = "p",
    list_kind: str = "ul",
    settings: Settings | None = None,
) -> ConversionResult:
    """
    Convert new lines in ``text`` according to ``wrapper``.

    Args:
        wrapper: ``br``, ``p``, ``li`` or ``changelog``.
        list_kind: ``ul``, ``ol`` or ``menu``; used by ``li`` only.
        settings: Extension tag sets and flags. Defaults to ``Settings()``.

    Raises:
        ConfigurationError: unknown wrapper or list kind.
    """
    mode = WrapperMode.parse(wrapper, list_kind)
    if settings is None:
        settings = Settings()
    model = settings.content_model()

    def result(converted: str, balanced: bool = True) -> ConversionResult:
        return ConversionResult(
            mode=mode.wrapper,
            list_kind=mode.list_kind if mode.is_list else None,
            text=converted,
            balanced=balanced,
        )

    text = cleanup.trim_new_lines(text)
    text = cleanup.strip_wrapper_whitespace(text, model.wrapper_only, model.inside_wrappers_only)

    if not classifier.has_new_lines(text):
        single = _single_line(text, mode, model)
        if single is not None:
            logger.debug("No line boundaries, %s mode handled in one piece", mode.wrapper.value)
            return result(single)
    if _already_wrapped(text, mode):
        logger.debug("Input already wrapped for %s mode, returning as is", mode.wrapper.value)
        return result(text)

    body, balanced = _segment(text, mode, settings, model)
    body = cleanup.trim_breaks(body)
    if settings.collapse_breaks:
        body = cleanup.collapse_breaks(body, settings.preserve_non_breaking_space)
    if mode.is_list:
        body = f"{mode.list_open}{body}{mode.list_close}"
    body = cleanup.trim_boundary_breaks(body)
    return result(normalize(body, model.preserve_space), balanced)


def newlines_to_breaks(text: str, settings: Settings | None = None) -> str:
    return convert(text, "br", settings=settings).text


def newlines_to_paragraphs(text: str, settings: Settings | None = None) -> str:
    return convert(text, "p", settings=settings).text


def newlines_to_list_items(text: str, list_kind: str = "ul", settings: Settings | None = None) -> str:
    return convert(text, "li", list_kind, settings=settings).text


def newlines_to_changelog(text: str, settings: Settings | None = None) -> str:
    """Like ``newlines_to_list_items`` but classifies lines by their first character.

    ``*``, ``+`` and ``-`` lines become change, addition and removal items.
    Any other line names a sub-list that collects the marked lines after it.
    """
    return convert(text, "changelog", settings=settings).text
