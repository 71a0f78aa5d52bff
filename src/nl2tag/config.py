"""Content-model tables and conversion settings loaded from .env."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from nl2tag.models import ConfigurationError

# Self-closing elements never count towards tag balance
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input", "link",
    "meta", "param", "source", "track", "wbr",
})

# Elements whose literal new lines carry meaning
PRESERVE_SPACE_IN = frozenset({"pre", "textarea", "code", "samp", "kbd", "var"})

# Allowed in <p>. area, link and meta are valid only in some contexts, so they
# have to be added explicitly through the extension set.
PHRASING_CONTENT = frozenset({
    "a", "abbr", "audio", "b", "bdi", "bdo", "br", "button", "canvas", "cite",
    "code", "data", "datalist", "del", "dfn", "em", "embed", "i", "iframe",
    "img", "input", "ins", "kbd", "label", "map", "mark", "math", "meter",
    "noscript", "object", "output", "picture", "progress", "q", "ruby", "s",
    "samp", "script", "select", "slot", "small", "span", "strong", "sub",
    "sup", "svg", "template", "textarea", "time", "u", "var", "video", "wbr",
})

# Allowed in <li>
FLOW_CONTENT = PHRASING_CONTENT | frozenset({
    "address", "article", "aside", "blockquote", "details", "dialog", "div",
    "dl", "fieldset", "figure", "footer", "form", "h1", "h2", "h3", "h4",
    "h5", "h6", "header", "hgroup", "hr", "main", "menu", "nav", "ol", "p",
    "pre", "section", "table", "ul",
})

# Containers whose whitespace is only there for source readability
WRAPPER_ONLY = frozenset({
    "audio", "col", "colgroup", "datalist", "dl", "fieldset", "map", "math",
    "menu", "ol", "optgroup", "picture", "select", "table", "tbody", "tfoot",
    "thead", "tr", "ul", "video",
})

# Children of wrapper-only elements that may hold meaningful whitespace
INSIDE_WRAPPERS_ONLY = frozenset({"caption", "dd", "dt", "li", "option", "td", "th"})

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _load_env() -> None:
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)
    else:
        load_dotenv()


def _tag_set(names) -> frozenset[str]:
    return frozenset(n.strip().lower() for n in names if n and n.strip())


def _env_tags(name: str) -> frozenset[str]:
    return _tag_set(os.getenv(name, "").split(","))


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class ContentModel:
    """Effective tag sets for one conversion call (defaults plus extensions)."""

    phrasing: frozenset[str]
    flow: frozenset[str]
    wrapper_only: frozenset[str]
    inside_wrappers_only: frozenset[str]
    preserve_space: frozenset[str]


@dataclass(frozen=True)
class Settings:
    # Extension sets, merged with the built-in defaults
    phrasing_content: frozenset[str] = field(default_factory=frozenset)
    flow_content: frozenset[str] = field(default_factory=frozenset)
    wrapper_only: frozenset[str] = field(default_factory=frozenset)
    inside_wrappers_only: frozenset[str] = field(default_factory=frozenset)
    preserve_space_in: frozenset[str] = field(default_factory=frozenset)

    # Add <br> for new lines inside open tags that do not preserve whitespace
    situational_break: bool = True
    # Collapse repeated <br> and drop empty paragraphs
    collapse_breaks: bool = True
    # Keep <p> elements holding only a non-breaking space
    preserve_non_breaking_space: bool = False

    def __post_init__(self) -> None:
        for name in (
            "phrasing_content", "flow_content", "wrapper_only",
            "inside_wrappers_only", "preserve_space_in",
        ):
            object.__setattr__(self, name, _tag_set(getattr(self, name)))

    def content_model(self) -> ContentModel:
        return ContentModel(
            phrasing=PHRASING_CONTENT | self.phrasing_content,
            flow=FLOW_CONTENT | self.flow_content,
            wrapper_only=WRAPPER_ONLY | self.wrapper_only,
            inside_wrappers_only=INSIDE_WRAPPERS_ONLY | self.inside_wrappers_only,
            preserve_space=PRESERVE_SPACE_IN | self.preserve_space_in,
        )

    @classmethod
    def from_env(cls) -> Settings:
        _load_env()
        return cls(
            phrasing_content=_env_tags("NL2TAG_PHRASING_CONTENT"),
            flow_content=_env_tags("NL2TAG_FLOW_CONTENT"),
            wrapper_only=_env_tags("NL2TAG_WRAPPER_ONLY"),
            inside_wrappers_only=_env_tags("NL2TAG_INSIDE_WRAPPERS_ONLY"),
            preserve_space_in=_env_tags("NL2TAG_PRESERVE_SPACE_IN"),
            situational_break=_env_flag("NL2TAG_SITUATIONAL_BREAK", True),
            collapse_breaks=_env_flag("NL2TAG_COLLAPSE_BREAKS", True),
            preserve_non_breaking_space=_env_flag("NL2TAG_PRESERVE_NBSP", False),
        )
