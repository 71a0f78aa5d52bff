"""Wrapper modes and conversion result models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field


class ConfigurationError(ValueError):
    """Raised when an unknown wrapper, list kind or setting value is supplied."""


class Wrapper(str, Enum):
    BR = "br"
    P = "p"
    LI = "li"
    CHANGELOG = "changelog"


class ListKind(str, Enum):
    UL = "ul"
    OL = "ol"
    MENU = "menu"


@dataclass(frozen=True)
class WrapperMode:
    """Target markup for one conversion call."""

    wrapper: Wrapper
    list_kind: ListKind = ListKind.UL

    @classmethod
    def parse(cls, wrapper: str, list_kind: str = "ul") -> WrapperMode:
        try:
            parsed = Wrapper(str(wrapper).strip().lower())
        except ValueError:
            available = ", ".join(w.value for w in Wrapper)
            raise ConfigurationError(
                f"Unsupported wrapper '{wrapper}'. Available: {available}"
            ) from None
        try:
            kind = ListKind(str(list_kind).strip().lower())
        except ValueError:
            available = ", ".join(k.value for k in ListKind)
            raise ConfigurationError(
                f"Unsupported list kind '{list_kind}'. Available: {available}"
            ) from None
        if parsed is Wrapper.CHANGELOG:
            kind = ListKind.UL
        return cls(parsed, kind)

    @property
    def tag(self) -> str:
        """Element each unit is wrapped in."""
        if self.wrapper is Wrapper.CHANGELOG:
            return "li"
        return self.wrapper.value

    @property
    def is_list(self) -> bool:
        return self.wrapper in (Wrapper.LI, Wrapper.CHANGELOG)

    @property
    def list_open(self) -> str:
        if self.wrapper is Wrapper.CHANGELOG:
            return '<ul class="changelog_list">'
        return f"<{self.list_kind.value}>"

    @property
    def list_close(self) -> str:
        return f"</{self.list_kind.value}>"


class ConversionResult(BaseModel):
    """Outcome of converting one text."""

    mode: Wrapper = Field(description="Wrapper mode used")
    list_kind: ListKind | None = Field(
        default=None,
        description="List element for li/changelog modes",
    )
    text: str = Field(default="", description="Converted markup")
    balanced: bool = Field(
        default=True,
        description="False when unclosed tags forced a verbatim tail",
    )
