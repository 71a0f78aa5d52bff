"""nl2tag - Convert new lines in HTML-bearing text to <br>, <p> or <li> markup."""

__version__ = "0.1.0"

from nl2tag.config import Settings
from nl2tag.converter import (
    convert,
    newlines_to_breaks,
    newlines_to_changelog,
    newlines_to_list_items,
    newlines_to_paragraphs,
)
from nl2tag.models import ConfigurationError, ConversionResult, ListKind, Wrapper, WrapperMode
from nl2tag.normalizer import NormalizationError

__all__ = [
    "ConfigurationError",
    "ConversionResult",
    "ListKind",
    "NormalizationError",
    "Settings",
    "Wrapper",
    "WrapperMode",
    "convert",
    "newlines_to_breaks",
    "newlines_to_changelog",
    "newlines_to_list_items",
    "newlines_to_paragraphs",
]
