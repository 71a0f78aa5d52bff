"""Turn <br> back into literal new lines inside whitespace-preserving elements."""

from __future__ import annotations

import logging
import re

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

logger = logging.getLogger(__name__)

# Keep void elements as <br> (not <br/>) and escape only what must be escaped
FORMATTER = HTMLFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
    empty_attributes_are_booleans=True,
)

_HTML_ROOT_RE = re.compile(r"^\s*<html(?:\s[^<>]*)?>.*</html>\s*$", re.IGNORECASE | re.DOTALL)


class NormalizationError(Exception):
    """Raised when the markup cannot be parsed for normalization."""


def normalize(markup: str, preserve_space: frozenset[str]) -> str:
    """Replace <br> elements nested in ``preserve_space`` elements with "\\n".

    Markup that has no whitespace-preserving element is returned untouched.
    """
    names = "|".join(re.escape(n) for n in sorted(preserve_space))
    if not names or not re.search(rf"<(?:{names})\b", markup, re.IGNORECASE):
        return markup
    if not re.search(r"<br\b", markup, re.IGNORECASE):
        return markup

    wrapped = _HTML_ROOT_RE.match(markup) is not None
    source = markup if wrapped else f"<html>{markup}</html>"
    try:
        soup = BeautifulSoup(source, "html.parser")
    except ParserRejectedMarkup as exc:
        logger.error("Markup normalization failed: %s", exc)
        raise NormalizationError(f"Failed to parse markup: {exc}") from exc

    replaced = 0
    for element in soup.find_all(sorted(preserve_space)):
        for br in element.find_all("br"):
            br.replace_with("\n")
            replaced += 1
    logger.debug("Replaced %d <br> inside whitespace-preserving elements", replaced)

    if wrapped:
        return soup.decode(formatter=FORMATTER)
    return soup.html.decode_contents(formatter=FORMATTER)
