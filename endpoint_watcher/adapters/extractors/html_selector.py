"""
HTML extractor adapter - Selects elements with CSS selectors via BeautifulSoup.

The path may end with ``@attr`` to read an attribute instead of the
element's text content:

    ".title a"                     -> text of each matched element
    "div[class*=showDate-]@class"  -> class attribute of each match
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup  # type: ignore
from bs4.element import Tag  # type: ignore
from soupsieve import SelectorSyntaxError  # type: ignore

from endpoint_watcher.core.entities import TrackedSet
from endpoint_watcher.core.errors import ParseError
from endpoint_watcher.core.path import parse_html_path
from endpoint_watcher.core.ports import Extractor

logger = logging.getLogger(__name__)


class AdapterHtmlExtractor(Extractor):  # pylint: disable=too-few-public-methods
    """
    Adapter that implements Extractor for HTML documents.

    Empty values and duplicates are skipped. An empty or invalid selector
    matches nothing.
    """

    def __init__(self, features: str = "html.parser"):
        """
        Initialize the extractor.

        Args:
            features: BeautifulSoup tree builder to use
        """
        self.features = features

    def extract(self, body: bytes, path: str) -> TrackedSet:
        """
        Collect text or attribute values of every element matching path.

        Args:
            body: Raw HTML bytes
            path: CSS selector, optionally suffixed with ``@attribute``

        Returns:
            Set of unique non-empty, trimmed strings

        Raises:
            ParseError: If the body cannot be parsed as HTML
        """
        html_path = parse_html_path(path)

        try:
            soup = BeautifulSoup(body, self.features)
        except Exception as e:
            raise ParseError(f"parse HTML: {e}") from e

        if not html_path.selector.strip():
            logger.warning("Empty CSS selector in path %r", path)
            return set()

        try:
            elements = soup.select(html_path.selector)
        except SelectorSyntaxError as e:
            logger.warning("Invalid CSS selector %r: %s", html_path.selector, e)
            return set()

        values: TrackedSet = set()
        for element in elements:
            value = _element_value(element, html_path.attribute).strip()
            if value:
                values.add(value)

        logger.debug(
            "Selector %r matched %d elements, %d unique values",
            html_path.selector,
            len(elements),
            len(values),
        )
        return values


def _element_value(element: Tag, attribute: Optional[str]) -> str:
    """Text content of element, or the named attribute when given."""
    if attribute is None:
        return element.get_text()

    value = element.get(attribute)
    if value is None:
        return ""
    # Multi-valued attributes (class, rel, ...) come back as lists.
    if isinstance(value, list):
        return " ".join(value)
    return str(value)
