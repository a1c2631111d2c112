"""
Extractors module - Extractor port implementations and format dispatch.

The response Content-Type decides which extractor runs: HTML when it
mentions ``text/html``, JSON otherwise. The body is never sniffed.
"""

from endpoint_watcher.adapters.extractors.html_selector import AdapterHtmlExtractor
from endpoint_watcher.adapters.extractors.json_path import AdapterJsonExtractor
from endpoint_watcher.core.entities import DocumentFormat
from endpoint_watcher.core.ports import Extractor

HTML_CONTENT_TYPE = "text/html"


def detect_format(content_type: str) -> DocumentFormat:
    """
    Classify a response by its Content-Type header.

    Args:
        content_type: Content-Type header value (may be empty)

    Returns:
        DocumentFormat.HTML or DocumentFormat.JSON
    """
    if HTML_CONTENT_TYPE in (content_type or "").lower():
        return DocumentFormat.HTML
    return DocumentFormat.JSON


def select_extractor(document_format: DocumentFormat) -> Extractor:
    """Return the extractor for a document format."""
    if document_format is DocumentFormat.HTML:
        return AdapterHtmlExtractor()
    return AdapterJsonExtractor()


__all__ = [
    "AdapterHtmlExtractor",
    "AdapterJsonExtractor",
    "detect_format",
    "select_extractor",
]
