"""
Path parsing for the HTML dialect.

JSON paths are handed to the GJSON evaluator untouched; only HTML paths
carry an optional ``@attribute`` suffix that must be split off.
"""

from endpoint_watcher.core.entities import HtmlPath


def parse_html_path(path: str) -> HtmlPath:
    """
    Split an HTML path into CSS selector and attribute name.

    Everything after the last ``@`` is the attribute. Without ``@`` the
    whole path is the selector and no attribute is read.

    Examples:
        ".title a"                     -> (".title a", None)
        "div[class*=showDate-]@class"  -> ("div[class*=showDate-]", "class")

    Args:
        path: Path expression, any string (including empty)

    Returns:
        HtmlPath with selector and optional attribute
    """
    selector, sep, attribute = path.rpartition("@")
    if not sep:
        return HtmlPath(selector=path)
    return HtmlPath(selector=selector, attribute=attribute)
