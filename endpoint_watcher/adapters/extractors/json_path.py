"""
JSON extractor adapter - Evaluates GJSON path queries with gjson.

Example: ``events.#.event_date`` against
``{"events": [{"event_date": "2026-03-15"}]}`` yields ``{"2026-03-15"}``.
"""

import json
import logging
from decimal import Decimal
from typing import Any

import gjson

from endpoint_watcher.core.entities import TrackedSet
from endpoint_watcher.core.ports import Extractor

logger = logging.getLogger(__name__)


class AdapterJsonExtractor(Extractor):  # pylint: disable=too-few-public-methods
    """
    Adapter that implements Extractor for JSON documents.

    Only array results are collected. A path that is missing, malformed or
    resolves to a scalar/object yields an empty set; JSON extraction never
    raises.
    """

    def extract(self, body: bytes, path: str) -> TrackedSet:
        """
        Collect the string form of every element the path resolves to.

        Args:
            body: Raw JSON bytes
            path: GJSON path query

        Returns:
            Set of unique non-empty strings
        """
        try:
            document = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
            logger.warning("Response body is not valid JSON: %s", e)
            return set()

        try:
            result = gjson.get(document, path)
        except gjson.GJSONError as e:
            logger.debug("Path %r did not resolve: %s", path, e)
            return set()

        if not isinstance(result, list):
            logger.debug(
                "Path %r resolved to %s, not an array",
                path,
                type(result).__name__,
            )
            return set()

        values: TrackedSet = set()
        for element in result:
            value = stringify(element).strip()
            if value:
                values.add(value)
        return values


def stringify(value: Any) -> str:
    """
    Render a JSON value as a tracked string.

    Strings are kept as-is, numbers use their canonical decimal form,
    booleans become ``true``/``false``, null becomes empty and objects or
    arrays are rendered as compact JSON.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _format_float(value: float) -> str:
    """Plain decimal without exponent; integral values drop the fraction."""
    if value.is_integer():
        return str(int(value))
    # repr gives the shortest round-tripping digits; Decimal removes the exponent.
    return format(Decimal(repr(value)), "f")
