"""
HTTP fetcher adapter - Fetches the watched endpoint with requests.
"""

import logging
from typing import Dict, Optional

import requests

from endpoint_watcher.core.entities import FetchResult
from endpoint_watcher.core.errors import FetchError
from endpoint_watcher.core.ports import Fetcher

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

# Keep error messages readable when a server returns a whole HTML page.
_MAX_ERROR_BODY = 500


class AdapterRequestsFetcher(Fetcher):  # pylint: disable=too-few-public-methods
    """
    Adapter that implements Fetcher with a single requests GET.

    No retries: a failed fetch fails the run and the next scheduled run
    compares against the untouched baseline.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, verify_ssl: bool = True):
        """
        Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds
            verify_ssl: Whether to verify SSL certificates
        """
        self.timeout = timeout
        self.verify_ssl = verify_ssl

    def fetch(
        self, url: str, headers: Optional[Dict[str, str]] = None
    ) -> FetchResult:
        """
        Fetch a URL.

        Args:
            url: URL to fetch
            headers: Extra request headers applied verbatim

        Returns:
            FetchResult with body, content type, final URL and status

        Raises:
            FetchError: On network failure or non-2xx status
        """
        logger.debug("GET %s (headers: %s)", url, sorted(headers or {}))
        try:
            response = requests.get(
                url,
                headers=headers or None,
                timeout=self.timeout,
                allow_redirects=True,
                verify=self.verify_ssl,
            )
        except requests.exceptions.RequestException as e:
            raise FetchError(f"request: {e}") from e

        if not 200 <= response.status_code < 300:
            body = response.text[:_MAX_ERROR_BODY]
            raise FetchError(
                f"HTTP {response.status_code}: {body}",
                status_code=response.status_code,
            )

        content_type = response.headers.get("Content-Type", "")
        logger.info(
            "Fetched %s: status=%d, %d bytes, content-type=%r",
            response.url,
            response.status_code,
            len(response.content),
            content_type,
        )
        return FetchResult(
            body=response.content,
            content_type=content_type,
            url=response.url,
            status_code=response.status_code,
        )
