"""
Ports - Interfaces implemented by adapters.

The use case depends only on these abstractions, so fetchers, stores and
notifiers can be swapped (e.g. an in-memory store in tests).
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from endpoint_watcher.core.entities import FetchResult, TrackedSet


class Fetcher(ABC):  # pylint: disable=too-few-public-methods
    """Retrieves the raw document for a URL."""

    @abstractmethod
    def fetch(
        self, url: str, headers: Optional[Dict[str, str]] = None
    ) -> FetchResult:
        """
        Fetch a URL.

        Args:
            url: URL to fetch
            headers: Extra request headers applied verbatim

        Returns:
            FetchResult with body and content type

        Raises:
            FetchError: On network failure or non-2xx status
        """


class Extractor(ABC):  # pylint: disable=too-few-public-methods
    """Extracts a tracked set from a document."""

    @abstractmethod
    def extract(self, body: bytes, path: str) -> TrackedSet:
        """
        Extract the values selected by path.

        Args:
            body: Raw document bytes
            path: Path expression in this extractor's dialect

        Returns:
            Set of unique non-empty strings (possibly empty)

        Raises:
            ParseError: If the document cannot be parsed at all
        """


class StateStore(ABC):
    """Durable home of the baseline between runs."""

    @abstractmethod
    def load(self) -> TrackedSet:
        """
        Load the previous baseline.

        Raises:
            StateNotFoundError: If nothing was saved yet
            StateCorruptError: If the stored baseline is unreadable
        """

    @abstractmethod
    def save(self, values: TrackedSet) -> None:
        """
        Persist a new baseline.

        Raises:
            StateSaveError: If the baseline cannot be written
        """


class Notifier(ABC):  # pylint: disable=too-few-public-methods
    """Delivers a plain-text message to a human."""

    @abstractmethod
    def send(self, text: str) -> None:
        """
        Send a message.

        Raises:
            NotificationError: If the transport call fails
        """
