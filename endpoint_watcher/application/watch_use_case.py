"""
Watch Use Case - Fetch, extract, diff, notify and persist one endpoint.

Ports are injected, so the same workflow runs against Telegram and a JSON
file in production and against mocks and an in-memory store in tests.
"""

import logging
from typing import Dict, Optional

from endpoint_watcher.adapters.extractors import detect_format, select_extractor
from endpoint_watcher.core import report
from endpoint_watcher.core.diff import diff_sets
from endpoint_watcher.core.entities import RunOutcome, RunResult, TrackedSet
from endpoint_watcher.core.errors import (
    FetchError,
    NotificationError,
    ParseError,
    StateCorruptError,
    StateLoadError,
    StateSaveError,
    WatchError,
)
from endpoint_watcher.core.ports import Fetcher, Notifier, StateStore

logger = logging.getLogger(__name__)


class WatchUseCase:  # pylint: disable=too-few-public-methods
    """
    Use case for detecting changes in one endpoint.

    1. Fetches the endpoint using Fetcher
    2. Extracts the tracked set with the extractor matching the format
    3. Loads the baseline from StateStore (absent means first run)
    4. Diffs and notifies through Notifier when something changed
    5. Saves the current set as the new baseline

    Fetch, parse and save failures are fatal: they are notified
    (best-effort) and re-raised, and the baseline is left untouched.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        store: StateStore,
        notifier: Notifier,
        persist: bool = True,
    ):
        """
        Initialize the use case with its dependencies.

        Args:
            fetcher: Implementation of Fetcher port
            store: Implementation of StateStore port
            notifier: Implementation of Notifier port
            persist: If False, the new baseline is not saved (dry run)
        """
        self.fetcher = fetcher
        self.store = store
        self.notifier = notifier
        self.persist = persist

    def execute(
        self,
        endpoint: str,
        track_path: str,
        headers: Optional[Dict[str, str]] = None,
    ) -> RunResult:
        """
        Run one change-detection cycle.

        Args:
            endpoint: URL to watch
            track_path: Path expression selecting the tracked values
            headers: Extra request headers

        Returns:
            RunResult describing what happened

        Raises:
            FetchError: If the endpoint cannot be fetched
            ParseError: If an HTML body cannot be parsed
            StateSaveError: If the new baseline cannot be written
        """
        # Step 1: Fetch
        try:
            fetched = self.fetcher.fetch(endpoint, headers)
        except FetchError as e:
            self._fail("fetch failed", e)
            raise

        # Step 2: Extract with the extractor for the detected format
        document_format = detect_format(fetched.content_type)
        logger.info("Detected %s document", document_format.value)
        try:
            current = select_extractor(document_format).extract(
                fetched.body, track_path
            )
        except ParseError as e:
            self._fail(f"{document_format.value} extraction failed", e)
            raise

        if not current:
            logger.warning("TRACK_PATH %r matched 0 values", track_path)
        else:
            logger.info("Extracted %d values", len(current))

        # Step 3: Compare with the baseline
        result = self._compare(endpoint, current)

        # Step 4: Persist the new baseline
        if not self.persist:
            logger.info("Dry run: baseline not saved")
            return result
        try:
            self.store.save(current)
        except StateSaveError as e:
            self._fail("save state failed", e)
            raise

        return result

    def _compare(self, endpoint: str, current: TrackedSet) -> RunResult:
        try:
            previous = self.store.load()
        except StateCorruptError as e:
            logger.error("Discarding unreadable baseline: %s", e)
            notified = self._notify(report.format_corrupt_state(e))
            return RunResult(RunOutcome.FIRST_RUN, current, notified=notified)
        except StateLoadError as e:
            logger.info("First run, saving baseline. (%s)", e)
            notified = self._notify(report.FIRST_RUN_MESSAGE)
            return RunResult(RunOutcome.FIRST_RUN, current, notified=notified)

        changes = diff_sets(previous, current)
        if changes.is_empty:
            logger.info("No change.")
            return RunResult(RunOutcome.UNCHANGED, current, changes)

        logger.info(
            "Change detected: %d added, %d removed",
            len(changes.added),
            len(changes.removed),
        )
        notified = self._notify(report.format_changes(endpoint, changes))
        return RunResult(RunOutcome.CHANGED, current, changes, notified)

    def _notify(self, text: str) -> bool:
        """Send text; a delivery failure is logged, never raised."""
        try:
            self.notifier.send(text)
        except NotificationError as e:
            logger.error("Notification failed: %s", e)
            return False
        return True

    def _fail(self, context: str, error: WatchError) -> None:
        logger.error("%s: %s", context, error)
        self._notify(report.format_failure(context, error))
