"""
Tests for Watch Use Case.

Tests the orchestration logic that coordinates fetching, extraction,
diffing, notification and persistence.
"""

import json
from unittest.mock import Mock

import pytest

from endpoint_watcher.adapters.stores import AdapterMemoryStore
from endpoint_watcher.application import WatchUseCase
from endpoint_watcher.core import report
from endpoint_watcher.core.entities import FetchResult, RunOutcome
from endpoint_watcher.core.errors import (
    FetchError,
    NotificationError,
    ParseError,
    StateCorruptError,
    StateSaveError,
)

ENDPOINT = "https://example.com/events"
JSON_PATH = "events.#.event_date"


def _json_result(*dates):
    body = json.dumps({"events": [{"event_date": d} for d in dates]})
    return FetchResult(body=body.encode("utf-8"), content_type="application/json")


class TestWatchUseCase:
    """Test suite for WatchUseCase."""

    @pytest.fixture
    def mock_fetcher(self):
        """Create a mock fetcher."""
        return Mock()

    @pytest.fixture
    def mock_notifier(self):
        """Create a mock notifier."""
        return Mock()

    @pytest.fixture
    def store(self):
        """Create an empty in-memory store."""
        return AdapterMemoryStore()

    @pytest.fixture
    def use_case(self, mock_fetcher, store, mock_notifier):
        """Create a use case with dependencies."""
        return WatchUseCase(
            fetcher=mock_fetcher, store=store, notifier=mock_notifier
        )

    def test_first_run_saves_baseline(
        self, use_case, mock_fetcher, store, mock_notifier
    ):
        """Test first run skips diff, notifies and saves the set."""
        mock_fetcher.fetch.return_value = _json_result("2026-03-15", "2026-04-01")

        result = use_case.execute(ENDPOINT, JSON_PATH)

        assert result.outcome is RunOutcome.FIRST_RUN
        assert result.changes is None
        assert result.notified is True
        mock_notifier.send.assert_called_once_with(report.FIRST_RUN_MESSAGE)
        assert store.load() == {"2026-03-15", "2026-04-01"}

    def test_headers_passed_to_fetcher(self, use_case, mock_fetcher):
        """Test configured headers reach the fetcher."""
        mock_fetcher.fetch.return_value = _json_result()

        use_case.execute(ENDPOINT, JSON_PATH, headers={"Authorization": "t"})

        mock_fetcher.fetch.assert_called_once_with(
            ENDPOINT, {"Authorization": "t"}
        )

    def test_change_detected(self, mock_fetcher, mock_notifier):
        """Test a change is notified and becomes the new baseline."""
        store = AdapterMemoryStore({"2026-03-15", "2026-02-01"})
        use_case = WatchUseCase(mock_fetcher, store, mock_notifier)
        mock_fetcher.fetch.return_value = _json_result("2026-03-15", "2026-04-01")

        result = use_case.execute(ENDPOINT, JSON_PATH)

        assert result.outcome is RunOutcome.CHANGED
        assert result.changes.added == ["2026-04-01"]
        assert result.changes.removed == ["2026-02-01"]
        message = mock_notifier.send.call_args.args[0]
        assert message.startswith(f"Endpoint state changed: {ENDPOINT}\n")
        assert "Added (1):\n  2026-04-01" in message
        assert "Removed (1):\n  2026-02-01" in message
        assert store.load() == {"2026-03-15", "2026-04-01"}

    def test_no_change(self, mock_fetcher, mock_notifier):
        """Test identical sets send nothing but still save."""
        store = AdapterMemoryStore({"2026-03-15"})
        use_case = WatchUseCase(mock_fetcher, store, mock_notifier)
        mock_fetcher.fetch.return_value = _json_result("2026-03-15")

        result = use_case.execute(ENDPOINT, JSON_PATH)

        assert result.outcome is RunOutcome.UNCHANGED
        assert result.changes.is_empty
        mock_notifier.send.assert_not_called()
        assert store.save_count == 1

    def test_html_document(self, mock_fetcher, mock_notifier):
        """Test text/html responses go through the CSS extractor."""
        store = AdapterMemoryStore({"/old"})
        use_case = WatchUseCase(mock_fetcher, store, mock_notifier)
        mock_fetcher.fetch.return_value = FetchResult(
            body=b'<div class="title"><a href="/x">Hello</a></div>',
            content_type="text/html; charset=utf-8",
        )

        result = use_case.execute(ENDPOINT, ".title a@href")

        assert result.changes.added == ["/x"]
        assert result.changes.removed == ["/old"]
        assert store.load() == {"/x"}

    def test_zero_matches_is_not_an_error(self, mock_fetcher, mock_notifier):
        """Test an empty extraction still completes the run."""
        store = AdapterMemoryStore({"a"})
        use_case = WatchUseCase(mock_fetcher, store, mock_notifier)
        mock_fetcher.fetch.return_value = _json_result()

        result = use_case.execute(ENDPOINT, JSON_PATH)

        assert result.current == set()
        assert result.changes.removed == ["a"]
        assert store.load() == set()

    def test_fetch_failure_no_state_change(self, mock_fetcher, mock_notifier):
        """Test fetch errors are notified, re-raised and save nothing."""
        store = AdapterMemoryStore({"a"})
        use_case = WatchUseCase(mock_fetcher, store, mock_notifier)
        mock_fetcher.fetch.side_effect = FetchError("HTTP 500: boom", 500)

        with pytest.raises(FetchError):
            use_case.execute(ENDPOINT, JSON_PATH)

        mock_notifier.send.assert_called_once_with("fetch failed: HTTP 500: boom")
        assert store.save_count == 0
        assert store.load() == {"a"}

    def test_parse_failure_no_state_change(
        self, use_case, mock_fetcher, store, mock_notifier, monkeypatch
    ):
        """Test HTML parse errors are fatal and save nothing."""
        mock_fetcher.fetch.return_value = FetchResult(
            body=b"<html>", content_type="text/html"
        )
        failing = Mock()
        failing.extract.side_effect = ParseError("parse HTML: bad")
        monkeypatch.setattr(
            "endpoint_watcher.application.watch_use_case.select_extractor",
            lambda document_format: failing,
        )

        with pytest.raises(ParseError):
            use_case.execute(ENDPOINT, "div")

        mock_notifier.send.assert_called_once_with(
            "html extraction failed: parse HTML: bad"
        )
        assert store.save_count == 0

    def test_corrupt_state_is_louder_first_run(self, mock_fetcher, mock_notifier):
        """Test an unreadable baseline is reported and overwritten."""
        store = Mock()
        store.load.side_effect = StateCorruptError("parse state file: bad")
        use_case = WatchUseCase(mock_fetcher, store, mock_notifier)
        mock_fetcher.fetch.return_value = _json_result("2026-03-15")

        result = use_case.execute(ENDPOINT, JSON_PATH)

        assert result.outcome is RunOutcome.FIRST_RUN
        message = mock_notifier.send.call_args.args[0]
        assert "State file corrupt" in message
        store.save.assert_called_once_with({"2026-03-15"})

    def test_save_failure_is_fatal(self, mock_fetcher, mock_notifier):
        """Test a failed save is notified and re-raised."""
        store = Mock()
        store.load.return_value = set()
        store.save.side_effect = StateSaveError("save state file: read-only")
        use_case = WatchUseCase(mock_fetcher, store, mock_notifier)
        mock_fetcher.fetch.return_value = _json_result("a")

        with pytest.raises(StateSaveError):
            use_case.execute(ENDPOINT, JSON_PATH)

        assert mock_notifier.send.call_args.args[0] == (
            "save state failed: save state file: read-only"
        )

    def test_notification_failure_not_fatal(self, mock_fetcher, mock_notifier):
        """Test delivery errors are swallowed and state still saved."""
        store = AdapterMemoryStore({"a"})
        use_case = WatchUseCase(mock_fetcher, store, mock_notifier)
        mock_fetcher.fetch.return_value = _json_result("b")
        mock_notifier.send.side_effect = NotificationError("telegram HTTP 502")

        result = use_case.execute(ENDPOINT, JSON_PATH)

        assert result.outcome is RunOutcome.CHANGED
        assert result.notified is False
        assert store.load() == {"b"}

    def test_dry_run_does_not_persist(self, mock_fetcher, mock_notifier):
        """Test persist=False leaves the baseline untouched."""
        store = AdapterMemoryStore({"a"})
        use_case = WatchUseCase(mock_fetcher, store, mock_notifier, persist=False)
        mock_fetcher.fetch.return_value = _json_result("b")

        result = use_case.execute(ENDPOINT, JSON_PATH)

        assert result.outcome is RunOutcome.CHANGED
        assert store.save_count == 0
        assert store.load() == {"a"}

    def test_second_run_after_first_is_unchanged(self, use_case, mock_fetcher):
        """Test the saved baseline is used by the next run."""
        mock_fetcher.fetch.return_value = _json_result("x", "y")

        first = use_case.execute(ENDPOINT, JSON_PATH)
        second = use_case.execute(ENDPOINT, JSON_PATH)

        assert first.outcome is RunOutcome.FIRST_RUN
        assert second.outcome is RunOutcome.UNCHANGED
