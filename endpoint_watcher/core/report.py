"""
Change reporter - Formats notification text.

Delivery lives in the notifier adapters; this module only builds strings.
"""

from typing import List

from endpoint_watcher.core.entities import ChangeSet

# Telegram rejects messages over 4096 characters; leave room for the marker.
MAX_MESSAGE_LENGTH = 4000
TRUNCATION_MARKER = "\n... (truncated)"

FIRST_RUN_MESSAGE = "First run, saving baseline."


def format_changes(endpoint: str, changes: ChangeSet) -> str:
    """
    Build the human-readable change summary.

    Args:
        endpoint: Watched URL, named in the header line
        changes: Diff between baseline and current set

    Returns:
        Message text, at most MAX_MESSAGE_LENGTH characters plus
        TRUNCATION_MARKER
    """
    lines: List[str] = [f"Endpoint state changed: {endpoint}"]

    if changes.added:
        lines.append("")
        lines.append(f"Added ({len(changes.added)}):")
        lines.extend(f"  {value}" for value in changes.added)

    if changes.removed:
        lines.append("")
        lines.append(f"Removed ({len(changes.removed)}):")
        lines.extend(f"  {value}" for value in changes.removed)

    return truncate("\n".join(lines) + "\n")


def format_failure(context: str, error: Exception) -> str:
    """Format a fatal error as ``<context>: <error>``."""
    return truncate(f"{context}: {error}")


def format_corrupt_state(error: Exception) -> str:
    """Notice sent when an unreadable baseline is about to be overwritten."""
    return truncate(
        f"State file corrupt ({error}); prior history discarded, "
        "saving new baseline."
    )


def truncate(text: str) -> str:
    """Cut text to MAX_MESSAGE_LENGTH characters and mark the cut."""
    if len(text) > MAX_MESSAGE_LENGTH:
        return text[:MAX_MESSAGE_LENGTH] + TRUNCATION_MARKER
    return text
