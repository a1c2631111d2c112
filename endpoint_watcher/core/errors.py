"""
Error taxonomy for a watch run.

ConfigError, FetchError, ParseError and StateSaveError are fatal.
StateLoadError sends the run down the first-run path.
NotificationError is logged and never fatal.
"""

from typing import Optional


class WatchError(Exception):
    """Base class for every error raised by endpoint_watcher."""


class ConfigError(WatchError):
    """Missing or malformed configuration."""


class FetchError(WatchError):
    """Network failure or non-2xx response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(WatchError):
    """Document could not be parsed."""


class StateLoadError(WatchError):
    """Previous baseline could not be loaded."""


class StateNotFoundError(StateLoadError):
    """No baseline has been saved yet."""


class StateCorruptError(StateLoadError):
    """Baseline exists but is not a JSON array of strings."""


class StateSaveError(WatchError):
    """New baseline could not be written."""


class NotificationError(WatchError):
    """Notification transport call failed."""
