"""
Application module - Use cases orchestrating the core ports.
"""

from endpoint_watcher.application.watch_use_case import WatchUseCase

__all__ = ["WatchUseCase"]
