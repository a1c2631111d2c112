"""
Notifiers module - Notifier port implementations.
"""

from endpoint_watcher.adapters.notifiers.stdout import AdapterStdoutNotifier
from endpoint_watcher.adapters.notifiers.telegram import AdapterTelegramNotifier

__all__ = ["AdapterStdoutNotifier", "AdapterTelegramNotifier"]
