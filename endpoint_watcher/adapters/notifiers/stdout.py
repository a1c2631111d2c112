"""
Stdout notifier adapter - Prints messages instead of sending them.
"""

from endpoint_watcher.core.ports import Notifier


class AdapterStdoutNotifier(Notifier):  # pylint: disable=too-few-public-methods
    """Notifier used in dry-run mode."""

    def __init__(self, title: str = "Endpoint Watcher"):
        self.title = title

    def send(self, text: str) -> None:
        print()
        print("=" * 80)
        print(self.title)
        print("=" * 80)
        print(text.rstrip("\n"))
        print("=" * 80)
        print()
