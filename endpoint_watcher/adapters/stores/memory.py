"""
In-memory store - Keeps the baseline in process memory.
"""

from typing import Optional

from endpoint_watcher.core.entities import TrackedSet
from endpoint_watcher.core.errors import StateNotFoundError
from endpoint_watcher.core.ports import StateStore


class AdapterMemoryStore(StateStore):
    """StateStore backed by an attribute; used by tests."""

    def __init__(self, initial: Optional[TrackedSet] = None):
        self.values: Optional[TrackedSet] = (
            set(initial) if initial is not None else None
        )
        self.save_count = 0

    def load(self) -> TrackedSet:
        if self.values is None:
            raise StateNotFoundError("no baseline saved")
        return set(self.values)

    def save(self, values: TrackedSet) -> None:
        self.values = set(values)
        self.save_count += 1
