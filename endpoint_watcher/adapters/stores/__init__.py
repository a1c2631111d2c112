"""
Stores module - StateStore port implementations.
"""

from endpoint_watcher.adapters.stores.json_file import AdapterJsonFileStore
from endpoint_watcher.adapters.stores.memory import AdapterMemoryStore

__all__ = ["AdapterJsonFileStore", "AdapterMemoryStore"]
