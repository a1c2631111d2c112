"""
JSON file store - Persists the baseline as a sorted JSON array on disk.

File structure:
    [
      "value-a",
      "value-b"
    ]
"""

import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Union

from endpoint_watcher.core.entities import TrackedSet
from endpoint_watcher.core.errors import (
    StateCorruptError,
    StateLoadError,
    StateNotFoundError,
    StateSaveError,
)
from endpoint_watcher.core.ports import StateStore

logger = logging.getLogger(__name__)

DEFAULT_STATE_FILE = "last_response.json"


class AdapterJsonFileStore(StateStore):
    """
    Adapter that implements StateStore with a single JSON file.

    Writes go to a temporary sibling file that is then moved over the
    target, so an interrupted save leaves the previous baseline intact.
    """

    def __init__(self, path: Union[str, Path] = DEFAULT_STATE_FILE):
        """
        Initialize the store.

        Args:
            path: Location of the state file
        """
        self.path = Path(path)

    def load(self) -> TrackedSet:
        """
        Load the baseline from disk.

        Returns:
            Set of strings saved by the previous run

        Raises:
            StateNotFoundError: If the file does not exist
            StateCorruptError: If the file is not a JSON array of strings
            StateLoadError: If the file exists but cannot be read
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise StateNotFoundError(f"state file not found: {self.path}") from e
        except UnicodeDecodeError as e:
            raise StateCorruptError(f"decode state file {self.path}: {e}") from e
        except OSError as e:
            raise StateLoadError(f"read state file {self.path}: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StateCorruptError(f"parse state file {self.path}: {e}") from e

        if not isinstance(data, list) or not all(isinstance(v, str) for v in data):
            raise StateCorruptError(
                f"state file {self.path} is not a JSON array of strings"
            )

        logger.debug("Loaded %d values from %s", len(data), self.path)
        return set(data)

    def save(self, values: TrackedSet) -> None:
        """
        Write the baseline as a sorted, two-space indented JSON array.

        Args:
            values: Set to persist

        Raises:
            StateSaveError: If the file cannot be written
        """
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(sorted(values), f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_path, self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise StateSaveError(f"save state file {self.path}: {e}") from e

        logger.debug("Saved %d values to %s", len(values), self.path)
