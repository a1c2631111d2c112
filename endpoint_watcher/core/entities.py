"""
Core entities - Data structures shared by every layer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set

# Unique, non-empty, trimmed strings observed in one run.
TrackedSet = Set[str]


class DocumentFormat(Enum):
    """Format of a fetched document, used to pick the extractor."""

    JSON = "json"
    HTML = "html"


@dataclass(frozen=True)
class FetchResult:
    """
    Raw response of a single fetch.

    Attributes:
        body: Response body bytes
        content_type: Content-Type header as returned by the server
        url: Final URL after redirects
        status_code: HTTP status code
    """

    body: bytes
    content_type: str
    url: str = ""
    status_code: int = 200


@dataclass(frozen=True)
class HtmlPath:
    """CSS selector plus the optional attribute to read instead of text."""

    selector: str
    attribute: Optional[str] = None


@dataclass(frozen=True)
class ChangeSet:
    """Values added and removed between two tracked sets, both sorted."""

    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.added and not self.removed


class RunOutcome(Enum):
    """What a watch run concluded."""

    FIRST_RUN = "first_run"
    CHANGED = "changed"
    UNCHANGED = "unchanged"


@dataclass
class RunResult:
    """
    Result of one watch run.

    Attributes:
        outcome: FIRST_RUN, CHANGED or UNCHANGED
        current: Set extracted in this run (the new baseline)
        changes: Computed diff, None on first run
        notified: Whether a notification was delivered
    """

    outcome: RunOutcome
    current: TrackedSet
    changes: Optional[ChangeSet] = None
    notified: bool = False
