"""
Set differ - Computes added/removed values between two runs.
"""

from endpoint_watcher.core.entities import ChangeSet, TrackedSet


def diff_sets(old: TrackedSet, new: TrackedSet) -> ChangeSet:
    """
    Compare the previous baseline with the current set.

    Args:
        old: Baseline from the previous run
        new: Set extracted in this run

    Returns:
        ChangeSet whose ``added`` and ``removed`` lists are sorted
        ascending; both are empty when the sets are equal.
    """
    return ChangeSet(
        added=sorted(new - old),
        removed=sorted(old - new),
    )
