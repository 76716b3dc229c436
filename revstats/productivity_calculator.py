"""
Calculate productivity statistics from the per-day commit history.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProductivityStats:
    """Busiest day, least busy active day and total commits."""

    most: int = 0
    less: int = 1
    total: int = 0
    active_days: int = 0


def calculate_productivity(history: dict[str, int] | None) -> ProductivityStats:
    """
    Calculate productivity statistics.

    Args:
        history: Mapping of YYYY-MM-DD -> commit count, or None

    Returns:
        ProductivityStats with:
        - most: commits on the busiest day (0 when empty)
        - less: commits on the least busy active day (1 when empty)
        - total: sum of all commits
        - active_days: number of days with at least one commit
    """
    if not history:
        return ProductivityStats()

    # Days without commits never appear in the history, skip stray zeros anyway
    counts = [count for count in history.values() if count >= 1]
    if not counts:
        return ProductivityStats()

    return ProductivityStats(
        most=max(counts),
        less=min(counts),
        total=sum(counts),
        active_days=len(counts),
    )
