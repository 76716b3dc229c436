"""
Aggregate commit timestamps into a per-day history.

Builds the day -> commit count mapping and the analysis window that the
calendar is rendered over.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from revstats.clock import Clock

# Length of the trailing window, matching a contributions graph
TRAILING_DAYS = 365


@dataclass
class CommitHistory:
    """Aggregated commit history and the window it is analysed over."""

    history: dict[str, int]
    initial: datetime
    final: datetime
    oldest: int
    newest: int
    today_date: str
    today_time: int
    years: int
    year: int | None = None

    @property
    def total_commits(self) -> int:
        return sum(self.history.values())


def parse_year_filter(value) -> int | None:
    """
    Parse a year filter value.

    Args:
        value: Year as int or string, or None

    Returns:
        Four-digit year, or None when the value is missing or not a year.
    """
    if value is None or isinstance(value, bool):
        return None

    text = str(value).strip()
    if len(text) != 4 or not text.isdigit():
        return None

    return int(text)


def aggregate_history(
    timestamps: list[int],
    year=None,
    clock: Clock | None = None,
    trailing: bool = False,
) -> CommitHistory | None:
    """
    Fold canonical timestamps into a per-day commit history.

    Args:
        timestamps: Canonical timestamps (seconds), in any order
        year: Optional year filter; invalid values mean "no filter"
        clock: Clock used for day bucketing and "today". Defaults to the
            system clock in local time.
        trailing: Use the trailing one-year window ending today instead of
            whole calendar years.

    Returns:
        CommitHistory, or None when there is no commit to analyse (empty
        input, or a year filter matching nothing).
    """
    if clock is None:
        clock = Clock.system()

    year_filter = parse_year_filter(year)

    history: dict[str, int] = {}
    oldest = None
    newest = None

    for ts in timestamps:
        try:
            day = clock.day_key(ts)
        except (OverflowError, ValueError, OSError):
            # Outside what datetime can represent
            continue

        if year_filter is not None and int(day[:4]) != year_filter:
            continue

        history[day] = history.get(day, 0) + 1

        if oldest is None or ts < oldest:
            oldest = ts
        if newest is None or ts > newest:
            newest = ts

    if not history:
        return None

    oldest_day = clock.to_datetime(oldest).date()
    newest_day = clock.to_datetime(newest).date()

    if trailing:
        initial, final = _trailing_window(oldest_day, newest_day, clock)
    else:
        initial = clock.at(date(oldest_day.year, 1, 1), 0, 0, 1)
        final = clock.at(date(newest_day.year, 12, 31), 23, 59, 59)

    assert final >= initial, "analysis window ends before it starts"

    return CommitHistory(
        history=history,
        initial=initial,
        final=final,
        oldest=oldest,
        newest=newest,
        today_date=clock.today_key,
        today_time=clock.today_time,
        years=final.year - initial.year,
        year=year_filter,
    )


def _trailing_window(
    oldest_day: date, newest_day: date, clock: Clock
) -> tuple[datetime, datetime]:
    """Window covering the commits and at least the last year up to today."""
    last_year = clock.today - timedelta(days=TRAILING_DAYS)

    first_day = min(oldest_day, last_year)
    last_day = max(newest_day, clock.today)

    return clock.at(first_day, 0, 0, 1), clock.at(last_day, 23, 59, 59)
