"""
Calendar builder for the commit heatmap.

Expands the analysis window into weekday columns, one cell per day, the
same grid a contributions graph draws: seven rows (Sun..Sat) and one
column per week.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum

from revstats.clock import WEEKDAYS, weekday_index, weekday_name
from revstats.history_aggregator import CommitHistory


class CellKind(Enum):
    """What a calendar cell represents."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    PADDING = "padding"


@dataclass(frozen=True)
class CalendarCell:
    """One day in the calendar grid, or padding used for alignment."""

    date: str | None
    commits: int
    kind: CellKind

    @classmethod
    def padding(cls) -> "CalendarCell":
        return cls(date=None, commits=0, kind=CellKind.PADDING)

    @classmethod
    def day(cls, date: str, commits: int) -> "CalendarCell":
        kind = CellKind.ACTIVE if commits > 0 else CellKind.INACTIVE
        return cls(date=date, commits=commits, kind=kind)

    @property
    def is_padding(self) -> bool:
        return self.kind is CellKind.PADDING

    @property
    def is_active(self) -> bool:
        return self.kind is CellKind.ACTIVE

    @property
    def is_inactive(self) -> bool:
        return self.kind is CellKind.INACTIVE


def empty_calendar() -> dict[str, list[CalendarCell]]:
    return {weekday: [] for weekday in WEEKDAYS}


@dataclass
class CalendarGrid:
    """Calendar partitioned by year plus the unified cross-year view."""

    years: dict[int, dict[str, list[CalendarCell]]] = field(default_factory=dict)
    unified: dict[str, list[CalendarCell]] = field(default_factory=empty_calendar)

    @property
    def weekdays(self) -> tuple[str, ...]:
        return WEEKDAYS


def iter_days(initial: datetime, final: datetime):
    """
    Yield every calendar day whose start lies in ``[initial, final)``.

    Steps by calendar date so daylight saving changes never skip or repeat
    a day.
    """
    day = initial.date()
    start_time = initial.timetz()

    while datetime.combine(day, start_time) < final:
        yield day
        if day == date.max:
            break
        day += timedelta(days=1)


def build_calendar(history: CommitHistory | None) -> CalendarGrid | None:
    """
    Build the calendar grid for an aggregated history.

    Args:
        history: Output of aggregate_history(), or None for no history

    Returns:
        CalendarGrid whose year calendars and unified calendar share the
        same cell instances, or None when there is no history.
    """
    if history is None:
        return None

    grid = CalendarGrid()
    first_day: date | None = None
    last_day: date | None = None

    for day in iter_days(history.initial, history.final):
        weekday = weekday_name(day)

        calendar = grid.years.get(day.year)
        if calendar is None:
            # First day of this year: align the columns on a Sunday
            calendar = empty_calendar()
            grid.years[day.year] = calendar
            _pad_leading(calendar, day)

        if first_day is None:
            first_day = day
            _pad_leading(grid.unified, day)

        key = day.isoformat()
        cell = CalendarCell.day(key, history.history.get(key, 0))

        calendar[weekday].append(cell)
        grid.unified[weekday].append(cell)
        last_day = day

    if last_day is not None:
        _pad_trailing(grid.unified, last_day)

    return grid


def weeks_in_calendar(calendar: dict[str, list[CalendarCell]]) -> int:
    """Number of week columns, i.e. the longest weekday row."""
    return max((len(cells) for cells in calendar.values()), default=0)


def iter_cells(calendar: dict[str, list[CalendarCell]]):
    """Yield cells in chronological order: week by week, Sun..Sat."""
    for week in range(weeks_in_calendar(calendar)):
        for weekday in WEEKDAYS:
            cells = calendar.get(weekday, [])
            if week < len(cells):
                yield cells[week]


def _pad_leading(calendar: dict[str, list[CalendarCell]], day: date) -> None:
    for weekday in WEEKDAYS[: weekday_index(day)]:
        calendar[weekday].append(CalendarCell.padding())


def _pad_trailing(calendar: dict[str, list[CalendarCell]], day: date) -> None:
    for weekday in WEEKDAYS[weekday_index(day) + 1:]:
        calendar[weekday].append(CalendarCell.padding())
