"""
Calculate coding streaks from the calendar grid.
"""

from dataclasses import dataclass, field

from revstats.calendar_builder import CalendarCell, CalendarGrid, iter_cells


@dataclass(frozen=True)
class Streak:
    """A run of consecutive active days.

    ``days`` counts the active days, ``marks`` sums their commits.
    """

    days: int = 0
    marks: int = 0


@dataclass
class StreakReport:
    """Longest and current streaks plus the days that broke a streak."""

    longest: Streak = field(default_factory=Streak)
    current: Streak = field(default_factory=Streak)
    missing: list[str] = field(default_factory=list)


def calculate_streak(
    calendar: CalendarGrid | dict[str, list[CalendarCell]] | None,
    today: str,
    year: int | None = None,
) -> StreakReport:
    """
    Calculate streak information from the unified calendar.

    Walks the calendar week by week, Sunday to Saturday. Padding cells
    neither break nor extend a streak; a day without commits closes the
    running streak.

    Args:
        calendar: CalendarGrid from build_calendar() (its unified view is
            used) or a weekday -> cells mapping. None means no history.
        today: Today's date (YYYY-MM-DD). Days from today onward are never
            reported as missing.
        year: Only report missing days from this year, if set.

    Returns:
        StreakReport with:
        - longest: longest streak by days and by commits, measured
          independently
        - current: streak running at today (through yesterday if today
          has no commits yet)
        - missing: inactive days that interrupted a started history
    """
    if calendar is None:
        return StreakReport()

    if isinstance(calendar, CalendarGrid):
        calendar = calendar.unified

    days = 0
    marks = 0
    days_history = []
    marks_history = []
    missing = []
    current = Streak()
    started = False
    finished = False

    for cell in iter_cells(calendar):
        if cell.is_padding:
            continue

        reached_today = cell.date == today
        if reached_today:
            finished = True

        if cell.is_active:
            started = True
            days += 1
            marks += cell.commits
            if reached_today:
                current = Streak(days, marks)
            continue

        if reached_today:
            # Grace period: today's commits may still come
            current = Streak(days, marks)

        days_history.append(days)
        marks_history.append(marks)
        days = 0
        marks = 0

        if started and not finished and _in_year(cell.date, year):
            missing.append(cell.date)

    # Append most recent streak
    days_history.append(days)
    marks_history.append(marks)

    return StreakReport(
        longest=Streak(max(days_history), max(marks_history)),
        current=current,
        missing=missing,
    )


def _in_year(day: str, year: int | None) -> bool:
    if year is None:
        return True
    return day[:4] == f"{year:04d}"
