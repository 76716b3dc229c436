"""
Terminal display functions for revstats.
"""

import math
from datetime import datetime

from revstats.calendar_builder import CalendarCell, CalendarGrid, weeks_in_calendar
from revstats.clock import MONTHS, WEEKDAYS
from revstats.history_aggregator import CommitHistory
from revstats.productivity_calculator import ProductivityStats
from revstats.streak_calculator import StreakReport

# 256-colour backgrounds, lightest to darkest
LEVEL_COLORS = ("051", "045", "039", "033", "027")
INACTIVE_CELL = "\033[0;90m░\033[0m"
PADDING_CELL = " "
INDENT = " " * 6


def get_milestone_message(streak_days: int) -> str | None:
    """
    Get milestone message for a given streak length.

    Args:
        streak_days: Streak length in days

    Returns:
        Milestone message string or None if no milestone
    """
    milestones = {
        7: "One week strong!",
        14: "Two weeks of consistency!",
        30: "One month champion!",
        60: "Two months unstoppable!",
        100: "100 days - legendary!",
    }
    return milestones.get(streak_days)


def intensity_level(commits: int, most: int) -> int:
    """
    Calculate intensity level for heatmap coloring.

    Args:
        commits: Number of commits for the day
        most: Commits on the busiest day

    Returns:
        0 for no commits, otherwise 1-5 relative to the busiest day
    """
    if commits <= 0 or most <= 0:
        return 0
    level = math.ceil(commits * len(LEVEL_COLORS) / most)
    return max(1, min(level, len(LEVEL_COLORS)))


def format_cell(cell: CalendarCell, most: int) -> str:
    """Render one calendar cell as a single terminal character."""
    if cell.is_padding:
        return PADDING_CELL
    level = intensity_level(cell.commits, most)
    if level == 0:
        return INACTIVE_CELL
    return f"\033[48;5;{LEVEL_COLORS[level - 1]}m \033[0m"


def month_header(calendar: dict[str, list[CalendarCell]]) -> str:
    """
    Build the month labels line for a calendar.

    Each label starts at the first week whose first real day falls in a new
    month; labels that would overlap the previous one are dropped.
    """
    weeks = weeks_in_calendar(calendar)
    line = [" "] * weeks
    last_month = None
    free_from = 0

    for week in range(weeks):
        day = _first_day_of_week(calendar, week)
        if day is None:
            continue

        month = int(day[5:7])
        if month == last_month:
            continue
        last_month = month

        label = MONTHS[month - 1]
        if week < free_from:
            continue
        for offset, char in enumerate(label):
            if week + offset < weeks:
                line[week + offset] = char
        free_from = week + len(label) + 1

    return INDENT + "".join(line).rstrip()


def display_calendar(grid: CalendarGrid | None, productivity: ProductivityStats) -> None:
    """
    Display the commit heatmap, one block per year.

    Args:
        grid: CalendarGrid from build_calendar(), or None for no history
        productivity: Stats used to scale the colours
    """
    if grid is None:
        display_no_history()
        return

    for year in sorted(grid.years):
        calendar = grid.years[year]
        print(f"{INDENT}{year}")
        print(month_header(calendar))

        for weekday in WEEKDAYS:
            row = "".join(format_cell(cell, productivity.most) for cell in calendar[weekday])
            print(f"{weekday}   {row}")

        print()


def display_details(
    history: CommitHistory,
    productivity: ProductivityStats,
    streak: StreakReport,
) -> None:
    """Display history bounds, productivity stats and streaks."""
    oldest = datetime.fromtimestamp(history.oldest, history.initial.tzinfo)
    newest = datetime.fromtimestamp(history.newest, history.initial.tzinfo)

    print(f"{INDENT}Oldest: {oldest:%a %b %d %Y %H:%M:%S}")
    print(f"{INDENT}Newest: {newest:%a %b %d %Y %H:%M:%S}")
    print(f"{INDENT}Most Productive Day: {productivity.most} {_plural(productivity.most, 'commit')}")
    print(f"{INDENT}Less Productive Day: {productivity.less} {_plural(productivity.less, 'commit')}")
    print(f"{INDENT}Total Commits: {productivity.total}")
    print(f"{INDENT}Active Days: {productivity.active_days}")

    longest = streak.longest
    print(
        f"{INDENT}Longest Streak: {longest.days} {_plural(longest.days, 'day')}"
        f" / {longest.marks} {_plural(longest.marks, 'commit')}"
    )

    current = streak.current
    if current.days == 0:
        status = "No active streak"
    else:
        status = f"Current Streak: {current.days} {_plural(current.days, 'day')}"
        milestone = get_milestone_message(current.days)
        if milestone:
            status = f"{status} - {milestone}"
    print(f"{INDENT}{status}")
    print()


def display_missing(missing: list[str]) -> None:
    """Display days without commits inside the history."""
    for day in missing:
        print(f"{INDENT}Missing commit: {day}")


def display_no_history() -> None:
    print("No commits found.")


def _first_day_of_week(calendar: dict[str, list[CalendarCell]], week: int) -> str | None:
    for weekday in WEEKDAYS:
        cells = calendar[weekday]
        if week < len(cells) and not cells[week].is_padding:
            return cells[week].date
    return None


def _plural(count: int, word: str) -> str:
    return word if count == 1 else f"{word}s"
