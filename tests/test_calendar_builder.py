"""
Tests for the calendar builder.
"""

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from revstats.calendar_builder import (
    CalendarCell,
    CellKind,
    build_calendar,
    iter_cells,
    iter_days,
    weeks_in_calendar,
)
from revstats.clock import WEEKDAYS, Clock, weekday_index
from revstats.history_aggregator import aggregate_history
from revstats.productivity_calculator import calculate_productivity
from revstats.streak_calculator import calculate_streak


def ts(value: str) -> int:
    """UTC timestamp for 'YYYY-MM-DD HH:MM'."""
    moment = datetime.strptime(value, "%Y-%m-%d %H:%M").replace(tzinfo=timezone.utc)
    return int(moment.timestamp())


@pytest.fixture
def clock():
    """UTC clock fixed at 2024-06-15 12:00."""
    return Clock(now=datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc), tz=timezone.utc)


def real_cells(calendar):
    return [cell for cells in calendar.values() for cell in cells if not cell.is_padding]


class TestCalendarCell:
    """Tests for the CalendarCell variants."""

    def test_active_day(self):
        cell = CalendarCell.day("2024-01-01", 3)
        assert cell.kind is CellKind.ACTIVE
        assert cell.is_active
        assert not cell.is_padding

    def test_inactive_day(self):
        cell = CalendarCell.day("2024-01-01", 0)
        assert cell.kind is CellKind.INACTIVE
        assert cell.is_inactive
        assert not cell.is_active

    def test_padding(self):
        cell = CalendarCell.padding()
        assert cell.is_padding
        assert cell.date is None
        assert cell.commits == 0


class TestIterDays:
    """Tests for day iteration."""

    def test_full_leap_year(self):
        initial = datetime(2024, 1, 1, 0, 0, 1, tzinfo=timezone.utc)
        final = datetime(2024, 12, 31, 23, 59, 59, tzinfo=timezone.utc)

        days = list(iter_days(initial, final))

        assert len(days) == 366
        assert days[0] == date(2024, 1, 1)
        assert days[-1] == date(2024, 12, 31)

    def test_daylight_saving_changes_do_not_skip_days(self):
        """Calendar stepping survives the spring and autumn clock changes."""
        tz = ZoneInfo("America/New_York")
        initial = datetime(2024, 1, 1, 0, 0, 1, tzinfo=tz)
        final = datetime(2024, 12, 31, 23, 59, 59, tzinfo=tz)

        days = list(iter_days(initial, final))

        assert len(days) == 366
        assert len(set(days)) == 366
        assert date(2024, 3, 10) in days
        assert date(2024, 11, 3) in days


class TestBuildCalendar:
    """Tests for build_calendar."""

    def test_none_history_returns_none(self):
        assert build_calendar(None) is None

    def test_every_day_in_window_has_a_cell(self, clock):
        history = aggregate_history([ts("2023-05-01 10:00"), ts("2024-05-01 10:00")], clock=clock)

        grid = build_calendar(history)

        # 2023 has 365 days, 2024 has 366
        assert len(real_cells(grid.unified)) == 365 + 366
        assert len(real_cells(grid.years[2023])) == 365
        assert len(real_cells(grid.years[2024])) == 366

    def test_counts_come_from_history(self, clock):
        history = aggregate_history([1704067200, 1704067200, 1704153600], clock=clock)

        grid = build_calendar(history)
        by_date = {cell.date: cell for cell in real_cells(grid.unified)}

        assert by_date["2024-01-01"].commits == 2
        assert by_date["2024-01-02"].commits == 1
        assert by_date["2024-01-03"].commits == 0
        assert by_date["2024-01-03"].is_inactive

    def test_days_land_in_their_weekday_column(self, clock):
        history = aggregate_history([1704067200], clock=clock)

        grid = build_calendar(history)

        # 2024-01-01 is a Monday
        assert grid.years[2024]["Mon"][0].date == "2024-01-01"
        assert grid.years[2024]["Tue"][0].date == "2024-01-02"
        assert grid.years[2024]["Sun"][1].date == "2024-01-07"

    def test_leading_padding_matches_first_weekday(self, clock):
        """2022 starts on Saturday, 2023 on Sunday, 2024 on Monday."""
        history = aggregate_history([ts("2022-03-01 10:00"), ts("2024-03-01 10:00")], clock=clock)

        grid = build_calendar(history)

        for year in (2022, 2023, 2024):
            calendar = grid.years[year]
            first_week = [calendar[weekday][0] for weekday in WEEKDAYS]
            padding = sum(1 for cell in first_week if cell.is_padding)
            assert padding == weekday_index(date(year, 1, 1))

        assert sum(1 for cells in grid.years[2022].values() if cells[0].is_padding) == 6
        assert sum(1 for cells in grid.years[2023].values() if cells[0].is_padding) == 0

    def test_unified_pads_only_first_year(self, clock):
        history = aggregate_history([ts("2023-03-01 10:00"), ts("2024-03-01 10:00")], clock=clock)

        grid = build_calendar(history)
        cells = list(iter_cells(grid.unified))
        leading = 0
        for cell in cells:
            if not cell.is_padding:
                break
            leading += 1

        # 2023-01-01 is a Sunday, no leading padding at all
        assert leading == 0
        assert cells[0].date == "2023-01-01"

    def test_unified_columns_have_equal_length(self, clock):
        history = aggregate_history([ts("2022-03-01 10:00"), ts("2024-03-01 10:00")], clock=clock)

        grid = build_calendar(history)
        lengths = {len(cells) for cells in grid.unified.values()}

        assert len(lengths) == 1
        assert weeks_in_calendar(grid.unified) == lengths.pop()

    def test_year_columns_differ_by_at_most_one(self, clock):
        history = aggregate_history([ts("2024-03-01 10:00")], clock=clock)

        grid = build_calendar(history)
        lengths = [len(cells) for cells in grid.years[2024].values()]

        assert max(lengths) - min(lengths) <= 1

    def test_views_share_cell_instances(self, clock):
        history = aggregate_history([ts("2023-03-01 10:00"), ts("2024-03-01 10:00")], clock=clock)

        grid = build_calendar(history)
        unified_ids = {id(cell) for cell in real_cells(grid.unified)}
        year_ids = {
            id(cell) for calendar in grid.years.values() for cell in real_cells(calendar)
        }

        assert unified_ids == year_ids

    def test_unified_traversal_is_chronological(self, clock):
        history = aggregate_history([ts("2023-12-20 10:00"), ts("2024-01-10 10:00")], clock=clock)

        grid = build_calendar(history)
        dates = [cell.date for cell in iter_cells(grid.unified) if not cell.is_padding]

        assert dates == sorted(dates)
        assert len(dates) == len(set(dates))

    def test_trailing_window(self, clock):
        history = aggregate_history([ts("2024-06-01 10:00")], clock=clock, trailing=True)

        grid = build_calendar(history)
        dates = [cell.date for cell in iter_cells(grid.unified) if not cell.is_padding]

        assert dates[0] == "2023-06-16"
        assert dates[-1] == "2024-06-15"
        assert sorted(grid.years) == [2023, 2024]


def test_pipeline_is_idempotent(clock):
    """Two runs over the same timestamps give identical calendar, stats and streaks."""
    timestamps = [
        ts("2023-12-30 09:00"),
        ts("2023-12-31 22:15"),
        ts("2024-01-01 10:00"),
        ts("2024-01-01 11:00"),
        ts("2024-03-05 17:45"),
    ]

    runs = []
    for _ in range(2):
        history = aggregate_history(list(timestamps), clock=clock)
        grid = build_calendar(history)
        productivity = calculate_productivity(history.history)
        streak = calculate_streak(grid, history.today_date, year=history.year)
        runs.append((history, grid, productivity, streak))

    first, second = runs
    assert first[0] == second[0]
    assert first[1] == second[1]
    assert first[2] == second[2]
    assert first[3] == second[3]
    assert first[1] is not second[1]
