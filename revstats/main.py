"""
revstats: Revision control statistics

Entry point for the application.
"""

import argparse
from pathlib import Path

from revstats.calendar_builder import build_calendar
from revstats.cli import display_calendar, display_details, display_missing, display_no_history
from revstats.clock import Clock
from revstats.commit_sources import collect_timestamps, detect_source
from revstats.config import get_timezone, load_projects
from revstats.history_aggregator import aggregate_history, parse_year_filter
from revstats.productivity_calculator import calculate_productivity
from revstats.streak_calculator import calculate_streak


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="revstats",
        description="Contribution heatmap for git, Mercurial and Subversion repositories.",
    )
    p.add_argument("path", nargs="?", type=Path, help="Analyse this repository instead of ~/.revstats.json.")
    p.add_argument("--config", type=Path, default=None, help="Path to the projects JSON file.")
    p.add_argument("--year", type=str, default=None, help="Only count commits from this year.")
    p.add_argument("--details", action="store_true", help="Display streak and productivity data.")
    p.add_argument("--missing", action="store_true", help="Display empty days between the calendar.")
    p.add_argument("--trailing", action="store_true", help="Show the last 365 days instead of whole years.")
    return p


def _repositories(args: argparse.Namespace) -> dict[str, Path]:
    if args.path is not None:
        return {args.path.name or str(args.path): args.path}
    return load_projects(args.config)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        repositories = _repositories(args)
        clock = Clock.system(get_timezone())
    except ValueError as e:
        print(f"\nConfiguration Error:\n{e}")
        return 1

    paths = []
    for name, path in repositories.items():
        if detect_source(path) is None:
            print(f"Skipping {name}: no supported repository found at {path}")
            continue
        paths.append(path)

    timestamps = collect_timestamps(paths)

    year = parse_year_filter(args.year)
    history = aggregate_history(timestamps, year=year, clock=clock, trailing=args.trailing)

    if history is None:
        display_no_history()
        return 0

    grid = build_calendar(history)
    productivity = calculate_productivity(history.history)
    display_calendar(grid, productivity)

    if args.details or args.missing:
        streak = calculate_streak(grid, history.today_date, year=year)

        if args.details:
            display_details(history, productivity, streak)
        if args.missing:
            display_missing(streak.missing)

    return 0


if __name__ == "__main__":
    exit(main())
