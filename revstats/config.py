"""
Configuration management for revstats.

Loads settings from environment variables (and a .env file) and the list
of tracked repositories from ~/.revstats.json.
"""

import json
import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import RootModel, ValidationError

# Load .env file from the working directory
load_dotenv()

REVSTATS_CONFIG = os.getenv("REVSTATS_CONFIG")
REVSTATS_TIMEZONE = os.getenv("REVSTATS_TIMEZONE")


class ProjectsConfig(RootModel[dict[str, str]]):
    """Mapping of project names to repository paths."""

    pass


def get_config_path() -> Path:
    """Get the projects file path, ~/.revstats.json unless overridden."""
    if REVSTATS_CONFIG:
        return Path(REVSTATS_CONFIG).expanduser()
    return Path.home() / ".revstats.json"


def load_projects(config_path: str | Path | None = None) -> dict[str, Path]:
    """
    Load the tracked repositories.

    Args:
        config_path: Path to the JSON projects file. Defaults to
            get_config_path().

    Returns:
        Dictionary of project name -> repository path

    Raises:
        ValueError: If the file is missing or is not a JSON object of
            name -> path strings
    """
    path = Path(config_path).expanduser() if config_path else get_config_path()

    try:
        content = path.read_text(encoding="utf-8")
    except OSError:
        raise ValueError(
            f"Missing {path} file.\n"
            'Create it with a JSON object such as {"project": "/path/to/repo"}.'
        )

    try:
        projects = ProjectsConfig.model_validate(json.loads(content))
    except (json.JSONDecodeError, ValidationError) as e:
        raise ValueError(f"Invalid projects file {path}: {e}")

    return {name: Path(repo).expanduser() for name, repo in projects.root.items()}


def get_timezone() -> ZoneInfo | None:
    """
    Timezone used to bucket commits into days.

    Returns:
        ZoneInfo for REVSTATS_TIMEZONE, or None for the machine's local time

    Raises:
        ValueError: If REVSTATS_TIMEZONE is not a known timezone name
    """
    if not REVSTATS_TIMEZONE:
        return None

    try:
        return ZoneInfo(REVSTATS_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown timezone in REVSTATS_TIMEZONE: {REVSTATS_TIMEZONE}")
