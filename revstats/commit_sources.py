"""
Commit sources for the supported version control systems.

Each source knows how to recognise a working copy and how to list the
timestamps of its commits. Repositories are read one after the other.
"""

import sqlite3
import subprocess
from pathlib import Path

from revstats.timestamp_normalizer import (
    TimestampScale,
    normalize_timestamps,
    split_output,
)


class CommitSourceError(Exception):
    """Raised when a backend cannot produce its commit log."""

    pass


class CommitSource:
    """Base class for a version control backend."""

    name = ""
    marker = ""
    scale = TimestampScale.SECONDS

    def detect(self, path: Path) -> bool:
        """Check whether ``path`` is a working copy of this backend."""
        return (Path(path) / self.marker).exists()

    def read_output(self, path: Path) -> list[str]:
        """
        Read raw commit timestamps for a repository.

        Raises:
            CommitSourceError: If the backend fails
        """
        raise NotImplementedError

    def list_timestamps(self, path: Path) -> list[int]:
        """List canonical commit timestamps for a repository."""
        return normalize_timestamps(self.read_output(path), self.scale)

    def _run(self, args: list[str]) -> list[str]:
        try:
            proc = subprocess.run(args, capture_output=True, text=True)
        except OSError as e:
            raise CommitSourceError(f"{args[0]} could not be started: {e}")

        if proc.returncode != 0:
            raise CommitSourceError(
                f"{args[0]} exited with status {proc.returncode}: {proc.stderr.strip()}"
            )

        return split_output(proc.stdout)


class GitSource(CommitSource):
    """Git repositories, author times as plain seconds."""

    name = "git"
    marker = ".git"

    def read_output(self, path: Path) -> list[str]:
        return self._run(["git", "-C", str(path), "log", "--format=%at"])


class MercurialSource(CommitSource):
    """Mercurial repositories; ``{date}`` carries a fractional suffix."""

    name = "hg"
    marker = ".hg"
    scale = TimestampScale.FRACTIONAL

    def read_output(self, path: Path) -> list[str]:
        return self._run(["hg", "log", "--template", "{date}\n", "-R", str(path)])


class SubversionSource(CommitSource):
    """Subversion working copies, read from the wc.db metadata store."""

    name = "svn"
    marker = ".svn/wc.db"
    scale = TimestampScale.OVERLONG

    def read_output(self, path: Path) -> list[str]:
        db_path = Path(path) / self.marker

        try:
            uri = f"{db_path.resolve().as_uri()}?mode=ro"
            with sqlite3.connect(uri, uri=True) as conn:
                rows = conn.execute("SELECT changed_date FROM NODES").fetchall()
        except sqlite3.Error as e:
            raise CommitSourceError(f"Cannot read {db_path}: {e}")

        return [str(row[0]) for row in rows if row[0] is not None]


SOURCES = (GitSource(), MercurialSource(), SubversionSource())


def detect_source(path: Path) -> CommitSource | None:
    """Return the first backend that recognises ``path``, or None."""
    for source in SOURCES:
        if source.detect(path):
            return source
    return None


def fetch_timestamps(path: Path) -> list[int]:
    """
    List the commit timestamps of one repository.

    Args:
        path: Repository working copy

    Returns:
        Canonical timestamps. Empty when no backend recognises the path or
        the backend fails.
    """
    source = detect_source(Path(path))
    if source is None:
        return []

    try:
        return source.list_timestamps(Path(path))
    except CommitSourceError:
        return []


def collect_timestamps(paths: list[Path]) -> list[int]:
    """Concatenate the commit timestamps of several repositories."""
    timestamps = []
    for path in paths:
        timestamps.extend(fetch_timestamps(path))
    return timestamps
