"""
Normalize raw commit timestamps reported by version control backends.

Backends report commit times with different shapes: git prints plain
seconds, Mercurial prints seconds with a fractional/offset suffix and the
Subversion working copy stores microseconds. Everything is reduced to
integer seconds since the epoch.
"""

import math
import re
from enum import Enum

# Digits in a seconds-since-epoch value for any date between 2001 and 2286
SECONDS_DIGITS = 10

# 9999-12-30 00:00 UTC, the last day datetime can hold in any timezone
MAX_TIMESTAMP = 253402128000

_INTEGER_PATTERN = re.compile(r"^\d+$")
_FRACTIONAL_PATTERN = re.compile(r"^(\d+)(?:\.\d*)?(?:[\s+-].*)?$")


class TimestampScale(Enum):
    """How a backend encodes its timestamps."""

    SECONDS = "seconds"
    FRACTIONAL = "fractional"
    OVERLONG = "overlong"


def split_output(output: str) -> list[str]:
    """Split backend output into raw timestamp lines."""
    return [line.strip() for line in output.splitlines()]


def normalize_timestamps(
    raw: list, scale: TimestampScale = TimestampScale.SECONDS
) -> list[int]:
    """
    Convert raw backend timestamps into canonical integer seconds.

    Args:
        raw: Sequence of raw values (strings or numbers) in backend order
        scale: Encoding used by the backend that produced ``raw``

    Returns:
        List of non-negative integer timestamps in input order. Blank,
        non-numeric, negative and non-finite entries are dropped, as are
        values past the year 9999. For OVERLONG input, entries whose digit
        count differs from the first sample are dropped as well.
    """
    samples = [_as_text(value) for value in raw]
    samples = [s for s in samples if s]

    if scale is TimestampScale.OVERLONG:
        return _normalize_overlong(samples)

    timestamps = []
    for sample in samples:
        if scale is TimestampScale.FRACTIONAL:
            match = _FRACTIONAL_PATTERN.match(sample)
            if match:
                timestamps.append(int(match.group(1)))
        elif _INTEGER_PATTERN.match(sample):
            timestamps.append(int(sample))

    return [ts for ts in timestamps if ts <= MAX_TIMESTAMP]


def _normalize_overlong(samples: list[str]) -> list[int]:
    digits = [s for s in samples if _INTEGER_PATTERN.match(s)]
    if not digits:
        return []

    width = len(digits[0])
    power = 10 ** max(width - SECONDS_DIGITS, 0)

    timestamps = [int(s) // power for s in digits if len(s) == width]
    return [ts for ts in timestamps if ts <= MAX_TIMESTAMP]


def _as_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return ""
    if isinstance(value, float):
        if not math.isfinite(value) or value < 0:
            return ""
        return str(int(value))
    return str(value).strip()
