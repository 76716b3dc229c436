"""
Clock value shared by the aggregation, calendar and streak stages.

Holds "now" and the timezone used to turn timestamps into calendar days,
so none of the stages read the system clock on their own.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo

WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True)
class Clock:
    """Current instant plus the timezone used for day bucketing.

    A ``tz`` of None means the machine's local time.
    """

    now: datetime
    tz: tzinfo | None = field(default=None)

    @classmethod
    def system(cls, tz: tzinfo | None = None) -> "Clock":
        return cls(now=datetime.now(tz), tz=tz)

    def to_datetime(self, ts: int) -> datetime:
        """Convert a timestamp (seconds) to a datetime in the clock's timezone."""
        return datetime.fromtimestamp(ts, self.tz)

    def day_key(self, ts: int) -> str:
        return self.to_datetime(ts).strftime("%Y-%m-%d")

    @property
    def today(self) -> date:
        return self.now.date()

    @property
    def today_key(self) -> str:
        return self.today.isoformat()

    @property
    def today_time(self) -> int:
        return int(self.now.timestamp())

    def at(self, day: date, hour: int, minute: int, second: int) -> datetime:
        """Wall-clock datetime on ``day`` in the clock's timezone."""
        return datetime(day.year, day.month, day.day, hour, minute, second, tzinfo=self.tz)


def weekday_name(day: date) -> str:
    """Return the Sun..Sat abbreviation for a date."""
    # date.weekday() is 0 for Monday
    return WEEKDAYS[(day.weekday() + 1) % 7]


def weekday_index(day: date) -> int:
    """Zero-based weekday with Sunday as 0."""
    return (day.weekday() + 1) % 7
