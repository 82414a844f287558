"""Time value objects for the scheduler.

A point in time is a plain ``datetime``. All arithmetic is in whole
minutes; the helpers here are the only place that converts between
minutes and ``timedelta``.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from rockwater.domain.shared.errors import ConfigurationError

Minutes = int


def add_minutes(point: datetime, minutes: Minutes) -> datetime:
    """Return ``point`` shifted by a whole number of minutes."""
    return point + timedelta(minutes=minutes)


def minutes_between(start: datetime, end: datetime) -> Minutes:
    """Return the whole minutes from ``start`` to ``end`` (negative if reversed)."""
    return int((end - start).total_seconds() // 60)


def same_day(a: datetime, b: datetime) -> bool:
    """Check whether two points fall on the same calendar date."""
    return a.date() == b.date()


def format_clock(point: datetime) -> str:
    """Format a point as ``HH:MM``."""
    return point.strftime("%H:%M")


def parse_point_in_time(text: str) -> datetime:
    """Parse an ISO-8601 string into a point in time.

    Args:
        text: Value like "2026-01-25T08:00" or "2026-01-25 08:00"

    Returns:
        Parsed datetime

    Raises:
        ConfigurationError: If the text is not a valid ISO-8601 timestamp
    """
    try:
        return datetime.fromisoformat(text.strip())
    except ValueError as e:
        raise ConfigurationError(f"Invalid point in time: {text!r}") from e


@dataclass(frozen=True)
class TimeBlock:
    """Half-open interval ``[start, end)`` occupied on the timeline.

    Example:
        rock = TimeBlock.from_duration(datetime(2026, 1, 25, 9), 30)
        rock.overlaps(datetime(2026, 1, 25, 8), datetime(2026, 1, 25, 9))  # False
    """

    start: datetime
    end: datetime

    @classmethod
    def from_duration(cls, start: datetime, minutes: Minutes) -> "TimeBlock":
        """Create a block starting at ``start`` lasting ``minutes``."""
        return cls(start=start, end=add_minutes(start, minutes))

    @property
    def duration(self) -> Minutes:
        """Length of the block in minutes."""
        return minutes_between(self.start, self.end)

    def overlaps(self, start: datetime, end: datetime) -> bool:
        """Check whether ``[start, end)`` intersects this block.

        Touching edges do not overlap, so a task ending exactly when
        the block starts fits before it.
        """
        return start < self.end and end > self.start

    def __str__(self) -> str:
        return f"{format_clock(self.start)}-{format_clock(self.end)}"
