"""
Time utilities shared by the activation and audit modules.

All server-assigned times are timezone-aware UTC datetimes.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone

UPDATE_TIME_FORMAT = "%Y/%m/%d %H:%M:%S"


class Clock(ABC):
    """Source of the current UTC time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as an aware UTC datetime."""
        pass


class SystemClock(Clock):
    """Clock backed by the system time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Clock that returns a settable instant. Used by tests and replays."""

    def __init__(self, instant: datetime):
        self.instant = instant

    def now(self) -> datetime:
        return self.instant

    def advance(self, delta) -> None:
        """Move the clock forward by a timedelta."""
        self.instant = self.instant + delta


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision from a datetime."""
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


def to_epoch_millis(value: datetime) -> int:
    """
    Convert an aware datetime to milliseconds since the Unix epoch.

    Naive datetimes are interpreted as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    delta = value - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def format_update_time(value: datetime) -> str:
    """Render a datetime as ``yyyy/MM/dd HH:mm:ss`` in UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(UPDATE_TIME_FORMAT)
