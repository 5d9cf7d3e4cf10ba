"""
Clock -- where services get "now" from.

The month windows, activity cutoffs and dated payout numbers all hinge on
the current instant, so services take a Clock in their constructor and pass
``clock.now_utc()`` down to the engines.  Engines themselves only ever see a
``now`` argument.

SystemClock reads the wall clock.  DeterministicClock is pinned to one
instant (2024-01-15 12:00 UTC unless told otherwise) and moves only when a
test moves it.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone

DEFAULT_FIXED_TIME = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC (naive values are taken as UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Clock(ABC):
    """Source of the current instant for services."""

    @abstractmethod
    def now(self) -> datetime:
        """Current instant, timezone-aware."""

    def now_utc(self) -> datetime:
        """Current instant converted to UTC."""
        return self.now().astimezone(timezone.utc)

    def today(self) -> date:
        """Current UTC calendar date (payout numbers are dated by it)."""
        return self.now_utc().date()


class SystemClock(Clock):
    """Wall-clock time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Clock frozen at a chosen instant.

    A naive ``fixed_time`` is taken as UTC, matching how the engines treat
    naive datetimes.
    """

    def __init__(self, fixed_time: datetime | None = None):
        self._current = DEFAULT_FIXED_TIME
        if fixed_time is not None:
            self.set_time(fixed_time)

    def now(self) -> datetime:
        return self._current

    def set_time(self, time: datetime) -> None:
        self._current = time if time.tzinfo is not None else as_utc(time)

    def advance(self, seconds: int = 1) -> None:
        """Move forward by ``seconds`` (negative values move back)."""
        self._current += timedelta(seconds=seconds)
