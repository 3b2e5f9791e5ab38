"""
Injectable clocks.

The recurrence engine never asks the system for the date: it is handed a
calendar day.  Services obtain that day from a Clock, so production code
uses SystemClock and tests pin the day with DeterministicClock.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone


class Clock(ABC):
    """Source of the current instant for services.

    ``now()`` is always timezone-aware; ``today()`` is its calendar date in
    that same timezone.
    """

    @abstractmethod
    def now(self) -> datetime:
        ...

    def today(self) -> date:
        return self.now().date()


class SystemClock(Clock):
    """Wall-clock time in ``tz`` (UTC when omitted).

    Receipts are dated by the landlord's calendar, so deployments in Brazil
    pass their local offset here.
    """

    def __init__(self, tz: timezone | None = None):
        self._tz = tz or timezone.utc

    def now(self) -> datetime:
        return datetime.now(self._tz)


class DeterministicClock(Clock):
    """Clock pinned to one instant until moved forward by ``advance_days``."""

    def __init__(self, instant: datetime | None = None):
        self._instant = instant or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    @classmethod
    def on(cls, day: date) -> "DeterministicClock":
        """Pin the clock at noon UTC of ``day``."""
        return cls(datetime.combine(day, datetime.min.time(), timezone.utc) + timedelta(hours=12))

    def now(self) -> datetime:
        return self._instant

    def advance_days(self, days: int = 1) -> date:
        self._instant += timedelta(days=days)
        return self.today()
