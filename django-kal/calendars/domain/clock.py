"""Current-instant source used to stamp entity timestamps."""

from abc import ABC, abstractmethod
from datetime import UTC, datetime, timedelta


class Clock(ABC):
    """Interface for reading the current UTC instant."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current instant as an aware UTC datetime."""
        ...


class SystemClock(Clock):
    """Wall clock."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock(Clock):
    """Clock frozen at a given instant until explicitly moved."""

    def __init__(self, instant: datetime) -> None:
        self._instant = instant.astimezone(UTC)

    def now(self) -> datetime:
        return self._instant

    def advance(self, delta: timedelta) -> datetime:
        self._instant = self._instant + delta
        return self._instant


SYSTEM_CLOCK = SystemClock()
