"""Time Authority Protocol - interface for timestamp provisioning.

Services that stamp observations, outbox items or sync attempts MUST inject
a TimeAuthorityProtocol implementation instead of calling datetime.now()
directly.

For production:
    Use SystemTimeAuthority from fieldsync.infrastructure.adapters.time

For testing:
    Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority.

    Example usage:
        class MyService:
            def __init__(self, time_authority: TimeAuthorityProtocol) -> None:
                self._time = time_authority

            def process(self) -> None:
                now = self._time.utcnow()  # NOT datetime.now()
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return current time with timezone awareness (UTC recommended)."""
        ...

    @abstractmethod
    def utcnow(self) -> datetime:
        """Return current UTC time as a timezone-aware datetime."""
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Return monotonic clock value for measuring elapsed time.

        Only differences between values are meaningful.
        """
        ...
