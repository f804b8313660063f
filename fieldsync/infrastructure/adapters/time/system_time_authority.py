"""SystemTimeAuthority - production TimeAuthorityProtocol backed by the OS clock."""

import time
from datetime import datetime, timezone

from fieldsync.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Reads wall-clock time in UTC and the process monotonic clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def utcnow(self) -> datetime:
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        return time.monotonic()
