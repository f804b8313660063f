"""ConnectivityProbe port: advisory network reachability.

A True result does not guarantee that a following remote call succeeds;
DNS, TLS, auth and rate-limit failures are all still possible. Callers
treat the answer as a hint for whether a sync is worth attempting.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ConnectivityProbeProtocol(Protocol):
    """Interface for connectivity checks."""

    async def is_online(self) -> bool:
        """Return True only if a network link exists and the internet is reachable.

        Implementations never raise; any fault reads as offline.
        """
        ...
