"""LocationProvider port: the current GPS fix for a new observation.

Used by the capture flow when the caller does not pass a location
explicitly. A provider answers with the best fix it has or None and should
not raise; a missing receiver and a lost satellite lock both read as None.
"""

from typing import Protocol, runtime_checkable

from fieldsync.domain.models.observation import GPSLocation


@runtime_checkable
class LocationProviderProtocol(Protocol):
    """Interface for GPS fix sources."""

    async def get_current_location(self) -> GPSLocation | None:
        """Return the current fix, or None when no fix is available."""
        ...
