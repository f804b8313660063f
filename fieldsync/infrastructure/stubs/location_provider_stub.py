"""LocationProviderStub for testing."""

from __future__ import annotations

from fieldsync.application.ports.location_provider import LocationProviderProtocol
from fieldsync.domain.models.observation import GPSLocation


class LocationProviderStub(LocationProviderProtocol):
    """Provider whose fix is set by the test.

    Attributes:
        request_count: Number of get_current_location() calls made so far.
    """

    def __init__(self, location: GPSLocation | None = None) -> None:
        self._location = location
        self.request_count = 0

    def set_location(self, location: GPSLocation | None) -> None:
        self._location = location

    async def get_current_location(self) -> GPSLocation | None:
        self.request_count += 1
        return self._location
