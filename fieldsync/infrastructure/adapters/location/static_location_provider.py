"""StaticLocationProvider - fixed survey-station fix.

Machines running the CLI usually have no GPS receiver. Field teams working
from a known station configure its coordinates once
(FIELDSYNC_LOCATION_LAT / FIELDSYNC_LOCATION_LON) and captures without an
explicit location are stamped with them.
"""

from __future__ import annotations

import structlog

from fieldsync.application.ports.location_provider import LocationProviderProtocol
from fieldsync.domain.models.observation import GPSLocation

log = structlog.get_logger()


class StaticLocationProvider(LocationProviderProtocol):
    """Returns the configured fix, or None when none is configured."""

    def __init__(self, location: GPSLocation | None = None) -> None:
        self._location = location

    async def get_current_location(self) -> GPSLocation | None:
        if self._location is None:
            log.debug("location_unavailable", source="static")
        return self._location
