"""Observation capture flow.

Recording an observation:
0. Without an explicit location, ask the location provider for a fix;
   no fix raises LocationUnavailableError before anything is stored.
1. Build the observation (generated id, trimmed fields, parsed items).
2. Upsert it into the record store and enqueue it in the outbox.
3. Remember the enumerator for the next capture.
4. If the probe reports online, attempt an automatic sync_all().

The automatic sync is best-effort: OfflineError, ConfigError and
SyncBusyError are logged and reported on the CaptureResult; the
observation stays queued for a later run. StorageError is never swallowed.
"""

from __future__ import annotations

import secrets
import string
from collections.abc import Iterable

from fieldsync.application.dtos.sync import CaptureResult
from fieldsync.application.ports.location_provider import LocationProviderProtocol
from fieldsync.application.ports.observation_repository import (
    ObservationRepositoryProtocol,
)
from fieldsync.application.ports.outbox_repository import OutboxRepositoryProtocol
from fieldsync.application.ports.time_authority import TimeAuthorityProtocol
from fieldsync.application.ports.user_settings_repository import (
    UserSettingsRepositoryProtocol,
)
from fieldsync.application.services.base import LoggingMixin
from fieldsync.application.services.sync_service import SyncService
from fieldsync.domain.errors import (
    ConfigError,
    LocationUnavailableError,
    OfflineError,
    SyncBusyError,
)
from fieldsync.domain.models.observation import (
    GPSLocation,
    UserSettings,
    WildlifeObservation,
)
from fieldsync.domain.models.species import is_known_species

_ID_ALPHABET = string.ascii_lowercase + string.digits


def parse_items(raw: str | Iterable[str] | None) -> tuple[str, ...]:
    """Normalize free-text notes into trimmed, non-empty items.

    Accepts either a comma-separated string ("tracks, scat,,") or an
    iterable of strings.
    """
    if raw is None:
        return ()
    parts = raw.split(",") if isinstance(raw, str) else raw
    return tuple(part.strip() for part in parts if part and part.strip())


class ObservationCaptureService(LoggingMixin):
    """Records observations locally and triggers a best-effort sync."""

    def __init__(
        self,
        observations: ObservationRepositoryProtocol,
        outbox: OutboxRepositoryProtocol,
        settings: UserSettingsRepositoryProtocol,
        sync_service: SyncService,
        time_authority: TimeAuthorityProtocol,
        location_provider: LocationProviderProtocol | None = None,
    ) -> None:
        self._observations = observations
        self._outbox = outbox
        self._settings = settings
        self._sync = sync_service
        self._time = time_authority
        self._location_provider = location_provider
        self._init_logger(component="capture")

    def generate_observation_id(self) -> str:
        """Return an id of the form obs_<epoch millis>_<9 random chars>."""
        millis = int(self._time.utcnow().timestamp() * 1000)
        suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
        return f"obs_{millis}_{suffix}"

    async def default_enumerator(self) -> str | None:
        """Return the last-used enumerator name for prefill, if any."""
        settings = await self._settings.get()
        if settings is None or not settings.enumerator:
            return None
        return settings.enumerator

    async def current_location(self) -> GPSLocation | None:
        """Ask the provider for a fix; a provider fault reads as no fix."""
        if self._location_provider is None:
            return None
        try:
            return await self._location_provider.get_current_location()
        except Exception as e:
            self._log.warning("location_provider_error", error=str(e))
            return None

    async def record_observation(
        self,
        species: str,
        enumerator: str,
        location: GPSLocation | None = None,
        items: str | Iterable[str] | None = None,
        auto_sync: bool = True,
    ) -> CaptureResult:
        """Save one observation and queue it for sync.

        Args:
            species: Species name; surrounding whitespace is trimmed.
            enumerator: Recorder's name; surrounding whitespace is trimmed.
            location: GPS fix for the sighting; when None the location
                provider is asked for the current fix.
            items: Comma-separated string or iterable of extra notes.
            auto_sync: Attempt sync_all() right away when online.

        Returns:
            CaptureResult with the stored observation and its outbox item.

        Raises:
            ValueError: If species or enumerator is empty.
            LocationUnavailableError: If no location was given and the
                provider has no fix.
            StorageError: If the observation cannot be persisted.
        """
        if location is None:
            location = await self.current_location()
            if location is None:
                raise LocationUnavailableError(
                    "Location required: no GPS fix available"
                )

        observation = WildlifeObservation(
            id=self.generate_observation_id(),
            species=species.strip(),
            items=parse_items(items),
            enumerator=enumerator.strip(),
            location=location,
            timestamp=self._time.utcnow(),
            synced=False,
        )
        log = self._log_operation("record_observation", observation_id=observation.id)

        if not is_known_species(observation.species):
            log.info("unlisted_species_recorded", species=observation.species)

        await self._observations.upsert(observation)
        outbox_item = await self._outbox.enqueue(observation)
        await self._settings.save(UserSettings(enumerator=observation.enumerator))
        log.info("observation_recorded", species=observation.species)

        if not auto_sync:
            return CaptureResult(
                observation=observation,
                outbox_item=outbox_item,
                sync_skipped_reason="auto sync disabled",
            )

        if not await self._sync.is_online():
            log.info("auto_sync_skipped", reason="offline")
            return CaptureResult(
                observation=observation,
                outbox_item=outbox_item,
                sync_skipped_reason="offline",
            )

        try:
            sync_result = await self._sync.sync_all()
        except (OfflineError, ConfigError, SyncBusyError) as e:
            log.info("auto_sync_skipped", reason=str(e), error_type=type(e).__name__)
            return CaptureResult(
                observation=observation,
                outbox_item=outbox_item,
                sync_skipped_reason=str(e),
            )

        return CaptureResult(
            observation=observation,
            outbox_item=outbox_item,
            sync_result=sync_result,
        )
