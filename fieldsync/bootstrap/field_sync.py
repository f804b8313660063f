"""Bootstrap wiring for the FieldSync components.

Builds one explicit object graph per process: a key-value store, the three
repositories on top of it, the connectivity probe, the remote client, the
location provider and the services. Nothing is cached at module level;
callers own the returned FieldSync and pass its parts where they are needed.

Usage:
    config = load_field_sync_config()
    app = create_field_sync(config)
    result = await app.capture.record_observation(...)
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from fieldsync.application.ports.connectivity_probe import ConnectivityProbeProtocol
from fieldsync.application.ports.key_value_store import KeyValueStoreProtocol
from fieldsync.application.ports.location_provider import LocationProviderProtocol
from fieldsync.application.ports.remote_content_store import (
    RemoteContentStoreProtocol,
)
from fieldsync.application.ports.time_authority import TimeAuthorityProtocol
from fieldsync.application.services.observation_capture_service import (
    ObservationCaptureService,
)
from fieldsync.application.services.outbox_service import OutboxService
from fieldsync.application.services.sync_service import SyncService
from fieldsync.config.field_sync_config import FieldSyncConfig
from fieldsync.infrastructure.adapters.location import StaticLocationProvider
from fieldsync.infrastructure.adapters.network import (
    GitHubContentsClient,
    NetworkConnectivityProbe,
)
from fieldsync.infrastructure.adapters.persistence import (
    ALL_KEYS,
    JsonFileKeyValueStore,
    KeyValueObservationRepository,
    KeyValueOutboxRepository,
    KeyValueUserSettingsRepository,
)
from fieldsync.infrastructure.adapters.time import SystemTimeAuthority

log = structlog.get_logger()


@dataclass
class FieldSync:
    """The wired component graph for one process."""

    store: KeyValueStoreProtocol
    observations: KeyValueObservationRepository
    outbox: KeyValueOutboxRepository
    settings: KeyValueUserSettingsRepository
    probe: ConnectivityProbeProtocol
    remote: RemoteContentStoreProtocol
    time_authority: TimeAuthorityProtocol
    sync: SyncService
    location_provider: LocationProviderProtocol
    capture: ObservationCaptureService
    outbox_view: OutboxService

    async def clear_all_data(self) -> None:
        """Delete observations, outbox and user settings from the local store."""
        await self.store.remove_items(ALL_KEYS)
        log.warning("local_data_cleared", keys=list(ALL_KEYS))


def create_field_sync(
    config: FieldSyncConfig,
    *,
    store: KeyValueStoreProtocol | None = None,
    probe: ConnectivityProbeProtocol | None = None,
    remote: RemoteContentStoreProtocol | None = None,
    time_authority: TimeAuthorityProtocol | None = None,
    location_provider: LocationProviderProtocol | None = None,
) -> FieldSync:
    """Build the FieldSync component graph.

    Any collaborator can be overridden; tests pass stubs from
    fieldsync.infrastructure.stubs.

    Args:
        config: Loaded application configuration.
        store: Key-value backend (default: JSON files under config.data_dir).
        probe: Connectivity probe (default: NetworkConnectivityProbe).
        remote: Remote content store (default: GitHubContentsClient).
        time_authority: Clock (default: SystemTimeAuthority).
        location_provider: Source of fixes for captures without an explicit
            location (default: StaticLocationProvider over
            config.default_location).
    """
    time_authority = time_authority or SystemTimeAuthority()
    store = store or JsonFileKeyValueStore(config.data_dir)
    location_provider = location_provider or StaticLocationProvider(
        config.default_location
    )
    probe = probe or NetworkConnectivityProbe(
        probe_url=config.network.probe_url,
        timeout_seconds=config.network.probe_timeout_seconds,
    )
    if remote is None:
        remote = GitHubContentsClient(
            config=config.remote,
            timeout_seconds=config.network.request_timeout_seconds,
        )

    observations = KeyValueObservationRepository(store)
    outbox = KeyValueOutboxRepository(store, time_authority)
    settings = KeyValueUserSettingsRepository(store)

    sync = SyncService(
        observations=observations,
        outbox=outbox,
        probe=probe,
        remote=remote,
        time_authority=time_authority,
    )
    capture = ObservationCaptureService(
        observations=observations,
        outbox=outbox,
        settings=settings,
        sync_service=sync,
        time_authority=time_authority,
        location_provider=location_provider,
    )
    return FieldSync(
        store=store,
        observations=observations,
        outbox=outbox,
        settings=settings,
        probe=probe,
        remote=remote,
        time_authority=time_authority,
        location_provider=location_provider,
        sync=sync,
        capture=capture,
        outbox_view=OutboxService(observations=observations, outbox=outbox),
    )
