"""Sync orchestrator: pushes unsynced observations to the remote store.

Algorithm for one sync_all() run:
1. Reject the call with SyncBusyError if another run is in flight.
2. Fail with OfflineError if the connectivity probe reports offline.
3. Fail with ConfigError if the remote store is not configured.
4. Reconcile: drop outbox items whose observation is already synced (left
   behind when a previous run stopped between its two success steps).
5. Upsert every unsynced observation, one at a time:
   - success: mark the observation synced, then remove its outbox item;
   - RemoteError, or ConfigError if the configuration was cleared mid-run:
     record the error on the observation, then increment the outbox retry
     counter, and continue with the next observation.

Steps 1-3 happen before any remote call or store mutation. Store errors
(StorageError) are never caught here; they propagate to the caller.

Upserts are sequential so a batch never amplifies remote rate limits and
retry bookkeeping stays in attempt order.
"""

from __future__ import annotations

import asyncio

from fieldsync.application.dtos.sync import SyncFailure, SyncResult
from fieldsync.application.ports.connectivity_probe import ConnectivityProbeProtocol
from fieldsync.application.ports.observation_repository import (
    ObservationRepositoryProtocol,
)
from fieldsync.application.ports.outbox_repository import OutboxRepositoryProtocol
from fieldsync.application.ports.remote_content_store import (
    RemoteContentStoreProtocol,
)
from fieldsync.application.ports.time_authority import TimeAuthorityProtocol
from fieldsync.application.services.base import LoggingMixin
from fieldsync.config.field_sync_config import RemoteConfig
from fieldsync.domain.errors import ConfigError, OfflineError, RemoteError, SyncBusyError


class SyncService(LoggingMixin):
    """Drives the outbox through the remote upsert client.

    One instance owns the "sync in progress" guard for the stores it was
    given; build exactly one per process (see
    fieldsync.bootstrap.field_sync.create_field_sync).

    Example:
        service = SyncService(
            observations=observation_repo,
            outbox=outbox_repo,
            probe=probe,
            remote=github_client,
            time_authority=SystemTimeAuthority(),
        )
        result = await service.sync_all()
        print(result.success_count, result.failed_count)
    """

    def __init__(
        self,
        observations: ObservationRepositoryProtocol,
        outbox: OutboxRepositoryProtocol,
        probe: ConnectivityProbeProtocol,
        remote: RemoteContentStoreProtocol,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        self._observations = observations
        self._outbox = outbox
        self._probe = probe
        self._remote = remote
        self._time = time_authority
        self._sync_lock = asyncio.Lock()
        self._init_logger(component="sync")

    @property
    def is_syncing(self) -> bool:
        return self._sync_lock.locked()

    def configure(self, config: RemoteConfig | None) -> None:
        """Replace the remote configuration.

        Raises:
            ConfigError: If the new configuration is present but invalid.
        """
        if config is not None:
            config.validate()
        self._remote.configure(config)
        self._log_operation("configure").info(
            "remote_configured",
            repository=config.repository if config else None,
            base_path=config.base_path if config else None,
        )

    def is_configured(self) -> bool:
        return self._remote.is_configured()

    async def is_online(self) -> bool:
        """Ask the probe, reading any probe fault as offline."""
        try:
            return await self._probe.is_online()
        except Exception as e:
            self._log.warning("connectivity_probe_error", error=str(e))
            return False

    async def test_connection(self) -> bool:
        return await self._remote.test_connection()

    async def sync_all(self) -> SyncResult:
        """Push every unsynced observation to the remote store.

        Returns:
            SyncResult covering every observation attempted in this run.

        Raises:
            SyncBusyError: If a run is already in progress.
            OfflineError: If the probe reports offline.
            ConfigError: If the remote store is not configured.
            StorageError: If a local store cannot be read or written.
        """
        log = self._log_operation("sync_all")

        # No await between the check and the acquire, so this is atomic
        if self._sync_lock.locked():
            log.info("sync_rejected_busy")
            raise SyncBusyError("A sync is already in progress")

        async with self._sync_lock:
            if not await self.is_online():
                log.info("sync_skipped_offline")
                raise OfflineError("No internet connection")

            if not self._remote.is_configured():
                log.warning("sync_skipped_not_configured")
                raise ConfigError("GitHub credentials not configured")

            reconciled = await self._reconcile_outbox()
            pending = await self._observations.get_unsynced()
            log.info("sync_started", pending_count=len(pending), reconciled=reconciled)

            success_count = 0
            failures: list[SyncFailure] = []

            for observation in pending:
                try:
                    await self._remote.upsert(observation)
                except (RemoteError, ConfigError) as e:
                    message = str(e)
                    status = e.status if isinstance(e, RemoteError) else None
                    log.warning(
                        "observation_sync_failed",
                        observation_id=observation.id,
                        status=status,
                        error=message,
                    )
                    await self._observations.record_sync_error(
                        observation.id, message, self._time.utcnow()
                    )
                    await self._outbox.increment_retry(observation.id)
                    failures.append(
                        SyncFailure(
                            observation_id=observation.id,
                            message=message,
                            status=status,
                        )
                    )
                    continue

                # Two steps, not one transaction; _reconcile_outbox heals a gap
                await self._observations.mark_synced(observation.id)
                await self._outbox.remove(observation.id)
                success_count += 1
                log.debug("observation_synced", observation_id=observation.id)

            result = SyncResult(
                success_count=success_count,
                failed_count=len(failures),
                failures=tuple(failures),
                reconciled_count=reconciled,
            )
            log.info(
                "sync_completed",
                success_count=result.success_count,
                failed_count=result.failed_count,
            )
            return result

    async def _reconcile_outbox(self) -> int:
        """Remove outbox items whose observation is already synced."""
        items = await self._outbox.get_all()
        if not items:
            return 0
        synced_ids = {
            obs.id for obs in await self._observations.get_all() if obs.synced
        }
        stale = {item.observation_id for item in items} & synced_ids
        for observation_id in sorted(stale):
            await self._outbox.remove(observation_id)
        if stale:
            self._log_operation("reconcile_outbox").info(
                "stale_outbox_items_removed", count=len(stale)
            )
        return len(stale)
