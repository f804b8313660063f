"""Outbox view and explicit user removal.

The outbox screen lists every pending item with its observation's species,
last error and retry count. Removing an item only unqueues it; the
observation stays in the record store.
"""

from __future__ import annotations

from fieldsync.application.dtos.sync import OutboxEntryView
from fieldsync.application.ports.observation_repository import (
    ObservationRepositoryProtocol,
)
from fieldsync.application.ports.outbox_repository import OutboxRepositoryProtocol
from fieldsync.application.services.base import LoggingMixin


class OutboxService(LoggingMixin):
    """Read model and user actions for the outbox."""

    def __init__(
        self,
        observations: ObservationRepositoryProtocol,
        outbox: OutboxRepositoryProtocol,
    ) -> None:
        self._observations = observations
        self._outbox = outbox
        self._init_logger(component="outbox")

    async def get_outbox_view(self) -> list[OutboxEntryView]:
        """Return outbox items in queue order, joined with their observations."""
        items = await self._outbox.get_all()
        if not items:
            return []
        by_id = {obs.id: obs for obs in await self._observations.get_all()}
        return [
            OutboxEntryView(item=item, observation=by_id.get(item.observation_id))
            for item in items
        ]

    async def pending_count(self) -> int:
        return len(await self._outbox.get_all())

    async def remove_item(self, observation_id: str) -> bool:
        """Unqueue an observation. Returns False if it was not queued."""
        log = self._log_operation("remove_item", observation_id=observation_id)
        queued = any(
            item.observation_id == observation_id
            for item in await self._outbox.get_all()
        )
        if not queued:
            log.info("outbox_item_not_found")
            return False
        await self._outbox.remove(observation_id)
        log.info("outbox_item_removed")
        return True
