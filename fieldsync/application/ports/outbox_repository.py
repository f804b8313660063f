"""OutboxRepository port: the durable queue of pending sync items.

Items reference observations by id. The outbox is kept consistent with the
Record Store by the sync orchestrator, not by the store itself.

Queue policy:
- enqueue() is idempotent per observation id: a second enqueue for an id
  that is already queued returns the existing item unchanged.
- remove() deletes every item matching the id.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from fieldsync.domain.models.observation import OutboxItem, WildlifeObservation


@runtime_checkable
class OutboxRepositoryProtocol(Protocol):
    """Repository interface for outbox items."""

    async def enqueue(self, observation: "WildlifeObservation") -> "OutboxItem":
        """Queue an observation with retry_count=0 and created_at=now."""
        ...

    async def get_all(self) -> list["OutboxItem"]:
        """Return all queued items in queue order."""
        ...

    async def remove(self, observation_id: str) -> None:
        """Remove all items for the id. No-op if none match."""
        ...

    async def increment_retry(self, observation_id: str) -> None:
        """Add one to the matching item's retry_count. No-op if not found."""
        ...
