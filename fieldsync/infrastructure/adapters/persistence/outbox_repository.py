"""Key-value backed OutboxRepository.

Queue policy:
- enqueue() keeps observation ids unique; re-enqueueing a queued id
  returns the existing item untouched (its retry_count is preserved).
- remove() drops every item for the id, so duplicates written by older
  versions are cleaned up too.
"""

from __future__ import annotations

import asyncio

from fieldsync.application.ports.key_value_store import KeyValueStoreProtocol
from fieldsync.application.ports.outbox_repository import OutboxRepositoryProtocol
from fieldsync.application.ports.time_authority import TimeAuthorityProtocol
from fieldsync.domain.models.observation import OutboxItem, WildlifeObservation
from fieldsync.infrastructure.adapters.persistence.documents import (
    OUTBOX_KEY,
    load_collection,
    save_document,
)


class KeyValueOutboxRepository(OutboxRepositoryProtocol):
    """OutboxRepositoryProtocol over a KeyValueStoreProtocol."""

    def __init__(
        self,
        store: KeyValueStoreProtocol,
        time_authority: TimeAuthorityProtocol,
        key: str = OUTBOX_KEY,
    ) -> None:
        self._store = store
        self._time = time_authority
        self._key = key
        self._lock = asyncio.Lock()

    async def _load(self) -> list[OutboxItem]:
        return await load_collection(self._store, self._key, OutboxItem.from_dict)

    async def _save(self, items: list[OutboxItem]) -> None:
        await save_document(self._store, self._key, [item.to_dict() for item in items])

    async def enqueue(self, observation: WildlifeObservation) -> OutboxItem:
        async with self._lock:
            items = await self._load()
            for existing in items:
                if existing.observation_id == observation.id:
                    return existing
            item = OutboxItem(
                observation_id=observation.id,
                created_at=self._time.utcnow(),
                retry_count=0,
            )
            items.append(item)
            await self._save(items)
            return item

    async def get_all(self) -> list[OutboxItem]:
        return await self._load()

    async def remove(self, observation_id: str) -> None:
        async with self._lock:
            items = await self._load()
            remaining = [i for i in items if i.observation_id != observation_id]
            if len(remaining) != len(items):
                await self._save(remaining)

    async def increment_retry(self, observation_id: str) -> None:
        async with self._lock:
            items = await self._load()
            for index, existing in enumerate(items):
                if existing.observation_id == observation_id:
                    items[index] = existing.with_retry()
                    await self._save(items)
                    return
