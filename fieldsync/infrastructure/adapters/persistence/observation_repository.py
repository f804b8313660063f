"""Key-value backed ObservationRepository (the Record Store).

The whole collection lives under one key and is rewritten on every
mutation. An asyncio.Lock serializes read-modify-write cycles so two
coroutines in the same process never lose each other's update.
"""

from __future__ import annotations

import asyncio
from datetime import datetime

from fieldsync.application.ports.key_value_store import KeyValueStoreProtocol
from fieldsync.application.ports.observation_repository import (
    ObservationRepositoryProtocol,
)
from fieldsync.domain.models.observation import WildlifeObservation
from fieldsync.infrastructure.adapters.persistence.documents import (
    OBSERVATIONS_KEY,
    load_collection,
    save_document,
)


class KeyValueObservationRepository(ObservationRepositoryProtocol):
    """ObservationRepositoryProtocol over a KeyValueStoreProtocol."""

    def __init__(
        self, store: KeyValueStoreProtocol, key: str = OBSERVATIONS_KEY
    ) -> None:
        self._store = store
        self._key = key
        self._lock = asyncio.Lock()

    async def _load(self) -> list[WildlifeObservation]:
        return await load_collection(
            self._store, self._key, WildlifeObservation.from_dict
        )

    async def _save(self, observations: list[WildlifeObservation]) -> None:
        await save_document(
            self._store, self._key, [obs.to_dict() for obs in observations]
        )

    async def upsert(self, observation: WildlifeObservation) -> None:
        async with self._lock:
            observations = await self._load()
            for index, existing in enumerate(observations):
                if existing.id == observation.id:
                    observations[index] = observation
                    break
            else:
                observations.append(observation)
            await self._save(observations)

    async def get_all(self) -> list[WildlifeObservation]:
        return await self._load()

    async def get(self, observation_id: str) -> WildlifeObservation | None:
        for observation in await self._load():
            if observation.id == observation_id:
                return observation
        return None

    async def get_unsynced(self) -> list[WildlifeObservation]:
        return [obs for obs in await self._load() if not obs.synced]

    async def mark_synced(self, observation_id: str) -> None:
        async with self._lock:
            observations = await self._load()
            for index, existing in enumerate(observations):
                if existing.id == observation_id:
                    observations[index] = existing.mark_synced()
                    await self._save(observations)
                    return

    async def record_sync_error(
        self,
        observation_id: str,
        message: str,
        attempted_at: datetime,
    ) -> None:
        async with self._lock:
            observations = await self._load()
            for index, existing in enumerate(observations):
                if existing.id == observation_id:
                    observations[index] = existing.with_sync_error(
                        message, attempted_at
                    )
                    await self._save(observations)
                    return
