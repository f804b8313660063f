"""ObservationRepository port: the Record Store.

Durable local persistence of observations keyed by id. Volumes are small
(hundreds of records), so implementations may read and rewrite the whole
collection on every mutation, but they MUST serialize their own mutations
so concurrent callers in one process never lose an update.

Failure:
    Any persistence fault surfaces as StorageError. Callers must not assume
    partial writes are rolled back.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from fieldsync.domain.models.observation import WildlifeObservation


@runtime_checkable
class ObservationRepositoryProtocol(Protocol):
    """Repository interface for wildlife observations."""

    async def upsert(self, observation: "WildlifeObservation") -> None:
        """Replace the record with the same id, or append it."""
        ...

    async def get_all(self) -> list["WildlifeObservation"]:
        """Return all records in insertion order."""
        ...

    async def get(self, observation_id: str) -> "WildlifeObservation | None":
        """Return one record by id, or None."""
        ...

    async def get_unsynced(self) -> list["WildlifeObservation"]:
        """Return records whose synced flag is False, in store order."""
        ...

    async def mark_synced(self, observation_id: str) -> None:
        """Set synced on the matching record. Silent no-op if not found."""
        ...

    async def record_sync_error(
        self,
        observation_id: str,
        message: str,
        attempted_at: datetime,
    ) -> None:
        """Store the latest failure message and attempt instant.

        Silent no-op if the record is not found.
        """
        ...
