"""DTOs returned by the sync, capture and outbox services."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from fieldsync.domain.models.observation import OutboxItem, WildlifeObservation


@dataclass(frozen=True)
class SyncFailure:
    """One observation that could not be pushed in a sync run.

    status is the HTTP status (0 for transport failures), or None when the
    remote configuration was missing at the time of the attempt.
    """

    observation_id: str
    message: str
    status: int | None


@dataclass(frozen=True)
class SyncResult:
    """Aggregate outcome of one sync_all() run.

    Attributes:
        success_count: Observations accepted by the remote store.
        failed_count: Observations whose upsert failed.
        failures: Details for each failed observation, in attempt order.
        reconciled_count: Stale outbox items removed before the run
            (items whose observation was already synced).
    """

    success_count: int = 0
    failed_count: int = 0
    failures: tuple[SyncFailure, ...] = field(default_factory=tuple)
    reconciled_count: int = 0

    @property
    def attempted_count(self) -> int:
        return self.success_count + self.failed_count

    def to_dict(self) -> dict[str, int]:
        return {"success": self.success_count, "failed": self.failed_count}


@dataclass(frozen=True)
class CaptureResult:
    """Outcome of recording one observation.

    Attributes:
        observation: The observation as stored locally at save time.
        outbox_item: Its outbox entry.
        sync_result: Result of the automatic sync, or None if it was skipped.
        sync_skipped_reason: Why the automatic sync did not run or failed fast.
    """

    observation: WildlifeObservation
    outbox_item: OutboxItem
    sync_result: SyncResult | None = None
    sync_skipped_reason: str | None = None


@dataclass(frozen=True)
class OutboxEntryView:
    """An outbox item joined with its observation for display.

    observation is None when the record store no longer has the id.
    """

    item: OutboxItem
    observation: WildlifeObservation | None

    @property
    def observation_id(self) -> str:
        return self.item.observation_id

    @property
    def retry_count(self) -> int:
        return self.item.retry_count

    @property
    def last_error(self) -> str | None:
        return self.observation.sync_error if self.observation else None

    @property
    def last_attempt(self) -> datetime | None:
        return self.observation.sync_attempted if self.observation else None
