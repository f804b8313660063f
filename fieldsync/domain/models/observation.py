"""Wildlife observation domain models.

This module provides the value objects persisted by the local stores and
pushed to the remote repository:

- GPSLocation: where the observation was made
- WildlifeObservation: one sighting recorded in the field
- OutboxItem: a pending-sync reference to an observation
- UserSettings: prefill values remembered between captures

All models are immutable (frozen dataclasses). State changes produce new
instances via dataclasses.replace().

Serialized form (local store and remote payload) uses camelCase keys and
ISO-8601 timestamps:

    {
        "id": "obs_1735689600000_k3j9x0a1b",
        "species": "Red Fox",
        "items": ["tracks", "scat"],
        "enumerator": "Jono",
        "location": {"latitude": 45.1, "longitude": -75.2},
        "timestamp": "2026-01-01T00:00:00+00:00",
        "synced": false
    }
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any


def parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 string into a timezone-aware UTC datetime.

    Accepts the trailing "Z" form written by JavaScript clients.

    Raises:
        ValueError: If the value is not a valid ISO-8601 instant.
    """
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_instant(value: datetime) -> str:
    """Format a datetime as ISO-8601, assuming UTC when naive."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


@dataclass(frozen=True, eq=True)
class GPSLocation:
    """GPS fix captured with an observation.

    Attributes:
        latitude: Degrees, finite.
        longitude: Degrees, finite.
        accuracy: Optional horizontal accuracy in meters.
        altitude: Optional altitude in meters.
    """

    latitude: float
    longitude: float
    accuracy: float | None = None
    altitude: float | None = None

    def __post_init__(self) -> None:
        for name in ("latitude", "longitude"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number")
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite")
        for name in ("accuracy", "altitude"):
            value = getattr(self, name)
            if value is not None and not math.isfinite(value):
                raise ValueError(f"{name} must be finite when provided")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "latitude": self.latitude,
            "longitude": self.longitude,
        }
        if self.accuracy is not None:
            data["accuracy"] = self.accuracy
        if self.altitude is not None:
            data["altitude"] = self.altitude
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GPSLocation:
        return cls(
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            accuracy=_optional_float(data.get("accuracy")),
            altitude=_optional_float(data.get("altitude")),
        )


@dataclass(frozen=True, eq=True)
class WildlifeObservation:
    """A single wildlife sighting.

    The id and timestamp never change after creation. Only the sync
    orchestrator changes synced, sync_attempted and sync_error.

    Attributes:
        id: Client-generated unique identifier.
        species: Species name (non-empty).
        items: Additional notes, each trimmed and non-empty.
        enumerator: Name of the person recording the observation.
        location: GPS fix.
        timestamp: Creation instant (UTC).
        synced: True once the remote store has accepted the record.
        sync_attempted: Instant of the most recent failed sync attempt.
        sync_error: Message from the most recent failed sync attempt.
    """

    id: str
    species: str
    enumerator: str
    location: GPSLocation
    timestamp: datetime
    items: tuple[str, ...] = field(default_factory=tuple)
    synced: bool = False
    sync_attempted: datetime | None = None
    sync_error: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("id is required")
        if not self.species or not self.species.strip():
            raise ValueError("species must be a non-empty string")
        if not self.enumerator or not self.enumerator.strip():
            raise ValueError("enumerator must be a non-empty string")
        # Lists are accepted for convenience and frozen into a tuple
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))
        for item in self.items:
            if not item or item != item.strip():
                raise ValueError(f"items must be trimmed and non-empty: {item!r}")

    def mark_synced(self) -> WildlifeObservation:
        """Return a copy flagged as accepted by the remote store."""
        return replace(self, synced=True)

    def with_sync_error(self, message: str, attempted_at: datetime) -> WildlifeObservation:
        """Return a copy carrying the latest failed attempt."""
        return replace(self, sync_error=message, sync_attempted=attempted_at)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "species": self.species,
            "items": list(self.items),
            "enumerator": self.enumerator,
            "location": self.location.to_dict(),
            "timestamp": format_instant(self.timestamp),
            "synced": self.synced,
        }
        if self.sync_attempted is not None:
            data["syncAttempted"] = format_instant(self.sync_attempted)
        if self.sync_error is not None:
            data["syncError"] = self.sync_error
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WildlifeObservation:
        sync_attempted = data.get("syncAttempted")
        return cls(
            id=data["id"],
            species=data["species"],
            items=tuple(data.get("items") or ()),
            enumerator=data["enumerator"],
            location=GPSLocation.from_dict(data["location"]),
            timestamp=parse_instant(data["timestamp"]),
            synced=bool(data.get("synced", False)),
            sync_attempted=parse_instant(sync_attempted) if sync_attempted else None,
            sync_error=data.get("syncError"),
        )


@dataclass(frozen=True, eq=True)
class OutboxItem:
    """Pending-sync entry referencing an observation by id.

    Attributes:
        observation_id: Id of the queued observation.
        created_at: When the observation was queued.
        retry_count: Failed sync attempts so far (never decremented).
    """

    observation_id: str
    created_at: datetime
    retry_count: int = 0

    def __post_init__(self) -> None:
        if not self.observation_id:
            raise ValueError("observation_id is required")
        if self.retry_count < 0:
            raise ValueError("retry_count must be non-negative")

    def with_retry(self) -> OutboxItem:
        """Return a copy with one more failed attempt counted."""
        return replace(self, retry_count=self.retry_count + 1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "observationId": self.observation_id,
            "createdAt": format_instant(self.created_at),
            "retryCount": self.retry_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OutboxItem:
        observation_id = data.get("observationId")
        if observation_id is None:
            # Older outbox entries embedded the whole observation
            observation_id = data["observation"]["id"]
        return cls(
            observation_id=observation_id,
            created_at=parse_instant(data["createdAt"]),
            retry_count=int(data.get("retryCount", 0)),
        )


@dataclass(frozen=True, eq=True)
class UserSettings:
    """Values remembered between captures."""

    enumerator: str

    def to_dict(self) -> dict[str, Any]:
        return {"enumerator": self.enumerator}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UserSettings:
        return cls(enumerator=data.get("enumerator", ""))


def _optional_float(value: Any) -> float | None:
    return None if value is None else float(value)
