"""Observation builders shared by the test suite."""

from __future__ import annotations

from datetime import datetime, timezone

from fieldsync.domain.models import GPSLocation, WildlifeObservation

FIXED_TIMESTAMP = datetime(2026, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


def make_observation(
    observation_id: str = "obs_1",
    species: str = "Red Fox",
    *,
    synced: bool = False,
    items: tuple[str, ...] = (),
) -> WildlifeObservation:
    """Build an observation with a fixed location and timestamp."""
    return WildlifeObservation(
        id=observation_id,
        species=species,
        enumerator="Jono",
        location=GPSLocation(latitude=45.4215, longitude=-75.6972, accuracy=8.0),
        timestamp=FIXED_TIMESTAMP,
        items=items,
        synced=synced,
    )
