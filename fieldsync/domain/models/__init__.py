"""Domain models for FieldSync."""

from fieldsync.domain.models.observation import (
    GPSLocation,
    OutboxItem,
    UserSettings,
    WildlifeObservation,
)
from fieldsync.domain.models.species import WILDLIFE_SPECIES, is_known_species

__all__: list[str] = [
    "GPSLocation",
    "OutboxItem",
    "UserSettings",
    "WILDLIFE_SPECIES",
    "WildlifeObservation",
    "is_known_species",
]
