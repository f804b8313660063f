"""Local persistence adapters: JSON file store and the repositories built on it."""

from fieldsync.infrastructure.adapters.persistence.documents import (
    ALL_KEYS,
    OBSERVATIONS_KEY,
    OUTBOX_KEY,
    USER_SETTINGS_KEY,
)
from fieldsync.infrastructure.adapters.persistence.json_file_store import (
    JsonFileKeyValueStore,
)
from fieldsync.infrastructure.adapters.persistence.observation_repository import (
    KeyValueObservationRepository,
)
from fieldsync.infrastructure.adapters.persistence.outbox_repository import (
    KeyValueOutboxRepository,
)
from fieldsync.infrastructure.adapters.persistence.user_settings_repository import (
    KeyValueUserSettingsRepository,
)

__all__: list[str] = [
    "ALL_KEYS",
    "OBSERVATIONS_KEY",
    "OUTBOX_KEY",
    "USER_SETTINGS_KEY",
    "JsonFileKeyValueStore",
    "KeyValueObservationRepository",
    "KeyValueOutboxRepository",
    "KeyValueUserSettingsRepository",
]
