"""Key-value backed UserSettingsRepository."""

from __future__ import annotations

from fieldsync.application.ports.key_value_store import KeyValueStoreProtocol
from fieldsync.application.ports.user_settings_repository import (
    UserSettingsRepositoryProtocol,
)
from fieldsync.domain.errors import StorageError
from fieldsync.domain.models.observation import UserSettings
from fieldsync.infrastructure.adapters.persistence.documents import (
    USER_SETTINGS_KEY,
    load_document,
    save_document,
)


class KeyValueUserSettingsRepository(UserSettingsRepositoryProtocol):
    """Stores the single UserSettings record as a JSON object."""

    def __init__(
        self, store: KeyValueStoreProtocol, key: str = USER_SETTINGS_KEY
    ) -> None:
        self._store = store
        self._key = key

    async def get(self) -> UserSettings | None:
        document = await load_document(self._store, self._key)
        if document is None:
            return None
        if not isinstance(document, dict):
            raise StorageError(f"Expected a JSON object under {self._key}", key=self._key)
        return UserSettings.from_dict(document)

    async def save(self, settings: UserSettings) -> None:
        await save_document(self._store, self._key, settings.to_dict())
