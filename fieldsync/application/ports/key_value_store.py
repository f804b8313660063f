"""KeyValueStore port for durable local persistence.

The local stores keep each collection as one JSON document under a stable
string key (observations, outbox, user settings). This port is the
storage primitive they are built on.

Usage:
    class JsonFileKeyValueStore(KeyValueStoreProtocol):
        async def get_item(self, key: str) -> str | None:
            ...

    store: KeyValueStoreProtocol = JsonFileKeyValueStore(data_dir)
    raw = await store.get_item("wildlife_observations")
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStoreProtocol(Protocol):
    """Durable string-to-string storage.

    Implementations raise StorageError for any persistence fault. A
    set_item() call replaces the whole value for its key.
    """

    async def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if the key was never written.

        Raises:
            StorageError: If the value exists but cannot be read.
        """
        ...

    async def set_item(self, key: str, value: str) -> None:
        """Store a value, replacing any previous value for the key.

        Raises:
            StorageError: If the value cannot be written.
        """
        ...

    async def remove_items(self, keys: Iterable[str]) -> None:
        """Delete the given keys. Missing keys are ignored.

        Raises:
            StorageError: If an existing key cannot be deleted.
        """
        ...
