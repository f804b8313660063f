"""JSON document helpers shared by the key-value backed repositories."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any, TypeVar

from fieldsync.application.ports.key_value_store import KeyValueStoreProtocol
from fieldsync.domain.errors import StorageError

T = TypeVar("T")

# Stable storage keys, one namespace each
OBSERVATIONS_KEY = "wildlife_observations"
OUTBOX_KEY = "sync_outbox"
USER_SETTINGS_KEY = "user_settings"

ALL_KEYS: tuple[str, ...] = (OBSERVATIONS_KEY, OUTBOX_KEY, USER_SETTINGS_KEY)


async def load_document(store: KeyValueStoreProtocol, key: str) -> Any | None:
    """Read and decode the JSON document under key.

    Raises:
        StorageError: If the stored value is not valid JSON.
    """
    raw = await store.get_item(key)
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise StorageError(f"Corrupt JSON under {key}: {e}", key=key) from e


async def save_document(store: KeyValueStoreProtocol, key: str, document: Any) -> None:
    """Encode and write a JSON document under key."""
    await store.set_item(key, json.dumps(document))


async def load_collection(
    store: KeyValueStoreProtocol,
    key: str,
    decode: Callable[[dict[str, Any]], T],
) -> list[T]:
    """Read a JSON array and decode each entry.

    Raises:
        StorageError: If the document is not an array or an entry is malformed.
    """
    document = await load_document(store, key)
    if document is None:
        return []
    if not isinstance(document, list):
        raise StorageError(f"Expected a JSON array under {key}", key=key)
    try:
        return [decode(entry) for entry in document]
    except (KeyError, TypeError, ValueError) as e:
        raise StorageError(f"Malformed entry under {key}: {e}", key=key) from e
