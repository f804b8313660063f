"""JSON file key-value store.

Each key is stored as one file, ``<data_dir>/<key>.json``. Writes go to a
temporary file in the same directory which is then renamed over the target,
so a crash mid-write leaves either the old or the new value, never a torn
file. Blocking file I/O runs in a worker thread via asyncio.to_thread().
"""

from __future__ import annotations

import asyncio
import os
import re
import tempfile
from collections.abc import Iterable
from pathlib import Path

import structlog

from fieldsync.application.ports.key_value_store import KeyValueStoreProtocol
from fieldsync.domain.errors import StorageError

log = structlog.get_logger()

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class JsonFileKeyValueStore(KeyValueStoreProtocol):
    """File-backed implementation of KeyValueStoreProtocol.

    Example:
        store = JsonFileKeyValueStore(Path("~/.fieldsync").expanduser())
        await store.set_item("user_settings", '{"enumerator": "Jono"}')
    """

    def __init__(self, data_dir: Path) -> None:
        """Initialize the store.

        Args:
            data_dir: Directory holding one file per key. Created on first write.
        """
        self._data_dir = data_dir

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        """Return the file backing a key.

        Raises:
            StorageError: If the key contains characters unsafe for a filename.
        """
        if not _KEY_PATTERN.match(key):
            raise StorageError(f"Invalid storage key: {key!r}", key=key)
        return self._data_dir / f"{key}.json"

    async def get_item(self, key: str) -> str | None:
        path = self.path_for(key)
        return await asyncio.to_thread(self._read, key, path)

    async def set_item(self, key: str, value: str) -> None:
        path = self.path_for(key)
        await asyncio.to_thread(self._write, key, path, value)

    async def remove_items(self, keys: Iterable[str]) -> None:
        paths = [(key, self.path_for(key)) for key in keys]
        await asyncio.to_thread(self._remove, paths)

    def _read(self, key: str, path: Path) -> str | None:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            log.error("storage_read_failed", key=key, path=str(path), error=str(e))
            raise StorageError(f"Failed to read {key}: {e}", key=key) from e

    def _write(self, key: str, path: Path, value: str) -> None:
        tmp_name: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{key}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            log.error("storage_write_failed", key=key, path=str(path), error=str(e))
            raise StorageError(f"Failed to write {key}: {e}", key=key) from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def _remove(self, paths: list[tuple[str, Path]]) -> None:
        for key, path in paths:
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                log.error("storage_remove_failed", key=key, path=str(path), error=str(e))
                raise StorageError(f"Failed to remove {key}: {e}", key=key) from e
