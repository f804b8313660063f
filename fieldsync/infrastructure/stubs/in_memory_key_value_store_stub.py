"""InMemoryKeyValueStoreStub for testing.

Stores values in a dict and can be told to fail reads or writes so tests can
check that persistence faults propagate as StorageError.
"""

from __future__ import annotations

from collections.abc import Iterable

from fieldsync.application.ports.key_value_store import KeyValueStoreProtocol
from fieldsync.domain.errors import StorageError


class InMemoryKeyValueStoreStub(KeyValueStoreProtocol):
    """In-memory stub implementation of KeyValueStoreProtocol.

    Example:
        >>> stub = InMemoryKeyValueStoreStub()
        >>> stub.fail_writes_for("sync_outbox")
        >>> await stub.set_item("sync_outbox", "[]")  # raises StorageError
    """

    def __init__(self) -> None:
        self._values: dict[str, str] = {}
        self._failing_reads: set[str] = set()
        self._failing_writes: set[str] = set()
        self.write_count = 0

    def fail_reads_for(self, key: str) -> None:
        self._failing_reads.add(key)

    def fail_writes_for(self, key: str) -> None:
        self._failing_writes.add(key)

    def seed(self, key: str, value: str) -> None:
        self._values[key] = value

    def raw(self, key: str) -> str | None:
        return self._values.get(key)

    def reset(self) -> None:
        self._values.clear()
        self._failing_reads.clear()
        self._failing_writes.clear()
        self.write_count = 0

    async def get_item(self, key: str) -> str | None:
        if key in self._failing_reads:
            raise StorageError(f"Simulated read failure for {key}", key=key)
        return self._values.get(key)

    async def set_item(self, key: str, value: str) -> None:
        if key in self._failing_writes:
            raise StorageError(f"Simulated write failure for {key}", key=key)
        self._values[key] = value
        self.write_count += 1

    async def remove_items(self, keys: Iterable[str]) -> None:
        for key in keys:
            if key in self._failing_writes:
                raise StorageError(f"Simulated remove failure for {key}", key=key)
            self._values.pop(key, None)
