"""In-memory stubs of the application ports, for tests and offline demos."""

from fieldsync.infrastructure.stubs.connectivity_probe_stub import (
    ConnectivityProbeStub,
)
from fieldsync.infrastructure.stubs.in_memory_key_value_store_stub import (
    InMemoryKeyValueStoreStub,
)
from fieldsync.infrastructure.stubs.location_provider_stub import LocationProviderStub
from fieldsync.infrastructure.stubs.remote_content_store_stub import (
    RemoteContentStoreStub,
)

__all__: list[str] = [
    "ConnectivityProbeStub",
    "InMemoryKeyValueStoreStub",
    "LocationProviderStub",
    "RemoteContentStoreStub",
]
