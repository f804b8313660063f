"""
Pytest configuration and shared fixtures for FieldSync tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Ports are exercised through the stubs in fieldsync.infrastructure.stubs
- HTTP adapters are exercised with httpx.MockTransport, never the network
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from __future__ import annotations

import pytest

from fieldsync.application.services import (
    ObservationCaptureService,
    OutboxService,
    SyncService,
)
from fieldsync.infrastructure.adapters.persistence import (
    KeyValueObservationRepository,
    KeyValueOutboxRepository,
    KeyValueUserSettingsRepository,
)
from fieldsync.infrastructure.stubs import (
    ConnectivityProbeStub,
    InMemoryKeyValueStoreStub,
    LocationProviderStub,
    RemoteContentStoreStub,
)
from tests.helpers import FakeTimeAuthority


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from fieldsync import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    return FakeTimeAuthority()


@pytest.fixture
def kv_store() -> InMemoryKeyValueStoreStub:
    return InMemoryKeyValueStoreStub()


@pytest.fixture
def probe() -> ConnectivityProbeStub:
    return ConnectivityProbeStub(online=True)


@pytest.fixture
def remote() -> RemoteContentStoreStub:
    return RemoteContentStoreStub()


@pytest.fixture
def location_provider() -> LocationProviderStub:
    return LocationProviderStub()


@pytest.fixture
def observation_repo(kv_store: InMemoryKeyValueStoreStub) -> KeyValueObservationRepository:
    return KeyValueObservationRepository(kv_store)


@pytest.fixture
def outbox_repo(
    kv_store: InMemoryKeyValueStoreStub, fake_time_authority: FakeTimeAuthority
) -> KeyValueOutboxRepository:
    return KeyValueOutboxRepository(kv_store, fake_time_authority)


@pytest.fixture
def settings_repo(kv_store: InMemoryKeyValueStoreStub) -> KeyValueUserSettingsRepository:
    return KeyValueUserSettingsRepository(kv_store)


@pytest.fixture
def sync_service(
    observation_repo: KeyValueObservationRepository,
    outbox_repo: KeyValueOutboxRepository,
    probe: ConnectivityProbeStub,
    remote: RemoteContentStoreStub,
    fake_time_authority: FakeTimeAuthority,
) -> SyncService:
    return SyncService(
        observations=observation_repo,
        outbox=outbox_repo,
        probe=probe,
        remote=remote,
        time_authority=fake_time_authority,
    )


@pytest.fixture
def capture_service(
    observation_repo: KeyValueObservationRepository,
    outbox_repo: KeyValueOutboxRepository,
    settings_repo: KeyValueUserSettingsRepository,
    sync_service: SyncService,
    fake_time_authority: FakeTimeAuthority,
    location_provider: LocationProviderStub,
) -> ObservationCaptureService:
    return ObservationCaptureService(
        observations=observation_repo,
        outbox=outbox_repo,
        settings=settings_repo,
        sync_service=sync_service,
        time_authority=fake_time_authority,
        location_provider=location_provider,
    )


@pytest.fixture
def outbox_service(
    observation_repo: KeyValueObservationRepository,
    outbox_repo: KeyValueOutboxRepository,
) -> OutboxService:
    return OutboxService(observations=observation_repo, outbox=outbox_repo)
