"""Unit tests for StaticLocationProvider."""

import pytest

from fieldsync.application.ports import LocationProviderProtocol
from fieldsync.bootstrap import create_field_sync
from fieldsync.config import FieldSyncConfig
from fieldsync.domain.models import GPSLocation
from fieldsync.infrastructure.adapters.location import StaticLocationProvider
from fieldsync.infrastructure.stubs import (
    ConnectivityProbeStub,
    InMemoryKeyValueStoreStub,
    RemoteContentStoreStub,
)

STATION = GPSLocation(latitude=45.5, longitude=-73.6, accuracy=5.0)


class TestStaticLocationProvider:
    def test_implements_protocol(self) -> None:
        assert isinstance(StaticLocationProvider(), LocationProviderProtocol)

    @pytest.mark.asyncio
    async def test_returns_configured_fix(self) -> None:
        assert await StaticLocationProvider(STATION).get_current_location() == STATION

    @pytest.mark.asyncio
    async def test_no_fix_configured(self) -> None:
        assert await StaticLocationProvider().get_current_location() is None

    @pytest.mark.asyncio
    async def test_bootstrap_default_uses_configured_station(self, tmp_path) -> None:
        app = create_field_sync(
            FieldSyncConfig(data_dir=tmp_path, default_location=STATION),
            store=InMemoryKeyValueStoreStub(),
            probe=ConnectivityProbeStub(online=False),
            remote=RemoteContentStoreStub(),
        )

        assert isinstance(app.location_provider, StaticLocationProvider)
        result = await app.capture.record_observation(species="Moose", enumerator="Jono")
        assert result.observation.location == STATION
