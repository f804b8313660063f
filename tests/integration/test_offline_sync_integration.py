"""Integration tests for the offline-first capture and sync flow.

Wires the full component graph with create_field_sync(): JSON file store on
disk, real repositories and services, and the in-memory remote and probe
stubs in place of the network.
"""

from pathlib import Path

import pytest

from fieldsync.bootstrap import FieldSync, create_field_sync
from fieldsync.config import FieldSyncConfig
from fieldsync.domain.models import GPSLocation
from fieldsync.infrastructure.stubs import ConnectivityProbeStub, RemoteContentStoreStub
from tests.helpers import FakeTimeAuthority

LOCATION = GPSLocation(latitude=45.4215, longitude=-75.6972, accuracy=8.0)


@pytest.fixture
def probe() -> ConnectivityProbeStub:
    return ConnectivityProbeStub(online=False)


@pytest.fixture
def remote() -> RemoteContentStoreStub:
    return RemoteContentStoreStub()


@pytest.fixture
def clock() -> FakeTimeAuthority:
    return FakeTimeAuthority()


def build(tmp_path: Path, probe, remote, clock) -> FieldSync:
    return create_field_sync(
        FieldSyncConfig(data_dir=tmp_path / "data"),
        probe=probe,
        remote=remote,
        time_authority=clock,
    )


class TestOfflineThenOnline:
    """A capture made offline is pushed once connectivity returns."""

    @pytest.mark.asyncio
    async def test_red_fox_survives_restart_and_syncs(
        self,
        tmp_path: Path,
        probe: ConnectivityProbeStub,
        remote: RemoteContentStoreStub,
        clock: FakeTimeAuthority,
    ) -> None:
        app = build(tmp_path, probe, remote, clock)
        captured = await app.capture.record_observation(
            species="Red Fox", enumerator="Jono", location=LOCATION, items="den, kits"
        )
        assert captured.sync_skipped_reason == "offline"

        # Fresh object graph over the same directory, as after an app restart
        clock.advance(seconds=3600)
        probe.set_online(True)
        restarted = build(tmp_path, probe, remote, clock)

        (entry,) = await restarted.outbox_view.get_outbox_view()
        assert entry.observation_id == captured.observation.id

        result = await restarted.sync.sync_all()

        assert result.to_dict() == {"success": 1, "failed": 0}
        assert await restarted.outbox.get_all() == []
        stored = await restarted.observations.get(captured.observation.id)
        assert stored is not None and stored.synced is True
        content = remote.content_at(remote.path_for(captured.observation.id))
        assert content is not None
        assert '"species": "Red Fox"' in content
        assert '"den"' in content

    @pytest.mark.asyncio
    async def test_one_of_two_fails_then_retries(
        self,
        tmp_path: Path,
        probe: ConnectivityProbeStub,
        remote: RemoteContentStoreStub,
        clock: FakeTimeAuthority,
    ) -> None:
        app = build(tmp_path, probe, remote, clock)
        first = await app.capture.record_observation(
            species="Moose", enumerator="Jono", location=LOCATION
        )
        clock.advance(seconds=5)
        second = await app.capture.record_observation(
            species="Bobcat", enumerator="Jono", location=LOCATION
        )

        probe.set_online(True)
        remote.fail_for(second.observation.id, status=500, message="Server error")
        result = await app.sync.sync_all()

        assert result.success_count == 1
        assert result.failed_count == 1
        (entry,) = await app.outbox_view.get_outbox_view()
        assert entry.observation_id == second.observation.id
        assert entry.retry_count == 1
        assert entry.last_error == "GitHub API error: 500 - Server error"

        remote.clear_failures()
        retry = await app.sync.sync_all()

        assert retry.success_count == 1
        assert await app.outbox_view.pending_count() == 0
        assert remote.upsert_calls == [
            first.observation.id,
            second.observation.id,
            second.observation.id,
        ]

    @pytest.mark.asyncio
    async def test_clear_all_data(
        self,
        tmp_path: Path,
        probe: ConnectivityProbeStub,
        remote: RemoteContentStoreStub,
        clock: FakeTimeAuthority,
    ) -> None:
        app = build(tmp_path, probe, remote, clock)
        await app.capture.record_observation(
            species="Moose", enumerator="Jono", location=LOCATION
        )

        await app.clear_all_data()

        assert await app.observations.get_all() == []
        assert await app.outbox.get_all() == []
        assert await app.settings.get() is None
        assert list((tmp_path / "data").glob("*.json")) == []
