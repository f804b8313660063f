"""Unit tests for the domain error taxonomy."""

import pytest

from fieldsync.domain.errors import (
    ConfigError,
    OfflineError,
    RemoteError,
    StorageError,
    SyncBusyError,
)
from fieldsync.domain.exceptions import FieldSyncError


class TestErrorHierarchy:
    """All domain errors share the FieldSyncError base."""

    @pytest.mark.parametrize(
        "error",
        [
            ConfigError("x"),
            OfflineError("x"),
            SyncBusyError("x"),
            StorageError("x"),
            RemoteError(500, "x"),
        ],
    )
    def test_inherits_base(self, error: Exception) -> None:
        assert isinstance(error, FieldSyncError)


class TestRemoteError:
    """Test RemoteError formatting."""

    def test_message_format(self) -> None:
        error = RemoteError(422, "Invalid request")
        assert str(error) == "GitHub API error: 422 - Invalid request"
        assert error.status == 422
        assert error.message == "Invalid request"
        assert not error.is_transport_failure

    def test_status_zero_is_transport_failure(self) -> None:
        assert RemoteError(0, "Request timeout after 30.0s").is_transport_failure


class TestStorageError:
    def test_carries_key(self) -> None:
        error = StorageError("disk full", key="sync_outbox")
        assert error.key == "sync_outbox"
        assert str(error) == "disk full"
