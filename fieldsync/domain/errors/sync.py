"""Synchronization and persistence errors for FieldSync.

Error taxonomy:
- ConfigError: remote configuration missing or invalid. Not retried
  automatically; the user has to fix the settings.
- OfflineError: no connectivity. Retry later (next save, next foreground).
- RemoteError: the remote store rejected a write. Recorded on the
  observation and counted on its outbox item; retried by the next sync.
- SyncBusyError: a sync is already running in this process.
- StorageError: the local store could not be read or written. Never
  converted into sync state; always propagates to the caller.
"""

from fieldsync.domain.exceptions import FieldSyncError


class ConfigError(FieldSyncError):
    """Raised when remote credentials or repository are not configured.

    Example:
        raise ConfigError("GitHub credentials not configured")
    """

    pass


class OfflineError(FieldSyncError):
    """Raised when a sync is requested while the probe reports offline."""

    pass


class SyncBusyError(FieldSyncError):
    """Raised when sync_all() is called while another run is in flight.

    Overlapping runs are rejected rather than queued so that no
    observation is ever upserted twice by concurrent runs.
    """

    pass


class StorageError(FieldSyncError):
    """Raised when a local key-value namespace cannot be read or written.

    Callers must not assume partial writes were rolled back.
    """

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class RemoteError(FieldSyncError):
    """Raised when the remote store rejects a read or write.

    A status of 0 means the request never produced an HTTP response
    (timeout, DNS, TLS or connection failure).

    Attributes:
        status: HTTP status code, or 0 for transport failures.
        message: Message reported by the remote, or a transport description.
    """

    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"GitHub API error: {status} - {message}")
        self.status = status
        self.message = message

    @property
    def is_transport_failure(self) -> bool:
        """True when no HTTP response was received."""
        return self.status == 0
