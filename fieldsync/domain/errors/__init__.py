"""Domain errors for FieldSync.

All exceptions inherit from FieldSyncError.
"""

from fieldsync.domain.errors.location import LocationUnavailableError
from fieldsync.domain.errors.sync import (
    ConfigError,
    OfflineError,
    RemoteError,
    StorageError,
    SyncBusyError,
)

__all__: list[str] = [
    "ConfigError",
    "LocationUnavailableError",
    "OfflineError",
    "RemoteError",
    "StorageError",
    "SyncBusyError",
]
