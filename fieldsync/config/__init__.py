"""Configuration for FieldSync."""

from fieldsync.config.field_sync_config import (
    DEFAULT_BASE_PATH,
    MAX_REQUEST_TIMEOUT_SECONDS,
    FieldSyncConfig,
    NetworkConfig,
    RemoteConfig,
    load_field_sync_config,
    load_default_location,
    load_remote_config,
)

__all__: list[str] = [
    "DEFAULT_BASE_PATH",
    "MAX_REQUEST_TIMEOUT_SECONDS",
    "FieldSyncConfig",
    "NetworkConfig",
    "RemoteConfig",
    "load_default_location",
    "load_field_sync_config",
    "load_remote_config",
]
