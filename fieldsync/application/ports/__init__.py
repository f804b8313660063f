"""Application ports (interfaces) for FieldSync.

Infrastructure adapters and test stubs implement these protocols; services
depend only on them.
"""

from fieldsync.application.ports.connectivity_probe import ConnectivityProbeProtocol
from fieldsync.application.ports.key_value_store import KeyValueStoreProtocol
from fieldsync.application.ports.location_provider import LocationProviderProtocol
from fieldsync.application.ports.observation_repository import (
    ObservationRepositoryProtocol,
)
from fieldsync.application.ports.outbox_repository import OutboxRepositoryProtocol
from fieldsync.application.ports.remote_content_store import (
    RemoteContentStoreProtocol,
)
from fieldsync.application.ports.time_authority import TimeAuthorityProtocol
from fieldsync.application.ports.user_settings_repository import (
    UserSettingsRepositoryProtocol,
)

__all__: list[str] = [
    "ConnectivityProbeProtocol",
    "KeyValueStoreProtocol",
    "LocationProviderProtocol",
    "ObservationRepositoryProtocol",
    "OutboxRepositoryProtocol",
    "RemoteContentStoreProtocol",
    "TimeAuthorityProtocol",
    "UserSettingsRepositoryProtocol",
]
