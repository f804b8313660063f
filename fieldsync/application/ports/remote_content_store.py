"""RemoteContentStore port: conditional upsert of one observation.

The remote is content-addressed: every object has an opaque version token
(the SHA) that must accompany any update of an existing object. A missing
token means the object does not exist yet, which is expected and not an
error.

Idempotence:
    Repeated upserts for the same observation id converge to one remote
    object whose content equals the observation's serialized form. Failed
    writes do not partially commit (the remote is atomic per object).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from fieldsync.config.field_sync_config import RemoteConfig
    from fieldsync.domain.models.observation import WildlifeObservation


@runtime_checkable
class RemoteContentStoreProtocol(Protocol):
    """Interface for the remote observation repository."""

    def configure(self, config: "RemoteConfig | None") -> None:
        """Replace the remote configuration (None clears it)."""
        ...

    def is_configured(self) -> bool:
        """True when token and repository are both present."""
        ...

    def path_for(self, observation_id: str) -> str:
        """Return the deterministic remote path: {base_path}/{id}.json."""
        ...

    async def get_version_token(self, path: str) -> str | None:
        """Return the current SHA for path, or None if it does not exist.

        Raises:
            ConfigError: If the store is not configured.
            RemoteError: If the read is rejected for any reason but absence.
        """
        ...

    async def upsert(self, observation: "WildlifeObservation") -> str:
        """Create or update the observation's remote object.

        Returns:
            The version token of the written object.

        Raises:
            ConfigError: If the store is not configured.
            RemoteError: If the write is rejected or the request fails.
        """
        ...

    async def test_connection(self) -> bool:
        """Return True if the configured repository is reachable. Never raises."""
        ...
