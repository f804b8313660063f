"""RemoteContentStoreStub for testing.

Simulates the GitHub contents API in memory: each path holds one object
with a SHA that changes on every write. An update must present the current
SHA, exactly like the real endpoint, so tests exercise the same conditional
create-or-update path as production.
"""

from __future__ import annotations

import asyncio
import hashlib

from fieldsync.application.ports.remote_content_store import (
    RemoteContentStoreProtocol,
)
from fieldsync.config.field_sync_config import RemoteConfig
from fieldsync.domain.errors import ConfigError, RemoteError
from fieldsync.domain.models.observation import WildlifeObservation
from fieldsync.infrastructure.adapters.network.github_contents_client import (
    serialize_observation,
)

DEFAULT_STUB_CONFIG = RemoteConfig(token="stub-token", repository="field-team/observations")


class RemoteContentStoreStub(RemoteContentStoreProtocol):
    """In-memory stub implementation of RemoteContentStoreProtocol.

    Example:
        >>> stub = RemoteContentStoreStub()
        >>> stub.fail_for("obs_2", status=422, message="Invalid request")
        >>> await stub.upsert(observation)
        >>> stub.object_count()
        1
    """

    def __init__(
        self,
        config: RemoteConfig | None = DEFAULT_STUB_CONFIG,
        delay_seconds: float = 0.0,
    ) -> None:
        self._config = config
        self._delay = delay_seconds
        self._objects: dict[str, tuple[str, str]] = {}
        self._failures: dict[str, RemoteError] = {}
        self.upsert_calls: list[str] = []
        self.connection_ok = True

    def fail_for(self, observation_id: str, status: int = 500, message: str = "Server error") -> None:
        """Make every upsert for an observation id fail."""
        self._failures[observation_id] = RemoteError(status, message)

    def clear_failures(self) -> None:
        self._failures.clear()

    def object_count(self) -> int:
        return len(self._objects)

    def content_at(self, path: str) -> str | None:
        entry = self._objects.get(path)
        return entry[1] if entry else None

    def configure(self, config: RemoteConfig | None) -> None:
        self._config = config

    def is_configured(self) -> bool:
        if self._config is None:
            return False
        try:
            self._config.validate()
        except ConfigError:
            return False
        return True

    def _require_config(self) -> RemoteConfig:
        if self._config is None:
            raise ConfigError("GitHub credentials not configured")
        self._config.validate()
        return self._config

    def path_for(self, observation_id: str) -> str:
        config = self._require_config()
        return f"{config.base_path.strip('/')}/{observation_id}.json"

    async def get_version_token(self, path: str) -> str | None:
        self._require_config()
        entry = self._objects.get(path)
        return entry[0] if entry else None

    async def upsert(self, observation: WildlifeObservation) -> str:
        path = self.path_for(observation.id)
        self.upsert_calls.append(observation.id)
        if self._delay:
            await asyncio.sleep(self._delay)

        failure = self._failures.get(observation.id)
        if failure is not None:
            raise RemoteError(failure.status, failure.message)

        current_sha = await self.get_version_token(path)
        content = serialize_observation(observation)
        return self._put(path, content, current_sha)

    def _put(self, path: str, content: str, sha: str | None) -> str:
        existing = self._objects.get(path)
        if existing is not None and sha != existing[0]:
            raise RemoteError(409, f"{path} does not match {sha}")
        if existing is None and sha is not None:
            raise RemoteError(404, "Not Found")
        generation = f"{path}:{content}:{existing[0] if existing else ''}"
        new_sha = hashlib.sha1(generation.encode("utf-8")).hexdigest()
        self._objects[path] = (new_sha, content)
        return new_sha

    async def test_connection(self) -> bool:
        return self.is_configured() and self.connection_ok
