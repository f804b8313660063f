"""GitHub contents API client for observation upserts.

Each observation maps to one file, ``{base_path}/{id}.json``. An upsert
reads the file's current SHA (404 means the file does not exist yet), then
PUTs the serialized observation, passing the SHA when updating so GitHub
rejects writes based on a stale version.

Request format:
    PUT https://api.github.com/repos/{owner}/{name}/contents/{path}
    Authorization: token {token}
    {"message": "...", "content": "<base64 json>", "sha": "<previous sha>"}
"""

from __future__ import annotations

import asyncio
import base64
import json
from collections.abc import Awaitable
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
import structlog

from fieldsync.application.ports.remote_content_store import (
    RemoteContentStoreProtocol,
)
from fieldsync.config.field_sync_config import (
    MAX_REQUEST_TIMEOUT_SECONDS,
    RemoteConfig,
)
from fieldsync.domain.errors import ConfigError, RemoteError
from fieldsync.domain.models.observation import WildlifeObservation, format_instant

log = structlog.get_logger()

T = TypeVar("T")


def serialize_observation(observation: WildlifeObservation) -> str:
    """Return the pretty-printed JSON document stored remotely."""
    return json.dumps(observation.to_dict(), indent=2)


def commit_message_for(observation: WildlifeObservation) -> str:
    return (
        f"Add wildlife observation: {observation.species} "
        f"at {format_instant(observation.timestamp)}"
    )


class GitHubContentsClient(RemoteContentStoreProtocol):
    """RemoteContentStoreProtocol backed by the GitHub contents API.

    A new httpx.AsyncClient is opened per upsert; the GET and PUT of one
    upsert share it. Each public call is bounded as a whole by the
    configured timeout, on top of the per-phase httpx timeouts.

    Example:
        client = GitHubContentsClient(
            RemoteConfig(token="ghp_...", repository="acme/wildlife-data")
        )
        sha = await client.upsert(observation)
    """

    def __init__(
        self,
        config: RemoteConfig | None = None,
        timeout_seconds: float = MAX_REQUEST_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Remote configuration, or None until the user provides one.
            timeout_seconds: Per-request timeout, capped at 30 seconds.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        self._config = config
        self._timeout = min(timeout_seconds, MAX_REQUEST_TIMEOUT_SECONDS)
        self._transport = transport

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

    def _contents_url(self, config: RemoteConfig, path: str) -> str:
        return (
            f"{config.api_url.rstrip('/')}/repos/{config.repository.strip()}"
            f"/contents/{quote(path, safe='/')}"
        )

    def _headers(self, config: RemoteConfig) -> dict[str, str]:
        return {
            "Authorization": f"token {config.token}",
            "Accept": "application/vnd.github+json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def _bounded(self, operation: Awaitable[T]) -> T:
        # httpx timeouts apply per connect/read/write phase; this caps the whole call
        try:
            return await asyncio.wait_for(operation, timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise RemoteError(0, f"Request timeout after {self._timeout}s") from e

    async def _send(
        self, client: httpx.AsyncClient, method: str, url: str, **kwargs: Any
    ) -> httpx.Response:
        try:
            return await client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise RemoteError(0, f"Request timeout after {self._timeout}s") from e
        except httpx.RequestError as e:
            raise RemoteError(0, f"Request failed: {e}") from e

    async def get_version_token(self, path: str) -> str | None:
        config = self._require_config()
        return await self._bounded(self._get_version_token(config, path))

    async def _get_version_token(self, config: RemoteConfig, path: str) -> str | None:
        async with self._client() as client:
            return await self._fetch_sha(client, config, path)

    async def _fetch_sha(
        self, client: httpx.AsyncClient, config: RemoteConfig, path: str
    ) -> str | None:
        response = await self._send(
            client, "GET", self._contents_url(config, path), headers=self._headers(config)
        )
        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise RemoteError(response.status_code, _error_message(response))
        try:
            data = response.json()
        except ValueError as e:
            raise RemoteError(response.status_code, "Malformed contents response") from e
        # A directory at the path comes back as a list and has no file SHA
        sha = data.get("sha") if isinstance(data, dict) else None
        return sha if isinstance(sha, str) else None

    async def upsert(self, observation: WildlifeObservation) -> str:
        """Create or update the observation's file.

        The GET and PUT together are bounded by the request timeout.

        Returns:
            The new blob SHA, or "" if the response did not carry one.

        Raises:
            ConfigError: If no valid configuration is set.
            RemoteError: If GitHub rejects a request or it times out.
        """
        config = self._require_config()
        path = self.path_for(observation.id)
        sha, new_sha = await self._bounded(self._upsert(config, path, observation))
        log.debug(
            "remote_upsert_completed",
            observation_id=observation.id,
            path=path,
            created=sha is None,
        )
        return new_sha

    async def _upsert(
        self, config: RemoteConfig, path: str, observation: WildlifeObservation
    ) -> tuple[str | None, str]:
        content = base64.b64encode(
            serialize_observation(observation).encode("utf-8")
        ).decode("ascii")

        async with self._client() as client:
            sha = await self._fetch_sha(client, config, path)

            body: dict[str, Any] = {
                "message": commit_message_for(observation),
                "content": content,
            }
            if sha is not None:
                body["sha"] = sha

            response = await self._send(
                client,
                "PUT",
                self._contents_url(config, path),
                headers=self._headers(config),
                json=body,
            )

        if response.status_code not in (200, 201):
            raise RemoteError(response.status_code, _error_message(response))
        return sha, _content_sha(response)

    async def test_connection(self) -> bool:
        config = self._config
        if config is None or not self.is_configured():
            return False
        url = f"{config.api_url.rstrip('/')}/repos/{config.repository.strip()}"
        try:
            response = await self._bounded(self._get(url, config))
        except (httpx.HTTPError, RemoteError) as e:
            log.warning("github_connection_test_failed", error=str(e))
            return False
        return response.status_code == 200

    async def _get(self, url: str, config: RemoteConfig) -> httpx.Response:
        async with self._client() as client:
            return await client.get(url, headers=self._headers(config))


def _content_sha(response: httpx.Response) -> str:
    """Pull content.sha out of a PUT response, tolerating odd bodies."""
    try:
        data = response.json()
    except ValueError:
        return ""
    content = data.get("content") if isinstance(data, dict) else None
    sha = content.get("sha") if isinstance(content, dict) else None
    return sha if isinstance(sha, str) else ""


def _error_message(response: httpx.Response) -> str:
    try:
        detail = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(detail, dict) and "message" in detail:
        return str(detail["message"])
    return str(detail)
