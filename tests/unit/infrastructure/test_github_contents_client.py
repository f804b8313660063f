"""Unit tests for GitHubContentsClient.

Requests are served by httpx.MockTransport handlers; nothing touches the
network.
"""

from __future__ import annotations

import asyncio
import base64
import json
from collections.abc import Callable

import httpx
import pytest

from fieldsync.application.ports import RemoteContentStoreProtocol
from fieldsync.config import RemoteConfig
from fieldsync.domain.errors import ConfigError, RemoteError
from fieldsync.infrastructure.adapters.network import (
    GitHubContentsClient,
    commit_message_for,
    serialize_observation,
)
from tests.helpers import make_observation

CONFIG = RemoteConfig(token="ghp_test", repository="field-team/observations")
CONTENTS_URL = (
    "https://api.github.com/repos/field-team/observations"
    "/contents/data/observations/obs_1.json"
)

Handler = Callable[[httpx.Request], httpx.Response]


def make_client(handler: Handler, config: RemoteConfig | None = CONFIG) -> GitHubContentsClient:
    return GitHubContentsClient(config=config, transport=httpx.MockTransport(handler))


class RecordingHandler:
    """Serves queued responses and keeps every request it saw."""

    def __init__(self, *responses: httpx.Response) -> None:
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responses.pop(0)


class TestSerialization:
    """Test payload and commit message helpers."""

    def test_serialize_is_pretty_json(self) -> None:
        text = serialize_observation(make_observation())
        assert text.startswith("{\n  ")
        assert json.loads(text)["species"] == "Red Fox"

    def test_commit_message(self) -> None:
        assert commit_message_for(make_observation()) == (
            "Add wildlife observation: Red Fox at 2026-01-01T00:00:00+00:00"
        )


class TestConfiguration:
    """Test configuration handling."""

    def test_implements_protocol(self) -> None:
        assert isinstance(GitHubContentsClient(), RemoteContentStoreProtocol)

    def test_unconfigured(self) -> None:
        client = GitHubContentsClient()
        assert client.is_configured() is False
        with pytest.raises(ConfigError):
            client.path_for("obs_1")

    def test_invalid_config_not_configured(self) -> None:
        client = GitHubContentsClient(RemoteConfig(token="t", repository="bad"))
        assert client.is_configured() is False

    def test_configure_replaces_config(self) -> None:
        client = GitHubContentsClient()
        client.configure(CONFIG)
        assert client.is_configured() is True
        assert client.path_for("obs_1") == "data/observations/obs_1.json"

    def test_path_trims_slashes(self) -> None:
        client = GitHubContentsClient(
            RemoteConfig(token="t", repository="a/b", base_path="/surveys/2026/")
        )
        assert client.path_for("obs_1") == "surveys/2026/obs_1.json"

    def test_timeout_capped(self) -> None:
        client = GitHubContentsClient(CONFIG, timeout_seconds=90)
        assert client._timeout == 30.0

    @pytest.mark.asyncio
    async def test_upsert_unconfigured_raises_before_request(self) -> None:
        handler = RecordingHandler()
        client = make_client(handler, config=None)

        with pytest.raises(ConfigError):
            await client.upsert(make_observation())
        assert handler.requests == []


class TestUpsert:
    """Test the GET-then-PUT create-or-update flow."""

    @pytest.mark.asyncio
    async def test_create_when_file_missing(self) -> None:
        handler = RecordingHandler(
            httpx.Response(404, json={"message": "Not Found"}),
            httpx.Response(201, json={"content": {"sha": "new-sha"}}),
        )
        client = make_client(handler)
        observation = make_observation()

        sha = await client.upsert(observation)

        assert sha == "new-sha"
        get, put = handler.requests
        assert get.method == "GET"
        assert str(get.url) == CONTENTS_URL
        assert get.headers["Authorization"] == "token ghp_test"
        assert put.method == "PUT"
        body = json.loads(put.content)
        assert "sha" not in body
        assert body["message"] == commit_message_for(observation)
        decoded = base64.b64decode(body["content"]).decode("utf-8")
        assert decoded == serialize_observation(observation)

    @pytest.mark.asyncio
    async def test_update_passes_existing_sha(self) -> None:
        handler = RecordingHandler(
            httpx.Response(200, json={"sha": "old-sha", "path": "data/observations/obs_1.json"}),
            httpx.Response(200, json={"content": {"sha": "next-sha"}}),
        )
        client = make_client(handler)

        sha = await client.upsert(make_observation())

        assert sha == "next-sha"
        assert json.loads(handler.requests[1].content)["sha"] == "old-sha"

    @pytest.mark.asyncio
    async def test_put_rejected_raises_remote_error(self) -> None:
        handler = RecordingHandler(
            httpx.Response(404),
            httpx.Response(422, json={"message": "Invalid request"}),
        )
        client = make_client(handler)

        with pytest.raises(RemoteError) as exc_info:
            await client.upsert(make_observation())

        assert exc_info.value.status == 422
        assert str(exc_info.value) == "GitHub API error: 422 - Invalid request"

    @pytest.mark.asyncio
    async def test_get_failure_stops_before_put(self) -> None:
        handler = RecordingHandler(httpx.Response(401, json={"message": "Bad credentials"}))
        client = make_client(handler)

        with pytest.raises(RemoteError) as exc_info:
            await client.upsert(make_observation())

        assert exc_info.value.status == 401
        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    async def test_non_json_error_body(self) -> None:
        handler = RecordingHandler(
            httpx.Response(404),
            httpx.Response(502, text="Bad Gateway"),
        )
        client = make_client(handler)

        with pytest.raises(RemoteError, match="502 - Bad Gateway"):
            await client.upsert(make_observation())

    @pytest.mark.asyncio
    async def test_timeout_maps_to_status_zero(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler)

        with pytest.raises(RemoteError) as exc_info:
            await client.upsert(make_observation())

        assert exc_info.value.is_transport_failure
        assert "timeout" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_connect_error_maps_to_status_zero(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("no route", request=request)

        client = make_client(handler)

        with pytest.raises(RemoteError) as exc_info:
            await client.upsert(make_observation())

        assert exc_info.value.status == 0
        assert exc_info.value.message.startswith("Request failed")


    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [[], {"content": None}, {"content": {"sha": 7}}, {}],
    )
    async def test_unusual_success_body_returns_empty_sha(self, body) -> None:
        handler = RecordingHandler(httpx.Response(404), httpx.Response(201, json=body))
        client = make_client(handler)

        assert await client.upsert(make_observation()) == ""
        assert len(handler.requests) == 2

    @pytest.mark.asyncio
    async def test_whole_call_bounded_by_timeout(self) -> None:
        async def slow_handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(0.5)
            return httpx.Response(404)

        client = GitHubContentsClient(
            CONFIG, timeout_seconds=0.05, transport=httpx.MockTransport(slow_handler)
        )

        with pytest.raises(RemoteError) as exc_info:
            await client.upsert(make_observation())

        assert exc_info.value.is_transport_failure
        assert exc_info.value.message == "Request timeout after 0.05s"


class FakeContentsApi:
    """Minimal stateful contents endpoint: one SHA per path."""

    def __init__(self) -> None:
        self.files: dict[str, tuple[str, str]] = {}
        self.puts: list[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if request.method == "GET":
            if path not in self.files:
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(200, json={"sha": self.files[path][0]})
        body = json.loads(request.content)
        self.puts.append(body)
        current = self.files.get(path)
        if current is not None and body.get("sha") != current[0]:
            return httpx.Response(409, json={"message": "sha mismatch"})
        new_sha = f"sha-{len(self.puts)}"
        self.files[path] = (new_sha, body["content"])
        status = 201 if current is None else 200
        return httpx.Response(status, json={"content": {"sha": new_sha}})


class TestRepeatedUpsert:
    """Upserting an unchanged observation twice leaves one identical file."""

    @pytest.mark.asyncio
    async def test_second_upsert_updates_with_first_sha(self) -> None:
        api = FakeContentsApi()
        client = make_client(api)
        observation = make_observation(items=("tracks",))

        first_sha = await client.upsert(observation)
        second_sha = await client.upsert(observation)

        assert len(api.files) == 1
        first_put, second_put = api.puts
        assert "sha" not in first_put
        assert second_put["sha"] == first_sha
        assert second_put["content"] == first_put["content"]
        stored_sha, stored_content = api.files[httpx.URL(CONTENTS_URL).path]
        assert stored_sha == second_sha
        assert base64.b64decode(stored_content).decode("utf-8") == serialize_observation(
            observation
        )


class TestGetVersionToken:
    """Test SHA lookup."""

    @pytest.mark.asyncio
    async def test_missing_file(self) -> None:
        client = make_client(RecordingHandler(httpx.Response(404)))
        assert await client.get_version_token("data/observations/obs_1.json") is None

    @pytest.mark.asyncio
    async def test_existing_file(self) -> None:
        client = make_client(RecordingHandler(httpx.Response(200, json={"sha": "abc"})))
        assert await client.get_version_token("data/observations/obs_1.json") == "abc"

    @pytest.mark.asyncio
    async def test_directory_listing_has_no_sha(self) -> None:
        client = make_client(RecordingHandler(httpx.Response(200, json=[{"sha": "x"}])))
        assert await client.get_version_token("data/observations") is None

    @pytest.mark.asyncio
    async def test_malformed_body_raises(self) -> None:
        client = make_client(RecordingHandler(httpx.Response(200, text="<html>")))
        with pytest.raises(RemoteError, match="Malformed"):
            await client.get_version_token("data/observations/obs_1.json")


class TestConnection:
    """Test test_connection()."""

    @pytest.mark.asyncio
    async def test_slow_response_returns_false(self) -> None:
        async def slow_handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(0.5)
            return httpx.Response(200)

        client = GitHubContentsClient(
            CONFIG, timeout_seconds=0.05, transport=httpx.MockTransport(slow_handler)
        )
        assert await client.test_connection() is False

    @pytest.mark.asyncio
    async def test_ok(self) -> None:
        handler = RecordingHandler(httpx.Response(200, json={"full_name": "field-team/observations"}))
        client = make_client(handler)

        assert await client.test_connection() is True
        assert str(handler.requests[0].url) == (
            "https://api.github.com/repos/field-team/observations"
        )

    @pytest.mark.asyncio
    async def test_not_found(self) -> None:
        client = make_client(RecordingHandler(httpx.Response(404)))
        assert await client.test_connection() is False

    @pytest.mark.asyncio
    async def test_transport_error_returns_false(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("down", request=request)

        assert await make_client(handler).test_connection() is False

    @pytest.mark.asyncio
    async def test_unconfigured_returns_false(self) -> None:
        handler = RecordingHandler()
        assert await make_client(handler, config=None).test_connection() is False
        assert handler.requests == []
