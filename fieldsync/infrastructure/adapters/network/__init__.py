"""Network adapters: connectivity probe and GitHub contents client."""

from fieldsync.infrastructure.adapters.network.connectivity_probe import (
    NetworkConnectivityProbe,
)
from fieldsync.infrastructure.adapters.network.github_contents_client import (
    GitHubContentsClient,
    commit_message_for,
    serialize_observation,
)

__all__: list[str] = [
    "GitHubContentsClient",
    "NetworkConnectivityProbe",
    "commit_message_for",
    "serialize_observation",
]
