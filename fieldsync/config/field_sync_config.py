"""FieldSync configuration.

Configuration is loaded from environment variables, with a .env file in the
working directory (or its parent) loaded first when present.

Environment Variables (Remote):
- FIELDSYNC_GITHUB_TOKEN: GitHub token used for contents API writes
- FIELDSYNC_GITHUB_REPO: Repository identifier, "owner/name"
- FIELDSYNC_GITHUB_PATH: Base path inside the repository (default: data/observations)
- FIELDSYNC_GITHUB_API_URL: API base URL (default: https://api.github.com)

Environment Variables (Local):
- FIELDSYNC_DATA_DIR: Directory for the local JSON stores (default: ~/.fieldsync)
- FIELDSYNC_ENV: "production" for JSON logs, "development" for console logs

Environment Variables (Network):
- FIELDSYNC_REQUEST_TIMEOUT: Per-request timeout in seconds, capped at 30 (default: 30)
- FIELDSYNC_PROBE_URL: URL used for the reachability check (default: https://api.github.com)
- FIELDSYNC_PROBE_TIMEOUT: Reachability check timeout in seconds (default: 5)

Environment Variables (Location):
- FIELDSYNC_LOCATION_LAT, FIELDSYNC_LOCATION_LON: Fixed survey-station fix used
  when a capture does not supply its own location (default: unset, no fix)
- FIELDSYNC_LOCATION_ACCURACY, FIELDSYNC_LOCATION_ALTITUDE: Optional, meters
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from fieldsync.domain.errors import ConfigError
from fieldsync.domain.models.observation import GPSLocation

DEFAULT_BASE_PATH = "data/observations"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_DATA_DIR = Path.home() / ".fieldsync"

# Upper bound for a single remote call so one hung item cannot stall a batch
MAX_REQUEST_TIMEOUT_SECONDS = 30.0


def _get_optional_float_env(key: str) -> float | None:
    value = os.environ.get(key, "").strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed float value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class RemoteConfig:
    """GitHub repository the observations are pushed to.

    Attributes:
        token: Credential secret, sent as "Authorization: token {token}".
        repository: Repository identifier, "owner/name".
        base_path: Directory inside the repository for observation files.
        api_url: Contents API base URL.
    """

    token: str
    repository: str
    base_path: str = DEFAULT_BASE_PATH
    api_url: str = DEFAULT_API_URL

    def __repr__(self) -> str:
        # Keep the token out of logs and tracebacks
        return (
            f"RemoteConfig(token='***', repository={self.repository!r}, "
            f"base_path={self.base_path!r}, api_url={self.api_url!r})"
        )

    def validate(self) -> None:
        """Check every field is usable for a remote operation.

        Raises:
            ConfigError: If token, repository or base path is missing, or the
                repository is not of the form "owner/name".
        """
        missing = [
            name
            for name, value in (
                ("token", self.token),
                ("repository", self.repository),
                ("base_path", self.base_path),
            )
            if not value or not value.strip()
        ]
        if missing:
            raise ConfigError(
                f"GitHub credentials not configured: missing {', '.join(missing)}"
            )
        owner, _, name = self.repository.strip().partition("/")
        if not owner or not name or "/" in name:
            raise ConfigError(
                f"Repository must be 'owner/name', got {self.repository!r}"
            )


@dataclass(frozen=True)
class NetworkConfig:
    """Timeouts and probe target for remote calls."""

    request_timeout_seconds: float = MAX_REQUEST_TIMEOUT_SECONDS
    probe_url: str = DEFAULT_API_URL
    probe_timeout_seconds: float = 5.0

    def __post_init__(self) -> None:
        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be positive")
        if self.request_timeout_seconds > MAX_REQUEST_TIMEOUT_SECONDS:
            object.__setattr__(
                self, "request_timeout_seconds", MAX_REQUEST_TIMEOUT_SECONDS
            )
        if self.probe_timeout_seconds <= 0:
            raise ValueError("probe_timeout_seconds must be positive")


@dataclass(frozen=True)
class FieldSyncConfig:
    """Application configuration."""

    data_dir: Path = DEFAULT_DATA_DIR
    environment: str = "production"
    remote: RemoteConfig | None = None
    network: NetworkConfig = field(default_factory=NetworkConfig)
    default_location: GPSLocation | None = None


def _load_dotenv() -> None:
    env_path = Path(".env")
    if not env_path.exists():
        env_path = Path("../.env")
    if env_path.exists():
        load_dotenv(env_path)


def load_remote_config() -> RemoteConfig | None:
    """Load the remote configuration from the environment.

    Returns:
        RemoteConfig when both token and repository are set, None otherwise.
        A missing remote configuration is not an error here; it surfaces as
        ConfigError when a sync is attempted.
    """
    token = os.environ.get("FIELDSYNC_GITHUB_TOKEN", "").strip()
    repository = os.environ.get("FIELDSYNC_GITHUB_REPO", "").strip()
    if not token or not repository:
        return None
    return RemoteConfig(
        token=token,
        repository=repository,
        base_path=os.environ.get("FIELDSYNC_GITHUB_PATH", "").strip()
        or DEFAULT_BASE_PATH,
        api_url=os.environ.get("FIELDSYNC_GITHUB_API_URL", "").strip()
        or DEFAULT_API_URL,
    )


def load_default_location() -> GPSLocation | None:
    """Load the fixed station location from the environment.

    Returns:
        GPSLocation when latitude and longitude are both set and valid,
        None otherwise.
    """
    latitude = _get_optional_float_env("FIELDSYNC_LOCATION_LAT")
    longitude = _get_optional_float_env("FIELDSYNC_LOCATION_LON")
    if latitude is None or longitude is None:
        return None
    try:
        return GPSLocation(
            latitude=latitude,
            longitude=longitude,
            accuracy=_get_optional_float_env("FIELDSYNC_LOCATION_ACCURACY"),
            altitude=_get_optional_float_env("FIELDSYNC_LOCATION_ALTITUDE"),
        )
    except ValueError:
        return None


def load_field_sync_config() -> FieldSyncConfig:
    """Load configuration from environment variables.

    Returns:
        FieldSyncConfig with all settings.
    """
    _load_dotenv()

    data_dir = os.environ.get("FIELDSYNC_DATA_DIR")
    return FieldSyncConfig(
        data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
        environment=os.environ.get("FIELDSYNC_ENV", "production"),
        remote=load_remote_config(),
        network=NetworkConfig(
            request_timeout_seconds=_get_float_env(
                "FIELDSYNC_REQUEST_TIMEOUT", MAX_REQUEST_TIMEOUT_SECONDS
            ),
            probe_url=os.environ.get("FIELDSYNC_PROBE_URL", DEFAULT_API_URL),
            probe_timeout_seconds=_get_float_env("FIELDSYNC_PROBE_TIMEOUT", 5.0),
        ),
        default_location=load_default_location(),
    )
