"""Location adapters."""

from fieldsync.infrastructure.adapters.location.static_location_provider import (
    StaticLocationProvider,
)

__all__: list[str] = ["StaticLocationProvider"]
