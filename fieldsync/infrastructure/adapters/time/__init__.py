"""Time adapters."""

from fieldsync.infrastructure.adapters.time.system_time_authority import (
    SystemTimeAuthority,
)

__all__: list[str] = ["SystemTimeAuthority"]
