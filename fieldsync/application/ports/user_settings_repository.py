"""UserSettingsRepository port: single-record prefill storage."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from fieldsync.domain.models.observation import UserSettings


@runtime_checkable
class UserSettingsRepositoryProtocol(Protocol):
    """Repository interface for the user settings record."""

    async def get(self) -> "UserSettings | None":
        """Return the saved settings, or None if never saved."""
        ...

    async def save(self, settings: "UserSettings") -> None:
        """Replace the saved settings."""
        ...
