"""Data transfer objects for FieldSync services."""

from fieldsync.application.dtos.sync import (
    CaptureResult,
    OutboxEntryView,
    SyncFailure,
    SyncResult,
)

__all__: list[str] = [
    "CaptureResult",
    "OutboxEntryView",
    "SyncFailure",
    "SyncResult",
]
