"""Application services for FieldSync."""

from fieldsync.application.services.observation_capture_service import (
    ObservationCaptureService,
    parse_items,
)
from fieldsync.application.services.outbox_service import OutboxService
from fieldsync.application.services.sync_service import SyncService

__all__: list[str] = [
    "ObservationCaptureService",
    "OutboxService",
    "SyncService",
    "parse_items",
]
