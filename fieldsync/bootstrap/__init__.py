"""Bootstrap wiring for FieldSync."""

from fieldsync.bootstrap.field_sync import FieldSync, create_field_sync
from fieldsync.bootstrap.logging import configure_structlog

__all__: list[str] = ["FieldSync", "configure_structlog", "create_field_sync"]
