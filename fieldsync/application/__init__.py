"""Application layer for FieldSync: ports, services and DTOs."""
