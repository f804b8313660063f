"""Infrastructure layer for FieldSync: adapters, stubs and observability."""
