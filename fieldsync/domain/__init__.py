"""Domain layer for FieldSync: observation models and domain errors."""
