"""
FieldSync - offline-first wildlife observation capture

Observations are written to a local store first and queued in an outbox.
When the device is online the outbox is pushed, one record at a time, to a
GitHub repository through the contents API.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
