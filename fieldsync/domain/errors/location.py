"""Location errors for FieldSync."""

from fieldsync.domain.exceptions import FieldSyncError


class LocationUnavailableError(FieldSyncError):
    """Raised when an observation is recorded without a usable GPS fix.

    Nothing is stored; the user retries once a fix is available.
    """

    pass
