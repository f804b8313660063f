"""ConnectivityProbeStub for testing."""

from fieldsync.application.ports.connectivity_probe import ConnectivityProbeProtocol


class ConnectivityProbeStub(ConnectivityProbeProtocol):
    """Probe whose answer is set by the test.

    Attributes:
        check_count: Number of is_online() calls made so far.
    """

    def __init__(self, online: bool = True) -> None:
        self._online = online
        self.check_count = 0

    def set_online(self, online: bool) -> None:
        self._online = online

    async def is_online(self) -> bool:
        self.check_count += 1
        return self._online
