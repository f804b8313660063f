"""Network connectivity probe.

Online means both:
1. Link: the OS has a route out of the machine. Checked by connecting a UDP
   socket towards a public address, which consults the routing table but
   sends no packets.
2. Reachability: an HTTP HEAD to the probe URL returns any response below
   500 within the probe timeout.

The probe never raises. Any fault is logged at debug level and reported as
offline.
"""

from __future__ import annotations

import asyncio
import socket

import httpx
import structlog

from fieldsync.application.ports.connectivity_probe import ConnectivityProbeProtocol
from fieldsync.config.field_sync_config import DEFAULT_API_URL

log = structlog.get_logger()

# TEST-NET-3 (RFC 5737); only used for a route lookup
_ROUTE_CHECK_ADDRESS = ("203.0.113.1", 53)


class NetworkConnectivityProbe(ConnectivityProbeProtocol):
    """ConnectivityProbeProtocol using the routing table and an HTTP HEAD."""

    def __init__(
        self,
        probe_url: str = DEFAULT_API_URL,
        timeout_seconds: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._probe_url = probe_url
        self._timeout = timeout_seconds
        self._transport = transport

    async def is_online(self) -> bool:
        try:
            if not await asyncio.to_thread(self._has_network_link):
                log.debug("connectivity_no_link")
                return False
            return await self._is_internet_reachable()
        except Exception as e:
            log.debug("connectivity_probe_failed", error=str(e))
            return False

    def _has_network_link(self) -> bool:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.connect(_ROUTE_CHECK_ADDRESS)
            local_address = sock.getsockname()[0]
        except OSError:
            return False
        finally:
            sock.close()
        return not local_address.startswith("127.") and local_address != "0.0.0.0"

    async def _is_internet_reachable(self) -> bool:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.head(self._probe_url)
        except httpx.HTTPError as e:
            log.debug("connectivity_unreachable", url=self._probe_url, error=str(e))
            return False
        return response.status_code < 500
