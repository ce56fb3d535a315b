"""IPv4 reachability precheck."""

from __future__ import annotations

import asyncio
import logging
import socket

from originscan.config import IPV4_PROBE_HOST, IPV4_PROBE_PORT, IPV4_PROBE_TIMEOUT
from originscan.errors import NetworkUnavailableError

logger = logging.getLogger(__name__)


async def check_ipv4_connectivity(
    host: str = IPV4_PROBE_HOST,
    port: int = IPV4_PROBE_PORT,
    timeout: float = IPV4_PROBE_TIMEOUT,
) -> None:
    """Open and close one IPv4 TCP connection to *host*:*port*.

    Raises
    ------
    NetworkUnavailableError
        If the connection cannot be established within *timeout*.
    """
    try:
        _, writer = await asyncio.wait_for(
            asyncio.open_connection(host, port, family=socket.AF_INET),
            timeout=timeout,
        )
    except (OSError, asyncio.TimeoutError) as exc:
        logger.error("IPv4 probe to %s:%d failed: %s", host, port, exc)
        raise NetworkUnavailableError(
            "This program requires a working IPv4 network stack "
            f"(could not reach {host}:{port})."
        ) from exc

    writer.close()
    try:
        await writer.wait_closed()
    except OSError as exc:
        logger.debug("Closing IPv4 probe connection failed: %s", exc)
    logger.info("IPv4 connectivity check: OK")
