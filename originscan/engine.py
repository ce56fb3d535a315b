"""Single-host probe engine for originscan.

A probe sends one HEAD request to ``http://<domain>`` and, if that fails
at the transport level, one more to ``https://<domain>``.  Latency is
timed with time.perf_counter() around the attempt that answered.

Public API:
    build_client  -- IPv4-only, unverified, single-connection httpx client
    probe_domain  -- probe one domain, returning a ProbeOutcome or None
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

import httpx

from originscan.config import NETWORK_TIMEOUT, SPOOFED_USER_AGENT
from originscan.models import ProbeOutcome

logger = logging.getLogger(__name__)

# Signature: (timeout_seconds) -> fresh AsyncClient
ClientFactory = Callable[[float], httpx.AsyncClient]

# Tried in order; the second only when the first raises.
PROBE_SCHEMES = ("http", "https")

# Failures that drop a candidate instead of aborting the run.
PROBE_ERRORS = (httpx.HTTPError, httpx.InvalidURL, OSError)


def build_client(timeout: float = NETWORK_TIMEOUT) -> httpx.AsyncClient:
    """Build a fresh client for one probe.

    Binding the local side to ``0.0.0.0`` restricts dialing to IPv4.
    Certificates are not verified: the scan checks reachability and the
    ``Server`` header, not trust.
    """
    transport = httpx.AsyncHTTPTransport(
        verify=False,
        local_address="0.0.0.0",
        limits=httpx.Limits(max_connections=1, max_keepalive_connections=1),
    )
    return httpx.AsyncClient(
        transport=transport,
        timeout=httpx.Timeout(timeout),
        headers={"User-Agent": SPOOFED_USER_AGENT},
        follow_redirects=False,
    )


async def _timed_head(client: httpx.AsyncClient, url: str) -> tuple[httpx.Response, float]:
    """Send a HEAD request and return (response, elapsed_ms)."""
    t0 = time.perf_counter()
    response = await client.head(url)
    elapsed_ms = (time.perf_counter() - t0) * 1000.0
    return response, round(max(elapsed_ms, 0.0), 3)


async def probe_domain(
    domain: str,
    timeout: float = NETWORK_TIMEOUT,
    client_factory: Optional[ClientFactory] = None,
) -> Optional[ProbeOutcome]:
    """Probe *domain* over HTTP, falling back to HTTPS.

    Any completed HTTP exchange counts as reachable, whatever its status.
    Returns None when both schemes fail; the failure is only logged at
    debug level.
    """
    factory = client_factory or build_client
    last_error: Exception | None = None

    async with factory(timeout) as client:
        for scheme in PROBE_SCHEMES:
            url = f"{scheme}://{domain}"
            try:
                response, latency_ms = await _timed_head(client, url)
            except PROBE_ERRORS as exc:
                last_error = exc
                logger.debug("Probe %s failed: %s", url, exc)
                continue

            return ProbeOutcome(
                domain=domain,
                latency_ms=latency_ms,
                server_header=response.headers.get("server", ""),
                scheme=scheme,
                status_code=response.status_code,
            )

    logger.debug("Dropping %s, unreachable over http and https: %s", domain, last_error)
    return None
