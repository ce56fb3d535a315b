"""Region detection via Cloudflare trace endpoints."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import httpx

from originscan.config import DEFAULT_REGION, LOCATION_TIMEOUT, SPOOFED_USER_AGENT, TRACE_URLS
from originscan.engine import PROBE_ERRORS, ClientFactory, build_client

logger = logging.getLogger(__name__)


async def resolve_region(
    urls: Sequence[str] = TRACE_URLS,
    timeout: float = LOCATION_TIMEOUT,
    client_factory: Optional[ClientFactory] = None,
) -> str:
    """Determine the two-letter region code using a fallback chain of trace URLs.

    Never raises: an endpoint that fails, answers non-200 or has no
    ``loc=`` line moves on to the next one, and exhausting the list
    returns ``DEFAULT_REGION``.
    """
    factory = client_factory or build_client

    for url in urls:
        logger.info("Probing location via: %s", url)
        try:
            region = await _query_trace(url, timeout, factory)
        except PROBE_ERRORS as exc:
            logger.warning("Probe failed or blocked: %s (%s)", url, exc)
            continue
        if region:
            return region

    logger.warning("All location probes failed. Defaulting to %s.", DEFAULT_REGION)
    return DEFAULT_REGION


async def _query_trace(url: str, timeout: float, factory: ClientFactory) -> Optional[str]:
    """Query a single trace endpoint and return its region code, if any."""
    async with factory(timeout) as client:
        resp = await client.get(url, headers={"User-Agent": SPOOFED_USER_AGENT})

    if resp.status_code != httpx.codes.OK:
        logger.warning("Probe failed or blocked: %s (HTTP %d)", url, resp.status_code)
        return None

    region = parse_loc(resp.text)
    if not region:
        logger.warning("No loc= line in response from %s", url)
    return region


def parse_loc(body: str) -> Optional[str]:
    """Extract the value of the first ``loc=`` line from a trace body.

    A ``loc`` line carrying more than one ``=`` is ignored.
    """
    for line in body.splitlines():
        line = line.strip()
        if not line.startswith("loc="):
            continue
        parts = line.split("=")
        if len(parts) == 2 and parts[1]:
            return parts[1]
    return None
