"""Candidate dataset download and region filtering.

The dataset is the public university-domains list: a JSON array of
objects carrying ``name``, ``domains`` and ``alpha_two_code``.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Optional

import httpx

from originscan.config import DATASET_TIMEOUT, DATASET_URL
from originscan.engine import PROBE_ERRORS, ClientFactory, build_client
from originscan.errors import DatasetError
from originscan.models import Candidate

logger = logging.getLogger(__name__)


async def fetch_candidates(
    region: str,
    url: str = DATASET_URL,
    timeout: float = DATASET_TIMEOUT,
    client_factory: Optional[ClientFactory] = None,
) -> list[Candidate]:
    """Download the dataset and return the candidates located in *region*.

    Raises
    ------
    DatasetError
        On download failure, a non-200 response or an undecodable body.
    """
    factory = client_factory or build_client

    try:
        async with factory(timeout) as client:
            resp = await client.get(url)
    except PROBE_ERRORS as exc:
        raise DatasetError(f"Failed to download candidate list from {url}: {exc}") from exc

    if resp.status_code != httpx.codes.OK:
        raise DatasetError(f"Failed to download candidate list from {url}: HTTP {resp.status_code}")

    try:
        payload = resp.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DatasetError(f"Failed to parse candidate list: {exc}") from exc

    candidates = parse_candidates(payload)
    logger.debug("Dataset holds %d entries", len(candidates))
    return filter_by_region(candidates, region)


def parse_candidates(payload: Any) -> list[Candidate]:
    """Convert the decoded JSON array into Candidate records.

    Entries that are not objects are skipped.  A ``domains`` value that is
    neither a list nor a string counts as no domains, and blank domain
    strings are dropped so that ``primary_domain`` is always probe-able.
    """
    if not isinstance(payload, list):
        raise DatasetError(f"Expected a JSON array, got {type(payload).__name__}")

    candidates: list[Candidate] = []
    for entry in payload:
        if not isinstance(entry, dict):
            continue
        domains = entry.get("domains") or []
        if isinstance(domains, str):
            domains = [domains]
        elif not isinstance(domains, list):
            logger.debug("Ignoring malformed domains for %r: %r", entry.get("name"), domains)
            domains = []
        candidates.append(
            Candidate(
                name=str(entry.get("name") or ""),
                domains=tuple(d.strip() for d in domains if isinstance(d, str) and d.strip()),
                country_code=str(entry.get("alpha_two_code") or ""),
            )
        )
    return candidates


def filter_by_region(candidates: Iterable[Candidate], region: str) -> list[Candidate]:
    """Keep candidates whose country code equals *region*, preserving order."""
    return [c for c in candidates if c.country_code == region]
