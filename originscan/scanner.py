"""Concurrent scan coordinator for originscan.

Every candidate with at least one domain becomes one asyncio task.  A
semaphore caps how many probes run at once; ``asyncio.gather`` is the
completion barrier.

Public API:
    scan_candidates  -- probe all candidates and feed origin hits to an aggregator
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional, Sequence

from originscan.aggregator import ResultAggregator
from originscan.classifier import is_origin_server
from originscan.config import MAX_CONCURRENCY
from originscan.engine import probe_domain
from originscan.models import Candidate, ProbeOutcome, ScanStats

logger = logging.getLogger(__name__)

# Signature: (domain) -> ProbeOutcome | None
ProbeFunc = Callable[[str], Awaitable[Optional[ProbeOutcome]]]

# Signature: (completed, total)
ProgressCallback = Callable[[int, int], None]


async def scan_candidates(
    candidates: Sequence[Candidate],
    aggregator: ResultAggregator,
    max_concurrency: int = MAX_CONCURRENCY,
    probe: ProbeFunc = probe_domain,
    progress_callback: ProgressCallback | None = None,
) -> ScanStats:
    """Probe each candidate's first domain and record the origin servers.

    Candidates without domains are skipped and never take a worker slot.
    A failed probe only drops that candidate.  Returns once every
    submitted task has finished.

    Parameters
    ----------
    candidates:
        Hosts to scan, in submission order.
    aggregator:
        Receives one record per reachable, non-CDN candidate.
    max_concurrency:
        Upper bound on probes in flight.
    probe:
        Coroutine function performing a single probe.
    progress_callback:
        Optional callable invoked after each task completes.
    """
    if max_concurrency < 1:
        raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")

    stats = ScanStats(total=len(candidates))
    semaphore = asyncio.Semaphore(max_concurrency)
    expected = sum(1 for c in candidates if c.domains)

    def _finish(failed: bool) -> None:
        stats.completed += 1
        if failed:
            stats.failed += 1
        if progress_callback:
            try:
                progress_callback(stats.completed, expected)
            except Exception:
                logger.exception("Progress callback failed")

    async def _worker(sequence: int, candidate: Candidate) -> None:
        domain = candidate.primary_domain
        failed = True
        try:
            async with semaphore:
                outcome = await probe(domain)

            if outcome is not None:
                if is_origin_server(outcome.server_header):
                    aggregator.add(candidate, outcome, sequence)
                    stats.accepted += 1
                else:
                    logger.debug("Discarding %s, CDN-fronted (%s)", domain, outcome.server_header)
                    stats.rejected_cdn += 1
                failed = False
        except Exception:
            logger.exception("Unexpected error scanning %s", domain)
        _finish(failed)

    t0 = time.perf_counter()
    tasks: list[asyncio.Task] = []

    for sequence, candidate in enumerate(candidates):
        if not candidate.domains:
            stats.skipped += 1
            continue

        coro = _worker(sequence, candidate)
        try:
            tasks.append(asyncio.create_task(coro))
        except RuntimeError as exc:
            coro.close()
            logger.warning("Task submission failed for %s: %s", candidate.name, exc)
            _finish(failed=True)
            continue
        stats.submitted += 1

    for result in await asyncio.gather(*tasks, return_exceptions=True):
        if isinstance(result, Exception):
            logger.error("Scan task ended with an error: %s", result)

    stats.elapsed_s = round(time.perf_counter() - t0, 3)
    logger.debug(
        "Scan finished: %d submitted, %d accepted, %d CDN, %d failed, %d skipped",
        stats.submitted, stats.accepted, stats.rejected_cdn, stats.failed, stats.skipped,
    )
    return stats
