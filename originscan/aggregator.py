"""Thread-safe result collection and latency ranking."""

from __future__ import annotations

import math
import threading
from typing import Sequence

from originscan.models import Candidate, LatencySummary, ProbeOutcome, ScanRecord


class ResultAggregator:
    """Collects ScanRecords from concurrent producers.

    The lock guards only the append; producers do their network I/O
    before calling :meth:`add`.
    """

    def __init__(self) -> None:
        self._records: list[ScanRecord] = []
        self._lock = threading.Lock()

    def add(self, candidate: Candidate, outcome: ProbeOutcome, sequence: int) -> ScanRecord:
        """Record an origin hit for *candidate*."""
        record = ScanRecord(
            name=candidate.name,
            domain=outcome.domain,
            latency_ms=outcome.latency_ms,
            server_header=outcome.server_header,
            scheme=outcome.scheme,
            sequence=sequence,
        )
        with self._lock:
            self._records.append(record)
        return record

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def records(self) -> list[ScanRecord]:
        """Return a snapshot of all records in insertion order."""
        with self._lock:
            return list(self._records)

    def ranked(self, limit: int | None = None) -> list[ScanRecord]:
        """Return records by ascending latency, truncated to *limit*.

        Equal latencies keep submission order.
        """
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")

        ordered = sorted(self.records(), key=lambda r: (r.latency_ms, r.sequence))
        if limit is None:
            return ordered
        return ordered[:limit]


def summarize(records: Sequence[ScanRecord]) -> LatencySummary:
    """Compute min/avg/median/max latency over *records*."""
    if not records:
        return LatencySummary()

    values = sorted(r.latency_ms for r in records)
    n = len(values)

    return LatencySummary(
        count=n,
        min=values[0],
        avg=round(sum(values) / n, 2),
        median=round(_median(values), 2),
        max=values[-1],
    )


def _median(sorted_vals: list[float]) -> float:
    """Median of pre-sorted values, interpolating between the middle pair."""
    k = (len(sorted_vals) - 1) / 2
    f = math.floor(k)
    c = math.ceil(k)
    if f == c:
        return sorted_vals[int(k)]
    return (sorted_vals[f] + sorted_vals[c]) / 2
