"""Data models for originscan."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Candidate:
    """An organization and its domains, as read from the dataset."""

    name: str
    domains: tuple[str, ...] = ()
    country_code: str = ""

    @property
    def primary_domain(self) -> Optional[str]:
        """Only the first listed domain is ever probed."""
        return self.domains[0] if self.domains else None


@dataclass
class ProbeOutcome:
    """A successful probe of one domain."""

    domain: str
    latency_ms: float
    server_header: str = ""
    scheme: str = "http"  # http | https (the attempt that answered)
    status_code: Optional[int] = None


@dataclass(frozen=True)
class ScanRecord:
    """A candidate whose probe succeeded and was classified as origin."""

    name: str
    domain: str
    latency_ms: float
    server_header: str = ""
    scheme: str = "http"
    sequence: int = 0  # Submission index, used to break latency ties


@dataclass
class LatencySummary:
    """Latency figures over all accepted records."""

    count: int = 0
    min: float = 0.0
    avg: float = 0.0
    median: float = 0.0
    max: float = 0.0


@dataclass
class ScanStats:
    """Counters reported by the scan coordinator."""

    total: int = 0          # Candidates handed to the coordinator
    submitted: int = 0      # Tasks accepted by the pool
    completed: int = 0      # Tasks finished (including failures)
    skipped: int = 0        # Candidates without any domain
    failed: int = 0         # Unreachable on both schemes, or rejected at submission
    rejected_cdn: int = 0   # Reachable but CDN-fronted
    accepted: int = 0       # Recorded as origin servers
    elapsed_s: float = 0.0


@dataclass
class ScanConfig:
    """Configuration for a scan run."""

    limit: int = 10
    region: Optional[str] = None  # None = detect via trace endpoints
    dataset_url: Optional[str] = None  # None = built-in dataset URL
    skip_ipv4_check: bool = False
    verbose: bool = False
    quiet: bool = False
    json_output: bool = False
    csv_output: bool = False
    output_file: Optional[str] = None


@dataclass
class ScanReport:
    """Complete scan run results."""

    region: str
    candidates: int = 0
    records: list[ScanRecord] = field(default_factory=list)
    stats: ScanStats = field(default_factory=ScanStats)
    summary: LatencySummary = field(default_factory=LatencySummary)
    config: Optional[ScanConfig] = None
    timestamp: Optional[str] = None
