"""JSON and CSV export for scan results."""

from __future__ import annotations

import csv
import io
import json

from originscan.classifier import classify
from originscan.models import ScanRecord, ScanReport


def export_json(report: ScanReport, indent: int = 2) -> str:
    """Export the scan report as a JSON string."""
    data = _build_export_dict(report)
    return json.dumps(data, indent=indent, default=str)


def export_csv(report: ScanReport) -> str:
    """Export ranked records as CSV (one row per origin server)."""
    output = io.StringIO()
    writer = csv.writer(output)

    writer.writerow([
        "timestamp",
        "region",
        "rank",
        "organization",
        "domain",
        "latency_ms",
        "server",
        "classification",
        "scheme",
    ])

    for rank, r in enumerate(report.records, 1):
        writer.writerow([
            report.timestamp or "",
            report.region,
            rank,
            r.name,
            r.domain,
            r.latency_ms,
            r.server_header,
            classify(r.server_header),
            r.scheme,
        ])

    return output.getvalue()


def write_to_file(content: str, filepath: str) -> None:
    """Write export content to a file."""
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(content)


def _build_export_dict(report: ScanReport) -> dict:
    """Build a serializable dictionary from a ScanReport."""
    data: dict = {}

    if report.timestamp:
        data["timestamp"] = report.timestamp

    data["region"] = report.region
    data["candidates"] = report.candidates

    if report.config:
        data["config"] = {
            "limit": report.config.limit,
            "region_override": report.config.region,
            "dataset_url": report.config.dataset_url,
        }

    stats = report.stats
    data["stats"] = {
        "total": stats.total,
        "submitted": stats.submitted,
        "completed": stats.completed,
        "skipped": stats.skipped,
        "failed": stats.failed,
        "rejected_cdn": stats.rejected_cdn,
        "accepted": stats.accepted,
        "elapsed_s": stats.elapsed_s,
    }

    summary = report.summary
    data["latency"] = {
        "count": summary.count,
        "min": summary.min,
        "avg": summary.avg,
        "median": summary.median,
        "max": summary.max,
    }

    data["results"] = [_record_to_dict(rank, r) for rank, r in enumerate(report.records, 1)]
    return data


def _record_to_dict(rank: int, r: ScanRecord) -> dict:
    """Convert a ScanRecord to a serializable dict."""
    return {
        "rank": rank,
        "organization": r.name,
        "domain": r.domain,
        "latency_ms": r.latency_ms,
        "server": r.server_header,
        "classification": classify(r.server_header),
        "scheme": r.scheme,
    }
