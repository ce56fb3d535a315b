"""CLI entry point and orchestration for originscan."""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import time
from datetime import datetime, timezone
from typing import Optional

import click
from rich.logging import RichHandler

from originscan import __version__
from originscan.config import DEFAULT_LIMIT, MAX_CONCURRENCY
from originscan.errors import OriginScanError
from originscan.models import ScanConfig, ScanReport

logger = logging.getLogger("originscan")


@click.command()
@click.option("-n", "--limit", default=DEFAULT_LIMIT, type=click.IntRange(min=0),
              help="Number of results to display", show_default=True)
@click.option("-r", "--region", default=None, help="Two-letter region code [default: auto-detect]")
@click.option("--dataset-url", default=None, help="Override the candidate dataset URL")
@click.option("--skip-ipv4-check", is_flag=True, help="Skip the IPv4 connectivity precheck")
@click.option("--json", "json_output", is_flag=True, help="Output JSON to stdout")
@click.option("--csv", "csv_output", is_flag=True, help="Output CSV to stdout")
@click.option("-o", "--output", default=None, help="Write results to file")
@click.option("-q", "--quiet", is_flag=True, help="Suppress progress and log output")
@click.option("-v", "--verbose", is_flag=True, help="Log every probe failure")
@click.version_option(version=__version__)
def main(
    limit: int,
    region: str | None,
    dataset_url: str | None,
    skip_ipv4_check: bool,
    json_output: bool,
    csv_output: bool,
    output: str | None,
    quiet: bool,
    verbose: bool,
) -> None:
    """originscan: find universities serving directly from their origin.

    Detects your region, probes the first domain of every university in
    it over HTTP (falling back to HTTPS), discards CDN-fronted hosts and
    ranks the rest by response latency.
    """
    _configure_logging(verbose=verbose, quiet=quiet)

    # Check for proxy warnings
    if not quiet and not json_output and not csv_output:
        for var in ("HTTP_PROXY", "HTTPS_PROXY", "http_proxy", "https_proxy"):
            if os.environ.get(var):
                from originscan.display import render_warning
                render_warning(f"Proxy detected ({var}={os.environ[var]}), latencies may not reflect direct routing")
                break

    config = ScanConfig(
        limit=limit,
        region=region.strip().upper() if region else None,
        dataset_url=dataset_url,
        skip_ipv4_check=skip_ipv4_check,
        verbose=verbose,
        quiet=quiet,
        json_output=json_output,
        csv_output=csv_output,
        output_file=output,
    )

    try:
        report = asyncio.run(_run(config))
    except OriginScanError as exc:
        from originscan.display import render_error
        render_error(str(exc))
        sys.exit(1)
    except KeyboardInterrupt:
        if not quiet:
            from originscan.display import err_console
            err_console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(130)

    if report is None:
        return

    _handle_output(report, config)


def _configure_logging(verbose: bool, quiet: bool) -> None:
    """Send log records to stderr through Rich."""
    from originscan.display import err_console

    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


async def _run(config: ScanConfig) -> Optional[ScanReport]:
    """Main async orchestration.

    Returns None when the region has no candidates.
    """
    from originscan.aggregator import ResultAggregator, summarize
    from originscan.dataset import fetch_candidates
    from originscan.display import ProgressTracker
    from originscan.location import resolve_region
    from originscan.network import check_ipv4_connectivity
    from originscan.scanner import scan_candidates

    if not config.skip_ipv4_check:
        await check_ipv4_connectivity()

    if config.region:
        region = config.region
        logger.info("Using region override: %s", region)
    else:
        region = await resolve_region()
        logger.info("Detected local region: %s", region)

    logger.info("Fetching university list data.")
    if config.dataset_url:
        candidates = await fetch_candidates(region, url=config.dataset_url)
    else:
        candidates = await fetch_candidates(region)

    if not candidates:
        logger.warning("No candidates found for region: %s", region)
        return None

    logger.info(
        "Found %d candidates. Starting concurrent analysis (pool size: %d)...",
        len(candidates), MAX_CONCURRENCY,
    )

    progress = None
    if not config.quiet and not config.json_output and not config.csv_output:
        progress = ProgressTracker(region, sum(1 for c in candidates if c.domains))

    def on_progress(completed: int, total: int) -> None:
        if progress:
            progress.update(completed, total)

    aggregator = ResultAggregator()
    t0 = time.perf_counter()

    if progress:
        progress.start()
    try:
        stats = await scan_candidates(candidates, aggregator, progress_callback=on_progress)
    finally:
        if progress:
            progress.finish()

    logger.info("Analysis complete in %.2fs", time.perf_counter() - t0)
    logger.info("Identified %d origin servers.", len(aggregator))

    records = aggregator.ranked(config.limit)
    return ScanReport(
        region=region,
        candidates=len(candidates),
        records=records,
        stats=stats,
        summary=summarize(aggregator.records()),
        config=config,
        timestamp=datetime.now(timezone.utc).isoformat(timespec="seconds"),
    )


def _handle_output(report: ScanReport, config: ScanConfig) -> None:
    """Handle output rendering and export."""
    from originscan.display import err_console, render_results
    from originscan.export import export_csv, export_json, write_to_file

    if config.json_output or config.csv_output:
        content = export_json(report) if config.json_output else export_csv(report)
        if config.output_file:
            write_to_file(content, config.output_file)
            if not config.quiet:
                err_console.print(f"[dim]Results written to {config.output_file}[/dim]")
        else:
            click.echo(content)
        return

    render_results(report)

    # Plain table mode also writes JSON when -o is given
    if config.output_file:
        write_to_file(export_json(report), config.output_file)
        err_console.print(f"\n[dim]Results written to {config.output_file}[/dim]")


if __name__ == "__main__":
    main()
