"""Exceptions raised by originscan.

Only startup failures are raised out of the pipeline. Per-probe and
per-endpoint failures are absorbed where they happen.
"""


class OriginScanError(Exception):
    """Base class for fatal originscan errors."""


class NetworkUnavailableError(OriginScanError):
    """No usable IPv4 network stack."""


class DatasetError(OriginScanError):
    """The candidate dataset could not be downloaded or decoded."""
