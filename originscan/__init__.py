"""Origin server discovery and latency ranking."""

__version__ = "0.1.0"
