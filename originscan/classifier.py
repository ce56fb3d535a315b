"""Server header classification: CDN edge or direct origin."""

from __future__ import annotations

from typing import Sequence

from originscan.config import CDN_KEYWORDS, ORIGIN_KEYWORDS


def classify(
    server_header: str,
    cdn_keywords: Sequence[str] = CDN_KEYWORDS,
    origin_keywords: Sequence[str] = ORIGIN_KEYWORDS,
) -> str:
    """Return ``"cdn"``, ``"origin"`` or ``"unknown"`` for a ``Server`` header.

    An empty header is ``"origin"``. CDN keywords are checked first, so a
    header naming both an edge product and server software is ``"cdn"``.
    A present header matching neither list is ``"unknown"``.
    """
    header = (server_header or "").lower()
    if not header:
        return "origin"
    if any(keyword in header for keyword in cdn_keywords):
        return "cdn"
    if any(keyword in header for keyword in origin_keywords):
        return "origin"
    return "unknown"


def is_origin_server(server_header: str) -> bool:
    """True unless the header names a known CDN/edge provider.

    Unknown servers are kept rather than discarded.
    """
    return classify(server_header) != "cdn"
