"""
Pytest configuration and shared fixtures for originscan tests.
"""

from typing import Callable

import httpx
import pytest

from originscan.models import Candidate, ProbeOutcome


def client_factory_for(handler: Callable[[httpx.Request], httpx.Response]):
    """Build a ClientFactory whose clients answer through *handler*."""

    def factory(timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler), timeout=timeout)

    return factory


@pytest.fixture
def make_client_factory():
    """Return the ClientFactory builder for MockTransport handlers."""
    return client_factory_for


@pytest.fixture
def candidates():
    """Three candidates with distinct domains, plus one without any."""
    return [
        Candidate(name="Alpha University", domains=("alpha.edu", "www.alpha.edu"), country_code="US"),
        Candidate(name="Beta College", domains=("beta.edu",), country_code="US"),
        Candidate(name="No Domain Institute", domains=(), country_code="US"),
        Candidate(name="Gamma Institute", domains=("gamma.edu",), country_code="US"),
    ]


def outcome(domain: str, latency_ms: float, server: str = "nginx", scheme: str = "http") -> ProbeOutcome:
    """Shorthand for a successful ProbeOutcome."""
    return ProbeOutcome(domain=domain, latency_ms=latency_ms, server_header=server, scheme=scheme, status_code=200)
