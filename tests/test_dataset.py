"""
Unit tests for originscan.dataset module.
"""

import asyncio

import httpx
import pytest

from originscan.dataset import fetch_candidates, filter_by_region, parse_candidates
from originscan.errors import DatasetError

PAYLOAD = [
    {"name": "Alpha University", "domains": ["alpha.edu", "alpha.org"], "alpha_two_code": "US",
     "country": "United States", "web_pages": ["http://alpha.edu"]},
    {"name": "Universität Beta", "domains": ["uni-beta.de"], "alpha_two_code": "DE"},
    {"name": "Gamma College", "domains": [], "alpha_two_code": "US"},
    {"name": "Delta Institute", "domains": ["  ", "delta.edu"], "alpha_two_code": "US"},
    "not an object",
]


class TestParseCandidates:
    """Test parse_candidates function."""

    def test_parses_entries(self):
        """Test that objects become Candidates in dataset order."""
        result = parse_candidates(PAYLOAD)

        assert [c.name for c in result] == [
            "Alpha University", "Universität Beta", "Gamma College", "Delta Institute",
        ]
        assert result[0].domains == ("alpha.edu", "alpha.org")
        assert result[0].primary_domain == "alpha.edu"
        assert result[0].country_code == "US"

    def test_empty_and_blank_domains(self):
        """Test that blank domain strings are dropped."""
        result = parse_candidates(PAYLOAD)

        assert result[2].domains == ()
        assert result[2].primary_domain is None
        assert result[3].primary_domain == "delta.edu"

    def test_malformed_domains_treated_as_empty(self):
        """Test that a non-list, non-string domains value yields no domains."""
        payload = [
            {"name": "X", "domains": 5, "alpha_two_code": "US"},
            {"name": "Y", "domains": {"a": "y.edu"}, "alpha_two_code": "US"},
            {"name": "Z", "domains": "z.edu", "alpha_two_code": "US"},
        ]

        result = parse_candidates(payload)

        assert [c.domains for c in result] == [(), (), ("z.edu",)]

    def test_non_list_payload(self):
        """Test that a non-array payload raises DatasetError."""
        with pytest.raises(DatasetError):
            parse_candidates({"name": "x"})


class TestFilterByRegion:
    """Test filter_by_region function."""

    def test_filters_and_keeps_order(self):
        """Test that only matching country codes remain, in order."""
        result = filter_by_region(parse_candidates(PAYLOAD), "US")
        assert [c.name for c in result] == ["Alpha University", "Gamma College", "Delta Institute"]

    def test_no_match(self):
        """Test that an unknown region yields an empty list."""
        assert filter_by_region(parse_candidates(PAYLOAD), "ZZ") == []


class TestFetchCandidates:
    """Test fetch_candidates function."""

    def test_success(self, make_client_factory):
        """Test download, decode and filter."""

        def handler(request):
            return httpx.Response(200, json=PAYLOAD)

        result = asyncio.run(
            fetch_candidates("DE", url="https://data.example/unis.json", client_factory=make_client_factory(handler))
        )

        assert [c.name for c in result] == ["Universität Beta"]

    def test_malformed_entry_does_not_crash(self, make_client_factory):
        """Test that an entry with numeric domains is fetched without error."""

        def handler(request):
            return httpx.Response(200, json=[{"name": "X", "domains": 5, "alpha_two_code": "US"}])

        result = asyncio.run(fetch_candidates("US", client_factory=make_client_factory(handler)))

        assert len(result) == 1
        assert result[0].primary_domain is None

    def test_http_error_status(self, make_client_factory):
        """Test that a non-200 response is fatal."""

        def handler(request):
            return httpx.Response(404, text="not found")

        with pytest.raises(DatasetError, match="HTTP 404"):
            asyncio.run(fetch_candidates("US", client_factory=make_client_factory(handler)))

    def test_connection_failure(self, make_client_factory):
        """Test that a network failure is fatal."""

        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(DatasetError, match="Failed to download"):
            asyncio.run(fetch_candidates("US", client_factory=make_client_factory(handler)))

    def test_invalid_json(self, make_client_factory):
        """Test that an undecodable body is fatal."""

        def handler(request):
            return httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(DatasetError, match="parse"):
            asyncio.run(fetch_candidates("US", client_factory=make_client_factory(handler)))
