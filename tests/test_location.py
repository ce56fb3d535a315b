"""
Unit tests for originscan.location module.
"""

import asyncio

import httpx

from originscan.config import DEFAULT_REGION, SPOOFED_USER_AGENT
from originscan.location import parse_loc, resolve_region

TRACE_BODY = "fl=123abc\nh=www.example.cn\nip=203.0.113.7\nts=1700000000.1\nloc=DE\ntls=TLSv1.3\n"

URLS = [
    "https://first.example/cdn-cgi/trace",
    "https://second.example/cdn-cgi/trace",
    "https://third.example/cdn-cgi/trace",
]


class TestParseLoc:
    """Test parse_loc function."""

    def test_finds_loc_line(self):
        """Test that the loc value is extracted."""
        assert parse_loc(TRACE_BODY) == "DE"

    def test_crlf_line_endings(self):
        """Test that CRLF bodies parse the same."""
        assert parse_loc("ip=1.2.3.4\r\nloc=JP\r\n") == "JP"

    def test_missing_loc_line(self):
        """Test that a body without loc= yields None."""
        assert parse_loc("ip=1.2.3.4\ncolo=FRA\n") is None
        assert parse_loc("") is None

    def test_malformed_loc_line_skipped(self):
        """Test that a loc line with extra '=' is ignored but scanning continues."""
        assert parse_loc("loc=A=B\nloc=GB\n") == "GB"
        assert parse_loc("loc=\n") is None

    def test_prefix_must_start_line(self):
        """Test that 'loc=' inside another key does not match."""
        assert parse_loc("colo=FRA\nxloc=ZZ\n") is None


class TestResolveRegion:
    """Test resolve_region function."""

    def test_first_endpoint_success(self, make_client_factory):
        """Test that the first answering endpoint wins."""
        hosts = []

        def handler(request):
            hosts.append(request.url.host)
            return httpx.Response(200, text=TRACE_BODY)

        region = asyncio.run(resolve_region(URLS, client_factory=make_client_factory(handler)))

        assert region == "DE"
        assert hosts == ["first.example"]

    def test_falls_through_failures(self, make_client_factory):
        """Test that errors and non-200 answers advance to the next endpoint."""
        hosts = []

        def handler(request):
            hosts.append(request.url.host)
            if request.url.host == "first.example":
                raise httpx.ConnectError("refused", request=request)
            if request.url.host == "second.example":
                return httpx.Response(403, text="blocked")
            return httpx.Response(200, text="loc=SG\n")

        region = asyncio.run(resolve_region(URLS, client_factory=make_client_factory(handler)))

        assert region == "SG"
        assert hosts == ["first.example", "second.example", "third.example"]

    def test_redirect_is_failure_and_user_agent_sent(self, make_client_factory):
        """Test that a 301 is not followed and every request carries the browser user agent."""
        seen = []

        def handler(request):
            seen.append((request.url.host, request.headers["User-Agent"]))
            if request.url.host == "first.example":
                return httpx.Response(301, headers={"Location": "https://redirected.example/"})
            if request.url.host == "redirected.example":
                return httpx.Response(200, text="loc=ZZ\n")
            return httpx.Response(200, text="loc=FR\n")

        region = asyncio.run(resolve_region(URLS, client_factory=make_client_factory(handler)))

        assert region == "FR"
        assert [host for host, _ in seen] == ["first.example", "second.example"]
        assert all(agent == SPOOFED_USER_AGENT for _, agent in seen)

    def test_no_loc_line_advances(self, make_client_factory):
        """Test that a 200 without loc= tries the next endpoint."""

        def handler(request):
            if request.url.host == "first.example":
                return httpx.Response(200, text="ip=1.2.3.4\n")
            return httpx.Response(200, text="loc=CA\n")

        region = asyncio.run(resolve_region(URLS, client_factory=make_client_factory(handler)))

        assert region == "CA"

    def test_all_endpoints_fail_defaults_to_us(self, make_client_factory):
        """Test that exhausting every endpoint returns the default region."""

        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        region = asyncio.run(resolve_region(URLS, client_factory=make_client_factory(handler)))

        assert region == DEFAULT_REGION == "US"

    def test_empty_url_list(self):
        """Test that no endpoints at all still returns the default."""
        assert asyncio.run(resolve_region([])) == "US"
