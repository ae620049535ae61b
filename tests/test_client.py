"""Tests for DrupalClient request shaping and failure absorption."""

from __future__ import annotations

import httpx
import pytest

from drupalorg_mcp.client import DrupalClient, Fetched, FetchFailed, build_query
from drupalorg_mcp.config import ClientConfig
from drupalorg_mcp.models import ContentNode, Issue
from tests._factories import FakeDrupal, make_issue, make_node, make_page


class TestBuildQuery:
    def test_caller_wins(self) -> None:
        assert build_query({"type": "sa", "status": 1}, {"status": 0}) == {"type": "sa", "status": 0}

    def test_none_values_dropped(self) -> None:
        assert build_query({"type": "project_issue", "field_issue_priority": None}, {"limit": None}) == {"type": "project_issue"}

    def test_no_params(self) -> None:
        assert build_query({"type": "sa"}) == {"type": "sa"}


class TestRequestShape:
    async def test_headers_and_path(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal) -> None:
        await drupal_client.search_nodes({"type": "page"})
        request = fake_drupal.last_request
        assert request.method == "GET"
        assert str(request.url).startswith("https://www.drupal.org/api-d7/node.json")
        assert request.headers["user-agent"] == "drupalorg-mcp/1.0"
        assert request.headers["accept"] == "application/json"

    async def test_one_request_per_call(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal) -> None:
        await drupal_client.get_security_advisories()
        assert len(fake_drupal.requests) == 1

    async def test_search_nodes_sends_caller_keys_only(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal) -> None:
        params = {"type": "project_issue", "field_issue_status": 8, "field_issue_priority": 300, "limit": 5, "page": 2}
        await drupal_client.search_nodes(params)
        assert fake_drupal.last_query == {k: str(v) for k, v in params.items()}

    async def test_get_issues_query(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal) -> None:
        await drupal_client.get_issues("views", status=2)
        assert fake_drupal.last_query == {
            "type": "project_issue",
            "field_project_machine_name": "views",
            "field_issue_status": "2",
        }

    async def test_get_issues_with_priority(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal) -> None:
        await drupal_client.get_issues("token", priority=400)
        assert fake_drupal.last_query == {
            "type": "project_issue",
            "field_project_machine_name": "token",
            "field_issue_priority": "400",
        }

    async def test_advisory_defaults(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal) -> None:
        await drupal_client.get_security_advisories({"limit": 10})
        assert fake_drupal.last_query == {"type": "sa", "status": "1", "limit": "10"}

    async def test_advisory_caller_overrides_status(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal) -> None:
        await drupal_client.get_security_advisories({"status": 0})
        assert fake_drupal.last_query["status"] == "0"

    async def test_get_node_path(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal) -> None:
        fake_drupal.respond_json(make_node(3060))
        await drupal_client.get_node("3060")
        assert fake_drupal.last_request.url.path == "/api-d7/node/3060.json"
        assert fake_drupal.last_query == {}

    async def test_custom_base_url(self, fake_drupal: FakeDrupal) -> None:
        config = ClientConfig(base_url="http://mirror.test/api-d7", user_agent="tester/0.1")
        async with httpx.AsyncClient(transport=httpx.MockTransport(fake_drupal)) as http:
            await DrupalClient(http=http, config=config).search_nodes()
        assert str(fake_drupal.last_request.url) == "http://mirror.test/api-d7/node.json"
        assert fake_drupal.last_request.headers["user-agent"] == "tester/0.1"


class TestResults:
    async def test_search_returns_page(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal) -> None:
        fake_drupal.respond_json(make_page([make_node(1), make_node(2)], count=40))
        result = await drupal_client.search_nodes()
        assert isinstance(result, Fetched)
        assert result.value.count == 40
        assert [n.nid for n in result.value.items] == ["1", "2"]

    async def test_empty_page_is_not_failure(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal) -> None:
        fake_drupal.respond_json(make_page([], count=0))
        result = await drupal_client.search_nodes()
        assert isinstance(result, Fetched)
        assert result.value.items == []

    async def test_issues_parsed_as_issue(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal) -> None:
        fake_drupal.respond_json(make_page([make_issue(5)]))
        result = await drupal_client.get_issues("views")
        assert isinstance(result, Fetched)
        assert isinstance(result.value.items[0], Issue)

    async def test_get_node_issue_detected(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal) -> None:
        fake_drupal.respond_json(make_issue(9))
        result = await drupal_client.get_node("9")
        assert isinstance(result, Fetched)
        assert isinstance(result.value, Issue)

    async def test_get_node_plain(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal) -> None:
        fake_drupal.respond_json(make_node(9))
        result = await drupal_client.get_node("9")
        assert isinstance(result, Fetched)
        assert type(result.value) is ContentNode


class TestFailures:
    async def test_network_error(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal) -> None:
        fake_drupal.fail_with(httpx.ConnectError("connection refused"))
        result = await drupal_client.search_nodes()
        assert isinstance(result, FetchFailed)
        assert result.reason == "transport_error"

    async def test_timeout(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal) -> None:
        fake_drupal.fail_with(httpx.ReadTimeout("timed out"))
        result = await drupal_client.get_security_advisories()
        assert isinstance(result, FetchFailed)
        assert result.reason == "transport_error"

    @pytest.mark.parametrize(("status_code", "reason"), [(404, "not_found"), (500, "http_500"), (403, "http_403")])
    async def test_non_2xx(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal, status_code: int, reason: str) -> None:
        fake_drupal.respond_json({"error": "nope"}, status_code=status_code)
        result = await drupal_client.get_node("1")
        assert isinstance(result, FetchFailed)
        assert result.reason == reason

    async def test_invalid_json(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal) -> None:
        fake_drupal.respond_text("<html>maintenance</html>")
        result = await drupal_client.get_issues("views")
        assert isinstance(result, FetchFailed)
        assert result.reason == "invalid_json"

    async def test_malformed_envelope(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal) -> None:
        fake_drupal.respond_json({"unexpected": True})
        result = await drupal_client.search_nodes()
        assert isinstance(result, FetchFailed)
        assert result.reason == "malformed_response"

    @pytest.mark.parametrize(("key", "raw"), [("changed", "--5"), ("created", "²")])
    async def test_non_numeric_integer_field_in_page(
        self, drupal_client: DrupalClient, fake_drupal: FakeDrupal, key: str, raw: str
    ) -> None:
        fake_drupal.respond_json(make_page([make_node(1, **{key: raw})]))
        result = await drupal_client.search_nodes()
        assert isinstance(result, FetchFailed)
        assert result.reason == "malformed_response"

    async def test_non_numeric_status_on_single_node(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal) -> None:
        fake_drupal.respond_json(make_node(1, status="--1"))
        result = await drupal_client.get_node("1")
        assert isinstance(result, FetchFailed)
        assert result.reason == "malformed_response"

    async def test_malformed_issue_in_page(self, drupal_client: DrupalClient, fake_drupal: FakeDrupal) -> None:
        bad = make_issue(1)
        del bad["field_issue_priority"]
        fake_drupal.respond_json(make_page([bad]))
        result = await drupal_client.get_issues("views")
        assert isinstance(result, FetchFailed)
        assert result.reason == "malformed_response"

    async def test_failure_is_logged(
        self, drupal_client: DrupalClient, fake_drupal: FakeDrupal, caplog: pytest.LogCaptureFixture
    ) -> None:
        fake_drupal.fail_with(httpx.ConnectError("connection refused"))
        with caplog.at_level("WARNING", logger="drupalorg_mcp.client"):
            await drupal_client.search_nodes()
        assert any("Drupal.org request" in r.getMessage() for r in caplog.records)


class TestOwnership:
    async def test_owned_client_closed(self) -> None:
        client = DrupalClient()
        await client.aclose()
        assert client._http.is_closed

    async def test_injected_client_left_open(self, fake_drupal: FakeDrupal) -> None:
        http = httpx.AsyncClient(transport=httpx.MockTransport(fake_drupal))
        async with DrupalClient(http=http):
            pass
        assert not http.is_closed
        await http.aclose()
