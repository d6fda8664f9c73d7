"""
Tests for the Linear GraphQL client.

Requests are served by httpx.MockTransport, keyed on the GraphQL
operation name, so no network access is needed.
"""

import asyncio
import json
import re

import httpx
import pytest

from linear_gateway.api.linear_api import LinearClient
from linear_gateway.exceptions import LinearAPIError


def _operation(request: httpx.Request) -> tuple[str, dict]:
    payload = json.loads(request.content)
    name = re.search(r"(?:query|mutation)\s+(\w+)", payload["query"]).group(1)
    return name, payload["variables"]


def _client(responses: dict, seen: list | None = None) -> LinearClient:
    """Build a client whose transport answers each operation from ``responses``."""

    def handler(request: httpx.Request) -> httpx.Response:
        name, variables = _operation(request)
        if seen is not None:
            seen.append((name, variables, request))
        answer = responses[name]
        if callable(answer):
            answer = answer(variables)
        if isinstance(answer, httpx.Response):
            return answer
        return httpx.Response(200, json=answer)

    return LinearClient("lin_api_test", transport=httpx.MockTransport(handler))


ISSUE_NODE = {
    "id": "uuid-abc-1",
    "identifier": "ABC-1",
    "title": "Crash on save",
    "description": None,
}


class TestQueries:
    """Tests for read operations."""

    def test_issue_is_parsed(self):
        seen: list = []
        client = _client({"Issue": {"data": {"issue": ISSUE_NODE}}}, seen)

        issue = asyncio.run(client.issue("ABC-1"))

        assert issue.id == "uuid-abc-1"
        assert issue.identifier == "ABC-1"
        assert issue.title == "Crash on save"
        assert issue.description is None
        assert seen[0][1] == {"id": "ABC-1"}

    def test_sends_api_key_without_bearer_prefix(self):
        seen: list = []
        client = _client({"Viewer": {"data": {"viewer": {"id": "U1", "name": "Bot"}}}}, seen)

        asyncio.run(client.viewer())

        request = seen[0][2]
        assert request.headers["Authorization"] == "lin_api_test"
        assert request.headers["Content-Type"] == "application/json"

    def test_null_issue_is_none(self):
        client = _client({"Issue": {"data": {"issue": None}}})

        assert asyncio.run(client.issue("MISSING-1")) is None

    def test_entity_not_found_error_is_none(self):
        body = {
            "errors": [{"message": "Entity not found: Issue", "extensions": {"type": "invalid input"}}],
            "data": None,
        }
        client = _client({"Issue": httpx.Response(400, json=body)})

        assert asyncio.run(client.issue("MISSING-1")) is None

    def test_labels_follow_pagination(self):
        pages = {
            None: {
                "nodes": [{"id": "l1", "name": "bug"}, {"id": "l2", "name": "ui"}],
                "pageInfo": {"hasNextPage": True, "endCursor": "c1"},
            },
            "c1": {
                "nodes": [{"id": "l3", "name": "p1"}],
                "pageInfo": {"hasNextPage": False, "endCursor": None},
            },
        }
        client = _client(
            {"IssueLabels": lambda v: {"data": {"issue": {"labels": pages[v["after"]]}}}}
        )

        labels = asyncio.run(client.issue_labels("uuid-abc-1"))

        assert [label.name for label in labels.nodes] == ["bug", "ui", "p1"]

    def test_lazy_facets_resolve_through_issue(self):
        client = _client(
            {
                "Issue": {"data": {"issue": ISSUE_NODE}},
                "IssueAssignee": {"data": {"issue": {"assignee": {"id": "U1", "name": "Ada"}}}},
                "IssueState": {"data": {"issue": {"state": {"id": "s1", "name": "Todo", "type": "unstarted"}}}},
            }
        )

        async def run():
            issue = await client.issue("ABC-1")
            return await issue.assignee(), await issue.state()

        assignee, state = asyncio.run(run())

        assert (assignee.id, assignee.name) == ("U1", "Ada")
        assert state.name == "Todo"

    def test_unassigned_issue_has_no_assignee(self):
        client = _client({"IssueAssignee": {"data": {"issue": {"assignee": None}}}})

        assert asyncio.run(client.issue_assignee("uuid-abc-1")) is None


class TestMutations:
    """Tests for write operations."""

    def test_create_comment_sends_input(self):
        seen: list = []
        client = _client(
            {"CommentCreate": {"data": {"commentCreate": {"success": True, "comment": {"id": "c1"}}}}},
            seen,
        )

        comment = asyncio.run(client.create_comment(issue_id="uuid-abc-1", body="hi"))

        assert comment.id == "c1"
        assert seen[0][1] == {"input": {"issueId": "uuid-abc-1", "body": "hi"}}

    def test_update_issue_sends_changes(self):
        seen: list = []
        client = _client({"IssueUpdate": {"data": {"issueUpdate": {"success": True, "issue": {"id": "uuid-abc-1"}}}}}, seen)

        asyncio.run(client.update_issue("uuid-abc-1", {"assigneeId": "U1"}))

        assert seen[0][1] == {"id": "uuid-abc-1", "input": {"assigneeId": "U1"}}

    def test_unsuccessful_mutation_raises(self):
        client = _client({"IssueUpdate": {"data": {"issueUpdate": {"success": False}}}})

        with pytest.raises(LinearAPIError, match="did not update"):
            asyncio.run(client.update_issue("uuid-abc-1", {"assigneeId": "U1"}))


class TestErrors:
    """Tests for error translation."""

    def test_graphql_errors_raise_with_message(self):
        body = {"errors": [{"message": "Authentication required, not authenticated"}]}
        client = _client({"Viewer": httpx.Response(400, json=body)})

        with pytest.raises(LinearAPIError) as exc_info:
            asyncio.run(client.viewer())

        assert str(exc_info.value) == "Authentication required, not authenticated"
        assert exc_info.value.status_code == 400
        assert exc_info.value.errors == body["errors"]

    def test_other_issue_errors_are_not_swallowed(self):
        body = {"errors": [{"message": "Rate limit exceeded"}]}
        client = _client({"Issue": httpx.Response(400, json=body)})

        with pytest.raises(LinearAPIError, match="Rate limit exceeded"):
            asyncio.run(client.issue("ABC-1"))

    def test_http_error_without_body(self):
        client = _client({"Viewer": httpx.Response(502, text="Bad Gateway")})

        with pytest.raises(LinearAPIError, match="502"):
            asyncio.run(client.viewer())

    def test_transport_error_is_wrapped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = LinearClient("lin_api_test", transport=httpx.MockTransport(handler))

        with pytest.raises(LinearAPIError, match="connection refused") as exc_info:
            asyncio.run(client.viewer())

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_api_key_is_required(self):
        with pytest.raises(ValueError):
            LinearClient("")
