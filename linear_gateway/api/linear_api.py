"""
Async Linear GraphQL client.

One client wraps one API key, so every call it makes is authored by the
identity that owns that key.

Example:
    async with LinearClient(api_key) as client:
        issue = await client.issue("ENG-123")
        if issue is not None:
            labels = await issue.labels()
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

import httpx

from linear_gateway.constants import (
    ENTITY_NOT_FOUND_PREFIX,
    LINEAR_GRAPHQL_ENDPOINT,
    LINEAR_USER_AGENT,
)
from linear_gateway.exceptions import LinearAPIError
from linear_gateway.logging import linear_logger as logger

from .queries import (
    CREATE_COMMENT_MUTATION,
    ISSUE_ASSIGNEE_QUERY,
    ISSUE_LABELS_QUERY,
    ISSUE_QUERY,
    ISSUE_STATE_QUERY,
    UPDATE_ISSUE_MUTATION,
    VIEWER_QUERY,
)

T = TypeVar("T")

LABELS_PAGE_SIZE = 50


# =============================================================================
# Entities
# =============================================================================


@dataclass(frozen=True)
class LinearUser:
    id: str
    name: str

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "LinearUser":
        return cls(id=node["id"], name=node.get("name") or "")


@dataclass(frozen=True)
class LinearLabel:
    id: str
    name: str

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "LinearLabel":
        return cls(id=node.get("id", ""), name=node["name"])


@dataclass(frozen=True)
class LinearWorkflowState:
    id: str
    name: str
    type: Optional[str] = None

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "LinearWorkflowState":
        return cls(id=node.get("id", ""), name=node["name"], type=node.get("type"))


@dataclass(frozen=True)
class LinearComment:
    id: str


@dataclass(frozen=True)
class Connection(Generic[T]):
    """A flattened Linear connection (all pages)."""

    nodes: List[T] = field(default_factory=list)


@dataclass(frozen=True)
class LinearIssue:
    """
    Base issue record.

    Labels, assignee and workflow state are related entities that Linear
    resolves lazily; each accessor issues its own request through the client
    that fetched the issue.
    """

    id: str
    identifier: str
    title: str
    description: Optional[str]
    client: "LinearClient" = field(repr=False, compare=False)

    @classmethod
    def from_node(cls, node: Dict[str, Any], client: "LinearClient") -> "LinearIssue":
        return cls(
            id=node["id"],
            identifier=node.get("identifier") or node["id"],
            title=node.get("title") or "",
            description=node.get("description"),
            client=client,
        )

    async def labels(self) -> Connection[LinearLabel]:
        return await self.client.issue_labels(self.id)

    async def assignee(self) -> Optional[LinearUser]:
        return await self.client.issue_assignee(self.id)

    async def state(self) -> Optional[LinearWorkflowState]:
        return await self.client.issue_state(self.id)


# =============================================================================
# Client
# =============================================================================


def _error_message(errors: List[Dict[str, Any]]) -> str:
    messages = [str(e.get("message")) for e in errors if e.get("message")]
    return "; ".join(messages) or "Linear API returned an error"


def _is_not_found(errors: List[Dict[str, Any]]) -> bool:
    return any(
        str(e.get("message", "")).startswith(ENTITY_NOT_FOUND_PREFIX) for e in errors
    )


class LinearClient:
    """Async Linear GraphQL client bound to one API key."""

    def __init__(
        self,
        api_key: str,
        api_url: str = LINEAR_GRAPHQL_ENDPOINT,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ValueError("Linear API key required")

        self.api_url = api_url
        # Personal API keys are sent without a "Bearer" prefix
        self._http = httpx.AsyncClient(
            headers={
                "Authorization": api_key,
                "Content-Type": "application/json",
                "User-Agent": LINEAR_USER_AGENT,
            },
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "LinearClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Execute a GraphQL document and return its ``data`` member.

        Raises:
            LinearAPIError: on transport failures, non-2xx responses without a
                GraphQL body, or any GraphQL ``errors`` entry.
        """
        try:
            response = await self._http.post(
                self.api_url,
                json={"query": query, "variables": variables or {}},
            )
        except httpx.HTTPError as e:
            logger.warning("linear_transport_error", error=str(e), error_type=type(e).__name__)
            raise LinearAPIError(f"Linear request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        errors = payload.get("errors") or []
        if errors:
            logger.warning(
                "linear_graphql_errors",
                status_code=response.status_code,
                errors=[e.get("message") for e in errors],
            )
            raise LinearAPIError(_error_message(errors), status_code=response.status_code, errors=errors)

        if response.is_error:
            logger.warning("linear_http_error", status_code=response.status_code)
            raise LinearAPIError(
                f"Linear API returned {response.status_code}",
                status_code=response.status_code,
            )

        return payload.get("data") or {}

    async def _issue_field(self, query: str, issue_id: str, field_name: str) -> Optional[Dict[str, Any]]:
        data = await self._execute(query, {"id": issue_id})
        issue = data.get("issue")
        if not issue:
            raise LinearAPIError(f"Issue {issue_id} disappeared while resolving {field_name}")
        return issue.get(field_name)

    # ----- Queries -----

    async def issue(self, issue_id: str) -> Optional[LinearIssue]:
        """Fetch an issue by UUID or identifier, or None when it does not exist."""
        try:
            data = await self._execute(ISSUE_QUERY, {"id": issue_id})
        except LinearAPIError as e:
            if _is_not_found(e.errors):
                return None
            raise

        node = data.get("issue")
        if not node:
            return None
        return LinearIssue.from_node(node, client=self)

    async def issue_labels(self, issue_id: str) -> Connection[LinearLabel]:
        """Fetch every label of an issue, following cursor pagination."""
        labels: List[LinearLabel] = []
        cursor = None

        while True:
            data = await self._execute(
                ISSUE_LABELS_QUERY,
                {"id": issue_id, "first": LABELS_PAGE_SIZE, "after": cursor},
            )
            issue = data.get("issue")
            if not issue:
                raise LinearAPIError(f"Issue {issue_id} disappeared while resolving labels")

            connection = issue.get("labels") or {}
            for node in connection.get("nodes") or []:
                if node and node.get("name"):
                    labels.append(LinearLabel.from_node(node))

            page_info = connection.get("pageInfo") or {}
            if not page_info.get("hasNextPage"):
                break

            cursor = page_info.get("endCursor")

        return Connection(nodes=labels)

    async def issue_assignee(self, issue_id: str) -> Optional[LinearUser]:
        node = await self._issue_field(ISSUE_ASSIGNEE_QUERY, issue_id, "assignee")
        return LinearUser.from_node(node) if node else None

    async def issue_state(self, issue_id: str) -> Optional[LinearWorkflowState]:
        node = await self._issue_field(ISSUE_STATE_QUERY, issue_id, "state")
        return LinearWorkflowState.from_node(node) if node else None

    async def viewer(self) -> LinearUser:
        """The user this client's API key authenticates as."""
        data = await self._execute(VIEWER_QUERY)
        node = data.get("viewer")
        if not node:
            raise LinearAPIError("Linear did not return the authenticated user")
        return LinearUser.from_node(node)

    # ----- Mutations -----

    async def create_comment(self, issue_id: str, body: str) -> LinearComment:
        data = await self._execute(
            CREATE_COMMENT_MUTATION,
            {"input": {"issueId": issue_id, "body": body}},
        )
        payload = data.get("commentCreate") or {}
        if not payload.get("success"):
            raise LinearAPIError("Linear did not create the comment")
        comment = payload.get("comment") or {}
        return LinearComment(id=comment.get("id", ""))

    async def update_issue(self, issue_id: str, changes: Dict[str, Any]) -> None:
        """Apply an ``IssueUpdateInput`` (camelCase keys) to an issue."""
        data = await self._execute(
            UPDATE_ISSUE_MUTATION,
            {"id": issue_id, "input": changes},
        )
        payload = data.get("issueUpdate") or {}
        if not payload.get("success"):
            raise LinearAPIError("Linear did not update the issue")
