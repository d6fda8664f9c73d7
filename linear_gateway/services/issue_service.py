"""
Issue Service - the operations exposed over HTTP.

Each operation picks the client of the right agent, performs its Linear
calls and converts every outcome into a ``Success`` or ``Failure``. Remote
exceptions never escape an operation.
"""

import asyncio
from typing import Optional, TypedDict

from linear_gateway.api.linear_api import Connection, LinearLabel, LinearUser
from linear_gateway.constants import (
    ADD_COMMENT_FAILED,
    ASSIGN_ISSUE_FAILED,
    COMMENT_ADDED,
    FETCH_ISSUE_FAILED,
    ISSUE_ASSIGNED,
    ISSUE_NOT_FOUND,
    READ_AGENT,
    AgentId,
)
from linear_gateway.logging import LogContext, service_logger as logger
from linear_gateway.results import Failure, FailureKind, Result, Success

from .credential_router import CredentialRouter


class AssigneeSnapshot(TypedDict):
    id: str
    name: str


class IssueSnapshot(TypedDict):
    id: str
    title: str
    description: Optional[str]
    labels: list[str]
    state: str
    assignee: Optional[AssigneeSnapshot]


class MessagePayload(TypedDict):
    message: str


class IssueNotFoundError(LookupError):
    """The requested issue does not exist or is not visible to the agent."""

    def __init__(self, issue_id: str):
        self.issue_id = issue_id
        super().__init__(ISSUE_NOT_FOUND)


def _failure(operation: str, error: Exception, fallback: str) -> Failure:
    if isinstance(error, IssueNotFoundError):
        failure = Failure(ISSUE_NOT_FOUND, FailureKind.NOT_FOUND)
    else:
        failure = Failure(str(error) or fallback, FailureKind.REMOTE_ERROR)

    logger.warning(
        "issue_operation_failed",
        operation=operation,
        error=failure.error,
        error_type=type(error).__name__,
        kind=failure.kind.value,
    )
    return failure


def _agent_name(agent_id: AgentId) -> str:
    # Log binding must not fail before client_for can reject the value
    return str(getattr(agent_id, "value", agent_id))


def _label_names(labels: Connection[LinearLabel]) -> list[str]:
    return [label.name for label in labels.nodes]


def _assignee_snapshot(user: Optional[LinearUser]) -> Optional[AssigneeSnapshot]:
    if user is None:
        return None
    return {"id": user.id, "name": user.name}


class IssueService:
    """
    Service for the agent-facing issue operations.

    Usage:
        service = IssueService(router)
        result = await service.get_issue("ENG-123")
        if isinstance(result, Success):
            print(result.data["title"])
    """

    def __init__(self, router: CredentialRouter):
        self.router = router

    async def get_issue(self, issue_id: str) -> Result[IssueSnapshot]:
        """
        Fetch an issue snapshot through the read agent.

        Labels, assignee and workflow state are resolved concurrently; if any
        of them fails the whole operation fails.
        """
        with LogContext(issue_id=issue_id, agent_id=READ_AGENT.value):
            try:
                client = self.router.client_for(READ_AGENT)
                issue = await client.issue(issue_id)
                if issue is None:
                    raise IssueNotFoundError(issue_id)

                labels, assignee, state = await asyncio.gather(
                    issue.labels(),
                    issue.assignee(),
                    issue.state(),
                )

                snapshot: IssueSnapshot = {
                    "id": issue.id,
                    "title": issue.title,
                    "description": issue.description,
                    "labels": _label_names(labels),
                    "state": state.name if state is not None else "",
                    "assignee": _assignee_snapshot(assignee),
                }
            except Exception as e:
                return _failure("get_issue", e, FETCH_ISSUE_FAILED)

            logger.info("issue_fetched", labels=len(snapshot["labels"]))
            return Success(snapshot)

    async def add_comment(self, issue_id: str, agent_id: AgentId, comment: str) -> Result[MessagePayload]:
        """
        Post ``comment`` on the issue as ``agent_id``.

        Not idempotent: every call creates a new comment.
        """
        with LogContext(issue_id=issue_id, agent_id=_agent_name(agent_id)):
            try:
                client = self.router.client_for(agent_id)
                issue = await client.issue(issue_id)
                if issue is None:
                    raise IssueNotFoundError(issue_id)

                await client.create_comment(issue_id=issue.id, body=comment)
            except Exception as e:
                return _failure("add_comment", e, ADD_COMMENT_FAILED)

            logger.info("issue_comment_added", comment_chars=len(comment))
            return Success({"message": COMMENT_ADDED})

    async def assign_issue(self, issue_id: str, agent_id: AgentId) -> Result[MessagePayload]:
        """Assign the issue to ``agent_id``'s own Linear user."""
        with LogContext(issue_id=issue_id, agent_id=_agent_name(agent_id)):
            try:
                client = self.router.client_for(agent_id)
                issue, me = await asyncio.gather(
                    client.issue(issue_id),
                    client.viewer(),
                )
                if issue is None:
                    raise IssueNotFoundError(issue_id)

                await client.update_issue(issue.id, {"assigneeId": me.id})
            except Exception as e:
                return _failure("assign_issue", e, ASSIGN_ISSUE_FAILED)

            logger.info("issue_assigned", assignee_id=me.id)
            return Success({"message": ISSUE_ASSIGNED})


__all__ = [
    "AssigneeSnapshot",
    "IssueNotFoundError",
    "IssueService",
    "IssueSnapshot",
    "MessagePayload",
]
