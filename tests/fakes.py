"""
In-memory stand-ins for the Linear API.

One FakeLinearClient per agent, all sharing the same FakeLinearWorkspace,
so tests can assert which agent's client made each remote call.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any

from linear_gateway.api.linear_api import (
    Connection,
    LinearComment,
    LinearIssue,
    LinearLabel,
    LinearUser,
    LinearWorkflowState,
)
from linear_gateway.constants import AgentId


@dataclass
class FakeIssue:
    id: str
    identifier: str
    title: str
    description: str | None = None
    labels: list[str] = field(default_factory=list)
    state: str = "Todo"
    assignee: LinearUser | None = None


class FakeLinearWorkspace:
    """Shared remote state plus a log of every call, tagged with the agent."""

    def __init__(self):
        self.issues: dict[str, FakeIssue] = {}
        self.viewers = {
            agent: LinearUser(id=f"user-{agent.value.lower()}", name=agent.value.title())
            for agent in AgentId
        }
        self.calls: list[tuple[AgentId, str, tuple]] = []
        self.comments: list[tuple[AgentId, str, str]] = []
        self.updates: list[tuple[AgentId, str, dict[str, Any]]] = []
        self.failures: dict[str, Exception] = {}
        self.clients = {agent: FakeLinearClient(agent, self) for agent in AgentId}

    def add_issue(self, issue: FakeIssue) -> FakeIssue:
        self.issues[issue.id] = issue
        self.issues[issue.identifier] = issue
        return issue

    def fail(self, operation: str, error: Exception) -> None:
        self.failures[operation] = error

    def calls_for(self, operation: str) -> list[AgentId]:
        return [agent for agent, op, _ in self.calls if op == operation]


class FakeLinearClient:
    """Stands in for LinearClient; same coroutine surface, no network."""

    def __init__(self, agent: AgentId, workspace: FakeLinearWorkspace):
        self.agent = agent
        self.workspace = workspace
        self.closed = False

    async def _record(self, operation: str, *args) -> None:
        self.workspace.calls.append((self.agent, operation, args))
        # Yield so gathered calls genuinely interleave
        await asyncio.sleep(0)
        if operation in self.workspace.failures:
            raise self.workspace.failures[operation]

    def _get(self, issue_id: str) -> FakeIssue:
        return self.workspace.issues[issue_id]

    async def issue(self, issue_id: str) -> LinearIssue | None:
        await self._record("issue", issue_id)
        found = self.workspace.issues.get(issue_id)
        if found is None:
            return None
        node = {
            "id": found.id,
            "identifier": found.identifier,
            "title": found.title,
            "description": found.description,
        }
        return LinearIssue.from_node(node, client=self)

    async def issue_labels(self, issue_id: str) -> Connection[LinearLabel]:
        await self._record("issue_labels", issue_id)
        names = self._get(issue_id).labels
        return Connection(nodes=[LinearLabel(id=f"label-{i}", name=n) for i, n in enumerate(names)])

    async def issue_assignee(self, issue_id: str) -> LinearUser | None:
        await self._record("issue_assignee", issue_id)
        return self._get(issue_id).assignee

    async def issue_state(self, issue_id: str) -> LinearWorkflowState | None:
        await self._record("issue_state", issue_id)
        return LinearWorkflowState(id="state-1", name=self._get(issue_id).state, type="unstarted")

    async def viewer(self) -> LinearUser:
        await self._record("viewer")
        return self.workspace.viewers[self.agent]

    async def create_comment(self, issue_id: str, body: str) -> LinearComment:
        await self._record("create_comment", issue_id, body)
        self.workspace.comments.append((self.agent, issue_id, body))
        return LinearComment(id=f"comment-{len(self.workspace.comments)}")

    async def update_issue(self, issue_id: str, changes: dict[str, Any]) -> None:
        await self._record("update_issue", issue_id, changes)
        self.workspace.updates.append((self.agent, issue_id, changes))
        if "assigneeId" in changes:
            viewer = next(v for v in self.workspace.viewers.values() if v.id == changes["assigneeId"])
            self._get(issue_id).assignee = viewer

    async def aclose(self) -> None:
        self.closed = True


