"""
Pytest fixtures for Linear Agent Gateway tests.

Service and router fixtures run against the fake workspace in fakes.py.
"""

import pytest

from linear_gateway.config import Settings
from linear_gateway.services import CredentialRouter, IssueService

from fakes import FakeIssue, FakeLinearWorkspace


@pytest.fixture
def workspace() -> FakeLinearWorkspace:
    ws = FakeLinearWorkspace()
    ws.add_issue(
        FakeIssue(
            id="uuid-abc-1",
            identifier="ABC-1",
            title="Crash on save",
            description="Saving a draft crashes the editor",
            labels=["bug", "editor", "p1"],
            state="In Progress",
        )
    )
    return ws


@pytest.fixture
def router(workspace) -> CredentialRouter:
    return CredentialRouter(workspace.clients)


@pytest.fixture
def issue_service(router) -> IssueService:
    return IssueService(router)


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the developer's environment and .env file."""
    return Settings(
        _env_file=None,
        API_TOKEN="test-token",
        API_URL="https://gateway.example.com",
        MANAGER_BOT_API_KEY="lin_api_manager",
        BUG_BOT_API_KEY="lin_api_bug",
        FEATURE_BOT_API_KEY="lin_api_feature",
        IMPROVEMENT_BOT_API_KEY="lin_api_improvement",
        REMOTE_ERROR_STATUS_CODE=404,
    )
