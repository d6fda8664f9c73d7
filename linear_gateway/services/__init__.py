"""
Gateway services.

The credential router owns the per-agent Linear clients; the issue service
uses it to run the agent-facing operations.
"""

from linear_gateway.services.credential_router import CredentialRouter
from linear_gateway.services.issue_service import IssueService

__all__ = [
    "CredentialRouter",
    "IssueService",
]
