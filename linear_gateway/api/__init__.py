# Linear API integration module

from .linear_api import (
    Connection,
    LinearClient,
    LinearComment,
    LinearIssue,
    LinearLabel,
    LinearUser,
    LinearWorkflowState,
)

__all__ = [
    "Connection",
    "LinearClient",
    "LinearComment",
    "LinearIssue",
    "LinearLabel",
    "LinearUser",
    "LinearWorkflowState",
]
