"""
Application constants for the Linear Agent Gateway.

Contains the fixed set of bot identities, their credential variables,
and the messages returned by issue operations.
"""

from enum import Enum

# =============================================================================
# Agent Identities
# =============================================================================


class AgentId(str, Enum):
    """Bot identity acting on Linear. Each one owns exactly one API key."""
    MANAGER_BOT = "MANAGER_BOT"
    BUG_BOT = "BUG_BOT"
    FEATURE_BOT = "FEATURE_BOT"
    IMPROVEMENT_BOT = "IMPROVEMENT_BOT"


# Reads are centralized through one identity so the other bots need no read scope
READ_AGENT = AgentId.MANAGER_BOT

API_KEY_ENV_VARS: dict[AgentId, str] = {
    AgentId.MANAGER_BOT: "MANAGER_BOT_API_KEY",
    AgentId.BUG_BOT: "BUG_BOT_API_KEY",
    AgentId.FEATURE_BOT: "FEATURE_BOT_API_KEY",
    AgentId.IMPROVEMENT_BOT: "IMPROVEMENT_BOT_API_KEY",
}

# =============================================================================
# Linear API
# =============================================================================

LINEAR_GRAPHQL_ENDPOINT = "https://api.linear.app/graphql"
LINEAR_USER_AGENT = "LinearAgentGateway/1.0"

# Linear reports unknown ids as a GraphQL error rather than a null field
ENTITY_NOT_FOUND_PREFIX = "Entity not found"

# =============================================================================
# Operation Messages
# =============================================================================

ISSUE_NOT_FOUND = "Issue not found"
COMMENT_ADDED = "Comment added successfully"
ISSUE_ASSIGNED = "Issue assigned successfully"

FETCH_ISSUE_FAILED = "Failed to fetch issue"
ADD_COMMENT_FAILED = "Failed to add comment"
ASSIGN_ISSUE_FAILED = "Failed to assign issue"
