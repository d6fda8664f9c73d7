"""
Pydantic schemas for request and response validation.

Field names follow the public JSON contract (camelCase for request bodies).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from linear_gateway.constants import AgentId


class IssueAssignee(BaseModel):
    """Issue assignee details"""

    id: str
    name: str


class IssueDetails(BaseModel):
    """Issue details"""

    id: str
    title: str
    description: Optional[str]
    labels: list[str]
    state: str
    assignee: Optional[IssueAssignee]


class CommentBody(BaseModel):
    """Comment request body"""

    model_config = ConfigDict(populate_by_name=True)

    agent_id: AgentId = Field(alias="agentId", description="The agent that will make the comment")
    comment: str = Field(description="The comment text to add")


class AssignBody(BaseModel):
    """Assign request body"""

    model_config = ConfigDict(populate_by_name=True)

    agent_id: AgentId = Field(alias="agentId", description="The agent to assign the issue to")


class ErrorResponse(BaseModel):
    """Error response"""

    error: str


class MessageResponse(BaseModel):
    """Success message response"""

    message: str
