"""
Issue endpoints used by the bots.

Routes only translate between HTTP and the issue service: the service
decides which agent's credentials to use, and failures come back as
``{"error": ...}`` bodies.
"""

from typing import Any

from fastapi import APIRouter, Depends, Path
from fastapi.responses import JSONResponse

from ..config import Settings
from linear_gateway.results import Failure, Result
from linear_gateway.services import IssueService

from ..auth.dependencies import require_api_token
from ..dependencies import failure_status_code, get_app_settings, get_issue_service
from ..schemas import AssignBody, CommentBody, ErrorResponse, IssueDetails, MessageResponse

router = APIRouter(
    prefix="/issues",
    tags=["issues"],
    dependencies=[Depends(require_api_token)],
)

NOT_FOUND_RESPONSE: dict[int | str, dict[str, Any]] = {
    404: {"model": ErrorResponse, "description": "Issue not found"},
}


def _to_response(result: Result[Any], settings: Settings) -> Any:
    if isinstance(result, Failure):
        return JSONResponse(
            status_code=failure_status_code(result, settings),
            content={"error": result.error},
        )
    return result.data


@router.get(
    "/{issueId}",
    response_model=IssueDetails,
    responses=NOT_FOUND_RESPONSE,
    operation_id="getIssueDetails",
    summary="Get issue details",
    description="Retrieves details of a specific Linear issue",
)
async def get_issue_details(
    issue_id: str = Path(alias="issueId", description="The ID of the Linear issue"),
    service: IssueService = Depends(get_issue_service),
    settings: Settings = Depends(get_app_settings),
):
    result = await service.get_issue(issue_id)
    return _to_response(result, settings)


@router.post(
    "/{issueId}/comment",
    response_model=MessageResponse,
    responses=NOT_FOUND_RESPONSE,
    operation_id="addIssueComment",
    summary="Add a comment to an issue",
    description="Adds a comment to a Linear issue using a specific agent",
)
async def add_issue_comment(
    body: CommentBody,
    issue_id: str = Path(alias="issueId", description="The ID of the Linear issue"),
    service: IssueService = Depends(get_issue_service),
    settings: Settings = Depends(get_app_settings),
):
    result = await service.add_comment(issue_id, body.agent_id, body.comment)
    return _to_response(result, settings)


@router.post(
    "/{issueId}/assign",
    response_model=MessageResponse,
    responses=NOT_FOUND_RESPONSE,
    operation_id="assignIssue",
    summary="Assign an issue to an agent",
    description="Assigns a Linear issue to the agent making the request",
)
async def assign_issue(
    body: AssignBody,
    issue_id: str = Path(alias="issueId", description="The ID of the Linear issue"),
    service: IssueService = Depends(get_issue_service),
    settings: Settings = Depends(get_app_settings),
):
    result = await service.assign_issue(issue_id, body.agent_id)
    return _to_response(result, settings)
