"""
FastAPI dependency injection module.

Provides centralized dependencies for:
- Settings bound to the running application
- The process-wide credential router
- Issue service instances
"""

from fastapi import Depends, Request

from ..config import Settings
from linear_gateway.results import Failure
from linear_gateway.services import CredentialRouter, IssueService


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_credential_router(request: Request) -> CredentialRouter:
    """Credential router built at startup."""
    router = request.app.state.credential_router
    if router is None:
        raise RuntimeError("Credential router not initialized. Is the application lifespan running?")
    return router


def get_issue_service(
    router: CredentialRouter = Depends(get_credential_router),
) -> IssueService:
    """Get IssueService instance bound to the shared router."""
    return IssueService(router)


def failure_status_code(failure: Failure, settings: Settings) -> int:
    """
    HTTP status for a failed operation.

    Not-found is always 404; other failures use REMOTE_ERROR_STATUS_CODE,
    which defaults to 404 as well.
    """
    if failure.is_not_found:
        return 404
    return settings.remote_error_status_code


__all__ = [
    "get_app_settings",
    "get_credential_router",
    "get_issue_service",
    "failure_status_code",
]
