"""
Authentication dependencies for FastAPI routes.

Every issue route requires the shared static API token as a bearer token:
    Authorization: Bearer <API_TOKEN>

The same check runs twice: in BearerAuthMiddleware, before the request body
is read, and as a router dependency that also declares the security scheme
in the OpenAPI document.
"""

import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from linear_gateway.logging import get_logger

from ..config import Settings
from ..dependencies import get_app_settings

logger = get_logger("auth")

NOT_AUTHENTICATED = "Not authenticated"
INVALID_CREDENTIALS = "Invalid authentication credentials"

bearer_scheme = HTTPBearer(
    scheme_name="bearerAuth",
    description="Enter your API token",
    auto_error=False,
)


def token_error(token: str | None, expected: str) -> str | None:
    """
    Reason a bearer token is rejected, or None when it is accepted.

    An empty API_TOKEN rejects every request rather than allowing all of them.
    """
    if not token:
        return NOT_AUTHENTICATED

    if not expected:
        logger.error("api_token_not_configured")
        return INVALID_CREDENTIALS

    if not secrets.compare_digest(token.encode(), expected.encode()):
        return INVALID_CREDENTIALS
    return None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def require_api_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """Reject the request unless it carries the configured bearer token."""
    token = credentials.credentials if credentials is not None else None
    error = token_error(token, settings.api_token)
    if error is not None:
        raise _unauthorized(error)
