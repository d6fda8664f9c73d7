"""
Bearer token guard for the issue routes.

Runs before FastAPI reads the request body, so a caller without a valid
token gets 401 even when the body is malformed, and never sees validation
details.
"""

from fastapi.security.utils import get_authorization_scheme_param
from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from linear_gateway.logging import get_logger

from ..auth.dependencies import token_error
from ..config import Settings

logger = get_logger("auth")


class BearerAuthMiddleware:
    def __init__(self, app: ASGIApp, settings: Settings, path_prefix: str):
        self.app = app
        self.settings = settings
        self.path_prefix = path_prefix.rstrip("/")

    def _protects(self, path: str) -> bool:
        return path == self.path_prefix or path.startswith(self.path_prefix + "/")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not self._protects(scope["path"]):
            await self.app(scope, receive, send)
            return

        scheme, token = get_authorization_scheme_param(Headers(scope=scope).get("Authorization"))
        if scheme.lower() != "bearer":
            token = None

        error = token_error(token, self.settings.api_token)
        if error is None:
            await self.app(scope, receive, send)
            return

        logger.warning("unauthorized_request", path=scope["path"], detail=error)
        response = JSONResponse(
            status_code=401,
            content={"detail": error, "status_code": 401},
            headers={"WWW-Authenticate": "Bearer"},
        )
        await response(scope, receive, send)
