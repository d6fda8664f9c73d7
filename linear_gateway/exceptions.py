"""Exception types raised by the gateway core."""

from typing import Any


class LinearGatewayError(Exception):
    """Base class for gateway errors."""


class LinearAPIError(LinearGatewayError):
    """Raised when a Linear request fails at the transport, HTTP or GraphQL level."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        errors: list[dict[str, Any]] | None = None,
    ):
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(message)


class MissingCredentialsError(LinearGatewayError):
    """Raised at startup when one or more bot API keys are not configured."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        message = "Missing Linear API keys:\n" + "\n".join(f"  - {name}" for name in missing)
        super().__init__(message)


class UnknownAgentError(LinearGatewayError, KeyError):
    """Raised when a client is requested for a value that is not an AgentId."""

    def __init__(self, agent_id: Any):
        self.agent_id = agent_id
        super().__init__(f"Unknown agent: {agent_id!r}")

    def __str__(self) -> str:
        return self.args[0]
