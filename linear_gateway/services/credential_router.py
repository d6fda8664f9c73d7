"""
Credential Router - one authenticated Linear client per agent identity.

Built once at application startup and shared by reference. The mapping is
never mutated afterwards, so concurrent lookups need no locking.
"""

from collections.abc import Callable, Mapping
from types import MappingProxyType

from linear_gateway.api.linear_api import LinearClient
from linear_gateway.config import Settings
from linear_gateway.constants import AgentId
from linear_gateway.exceptions import MissingCredentialsError, UnknownAgentError
from linear_gateway.logging import get_logger

logger = get_logger("credentials")

ClientFactory = Callable[[str, Settings], LinearClient]


def default_client_factory(api_key: str, settings: Settings) -> LinearClient:
    return LinearClient(
        api_key,
        api_url=settings.linear_api_url,
        timeout=settings.linear_timeout_seconds,
    )


class CredentialRouter:
    """
    Immutable registry mapping every AgentId to its client.

    Usage:
        router = CredentialRouter.from_settings(get_settings())
        client = router.client_for(AgentId.BUG_BOT)
    """

    def __init__(self, clients: Mapping[AgentId, LinearClient]):
        missing = [agent.value for agent in AgentId if agent not in clients]
        if missing:
            raise ValueError(f"No client configured for: {', '.join(missing)}")
        self._clients = MappingProxyType({agent: clients[agent] for agent in AgentId})

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client_factory: ClientFactory = default_client_factory,
    ) -> "CredentialRouter":
        """
        Build one client per agent from the configured API keys.

        Raises:
            MissingCredentialsError: if any agent's API key is unset or blank.
        """
        missing = settings.missing_api_keys()
        if missing:
            raise MissingCredentialsError(missing)

        clients = {
            agent: client_factory(settings.api_key_for(agent).strip(), settings)
            for agent in AgentId
        }
        logger.info("credential_router_ready", agents=[agent.value for agent in AgentId])
        return cls(clients)

    def client_for(self, agent_id: AgentId) -> LinearClient:
        if not isinstance(agent_id, AgentId):
            raise UnknownAgentError(agent_id)
        return self._clients[agent_id]

    def clients(self) -> Mapping[AgentId, LinearClient]:
        """Read-only view of the registry."""
        return self._clients

    async def aclose(self) -> None:
        """Close every client's connection pool."""
        for client in self._clients.values():
            await client.aclose()


__all__ = ["CredentialRouter", "ClientFactory", "default_client_factory"]
