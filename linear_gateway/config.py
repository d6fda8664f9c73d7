"""
Application configuration using Pydantic settings.

Usage:
    from linear_gateway.config import get_settings
    settings = get_settings()

For agent identities and messages, import from linear_gateway.constants:
    from linear_gateway.constants import AgentId, API_KEY_ENV_VARS
"""

from functools import lru_cache
from typing import List

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import API_KEY_ENV_VARS, LINEAR_GRAPHQL_ENDPOINT, AgentId


class Settings(BaseSettings):
    """
    Gateway settings loaded from environment variables and .env file.

    Required at startup:
        - MANAGER_BOT_API_KEY / BUG_BOT_API_KEY / FEATURE_BOT_API_KEY / IMPROVEMENT_BOT_API_KEY
        - API_TOKEN (shared bearer token; DIFY_API_TOKEN is accepted too)
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # App settings
    app_name: str = "Linear Issues API"
    app_description: str = "API for managing Linear issues"
    app_version: str = "1.0.0"
    debug: bool = Field(default=False)
    env: str = Field(default="development", validation_alias="ENV")

    # Published in the OpenAPI document only
    api_url: str = Field(default="", validation_alias="API_URL")

    # Bearer authentication
    api_token: str = Field(
        default="",
        validation_alias=AliasChoices("API_TOKEN", "DIFY_API_TOKEN"),
    )

    # Linear credentials, one per agent
    manager_bot_api_key: str = Field(default="", validation_alias="MANAGER_BOT_API_KEY")
    bug_bot_api_key: str = Field(default="", validation_alias="BUG_BOT_API_KEY")
    feature_bot_api_key: str = Field(default="", validation_alias="FEATURE_BOT_API_KEY")
    improvement_bot_api_key: str = Field(default="", validation_alias="IMPROVEMENT_BOT_API_KEY")

    # Linear API
    linear_api_url: str = Field(default=LINEAR_GRAPHQL_ENDPOINT, validation_alias="LINEAR_API_URL")
    linear_timeout_seconds: float = Field(default=30.0, gt=0, validation_alias="LINEAR_TIMEOUT_SECONDS")

    # Status used for failures other than "issue not found"
    remote_error_status_code: int = Field(default=404, validation_alias="REMOTE_ERROR_STATUS_CODE")

    @field_validator("remote_error_status_code")
    @classmethod
    def validate_error_status(cls, v: int) -> int:
        """Only client and server error codes make sense for a failed operation."""
        if not 400 <= v <= 599:
            raise ValueError(f"REMOTE_ERROR_STATUS_CODE must be a 4xx or 5xx code (got {v})")
        return v

    @property
    def is_production(self) -> bool:
        return self.env.lower() in ("production", "prod")

    @property
    def is_development(self) -> bool:
        """Development logs are rendered for the console instead of as JSON."""
        return self.debug or self.env.lower() == "development"

    def api_key_for(self, agent_id: AgentId) -> str:
        """Return the configured Linear API key of one agent."""
        return getattr(self, API_KEY_ENV_VARS[agent_id].lower())

    def missing_api_keys(self) -> List[str]:
        """Environment variable names of the agent API keys that are unset or blank."""
        return [
            env_var
            for agent_id, env_var in API_KEY_ENV_VARS.items()
            if not self.api_key_for(agent_id).strip()
        ]


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
