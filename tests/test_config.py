"""
Tests for gateway settings.
"""

import pytest
from pydantic import ValidationError

from linear_gateway.config import Settings
from linear_gateway.constants import API_KEY_ENV_VARS, LINEAR_GRAPHQL_ENDPOINT, AgentId


class TestSettings:
    """Tests for Settings loading and helpers."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("MANAGER_BOT_API_KEY", "from-env")
        monkeypatch.setenv("API_TOKEN", "secret")

        settings = Settings(_env_file=None)

        assert settings.api_key_for(AgentId.MANAGER_BOT) == "from-env"
        assert settings.api_token == "secret"

    def test_legacy_token_variable_is_accepted(self, monkeypatch):
        monkeypatch.delenv("API_TOKEN", raising=False)
        monkeypatch.setenv("DIFY_API_TOKEN", "legacy")

        settings = Settings(_env_file=None)

        assert settings.api_token == "legacy"

    def test_defaults(self, monkeypatch):
        for name in ("LINEAR_API_URL", "REMOTE_ERROR_STATUS_CODE", "LINEAR_TIMEOUT_SECONDS"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.linear_api_url == LINEAR_GRAPHQL_ENDPOINT
        assert settings.remote_error_status_code == 404
        assert settings.linear_timeout_seconds == 30.0

    def test_missing_api_keys_lists_env_names(self, settings):
        assert settings.missing_api_keys() == []

        partial = settings.model_copy(update={"manager_bot_api_key": ""})
        assert partial.missing_api_keys() == [API_KEY_ENV_VARS[AgentId.MANAGER_BOT]]

    def test_error_status_must_be_an_error_code(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, REMOTE_ERROR_STATUS_CODE=200)

    def test_production_flag(self):
        assert Settings(_env_file=None, ENV="production").is_production
        assert not Settings(_env_file=None, ENV="development").is_production

    def test_development_flag(self):
        assert Settings(_env_file=None, ENV="development").is_development
        assert Settings(_env_file=None, ENV="production", debug=True).is_development
        assert not Settings(_env_file=None, ENV="production", debug=False).is_development
