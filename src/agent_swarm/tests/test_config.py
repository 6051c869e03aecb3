# src/agent_swarm/tests/test_config.py
"""
Unit tests for agent swarm configuration module.

Tests cover:
- Defaults applied when environment variables are absent
- Environment overrides and numeric parsing
- Structured logging selection by environment
- Required/optional/boolean helper behaviour
"""
import os
from unittest.mock import patch

import pytest

MOCK_ENV_VARS = {
    "APP_ENV": "prod",
    "LOG_LEVEL": "debug",
    "ANTHROPIC_API_KEY": "sk-ant-test",
    "AGENT_API_URL": "http://localhost:3000/api/agent",
    "AGENT_API_VERSION": "2024-01-01",
    "AGENT_MODEL": "claude-test",
    "AGENT_MAX_TOKENS": "4000",
    "AGENT_REQUEST_TIMEOUT": "45.5",
    "AGENT_CANCEL_POLL_INTERVAL": "0.25",
    "SWARM_HISTORY_LIMIT": "5",
}


class TestConfigDefaults:
    """Tests for default values."""

    @pytest.mark.unit
    def test_defaults_with_empty_environment(self):
        with patch.dict(os.environ, {}, clear=True):
            from agent_swarm.config import SwarmConfig
            config = SwarmConfig()

            assert config.APP_ENV == "dev"
            assert config.LOG_LEVEL == "INFO"
            assert config.ANTHROPIC_API_KEY == ""
            assert config.has_api_key is False
            assert config.AGENT_API_URL == "https://api.anthropic.com/v1/messages"
            assert config.AGENT_API_VERSION == "2023-06-01"
            assert config.AGENT_MODEL == "claude-sonnet-4-20250514"
            assert config.AGENT_MAX_TOKENS == 8000
            assert config.AGENT_REQUEST_TIMEOUT == 300.0
            assert config.AGENT_CANCEL_POLL_INTERVAL == 0.1
            assert config.SWARM_HISTORY_LIMIT == 20
            assert config.SWARM_STRUCTURED_LOGS is False


class TestConfigOverrides:
    """Tests for values read from the environment."""

    @pytest.mark.unit
    def test_values_loaded_from_env(self):
        with patch.dict(os.environ, MOCK_ENV_VARS, clear=True):
            from agent_swarm.config import SwarmConfig
            config = SwarmConfig()

            assert config.APP_ENV == "prod"
            assert config.LOG_LEVEL == "DEBUG"
            assert config.has_api_key is True
            assert config.AGENT_API_URL == "http://localhost:3000/api/agent"
            assert config.AGENT_API_VERSION == "2024-01-01"
            assert config.AGENT_MODEL == "claude-test"
            assert config.AGENT_MAX_TOKENS == 4000
            assert config.AGENT_REQUEST_TIMEOUT == 45.5
            assert config.AGENT_CANCEL_POLL_INTERVAL == 0.25
            assert config.SWARM_HISTORY_LIMIT == 5

    @pytest.mark.unit
    def test_structured_logs_default_outside_dev(self):
        with patch.dict(os.environ, {"APP_ENV": "prod"}, clear=True):
            from agent_swarm.config import SwarmConfig
            assert SwarmConfig().SWARM_STRUCTURED_LOGS is True

    @pytest.mark.unit
    def test_structured_logs_explicit_override(self):
        with patch.dict(os.environ, {"APP_ENV": "prod", "SWARM_STRUCTURED_LOGS": "false"}, clear=True):
            from agent_swarm.config import SwarmConfig
            assert SwarmConfig().SWARM_STRUCTURED_LOGS is False

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name,value",
        [
            ("AGENT_MAX_TOKENS", "lots"),
            ("AGENT_MAX_TOKENS", "0"),
            ("SWARM_HISTORY_LIMIT", "0"),
            ("AGENT_REQUEST_TIMEOUT", "soon"),
            ("AGENT_CANCEL_POLL_INTERVAL", "-1"),
        ],
    )
    def test_invalid_numbers_raise(self, name, value):
        with patch.dict(os.environ, {name: value}, clear=True):
            from agent_swarm.config import SwarmConfig
            with pytest.raises(ValueError) as exc_info:
                SwarmConfig()
            assert name in str(exc_info.value)

    @pytest.mark.unit
    def test_blank_number_uses_default(self):
        with patch.dict(os.environ, {"AGENT_MAX_TOKENS": "  "}, clear=True):
            from agent_swarm.config import SwarmConfig
            assert SwarmConfig().AGENT_MAX_TOKENS == 8000


class TestConfigHelpers:
    """Tests for the private lookup helpers."""

    @pytest.mark.unit
    def test_get_required_without_default_raises(self):
        with patch.dict(os.environ, {}, clear=True):
            from agent_swarm.config import SwarmConfig
            config = SwarmConfig()
            with pytest.raises(ValueError) as exc_info:
                config._get_required("SOME_MISSING_VAR")
            assert "SOME_MISSING_VAR" in str(exc_info.value)

    @pytest.mark.unit
    @pytest.mark.parametrize("value,expected", [("true", True), ("1", True), ("TRUE", True), ("no", False)])
    def test_get_bool(self, value, expected):
        with patch.dict(os.environ, {"FLAG": value}, clear=True):
            from agent_swarm.config import SwarmConfig
            assert SwarmConfig()._get_bool("FLAG") is expected

    @pytest.mark.unit
    def test_get_bool_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            from agent_swarm.config import SwarmConfig
            assert SwarmConfig()._get_bool("FLAG") is False
