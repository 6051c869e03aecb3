# config.py
import logging
import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class SwarmConfig:
    """Runtime settings for the agent swarm, read from the environment.

    Everything has a default except the API key, which is only checked when
    an agent call is actually made so that listing commands and tests work
    without credentials.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

        self.APP_ENV = self._get_required("APP_ENV", "dev")
        self.LOG_LEVEL = self._get_optional("LOG_LEVEL", "INFO").upper()

        # Agent endpoint
        self.ANTHROPIC_API_KEY = self._get_optional("ANTHROPIC_API_KEY")
        self.AGENT_API_URL = self._get_optional(
            "AGENT_API_URL", "https://api.anthropic.com/v1/messages"
        )
        self.AGENT_API_VERSION = self._get_optional("AGENT_API_VERSION", "2023-06-01")
        self.AGENT_MODEL = self._get_optional("AGENT_MODEL", "claude-sonnet-4-20250514")
        self.AGENT_MAX_TOKENS = self._get_int("AGENT_MAX_TOKENS", 8000, minimum=1)
        self.AGENT_REQUEST_TIMEOUT = self._get_float("AGENT_REQUEST_TIMEOUT", 300.0)

        # Run behaviour
        self.AGENT_CANCEL_POLL_INTERVAL = self._get_float("AGENT_CANCEL_POLL_INTERVAL", 0.1)
        self.SWARM_HISTORY_LIMIT = self._get_int("SWARM_HISTORY_LIMIT", 20, minimum=1)

        # JSON logs everywhere but dev unless set explicitly
        self.SWARM_STRUCTURED_LOGS = (
            self._get_bool("SWARM_STRUCTURED_LOGS")
            if "SWARM_STRUCTURED_LOGS" in os.environ
            else self.APP_ENV != "dev"
        )

    @property
    def has_api_key(self) -> bool:
        return bool(self.ANTHROPIC_API_KEY)

    def _get_required(self, name: str, default: Optional[str] = None) -> str:
        """Get a required configuration value from environment variables.

        Raises:
            ValueError: If the variable is unset and no default is provided
        """
        if name in os.environ:
            return os.environ[name]
        if default is not None:
            self.logger.debug("%s not set, using default %r", name, default)
            return default
        raise ValueError(
            f"Environment variable {name} not found and no default provided"
        )

    def _get_optional(self, name: str, default: str = "") -> str:
        return os.environ.get(name, default)

    def _get_bool(self, name: str) -> bool:
        """True if the variable is set to 'true' or '1' (case-insensitive)."""
        return os.environ.get(name, "").lower() in ("true", "1")

    def _get_int(self, name: str, default: int, minimum: Optional[int] = None) -> int:
        """Parse an integer setting.

        Raises:
            ValueError: If the value is not an integer or is below ``minimum``
        """
        raw = os.environ.get(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError:
            raise ValueError(f"{name} must be an integer, got {raw!r}") from None
        if minimum is not None and value < minimum:
            raise ValueError(f"{name} must be at least {minimum}, got {value}")
        return value

    def _get_float(self, name: str, default: float) -> float:
        """Parse a positive number of seconds.

        Raises:
            ValueError: If the value is not a number or is not positive
        """
        raw = os.environ.get(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = float(raw)
        except ValueError:
            raise ValueError(f"{name} must be a number, got {raw!r}") from None
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")
        return value


# Create a global instance of SwarmConfig
config = SwarmConfig()
