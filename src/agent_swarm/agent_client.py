# agent_client.py
"""Messages API REST client used to execute individual agent steps."""

from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import config
from .exceptions import CollaboratorError
from .logging_utils import get_logger
from .models import AgentRequest, AgentResponse


class AgentClient:
    """REST client for the agent chat-completion endpoint.

    Sends one system prompt plus one user message per call and returns the
    validated response. Any failure, including transport errors and
    malformed payloads, is raised as :class:`CollaboratorError`. Calls are
    never retried once a request has been sent.
    """

    # Maximum length of upstream error text carried in a CollaboratorError
    MAX_ERROR_LENGTH = 500

    # Connection attempts retried before the request reaches the server
    MAX_CONNECT_RETRIES = 2

    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the agent client.

        Args:
            api_url: Messages endpoint URL. Defaults to config value.
            api_key: API key. Defaults to ANTHROPIC_API_KEY.
            api_version: Value for the anthropic-version header.
            timeout: Request timeout in seconds.
        """
        self.logger = get_logger(__name__)

        self.api_url = api_url or config.AGENT_API_URL
        self.api_version = api_version or config.AGENT_API_VERSION
        self.timeout = timeout if timeout is not None else config.AGENT_REQUEST_TIMEOUT
        self._api_key = api_key if api_key is not None else config.ANTHROPIC_API_KEY

        # Lazy-initialized session
        self._session: Optional[requests.Session] = None

    def _get_session(self) -> requests.Session:
        """Get or create a requests session with connect-only retries."""
        if self._session is None:
            self._session = requests.Session()

            retry_strategy = Retry(
                total=None,
                connect=self.MAX_CONNECT_RETRIES,
                read=0,
                status=0,
                other=0,
                allowed_methods=["POST"],
            )
            adapter = HTTPAdapter(max_retries=retry_strategy)
            self._session.mount("https://", adapter)
            self._session.mount("http://", adapter)

        return self._session

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self._api_key,
            "anthropic-version": self.api_version,
        }

    def _error_message(self, response: requests.Response) -> str:
        """Extract a readable error from a non-success response."""
        message = ""
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict):
                message = str(error.get("message") or error.get("type") or "")
            elif error:
                message = str(error)

        if not message:
            message = (response.text or "").strip() or response.reason or "Unknown error"

        return message[: self.MAX_ERROR_LENGTH]

    def send(self, request: AgentRequest) -> AgentResponse:
        """Execute one agent call.

        Args:
            request: Directive, context message, model and output limit.

        Returns:
            The validated response payload.

        Raises:
            CollaboratorError: On missing credentials, transport failure,
                non-success status or a malformed success payload.
        """
        if not self._api_key:
            raise CollaboratorError(500, "ANTHROPIC_API_KEY is not configured")

        payload: Dict[str, Any] = request.to_payload()

        self.logger.debug(
            "Making agent API request",
            extra={
                "model": request.model,
                "max_tokens": request.max_output_units,
                "context_chars": len(request.context),
            }
        )

        try:
            response = self._get_session().post(
                self.api_url,
                headers=self._get_headers(),
                json=payload,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            self.logger.error(f"Agent API request timed out after {self.timeout}s")
            raise CollaboratorError(0, f"Request timed out after {self.timeout}s")
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Agent API request error: {e}")
            raise CollaboratorError(0, str(e)[: self.MAX_ERROR_LENGTH])

        if not response.ok:
            message = self._error_message(response)
            self.logger.error(
                "Agent API request failed",
                extra={"status_code": response.status_code, "response_text": message}
            )
            raise CollaboratorError(response.status_code, message)

        try:
            result = AgentResponse.model_validate(response.json())
        except ValueError as e:
            # ValidationError is a ValueError subclass; so is JSONDecodeError
            kind = "schema" if isinstance(e, ValidationError) else "JSON"
            self.logger.error(
                f"Invalid {kind} in agent API response: {e}",
                extra={"response_text": (response.text or "")[: self.MAX_ERROR_LENGTH]}
            )
            raise CollaboratorError(
                response.status_code,
                f"Invalid {kind} in response: {e}"[: self.MAX_ERROR_LENGTH],
            )

        self.logger.debug(
            "Agent API request completed",
            extra={
                "input_tokens": result.usage.input_tokens,
                "output_tokens": result.usage.output_tokens,
            }
        )

        return result

    def complete(
        self,
        system: str,
        message: str,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """Convenience wrapper returning only the response text."""
        request = AgentRequest(
            directive=system,
            context=message,
            model=model or config.AGENT_MODEL,
            max_output_units=max_tokens or config.AGENT_MAX_TOKENS,
        )
        return self.send(request).text

    def health_check(self) -> bool:
        """Perform a health check by making a minimal API call."""
        try:
            return bool(self.complete("Reply with 'OK'", "ping", max_tokens=10))
        except CollaboratorError as e:
            self.logger.warning(f"Health check failed: {e}")
            return False

    def close(self) -> None:
        """Close the HTTP session and clean up resources."""
        if self._session:
            self._session.close()
            self._session = None
            self.logger.debug("Agent client session closed")

    def __enter__(self) -> "AgentClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
