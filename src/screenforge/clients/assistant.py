"""Assistant Service Client"""

from typing import Any
import httpx
import pybreaker

from ..core import get_logger, extract_json, safe_json_dumps, JSONParseError
from ..core.errors import InterpretationUnavailable
from .breaker import create_breaker

logger = get_logger(__name__)

EDITOR_COMMAND_PATH = "/api/ai/editor-command"


class AssistantClient:
    """
    Client for the editing assistant with circuit breaker protection.
    Every failure surfaces as InterpretationUnavailable so callers can fall back.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        timeout: float = 20.0,
        fail_max: int = 5,
        reset_timeout: int = 30,
    ) -> None:
        """
        Initialize assistant client with circuit breaker.

        Args:
            base_url: Base URL of the assistant service
            timeout: Request timeout in seconds
            fail_max: Consecutive failures before the breaker opens
            reset_timeout: Seconds before the breaker lets a request through
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.Client(timeout=timeout)
        self._breaker = create_breaker("assistant-http", fail_max, reset_timeout)

        logger.info("client_init", url=self.base_url)

    def editor_command(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Ask the assistant to translate a command into operations.

        Args:
            payload: ``{"prompt": ..., "context": {...}}``

        Returns:
            Decoded reply object (``{"operations": [...], "message": ...}``)

        Raises:
            InterpretationUnavailable: If the breaker is open, the request
                fails or the reply is not a JSON object
        """
        url = f"{self.base_url}{EDITOR_COMMAND_PATH}"
        body = safe_json_dumps(payload)

        # Execute with circuit breaker protection
        def _make_request():
            response = self._client.post(url, content=body, headers={"Content-Type": "application/json"})
            response.raise_for_status()
            return response

        try:
            response = self._breaker.call(_make_request)
        except pybreaker.CircuitBreakerError as e:
            logger.error("editor_command_failed", error="Circuit breaker open - assistant unavailable")
            raise InterpretationUnavailable("Assistant circuit is open", e) from e
        except httpx.HTTPError as e:
            logger.warning("editor_command_http_error", error=str(e))
            raise InterpretationUnavailable(f"Assistant request failed: {e}", e) from e

        try:
            data = extract_json(response.text, repair=True)
        except JSONParseError as e:
            logger.error("invalid_response", error=str(e))
            raise InterpretationUnavailable("Assistant reply is not a JSON object", e) from e

        logger.info("editor_command", operations=len(data.get("operations") or []))
        return data

    def health_check(self) -> bool:
        """
        Check if the assistant is reachable (bypasses circuit breaker).

        Returns:
            True if the assistant is healthy
        """
        try:
            response = self._client.get(f"{self.base_url}/health", timeout=2.0)
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    def close(self) -> None:
        """Close HTTP client"""
        self._client.close()

    def __enter__(self) -> "AssistantClient":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
