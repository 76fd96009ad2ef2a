"""Document persistence: the store protocol and its implementations."""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable
import httpx
import pybreaker
from pydantic import ValidationError

from ..core import get_logger
from ..core.errors import PersistenceError
from ..editor.models import Document
from ..editor.industries import is_placeholder_document
from ..editor.templates import default_document
from ..monitoring import metrics_collector
from .breaker import create_breaker

logger = get_logger(__name__)


@runtime_checkable
class DocumentStore(Protocol):
    """Where an app's screens are loaded from and saved to."""

    def load(self) -> Document:
        """The saved document, or the seed document when nothing is saved."""
        ...

    def save(self, document: Document) -> None:
        ...

    def update_app(self, patch: dict[str, Any]) -> None:
        """Persist an app-level patch (name, colors, navigation, screens)."""
        ...


def prefer_seed(saved: Document, seed: Callable[[], Document]) -> Document:
    """
    The saved document, unless it is the untouched generic seed and ``seed``
    produces richer starter content (an industry template).
    """
    if not is_placeholder_document(saved):
        return saved
    seeded = seed()
    if is_placeholder_document(seeded):
        return saved
    logger.info("placeholder_replaced", screens=len(seeded.screens))
    return seeded


class MemoryStore:
    """In-process store, used for tests and offline editing."""

    def __init__(self, seed: Callable[[], Document] | None = None) -> None:
        self._seed = seed or default_document
        self.app: dict[str, Any] = {}

    def load(self) -> Document:
        screens = self.app.get("editorScreens")
        if not screens:
            return self._seed()
        return prefer_seed(Document.from_wire(screens), self._seed)

    def save(self, document: Document) -> None:
        self.update_app({"editorScreens": document.to_wire()})

    def update_app(self, patch: dict[str, Any]) -> None:
        self.app.update(patch)


class PersistenceClient:
    """
    Client for the app persistence API with circuit breaker protection.
    Failures raise PersistenceError; nothing is retried or rolled back here.
    """

    def __init__(
        self,
        base_url: str,
        app_id: str,
        timeout: float = 5.0,
        fail_max: int = 5,
        reset_timeout: int = 30,
        seed: Callable[[], Document] | None = None,
    ) -> None:
        if not app_id:
            raise ValueError("app_id is required")
        self.base_url = base_url.rstrip("/")
        self.app_id = app_id
        self._seed = seed or default_document
        self._client = httpx.Client(timeout=timeout)
        self._breaker = create_breaker("persistence-http", fail_max, reset_timeout)

        logger.info("client_init", url=self.base_url, app_id=app_id)

    @property
    def app_url(self) -> str:
        return f"{self.base_url}/api/apps/{self.app_id}"

    def load(self) -> Document:
        """
        Load the app's screens.

        Raises:
            PersistenceError: If the request fails or the screens are malformed
        """
        response = self._request("GET", lambda: self._client.get(self.app_url))
        try:
            data = response.json()
        except ValueError as e:
            raise PersistenceError("App response is not JSON", e) from e

        screens = data.get("editorScreens") if isinstance(data, dict) else None
        if not screens:
            logger.info("load_seeded", app_id=self.app_id)
            return self._seed()

        try:
            document = Document.from_wire(screens)
        except ValidationError as e:
            logger.error("load_invalid", app_id=self.app_id, errors=e.error_count())
            raise PersistenceError("Saved screens are malformed", e) from e

        logger.info("loaded", app_id=self.app_id, screens=len(document.screens))
        return prefer_seed(document, self._seed)

    def save(self, document: Document) -> None:
        self.update_app({"editorScreens": document.to_wire()})

    def update_app(self, patch: dict[str, Any]) -> None:
        """
        Raises:
            PersistenceError: If the request fails
        """
        self._request("PATCH", lambda: self._client.patch(self.app_url, json=patch))
        logger.info("saved", app_id=self.app_id, fields=sorted(patch))

    def _request(self, method: str, send: Callable[[], httpx.Response]) -> httpx.Response:
        def _make_request():
            response = send()
            response.raise_for_status()
            return response

        try:
            response = self._breaker.call(_make_request)
        except pybreaker.CircuitBreakerError as e:
            metrics_collector.record_persistence(method, "breaker_open")
            logger.error("persistence_failed", method=method, error="Circuit breaker open")
            raise PersistenceError("Persistence service unavailable", e) from e
        except httpx.HTTPError as e:
            metrics_collector.record_persistence(method, "error")
            logger.warning("persistence_http_error", method=method, error=str(e))
            raise PersistenceError(f"{method} {self.app_url} failed: {e}", e) from e

        metrics_collector.record_persistence(method, "success")
        return response

    def close(self) -> None:
        """Close HTTP client"""
        self._client.close()

    def __enter__(self) -> "PersistenceClient":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
