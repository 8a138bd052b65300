"""Remote store client — HTTP connection to the authoritative fronts store.

The manager talks to the store through the RemoteStore protocol:

    fetch_all()                          -> FrontsDocument
    save_all(document)                   -> None
    toggle_secret(danger_id, secret_id)  -> Secret
    toggle_portent(danger_id, portent_id) -> Portent

Every failure is raised as a StoreError subclass; nothing is returned
half-populated. Field edits are computed by the client and pushed wholesale
through save_all (last writer wins). Toggles are server-authoritative: the
server flips the flag, stamps `revealedAt`, and returns the updated entity.

Wire contract:
  GET  /api/fronts                  -> {"fronts": [...]}
  POST /api/fronts/save             {"fronts": [...]}
  POST /api/fronts/secret/toggle    {"dangerId", "secretId"}  -> {"secret": {...}}
  POST /api/fronts/portent/toggle   {"dangerId", "portentId"} -> {"portent": {...}}

Only the status code signals failure; error bodies are never parsed.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from front_manager.config import Settings
from front_manager.models import FrontsDocument, Portent, Secret

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocol — every store implementation must match these signatures
# ---------------------------------------------------------------------------

class RemoteStore(Protocol):
    async def fetch_all(self) -> FrontsDocument: ...

    async def save_all(self, document: FrontsDocument) -> None: ...

    async def toggle_secret(self, danger_id: str, secret_id: str) -> Secret: ...

    async def toggle_portent(self, danger_id: str, portent_id: str) -> Portent: ...


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class StoreError(RuntimeError):
    """Raised when the fronts store cannot be used for an operation."""


class NetworkError(StoreError):
    """Transport-level failure: connection refused, timeout, broken stream."""


class ServerError(StoreError):
    """The store answered with a non-2xx status."""

    def __init__(self, status: int) -> None:
        super().__init__(f"Server error: {status}")
        self.status = status


# ---------------------------------------------------------------------------
# HttpRemoteStore — connects to a real store over HTTP
# ---------------------------------------------------------------------------

class HttpRemoteStore:
    """Async HTTP client for the fronts REST API.

    Args:
        base_url:  Base URL of the store, e.g. "http://localhost:3000".
        timeout:   HTTP timeout in seconds. Defaults to 30.
        transport: Optional httpx transport. Lets the client run against an
                   in-process ASGI app instead of the network.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> HttpRemoteStore:
        return cls(settings.api_base, timeout=settings.timeout)

    async def _request(self, path: str, body: dict[str, Any] | None = None) -> httpx.Response:
        """GET `path`, or POST `body` to it as JSON. Raises on any failure."""
        url = f"{self._base_url}{path}"
        logger.debug("store request url=%s post=%s", url, body is not None)

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                if body is None:
                    resp = await client.get(url)
                else:
                    resp = await client.post(
                        url, json=body, headers={"Content-Type": "application/json"},
                    )
                resp.raise_for_status()
        except httpx.ConnectError as e:
            raise NetworkError(f"Cannot connect to fronts store at {self._base_url}") from e
        except httpx.TimeoutException as e:
            raise NetworkError(f"Fronts store timed out after {self._timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise ServerError(e.response.status_code) from e
        except httpx.RequestError as e:
            raise NetworkError(f"Request to fronts store failed: {e}") from e

        return resp

    async def fetch_all(self) -> FrontsDocument:
        resp = await self._request("/api/fronts")
        try:
            document = FrontsDocument.model_validate(resp.json())
        except (ValidationError, ValueError) as e:
            raise StoreError("Unexpected response format from fronts store") from e
        logger.info("Loaded %d fronts", len(document.fronts))
        return document

    async def save_all(self, document: FrontsDocument) -> None:
        await self._request("/api/fronts/save", document.to_payload())
        logger.info("Fronts saved successfully")

    async def toggle_secret(self, danger_id: str, secret_id: str) -> Secret:
        resp = await self._request(
            "/api/fronts/secret/toggle", {"dangerId": danger_id, "secretId": secret_id},
        )
        secret = self._parse_entity(resp, "secret", Secret)
        logger.debug("secret toggled id=%s revealed=%s", secret.id, secret.revealed)
        return secret

    async def toggle_portent(self, danger_id: str, portent_id: str) -> Portent:
        resp = await self._request(
            "/api/fronts/portent/toggle", {"dangerId": danger_id, "portentId": portent_id},
        )
        portent = self._parse_entity(resp, "portent", Portent)
        logger.debug("portent toggled id=%s completed=%s", portent.id, portent.completed)
        return portent

    def _parse_entity(self, resp: httpx.Response, key: str, model: type[Any]) -> Any:
        try:
            data = resp.json()
            return model.model_validate(data[key])
        except (ValidationError, ValueError, KeyError, TypeError) as e:
            raise StoreError(f"Unexpected {key} toggle response from fronts store") from e
