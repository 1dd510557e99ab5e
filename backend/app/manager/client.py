"""HTTP client the manager uses to reach the passwords API."""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

import httpx

from ..infra.logging import get_logger
from .state import Entry

__all__ = [
    "DEFAULT_API_URL",
    "ManagerApiError",
    "PasswordsApiClient",
]

logger = get_logger(__name__)

API_URL_ENV = "MANAGER_API_URL"
DEFAULT_API_URL = os.getenv(API_URL_ENV, "http://localhost:3000")
PASSWORDS_PATH = "/api/passwords"


class ManagerApiError(Exception):
    """Transport failure or non-success status while talking to the API."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PasswordsApiClient:
    """Thin wrapper over ``/api/passwords``.

    Any ``httpx.Client`` works as transport, including FastAPI's ``TestClient``.
    No retries and no timeouts: a request waits until the server answers.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(
            base_url=base_url or DEFAULT_API_URL, timeout=None
        )

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "PasswordsApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def list_entries(self) -> List[Entry]:
        payload = self._send("GET", action="fetch passwords")
        if not isinstance(payload, list):
            raise ManagerApiError("Failed to fetch passwords: unexpected payload")
        return [Entry.from_document(document) for document in payload]

    def insert_entry(self, entry: Entry) -> Dict[str, Any]:
        body = self._send("POST", action="save new password", json=entry.to_document())
        return dict(body.get("result") or {})

    def upsert_entry(self, entry: Entry) -> Dict[str, Any]:
        body = self._send("PUT", action="update password", json=entry.to_document())
        return dict(body.get("result") or {})

    def delete_entry(self, entry_id: str) -> int:
        """Return the server's deleted count (0 when the id was unknown)."""

        body = self._send("DELETE", action="delete password", json={"id": entry_id})
        result = body.get("result") or {}
        return int(result.get("deletedCount", 0))

    def _send(self, method: str, *, action: str, json: Any = None) -> Any:
        try:
            response = self._http.request(method, PASSWORDS_PATH, json=json)
        except httpx.HTTPError as exc:
            logger.warning(
                "manager_api_transport_error",
                extra={"method": method, "error": exc.__class__.__name__},
            )
            raise ManagerApiError(f"Failed to {action}: {exc}") from exc

        if response.is_error:
            logger.warning(
                "manager_api_error_status",
                extra={"method": method, "status_code": response.status_code},
            )
            raise ManagerApiError(
                f"Failed to {action} (HTTP {response.status_code})",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise ManagerApiError(f"Failed to {action}: invalid JSON response") from exc
