"""
HTTP client for the todo REST API.

    client = TodoApiClient("http://localhost:8000")
    todo = client.create({"title": "Write docs", "priority": "high"})
    client.update(todo["id"], {"completed": True})

Any ``httpx.Client`` can be passed in instead of a base URL, which is how
the tests drive the client against ``fastapi.testclient.TestClient`` or an
``httpx.MockTransport``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class TodoApiError(Exception):
    """Raised for any non-2xx response or transport failure."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or []


class TodoApiClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        api_prefix: str = "/api",
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ):
        self.api_prefix = api_prefix.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "TodoApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, json: Any = None) -> Dict[str, Any]:
        logger.debug("Making %s request to %s", method, path)
        try:
            response = self._client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            logger.error("Request error: %s", exc)
            raise TodoApiError(str(exc)) from exc

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.is_error:
            message = payload.get("error") or response.reason_phrase
            if response.status_code >= 500:
                logger.error("Server error occurred: %s", message)
            else:
                logger.warning("Response error %s: %s", response.status_code, message)
            raise TodoApiError(message, response.status_code, payload.get("details"))
        return payload

    def _todos(self, suffix: str = "") -> str:
        return f"{self.api_prefix}/todos{suffix}"

    def list(self) -> List[Dict[str, Any]]:
        return self._request("GET", self._todos())["data"]

    def get(self, todo_id: int) -> Dict[str, Any]:
        return self._request("GET", self._todos(f"/{todo_id}"))["data"]

    def create(self, todo: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", self._todos(), json=todo)["data"]

    def update(self, todo_id: int, updates: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", self._todos(f"/{todo_id}"), json=updates)["data"]

    def delete(self, todo_id: int) -> None:
        self._request("DELETE", self._todos(f"/{todo_id}"))

    def delete_all(self) -> int:
        """Delete every todo and return how many the server removed."""
        return self._request("DELETE", self._todos())["count"]

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health")
