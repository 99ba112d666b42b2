"""Tabular REST backend client (``/<service>/_table/<table>`` endpoints)."""

from __future__ import annotations

import logging
from typing import Any

import requests

from .config import API_KEY_HEADER, WRITE_METHODS, BackendSettings
from .errors import ApiError, ConfigError, NetworkError

logger = logging.getLogger(__name__)


class TableAPI:
    def __init__(self, settings: BackendSettings, session: requests.Session | None = None):
        self.settings = settings
        self.base_url = (settings.base_url or "").rstrip("/")
        self.session = session or requests.Session()

    def table_path(self, table: str, record_id: Any = None) -> str:
        path = f"/{self.settings.db_service}/_table/{table}"
        if record_id is not None:
            path = f"{path}/{record_id}"
        return path

    def _headers(self, method: str, has_body: bool) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            API_KEY_HEADER: self.settings.api_key or "",
        }
        if has_body and method in WRITE_METHODS:
            headers["Content-Type"] = "application/json"
        return headers

    def request(self, endpoint: str, method: str = "GET", body: Any = None) -> Any:
        """Issue one request and return the decoded JSON payload.

        Raises ``ConfigError`` before touching the network when the base URL or
        API key is missing, ``NetworkError`` when the backend is unreachable, and
        ``ApiError`` for any non-success status. Never retries.
        """
        if not self.base_url:
            raise ConfigError("Backend API base URL is required. Please set TICKETDESK_API_BASE_URL.")
        if not self.settings.api_key:
            raise ConfigError("Backend API key is required. Please set TICKETDESK_API_KEY.")

        method = method.upper()
        url = f"{self.base_url}{endpoint}"
        kwargs: dict[str, Any] = {"headers": self._headers(method, body is not None)}
        if body is not None:
            kwargs["json"] = body
        logger.debug("%s %s", method, url)
        try:
            resp = self.session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            raise NetworkError(
                f"Unable to connect to {self.base_url}. Please check that the backend is reachable "
                f"and that CORS is enabled for this origin. ({exc})"
            ) from exc

        if not resp.ok:
            raise ApiError(resp.status_code, _error_message(resp))
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise ApiError(resp.status_code, f"Malformed JSON response: {resp.text[:200]}") from exc


def _error_message(resp: requests.Response) -> str:
    fallback = resp.reason or f"HTTP {resp.status_code}"
    try:
        data = resp.json()
    except ValueError:
        return fallback
    if not isinstance(data, dict):
        return fallback
    message = data.get("message")
    # DreamFactory nests the message under an "error" object
    error = data.get("error")
    if not message and isinstance(error, dict):
        message = error.get("message")
    return str(message) if message else fallback
