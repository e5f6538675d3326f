"""HTTP transport shared by every resource: base URL, bearer token, errors."""
from __future__ import annotations

from typing import Any

import requests

from jobfinder.errors import ServerFailure, TransportFailure
from jobfinder.log import get_logger
from jobfinder.session import SessionContext

log = get_logger(__name__)


def _server_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return ""
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or "")
    return ""


class ApiClient:
    def __init__(
        self,
        base_url: str,
        session: SessionContext,
        *,
        timeout: float = 15.0,
        http: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.timeout = timeout
        self.http = http or requests.Session()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self.session.token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body (None if empty)."""
        url = f"{self.base_url}{path}"
        headers = self._headers()
        sent_token = "Authorization" in headers
        try:
            r = self.http.request(
                method,
                url,
                json=json,
                params=params,
                files=files,
                data=data,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            log.warning("%s %s failed before a response: %s", method, path, exc)
            raise TransportFailure(str(exc), cause=exc) from exc

        if not r.ok:
            message = _server_message(r)
            log.warning("%s %s -> %d %s", method, path, r.status_code, message)
            if r.status_code == 401 and sent_token:
                self.session.clear()
            raise ServerFailure(message, status=r.status_code)

        log.debug("%s %s -> %d", method, path, r.status_code)
        if not r.content:
            return None
        try:
            return r.json()
        except ValueError:
            return r.text

    def get(self, path: str, **kwargs: Any) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> Any:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> Any:
        return self.request("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> Any:
        return self.request("DELETE", path, **kwargs)


class Resource:
    """One remote resource; subclasses add the operations."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client


def items(payload: Any, *keys: str) -> list[dict]:
    """Unwrap list payloads that may arrive bare or under a named key."""
    if isinstance(payload, list):
        return [p for p in payload if isinstance(p, dict)]
    if isinstance(payload, dict):
        for key in keys + ("data", "items"):
            value = payload.get(key)
            if isinstance(value, list):
                return [p for p in value if isinstance(p, dict)]
    return []


def document(payload: Any, *keys: str) -> dict:
    """Unwrap a single-document payload that may be nested under a key."""
    if not isinstance(payload, dict):
        return {}
    for key in keys + ("data",):
        value = payload.get(key)
        if isinstance(value, dict):
            return value
    return payload
