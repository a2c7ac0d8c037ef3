"""GitHub REST API client for the notifications endpoints, using httpx."""

import json
from collections.abc import Mapping
from typing import Any

import httpx

from .errors import handle_response
from .models import API_VERSION, MEDIA_TYPE, USER_AGENT
from .settings import Settings, get_settings
from .urls import ParamValue, build_url

METHODS = ("GET", "PUT", "PATCH", "DELETE")


class GitHubClient:
    """Thin client for GitHub REST endpoints.

    One round trip per call: no retry, no throttle, no cache. Errors come back
    as `GitHubAPIError` subclasses from `errors.handle_response`; transport
    failures propagate as `httpx.HTTPError`.
    """

    def __init__(self, settings: Settings | None = None, transport: httpx.BaseTransport | None = None):
        self.settings = settings or get_settings()
        self.base_url = self.settings.github_api_url
        self._headers = {
            "Accept": MEDIA_TYPE,
            # No trailing space when the token is empty; h11 rejects it in header values.
            "Authorization": f"Bearer {self.settings.github_token}".rstrip(),
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": USER_AGENT,
        }
        self._client = httpx.Client(timeout=self.settings.request_timeout, transport=transport)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def headers(self, extra: Mapping[str, str] | None = None, has_body: bool = False) -> dict[str, str]:
        """Fixed headers, plus Content-Type when a body is sent, then caller overrides."""
        headers = dict(self._headers)
        if has_body:
            headers["Content-Type"] = "application/json"
        if extra:
            headers.update(extra)
        return headers

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Mapping[str, ParamValue] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Make one GitHub REST API call.

        Args:
            method: GET, PUT, PATCH or DELETE
            path: API path, e.g. "/notifications/threads/1"
            body: JSON-serializable request body (PUT/PATCH only)
            params: Query parameters; None values are left out
            headers: Header overrides for this call

        Returns:
            The decoded JSON body, or {} for 204 No Content.
        """
        method = method.upper()
        if method not in METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")
        if body is not None and method not in ("PUT", "PATCH"):
            raise ValueError(f"{method} requests do not take a body")

        url = build_url(path, params, base_url=self.base_url)
        content = json.dumps(body).encode() if body is not None else None
        resp = self._client.request(
            method,
            url,
            content=content,
            headers=self.headers(headers, has_body=content is not None),
        )
        return handle_response(resp)

    def get(self, path, params=None, headers=None):
        return self.request("GET", path, params=params, headers=headers)

    def put(self, path, body=None, params=None, headers=None):
        return self.request("PUT", path, body=body, params=params, headers=headers)

    def patch(self, path, body=None, params=None, headers=None):
        return self.request("PATCH", path, body=body, params=params, headers=headers)

    def delete(self, path, params=None, headers=None):
        return self.request("DELETE", path, params=params, headers=headers)

    def close(self):
        self._client.close()
