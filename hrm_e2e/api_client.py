"""
Thin HTTP client for auxiliary API checks against the application.

Wraps a ``requests.Session`` with base-URL composition, per-request
logging, and a status assertion helper.  It deliberately does not retry:
a failing request surfaces straight to the test.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlencode

import requests

from hrm_e2e.errors import UnexpectedStatusError

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class ApiClient:
    """Pass-through client for GET/POST/PUT/DELETE requests."""

    def __init__(
        self,
        base_url: str,
        *,
        session: requests.Session | None = None,
        timeout_s: float = 30,
    ):
        """
        Initialize ApiClient.

        Args:
            base_url: Root URL that relative endpoints are joined onto.
            session: Session to reuse. A new one is created when omitted.
            timeout_s: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout_s = timeout_s

    def build_url(self, endpoint: str, params: dict[str, Any] | None = None) -> str:
        """Compose base URL, endpoint and encoded query parameters."""
        if endpoint.startswith(("http://", "https://")):
            url = endpoint
        else:
            url = f"{self.base_url}/{endpoint.lstrip('/')}"
        if params:
            url = f"{url}?{urlencode(params)}"
        return url

    def _send(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        logger.info("API %s: %s", method, url)
        kwargs.setdefault("allow_redirects", False)
        try:
            response = self.session.request(method, url, timeout=self.timeout_s, **kwargs)
        except requests.RequestException:
            logger.error("API %s failed: %s", method, url)
            raise
        logger.info("API Response Status: %s", response.status_code)
        return response

    def get(
        self,
        endpoint: str,
        *,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        allow_redirects: bool = False,
    ) -> requests.Response:
        return self._send(
            "GET",
            self.build_url(endpoint, params),
            headers=headers,
            allow_redirects=allow_redirects,
        )

    def post(
        self,
        endpoint: str,
        data: Any = None,
        *,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        return self._send(
            "POST",
            self.build_url(endpoint),
            json=data,
            headers={**JSON_HEADERS, **(headers or {})},
        )

    def put(
        self,
        endpoint: str,
        data: Any = None,
        *,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        return self._send(
            "PUT",
            self.build_url(endpoint),
            json=data,
            headers={**JSON_HEADERS, **(headers or {})},
        )

    def delete(
        self,
        endpoint: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        return self._send("DELETE", self.build_url(endpoint), headers=headers)

    def set_auth_token(self, token: str) -> None:
        """
        Placeholder for bearer-token auth.

        The demo application authenticates through a browser session cookie,
        so the token is not attached to requests.
        """
        logger.info("Auth token set for API client")

    @staticmethod
    def get_json(response: requests.Response) -> Any:
        """Parse the response body as JSON, logging parse failures."""
        try:
            return response.json()
        except ValueError:
            logger.error("Failed to parse response as JSON (status %s)", response.status_code)
            raise

    @staticmethod
    def verify_status(response: requests.Response, expected_status: int) -> None:
        """
        Assert the response status code.

        Raises:
            UnexpectedStatusError: Status differs; the message includes the body.
        """
        if response.status_code != expected_status:
            raise UnexpectedStatusError(
                expected_status, response.status_code, response.text, response.url or ""
            )

    def close(self) -> None:
        self.session.close()
