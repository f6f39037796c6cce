"""HTTP transport for the monitoring API.

:class:`ApiClient` is the capability the resource clients in
:mod:`cli.rest` are built on: it exposes ``get``, ``post`` and
``delete`` against a base URL and owns authentication headers.  Every
verb returns the :class:`httpx.Response` after ``raise_for_status()``,
so :class:`httpx.HTTPStatusError` and :class:`httpx.RequestError` reach
the caller untranslated.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from construct_engine.config import Settings

logger = logging.getLogger(__name__)

USER_AGENT = "checkplane-cli"


class ApiClient:
    """Thin synchronous wrapper around :class:`httpx.Client`.

    Parameters
    ----------
    base_url:
        Root URL of the API (e.g. ``https://api.checklyhq.com``).
    api_key:
        Bearer token sent on every request.  Omitted when ``None``.
    account_id:
        Account the requests act on, sent as ``X-Checkly-Account``.
    timeout:
        Per-request timeout in seconds.
    transport:
        Optional transport override, used by tests to inject
        :class:`httpx.MockTransport`.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str | None = None,
        account_id: str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")

        headers: dict[str, str] = {
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        if account_id:
            headers["X-Checkly-Account"] = account_id

        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=httpx.Timeout(timeout),
            headers=headers,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> ApiClient:
        """Build a client from loaded :class:`~construct_engine.config.Settings`."""
        api_key = settings.api_key.get_secret_value() if settings.api_key else None
        return cls(
            settings.api_url,
            api_key=api_key,
            account_id=settings.account_id,
            timeout=settings.request_timeout,
            **kwargs,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    # -- Verbs ---------------------------------------------------------------

    def get(self, path: str) -> httpx.Response:
        return self._send("GET", path)

    def post(self, path: str, body: Any = None) -> httpx.Response:
        return self._send("POST", path, body)

    def delete(self, path: str) -> httpx.Response:
        return self._send("DELETE", path)

    # -- Lifecycle -----------------------------------------------------------

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._client.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- Internal helpers ----------------------------------------------------

    def _send(self, method: str, path: str, body: Any = None) -> httpx.Response:
        logger.debug("%s %s%s", method, self._base_url, path)
        response = self._client.request(method, path, json=body)
        logger.debug("%s %s -> %d", method, path, response.status_code)
        response.raise_for_status()
        return response
