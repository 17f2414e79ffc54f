"""
aiohttp transport for the Discord REST API.

``RestClient`` exposes the two verbs the thread manager needs. It decodes JSON
responses and raises :class:`aiohttp.ClientResponseError` for non-2xx replies.
Nothing here retries or waits out rate limits; failures reach the caller as-is.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping
from urllib.parse import quote

import aiohttp

from .config import core, rest

logger = logging.getLogger(__name__)


def _encode_query(query: Mapping[str, Any] | None) -> Dict[str, str]:
    """Drop ``None`` values and stringify the rest for the query string."""

    params: Dict[str, str] = {}
    for key, value in (query or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        else:
            params[key] = str(value)
    return params


class RestClient:
    """Minimal authenticated client for ``/api/v10`` style endpoints."""

    def __init__(
        self,
        token: str | None = None,
        *,
        api_base: str | None = None,
        session: aiohttp.ClientSession | None = None,
        timeout: float | None = None,
    ) -> None:
        self.token = token if token is not None else core.DISCORD_API_TOKEN
        self.api_base = (api_base or rest.API_BASE).rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout or rest.TIMEOUT_SECONDS)
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "RestClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self._session

    def _headers(self, reason: str | None) -> Dict[str, str]:
        headers = {"User-Agent": rest.USER_AGENT}
        if self.token:
            headers["Authorization"] = f"Bot {self.token}"
        if reason:
            headers["X-Audit-Log-Reason"] = quote(reason)
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        query: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | None = None,
        reason: str | None = None,
    ) -> Any:
        """Issue one request and return the decoded JSON payload."""

        url = f"{self.api_base}{path}"
        params = _encode_query(query)
        session = self._get_session()
        logger.debug("%s %s params=%s", method, path, params)

        async with session.request(
            method,
            url,
            params=params or None,
            json=dict(body) if body is not None else None,
            headers=self._headers(reason),
        ) as resp:
            if resp.status >= 400:
                detail = await resp.text()
                logger.warning("%s %s failed with %s: %s", method, path, resp.status, detail)
            resp.raise_for_status()
            if resp.status == 204:
                return None
            return await resp.json()

    async def get(self, path: str, *, query: Mapping[str, Any] | None = None) -> Any:
        return await self.request("GET", path, query=query)

    async def post(
        self,
        path: str,
        *,
        body: Mapping[str, Any] | None = None,
        reason: str | None = None,
    ) -> Any:
        return await self.request("POST", path, body=body, reason=reason)

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None


__all__ = ["RestClient"]
