"""
httpx-backed transports.

Both flavours inject the API key header once at construction and apply a
single per-request timeout. Neither retries: an ``httpx.HTTPError`` becomes a
``TransportError`` and propagates.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ..errors import InvalidCredentialError, TransportError
from .base import AsyncTransport, Transport, TransportResponse

LOGGER = logging.getLogger("sandworm")

BASE_URL = "https://api.dune.com/api"
API_KEY_HEADER = "X-Dune-Api-Key"
DEFAULT_TIMEOUT_SECONDS = 30.0


def build_auth_headers(api_key: str) -> Dict[str, str]:
    if not isinstance(api_key, str) or not api_key.strip():
        raise InvalidCredentialError()
    try:
        api_key.encode("ascii")
    except UnicodeEncodeError as exc:
        raise InvalidCredentialError("Dune API key contains non-ASCII characters") from exc
    if any(ch in api_key for ch in "\r\n"):
        raise InvalidCredentialError("Dune API key contains line breaks")
    return {API_KEY_HEADER: api_key, "Accept": "application/json"}


class HttpTransport(Transport):
    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        headers = build_auth_headers(api_key)
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self._client = httpx.Client(
            base_url=base_url,
            headers=headers,
            timeout=timeout_seconds,
            transport=transport,
        )

    def send(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> TransportResponse:
        if self._client.is_closed:
            raise TransportError(f"{method} {path} failed: client has been closed")
        try:
            response = self._client.request(method, path, json=json, params=params)
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc
        LOGGER.debug("%s %s -> %s", method, path, response.status_code)
        return TransportResponse(response.status_code, response.text)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class AsyncHttpTransport(AsyncTransport):
    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = build_auth_headers(api_key)
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout_seconds,
            transport=transport,
        )

    async def send(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> TransportResponse:
        if self._client.is_closed:
            raise TransportError(f"{method} {path} failed: client has been closed")
        try:
            response = await self._client.request(method, path, json=json, params=params)
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc
        LOGGER.debug("%s %s -> %s", method, path, response.status_code)
        return TransportResponse(response.status_code, response.text)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
