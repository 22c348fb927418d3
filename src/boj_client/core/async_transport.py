"""Asynchronous HTTP transport."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from ..config import BojClientConfig
from .errors import BojTransportError
from .transport import HttpRequest, HttpResponse, to_http_response
from .transport_shared import build_default_headers, build_default_timeout

logger = logging.getLogger("boj_client")


class AsyncTransport(Protocol):
    async def send(self, request: HttpRequest) -> HttpResponse: ...
    async def aclose(self) -> None: ...


class AsyncHttpxTransport:
    """Default async transport backed by ``httpx.AsyncClient``."""

    def __init__(
        self,
        config: BojClientConfig,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers=build_default_headers(config),
            timeout=build_default_timeout(config),
        )
        self._closed = False

    async def send(self, request: HttpRequest) -> HttpResponse:
        if self._closed:
            raise BojTransportError("transport is already closed")
        logger.debug("request start method=%s url=%s", request.method, request.url)
        try:
            response = await self._client.request(
                request.method,
                request.url,
                headers=dict(request.headers),
            )
        except httpx.HTTPError as exc:
            logger.debug("request network error url=%s error=%s", request.url, exc.__class__.__name__)
            raise BojTransportError(f"network/transport error: {exc}") from exc
        logger.debug(
            "response received url=%s http_status=%s content_type=%s bytes=%s",
            request.url,
            response.status_code,
            response.headers.get("content-type"),
            len(response.content),
        )
        return to_http_response(response)

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            await self._client.aclose()


__all__ = [
    "AsyncTransport",
    "AsyncHttpxTransport",
]
