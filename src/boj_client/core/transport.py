"""Synchronous HTTP transport."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from ..config import BojClientConfig
from .errors import BojTransportError
from .transport_shared import build_default_headers, build_default_timeout

logger = logging.getLogger("boj_client")


@dataclass(slots=True, frozen=True)
class HttpRequest:
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    method: str = "GET"


@dataclass(slots=True, frozen=True)
class HttpResponse:
    """Raw response. Header names are lower-cased."""

    status_code: int
    headers: Mapping[str, str]
    body: bytes


class SyncTransport(Protocol):
    def send(self, request: HttpRequest) -> HttpResponse: ...
    def close(self) -> None: ...


def to_http_response(response: httpx.Response) -> HttpResponse:
    return HttpResponse(
        status_code=response.status_code,
        headers={key.lower(): value for key, value in response.headers.items()},
        body=response.content,
    )


class HttpxTransport:
    """Default transport backed by ``httpx.Client``."""

    def __init__(
        self,
        config: BojClientConfig,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(
            headers=build_default_headers(config),
            timeout=build_default_timeout(config),
        )
        self._closed = False

    def send(self, request: HttpRequest) -> HttpResponse:
        if self._closed:
            raise BojTransportError("transport is already closed")
        logger.debug("request start method=%s url=%s", request.method, request.url)
        try:
            response = self._client.request(
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

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            self._client.close()


__all__ = [
    "HttpRequest",
    "HttpResponse",
    "SyncTransport",
    "HttpxTransport",
    "to_http_response",
]
