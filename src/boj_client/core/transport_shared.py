"""Shared helpers for sync/async transport implementations."""

from __future__ import annotations

import gzip
import zlib
from collections.abc import Iterable, Mapping
from urllib.parse import quote

import httpx

from ..config import BojClientConfig
from .errors import BojApiError, BojDecodeError
from .models import ResponseMeta

_GZIP_MAGIC = b"\x1f\x8b"


def build_default_headers(config: BojClientConfig) -> Mapping[str, str]:
    return {
        "Accept-Encoding": "gzip",
        "User-Agent": config.user_agent,
    }


def build_default_timeout(config: BojClientConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=config.transport.timeout_read_seconds,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


def build_url(base_url: str, endpoint: str, params: Iterable[tuple[str, str]]) -> str:
    """Join base URL, endpoint and percent-encoded params in the given order.

    Only RFC 3986 unreserved characters are left unescaped, so ``,`` in a
    code list becomes ``%2C``.
    """

    url = base_url.rstrip("/") + "/" + endpoint.lstrip("/")
    query = "&".join(f"{quote(key, safe='')}={quote(value, safe='')}" for key, value in params)
    if not query:
        return url
    return f"{url}?{query}"


def header_value(headers: Mapping[str, str], name: str) -> str | None:
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def normalize_response_body(headers: Mapping[str, str], body: bytes) -> bytes:
    """Gunzip a body that is still compressed.

    httpx already decodes ``Content-Encoding: gzip`` responses, so the body is
    only touched when it still starts with the gzip magic bytes.
    """

    encoding = header_value(headers, "content-encoding")
    if encoding is None or "gzip" not in encoding.lower():
        return body
    if not body.startswith(_GZIP_MAGIC):
        return body
    try:
        return gzip.decompress(body)
    except (OSError, EOFError, zlib.error) as exc:
        raise BojDecodeError(f"failed to decompress gzip response: {exc}") from exc


def ensure_success_status(meta: ResponseMeta, *, http_status: int | None = None) -> None:
    if meta.is_success:
        return
    raise BojApiError(
        meta.status,
        meta.message_id,
        meta.message,
        http_status=http_status,
    )


__all__ = [
    "build_default_headers",
    "build_default_timeout",
    "build_url",
    "header_value",
    "normalize_response_body",
    "ensure_success_status",
]
