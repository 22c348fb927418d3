from __future__ import annotations

import gzip

import httpx
import pytest

from boj_client.config import BojClientConfig
from boj_client.core.async_transport import AsyncHttpxTransport
from boj_client.core.errors import BojTransportError
from boj_client.core.transport import HttpRequest
from boj_client.core.transport_shared import normalize_response_body


def _transport(handler) -> tuple[AsyncHttpxTransport, httpx.AsyncClient]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return AsyncHttpxTransport(BojClientConfig(), client=client), client


@pytest.mark.asyncio
async def test_async_transport_sends_request():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, headers={"Content-Type": "text/csv"}, content=b"STATUS,200\r\n")

    transport, client = _transport(handler)
    response = await transport.send(
        HttpRequest(url="https://example.test/api/v1/getMetadata?db=FM08", headers={"User-Agent": "t/1"})
    )

    assert response.status_code == 200
    assert response.headers["content-type"] == "text/csv"
    assert response.body == b"STATUS,200\r\n"
    assert seen[0].headers["user-agent"] == "t/1"
    await client.aclose()


@pytest.mark.asyncio
async def test_async_transport_body_is_plain_after_gzip():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            headers={"Content-Encoding": "gzip"},
            content=gzip.compress(b'{"STATUS":200}'),
        )

    transport, client = _transport(handler)
    response = await transport.send(HttpRequest(url="https://example.test/x"))
    assert normalize_response_body(response.headers, response.body) == b'{"STATUS":200}'
    await client.aclose()


@pytest.mark.asyncio
async def test_async_transport_maps_network_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    transport, client = _transport(handler)
    with pytest.raises(BojTransportError, match="network/transport error"):
        await transport.send(HttpRequest(url="https://example.test/x"))
    await client.aclose()


@pytest.mark.asyncio
async def test_async_transport_close_semantics():
    transport, client = _transport(lambda request: httpx.Response(200))
    await transport.aclose()
    await transport.aclose()
    assert client.is_closed is False
    with pytest.raises(BojTransportError, match="closed"):
        await transport.send(HttpRequest(url="https://example.test/x"))
    await client.aclose()

    owned = AsyncHttpxTransport(BojClientConfig())
    await owned.aclose()
    assert owned._client.is_closed is True
