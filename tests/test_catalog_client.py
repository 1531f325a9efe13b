"""Tests for CatalogClient using httpx.MockTransport."""

import json
from datetime import datetime, timezone

import httpx
import pytest

from modrate.shared.adapters.catalog_client import CatalogClient
from modrate.shared.core.exceptions import TransportError
from modrate.shared.models.enums import CatalogSource

URL = "https://registry.test/c/lethal-company/api/v1/package/"
NOW = datetime(2025, 3, 22, 12, 0, 0, tzinfo=timezone.utc)


def client_for(handler) -> CatalogClient:
    return CatalogClient(url=URL, transport=httpx.MockTransport(handler), clock=lambda: NOW)


@pytest.mark.asyncio
async def test_fetch_returns_payload_and_records():
    body = json.dumps([{"name": "MoreSuits"}, {"name": "LateCompany"}]).encode()
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, content=body)

    snapshot = await client_for(handler).fetch()

    assert len(requests) == 1
    assert requests[0].method == "GET"
    assert str(requests[0].url) == URL
    assert snapshot.payload == body
    assert snapshot.records == [{"name": "MoreSuits"}, {"name": "LateCompany"}]
    assert snapshot.fetched_at == NOW
    assert snapshot.source is CatalogSource.REMOTE
    assert snapshot.size_bytes == len(body)


@pytest.mark.asyncio
async def test_error_status_raises_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, content=b"maintenance")

    with pytest.raises(TransportError) as exc_info:
        await client_for(handler).fetch()

    assert exc_info.value.details["status_code"] == 503


@pytest.mark.asyncio
async def test_network_failure_raises_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError) as exc_info:
        await client_for(handler).fetch()

    assert exc_info.value.error_code == "TRANSPORT_ERROR"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [b"<html>not json</html>", b'{"results": []}', b"\xff\xfe"],
)
async def test_body_that_is_not_a_json_list_raises_transport_error(body):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=body)

    with pytest.raises(TransportError):
        await client_for(handler).fetch()


@pytest.mark.asyncio
async def test_redirect_is_followed():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/package/"):
            return httpx.Response(301, headers={"Location": "https://registry.test/v2/"})
        return httpx.Response(200, content=b"[]")

    snapshot = await client_for(handler).fetch()

    assert snapshot.records == []
