import base64

import httpx
import pytest

from ss_activewear.services.catalog_client import SSActivewearClient, identifier_path
from ss_activewear.utils.errors import (
    ForbiddenError,
    InvalidResponseShapeError,
    MissingCredentialsError,
    NetworkUnreachableError,
    NotFoundError,
    UnauthorizedError,
    UpstreamError,
)


def test_identifier_path():
    assert identifier_path("products", "B00760004") == "products/B00760004"
    assert identifier_path("inventory", ["B00760004", " B00760005 ", ""]) == "inventory/B00760004,B00760005"
    assert identifier_path("/products/", "A/B") == "products/A%2FB"


@pytest.mark.asyncio
async def test_fetch_builds_authenticated_request(transport_client):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, json=[{"sku": "B00760004"}])

    async with transport_client(handler) as client:
        data = await client.fetch("products/B00760004")

    request = seen["request"]
    expected_auth = base64.b64encode(b"12345:test-api-key").decode()
    assert data == [{"sku": "B00760004"}]
    assert str(request.url) == "https://api.ssactivewear.com/V2/products/B00760004?mediatype=json"
    assert request.headers["Authorization"] == f"Basic {expected_auth}"
    assert request.headers["Accept"] == "application/json"
    assert request.headers["User-Agent"] == "SS-Activewear-MCP/1.0"


@pytest.mark.asyncio
async def test_fetch_uses_canadian_endpoint(transport_client, settings_factory):
    seen = {}

    def handler(request):
        seen["url"] = request.url
        return httpx.Response(200, json=[])

    async with transport_client(handler, settings=settings_factory(SS_REGION="CA")) as client:
        await client.fetch("products/", {"style": "2000", "brand": None})

    assert seen["url"].host == "api-ca.ssactivewear.com"
    assert seen["url"].params["style"] == "2000"
    assert "brand" not in seen["url"].params


@pytest.mark.asyncio
async def test_fetch_returns_text_for_xml(transport_client):
    def handler(request):
        assert request.url.params["mediatype"] == "xml"
        return httpx.Response(200, text="<products/>")

    async with transport_client(handler) as client:
        assert await client.fetch("products/", {"mediatype": "xml"}) == "<products/>"


@pytest.mark.asyncio
async def test_empty_body_is_none(transport_client):
    async with transport_client(lambda request: httpx.Response(200, content=b"")) as client:
        assert await client.fetch("products/") is None


@pytest.mark.asyncio
async def test_non_json_body_is_invalid_shape(transport_client):
    async with transport_client(lambda request: httpx.Response(200, text="<html>")) as client:
        with pytest.raises(InvalidResponseShapeError):
            await client.fetch("products/")


@pytest.mark.asyncio
@pytest.mark.parametrize("status,error_cls", [
    (401, UnauthorizedError),
    (403, ForbiddenError),
    (404, NotFoundError),
])
async def test_status_mapping(transport_client, status, error_cls):
    async with transport_client(lambda request: httpx.Response(status, json={})) as client:
        with pytest.raises(error_cls) as exc_info:
            await client.fetch("products/INVALID123")

    assert str(status) in str(exc_info.value)


@pytest.mark.asyncio
async def test_server_error_carries_status_and_message(transport_client):
    def handler(request):
        return httpx.Response(500, json={"message": "Database unavailable"})

    async with transport_client(handler) as client:
        with pytest.raises(UpstreamError) as exc_info:
            await client.fetch("products/")

    assert exc_info.value.status == 500
    assert str(exc_info.value) == "S&S API Error: 500 - Database unavailable"


@pytest.mark.asyncio
async def test_error_message_from_errors_array(transport_client):
    def handler(request):
        return httpx.Response(404, json={"errors": [{"message": "SKU not found"}]})

    async with transport_client(handler) as client:
        with pytest.raises(NotFoundError, match="SKU not found"):
            await client.fetch("products/INVALID123")


@pytest.mark.asyncio
async def test_transport_error_is_network_unreachable(transport_client):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with transport_client(handler) as client:
        with pytest.raises(NetworkUnreachableError):
            await client.fetch("products/")


@pytest.mark.asyncio
async def test_timeout_is_network_unreachable(transport_client):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    async with transport_client(handler) as client:
        with pytest.raises(NetworkUnreachableError, match="30 seconds"):
            await client.fetch("products/")


@pytest.mark.asyncio
async def test_missing_credentials_fail_on_first_call(settings_factory):
    calls = []
    settings = settings_factory(SS_ACCOUNT_NUMBER="", SS_API_KEY="")
    client = SSActivewearClient(settings, transport=httpx.MockTransport(lambda r: calls.append(r)))

    with pytest.raises(MissingCredentialsError) as exc_info:
        await client.fetch("products/")

    assert exc_info.value.missing == ["SS_ACCOUNT_NUMBER", "SS_API_KEY"]
    assert calls == []
    await client.disconnect()
