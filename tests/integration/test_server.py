"""
Integration tests for the stdio tool functions against an in-memory S&S API.
"""

import json
from unittest.mock import patch

import httpx
import pytest
import structlog
from fastmcp import Client

from ss_activewear import server
from ss_activewear.services.catalog_client import SSActivewearClient


@pytest.fixture
def served(settings_factory, sample_products):
    """Patch settings and the API client used by the tool functions."""
    settings = settings_factory()
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path.endswith("/products/INVALID123"):
            return httpx.Response(404, json={"errors": [{"message": "Not Found"}]})
        if request.url.path.endswith("/products/"):
            return httpx.Response(200, json=sample_products)
        return httpx.Response(200, json=[sample_products[0]])

    def client_factory(s):
        return SSActivewearClient(s, transport=httpx.MockTransport(handler))

    with patch("ss_activewear.server.get_settings", return_value=settings), \
         patch("ss_activewear.server.SSActivewearClient", side_effect=client_factory):
        yield requests


def test_tool_names():
    assert list(server.TOOLS) == [
        "search_products",
        "get_product_details",
        "check_inventory",
        "get_pricing",
        "download_product_data",
    ]


@pytest.mark.asyncio
async def test_tools_registered_on_server():
    async with Client(server.mcp) as client:
        tools = {tool.name: tool for tool in await client.list_tools()}

    assert set(tools) == set(server.TOOLS)
    assert set(tools["download_product_data"].inputSchema["properties"]) == {"format", "includeInventory"}
    assert tools["get_product_details"].inputSchema["required"] == ["identifier"]


@pytest.mark.asyncio
async def test_search_products_tool(served):
    payload = json.loads(await server.search_products("B00760004"))

    assert payload["searchStrategy"] == "direct"
    assert payload["products"][0]["sku"] == "B00760004"


@pytest.mark.asyncio
async def test_style_search_tool(served):
    payload = json.loads(await server.search_products("1717", limit=5))

    assert payload["searchStrategy"] == "style"
    assert served[0].url.params["style"] == "1717"


@pytest.mark.asyncio
async def test_not_found_returns_error_text(served):
    text = await server.get_product_details("INVALID123")

    assert text.startswith("Error: Failed to get product details: S&S API Error: 404 - Not Found")
    assert "Suggestion: Check the SKU, GTIN, or Style ID" in text


@pytest.mark.asyncio
async def test_inventory_and_pricing_tools(served):
    inventory = json.loads(await server.check_inventory(["B00760004"]))
    pricing = json.loads(await server.get_pricing(["B00760004"], quantity=100))

    assert inventory["inventory"][0]["totalQty"] == 1540
    assert pricing[0]["unitPrice"] == 2.75


@pytest.mark.asyncio
async def test_download_tool_defaults_to_csv(served):
    text = await server.download_product_data()

    lines = text.splitlines()
    assert lines[0].startswith("sku,")
    assert len(lines) == 5


@pytest.mark.asyncio
async def test_missing_credentials_returns_error_text(settings_factory):
    settings = settings_factory(SS_ACCOUNT_NUMBER="")

    text = await server.run_operation(lambda ops: ops.get_product_details("B00760004"), settings)

    assert text.startswith("Error: Failed to get product details: S&S Activewear credentials not configured")
    assert "SS_ACCOUNT_NUMBER" in text


@pytest.mark.asyncio
async def test_unexpected_exception_becomes_text(settings_factory):
    async def explode(ops):
        raise RuntimeError("boom")

    assert await server.run_operation(explode, settings_factory()) == "Error: boom"


def test_log_configuration_reports_missing(settings_factory):
    assert server.log_configuration(settings_factory()) == []
    assert server.log_configuration(settings_factory(SS_API_KEY="")) == ["SS_API_KEY"]


@pytest.mark.asyncio
async def test_tool_name_bound_to_log_context(settings_factory):
    seen = {}

    async def inspect(ops):
        seen.update(structlog.contextvars.get_contextvars())
        return "ok"

    assert await server.run_operation(inspect, settings_factory(), tool="get_pricing") == "ok"
    assert seen["tool"] == "get_pricing"
    assert "tool" not in structlog.contextvars.get_contextvars()
