"""
Stdio tool server exposing the catalog operations.

Each tool call opens its own API client, runs one operation and returns
text. Failures come back as an ``Error: ...`` message, never as a raised
exception.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Optional

from fastmcp import FastMCP

from ss_activewear.config.settings import Settings, get_settings
from ss_activewear.handlers.catalog_handlers import CatalogOperations
from ss_activewear.services.catalog_client import SSActivewearClient
from ss_activewear.utils.errors import ErrorHandler
from ss_activewear.utils.logger import LogContext, get_logger, setup_logging

logger = get_logger(__name__)

mcp = FastMCP("ss-activewear")


def log_configuration(settings: Settings) -> list[str]:
    """Report configuration at startup without exposing secrets.

    Missing credentials are logged, not raised: the first API call fails
    with a MissingCredentialsError instead.
    """
    missing = settings.missing_credentials()
    if missing:
        logger.error(
            "Missing required environment variables",
            missing=", ".join(missing),
            hint="Please check your .env file or MCP configuration.",
        )
    logger.info(
        "S&S Activewear MCP configuration",
        account_number="set" if settings.account_number else "missing",
        api_key="set" if settings.api_key else "missing",
        region=settings.region,
        debug="enabled" if settings.debug else "disabled",
    )
    return missing


async def run_operation(
    operation: Callable[[CatalogOperations], Awaitable[str]],
    settings: Optional[Settings] = None,
    tool: Optional[str] = None,
) -> str:
    """Run one operation with a fresh client, converting failures to text.

    Log lines emitted during the call carry the ``tool`` name.
    """
    settings = settings or get_settings()
    with LogContext(tool=tool):
        try:
            async with SSActivewearClient(settings) as client:
                return await operation(CatalogOperations(client, settings))
        except Exception as e:
            logger.error(
                "Tool call failed",
                error=str(e),
                category=ErrorHandler.categorize_error(e),
            )
            return ErrorHandler.format_error(e)


# =============================================================================
# Tools
# =============================================================================

async def search_products(
    query: str,
    category: Optional[str] = None,
    brand: Optional[str] = None,
    limit: int = 20,
) -> str:
    """Search S&S Activewear products by SKU, GTIN, style number, brand, or keyword."""
    return await run_operation(
        lambda ops: ops.search_products(query, category=category, brand=brand, limit=limit),
        tool="search_products",
    )


async def get_product_details(identifier: str) -> str:
    """Get detailed information about a product by SKU, GTIN, or Style ID, including inventory."""
    return await run_operation(
        lambda ops: ops.get_product_details(identifier), tool="get_product_details"
    )


async def check_inventory(identifiers: list[str], warehouse: Optional[str] = None) -> str:
    """Check real-time inventory for SKUs, GTINs, or Style IDs, optionally for one warehouse."""
    return await run_operation(
        lambda ops: ops.check_inventory(identifiers, warehouse=warehouse), tool="check_inventory"
    )


async def get_pricing(identifiers: list[str], quantity: int = 1) -> str:
    """Get price breaks and the volume unit price for SKUs, GTINs, or Style IDs."""
    return await run_operation(
        lambda ops: ops.get_pricing(identifiers, quantity=quantity), tool="get_pricing"
    )


async def download_product_data(format: str = "csv", includeInventory: bool = True) -> str:
    """Download product catalog data as csv, xml, or json."""
    return await run_operation(
        lambda ops: ops.download_product_data(format=format, include_inventory=includeInventory),
        tool="download_product_data",
    )


TOOLS: dict[str, Callable[..., Awaitable[str]]] = {
    "search_products": search_products,
    "get_product_details": get_product_details,
    "check_inventory": check_inventory,
    "get_pricing": get_pricing,
    "download_product_data": download_product_data,
}

for _name, _fn in TOOLS.items():
    mcp.tool(name=_name)(_fn)


def run(settings: Optional[Settings] = None) -> None:
    """Configure logging, report configuration, and serve over stdio."""
    settings = settings or get_settings()
    setup_logging(
        level="DEBUG" if settings.debug else settings.log_level,
        json_format=settings.log_json,
    )
    log_configuration(settings)
    logger.info("S&S Activewear MCP server is running")
    mcp.run()


__all__ = ["mcp", "run", "run_operation", "log_configuration", "TOOLS"]
