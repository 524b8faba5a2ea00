"""
Demo Runner Script for the S&S Activewear catalog bridge.

Runs a handful of live checks against the S&S API with the credentials in
your environment / .env file:
- Known product lookup: "B00760004"
- Style search: "2000"
- Invalid product: "INVALID123" (expected: not found)
- Multiple SKUs: "B00760004,B00760005"

Usage:
    python demo_runner.py
"""

import asyncio
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from ss_activewear.config.settings import get_settings
from ss_activewear.models.schemas import SearchCriteria
from ss_activewear.services.catalog_client import SSActivewearClient, identifier_path
from ss_activewear.services.normalizer import normalize
from ss_activewear.services.search_service import SearchService
from ss_activewear.utils.errors import CatalogError, NotFoundError
from ss_activewear.utils.logger import get_logger, setup_logging

# Setup logging
setup_logging(level="INFO")
logger = get_logger(__name__)


def describe(product: dict) -> str:
    """One-line product summary."""
    return (
        f"{product.get('sku')} - {product.get('brandName')} "
        f"{product.get('styleName')} {product.get('colorName')}"
    )


async def check_known_product(client: SSActivewearClient) -> dict:
    records = normalize(await client.fetch(identifier_path("products", "B00760004")))
    product = records[0] if records else {}
    stock = ", ".join(
        f"{w.get('warehouseAbbr')}: {w.get('qty')}" for w in product.get("warehouses") or []
    )
    return {"found": len(records), "first": describe(product), "inventory": stock or "n/a"}


async def check_style_search(client: SSActivewearClient) -> dict:
    outcome = await SearchService(client).search(SearchCriteria(query="2000", limit=3))
    return {
        "strategy": outcome.strategy_used.value,
        "found": outcome.total,
        "first": [describe(p) for p in outcome.records],
    }


async def check_invalid_product(client: SSActivewearClient) -> dict:
    try:
        await client.fetch(identifier_path("products", "INVALID123"))
    except NotFoundError as e:
        return {"not_found": True, "message": str(e)}
    return {"not_found": False, "message": "Unexpected success for INVALID123"}


async def check_multiple_products(client: SSActivewearClient) -> dict:
    records = normalize(
        await client.fetch(identifier_path("products", ["B00760004", "B00760005"]))
    )
    return {"found": len(records), "products": [describe(p) for p in records]}


DEMO_CHECKS = [
    ("Known product B00760004", check_known_product),
    ("Style search 2000", check_style_search),
    ("Invalid product INVALID123", check_invalid_product),
    ("Multiple products", check_multiple_products),
]


async def run_demo():
    """
    Run every demo check and print a summary.
    """
    settings = get_settings()

    print("\n" + "=" * 70)
    print("  S&S Activewear API - Demo Runner")
    print("=" * 70)

    missing = settings.missing_credentials()
    if missing:
        print(f"\n  ✗ Missing credentials: {', '.join(missing)}")
        print("    Set SS_ACCOUNT_NUMBER and SS_API_KEY in your .env file.")
        return [{"status": "error", "name": "configuration"}]

    print(f"\n  Region: {settings.region} ({settings.base_url})")

    results = []
    async with SSActivewearClient(settings) as client:
        for i, (name, check) in enumerate(DEMO_CHECKS, 1):
            print(f"\n  [{i}/{len(DEMO_CHECKS)}] {name}")
            start_time = datetime.now()
            try:
                detail = await check(client)
                status = "success"
            except CatalogError as e:
                detail = {"error": str(e)}
                status = "error"
            duration = round((datetime.now() - start_time).total_seconds(), 2)
            results.append({"status": status, "name": name, "duration_seconds": duration})

            marker = "✓" if status == "success" else "✗"
            print(f"    {marker} {status.upper()} ({duration}s)")
            for key, value in detail.items():
                print(f"      {key}: {value}")

    # Print summary
    failed = [r for r in results if r["status"] != "success"]
    print("\n" + "=" * 70)
    print(f"  Checks run: {len(results)}  Failed: {len(failed)}")
    print("=" * 70 + "\n")

    return results


if __name__ == "__main__":
    try:
        results = asyncio.run(run_demo())

        # Exit with error code if any failed
        failed_count = sum(1 for r in results if r["status"] != "success")
        sys.exit(failed_count)

    except KeyboardInterrupt:
        print("\n\n  Demo interrupted by user.")
        sys.exit(1)
    except Exception as e:
        print(f"\n  Fatal error: {e}")
        logger.exception("Demo runner failed")
        sys.exit(1)
