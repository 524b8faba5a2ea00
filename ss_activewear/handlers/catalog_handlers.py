"""
Catalog operation handlers.

Thin orchestrators behind the five caller-facing tools: validate arguments,
fetch through the search engine or the client, normalize, reshape, and
return a text payload. Any CatalogError is re-raised with the operation's
context ("Failed to get pricing: ...").
"""

from __future__ import annotations

from functools import wraps
from typing import Any, Optional, Sequence

from ss_activewear.config.settings import Settings
from ss_activewear.models.schemas import (
    ExportFormat,
    InventoryEntry,
    PriceBreaks,
    PricingEntry,
    ProductRecord,
    SearchCriteria,
)
from ss_activewear.services.catalog_client import identifier_path
from ss_activewear.services.normalizer import normalize
from ss_activewear.services.search_service import Fetcher, SearchService
from ss_activewear.utils.errors import (
    CatalogError,
    InvalidArgumentError,
    NotFoundError,
    OperationError,
)
from ss_activewear.utils.formatters import to_csv, to_json_text
from ss_activewear.utils.logger import get_logger

logger = get_logger(__name__)

# Quantity at which the dozen price applies.
DOZEN_QTY = 12


def with_context(context: str):
    """Re-raise CatalogErrors from the wrapped coroutine as OperationError."""
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except OperationError:
                raise
            except CatalogError as e:
                raise OperationError(context, e) from e
        return wrapper
    return decorator


def clean_identifiers(identifiers: Any) -> list[str]:
    """Accept a list of identifiers or a comma-separated string; drop blanks."""
    if identifiers is None:
        return []
    if isinstance(identifiers, str):
        identifiers = identifiers.split(",")
    return [str(i).strip() for i in identifiers if str(i).strip()]


def _price(value: Any) -> Optional[float]:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _qty(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def unit_price_for(record: ProductRecord, prices: PriceBreaks, quantity: int) -> Optional[float]:
    """
    Volume price for ``quantity`` units.

    Case price once the order reaches the record's ``caseQty``, dozen price
    from 12 units, piece price otherwise; each falls back to the next
    smaller break when missing.
    """
    case_qty = _qty(record.get("caseQty"))
    candidates = []
    if case_qty and quantity >= case_qty:
        candidates.append(prices.case_price)
    if quantity >= DOZEN_QTY:
        candidates.append(prices.dozen_price)
    candidates.extend([prices.piece_price, prices.customer_price])
    return next((p for p in candidates if p is not None), None)


class CatalogOperations:
    """The caller-facing catalog operations."""

    def __init__(self, client: Fetcher, settings: Settings):
        self.client = client
        self.settings = settings
        self.search_service = SearchService(client)

    # =========================================================================
    # Search
    # =========================================================================

    @with_context("Failed to search products")
    async def search_products(
        self,
        query: Optional[str],
        category: Optional[str] = None,
        brand: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> str:
        """Search products by SKU, GTIN, style, or keyword."""
        if query is None:
            raise InvalidArgumentError("A search query is required")
        if limit is None:
            limit = self.settings.default_search_limit
        if limit < 0:
            raise InvalidArgumentError("limit must be zero or greater")

        criteria = SearchCriteria(
            query=str(query),
            brand=brand,
            category=category,
            limit=limit,
        )
        outcome = await self.search_service.search(criteria)

        return to_json_text({
            "totalResults": outcome.total,
            "searchStrategy": outcome.strategy_used.value,
            "products": outcome.records,
        })

    # =========================================================================
    # Details
    # =========================================================================

    @with_context("Failed to get product details")
    async def get_product_details(self, identifier: Optional[str]) -> str:
        """Full record(s) for one SKU, GTIN, or style id."""
        identifier = (identifier or "").strip()
        if not identifier:
            raise InvalidArgumentError("An identifier (SKU, GTIN, or Style ID) is required")

        records = normalize(await self.client.fetch(identifier_path("products", identifier)))
        if not records:
            raise NotFoundError(f"Product not found: {identifier}")

        if len(records) == 1:
            return to_json_text(records[0])
        return to_json_text({
            "identifier": identifier,
            "totalResults": len(records),
            "products": records,
        })

    # =========================================================================
    # Inventory
    # =========================================================================

    @with_context("Failed to check inventory")
    async def check_inventory(
        self,
        identifiers: Sequence[str] | str | None,
        warehouse: Optional[str] = None,
    ) -> str:
        """Real-time warehouse quantities for the given identifiers."""
        ids = clean_identifiers(identifiers)
        if not ids:
            raise InvalidArgumentError("At least one identifier is required")

        warehouse = (warehouse or "").strip() or None
        params = {"warehouses": warehouse} if warehouse else None
        records = normalize(await self.client.fetch(identifier_path("inventory", ids), params))

        entries = []
        for record in records:
            if not isinstance(record, dict):
                continue
            warehouses = [w for w in record.get("warehouses") or [] if isinstance(w, dict)]
            if warehouse:
                warehouses = [
                    w for w in warehouses
                    if str(w.get("warehouseAbbr") or "").upper() == warehouse.upper()
                ]
            entries.append(InventoryEntry(
                sku=record.get("sku"),
                gtin=record.get("gtin"),
                style_id=record.get("styleID"),
                warehouses=warehouses,
                total_qty=sum(_qty(w.get("qty")) for w in warehouses),
            ).to_dict())

        return to_json_text({"totalResults": len(entries), "inventory": entries})

    # =========================================================================
    # Pricing
    # =========================================================================

    @with_context("Failed to get pricing")
    async def get_pricing(
        self,
        identifiers: Sequence[str] | str | None,
        quantity: int = 1,
    ) -> str:
        """Price breaks and the applicable unit price for ``quantity`` units."""
        ids = clean_identifiers(identifiers)
        if not ids:
            raise InvalidArgumentError("At least one identifier is required")
        if quantity is None or quantity < 1:
            raise InvalidArgumentError("quantity must be at least 1")

        records = normalize(await self.client.fetch(identifier_path("products", ids)))

        entries = []
        for record in records:
            if not isinstance(record, dict):
                continue
            prices = PriceBreaks(
                piece_price=_price(record.get("piecePrice")),
                dozen_price=_price(record.get("dozenPrice")),
                case_price=_price(record.get("casePrice")),
                customer_price=_price(record.get("customerPrice")),
                map_price=_price(record.get("mapPrice")),
                sale_price=_price(record.get("salePrice")),
            )
            unit = unit_price_for(record, prices, quantity)
            entries.append(PricingEntry(
                sku=record.get("sku"),
                brand_name=record.get("brandName"),
                style_name=record.get("styleName"),
                color_name=record.get("colorName"),
                size_name=record.get("sizeName"),
                quantity=quantity,
                pricing=prices,
                unit_price=unit,
                extended_price=round(unit * quantity, 2) if unit is not None else None,
            ).to_dict())

        return to_json_text(entries)

    # =========================================================================
    # Export
    # =========================================================================

    @with_context("Failed to download product data")
    async def download_product_data(
        self,
        format: str = "csv",
        include_inventory: bool = True,
    ) -> str:
        """Catalog export as CSV, JSON, or the API's own XML."""
        try:
            export_format = ExportFormat(str(format or "csv").lower())
        except ValueError:
            raise InvalidArgumentError(
                f"Unsupported format '{format}'. Use one of: csv, xml, json"
            )

        if export_format is ExportFormat.XML:
            return await self.client.fetch("products/", {"mediatype": "xml"})

        records = normalize(await self.client.fetch("products/"))
        if not include_inventory:
            records = [
                {k: v for k, v in r.items() if k != "warehouses"}
                for r in records
                if isinstance(r, dict)
            ]
        logger.info("Exporting catalog", format=export_format.value, records=len(records))

        if export_format is ExportFormat.CSV:
            return to_csv(records, self.settings.preferred_warehouse_codes)
        return to_json_text(records)
