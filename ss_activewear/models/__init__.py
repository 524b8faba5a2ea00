"""Models module for the S&S Activewear catalog bridge."""

from ss_activewear.models.schemas import (
    ExportFormat,
    FlatRow,
    IdentifierClass,
    InventoryEntry,
    PriceBreaks,
    PricingEntry,
    ProductRecord,
    SearchCriteria,
    SearchOutcome,
    SearchStrategy,
)

__all__ = [
    "ExportFormat",
    "FlatRow",
    "IdentifierClass",
    "InventoryEntry",
    "PriceBreaks",
    "PricingEntry",
    "ProductRecord",
    "SearchCriteria",
    "SearchOutcome",
    "SearchStrategy",
]
