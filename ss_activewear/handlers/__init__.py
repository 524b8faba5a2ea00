"""Operation handlers behind the caller-facing catalog tools."""

from ss_activewear.handlers.catalog_handlers import (
    CatalogOperations,
    clean_identifiers,
    unit_price_for,
    with_context,
)

__all__ = [
    "CatalogOperations",
    "clean_identifiers",
    "unit_price_for",
    "with_context",
]
