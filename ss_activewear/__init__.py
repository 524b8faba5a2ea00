"""
S&S Activewear catalog bridge.

Exposes the S&S Activewear product, inventory and pricing API as a small set
of tool operations, with identifier-aware search and flat CSV export.
"""

__version__ = "1.0.0"
__author__ = "S&S Activewear Integrations"

# Lazy imports to avoid circular dependencies
def get_operations():
    """Get the CatalogOperations class (lazy import)."""
    from ss_activewear.handlers.catalog_handlers import CatalogOperations
    return CatalogOperations

__all__ = ["get_operations", "__version__"]
