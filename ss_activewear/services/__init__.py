"""
Services package for the S&S Activewear catalog bridge.

Services:
    - SSActivewearClient: Authenticated access to the S&S V2 REST API
    - SearchService: Tiered product search with client-side filtering

Helpers:
    - classify: Identifier classification of search strings
    - normalize: Raw payload to list-of-records coercion
"""

from ss_activewear.services.catalog_client import SSActivewearClient, identifier_path
from ss_activewear.services.identifiers import classify
from ss_activewear.services.normalizer import normalize
from ss_activewear.services.search_service import (
    SEARCH_POLICY,
    PolicyAction,
    SearchService,
    TierResult,
    TierStatus,
)

__all__ = [
    # Client
    "SSActivewearClient",
    "identifier_path",
    # Search
    "SearchService",
    "SEARCH_POLICY",
    "PolicyAction",
    "TierResult",
    "TierStatus",
    # Helpers
    "classify",
    "normalize",
]
