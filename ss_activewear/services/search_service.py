"""
Tiered catalog search for S&S Activewear products.

The S&S API has no general free-text search, so a query is resolved through
an ordered list of tiers that degrade from an exact, authoritative lookup to
a best-effort substring filter over the catalog page the API returns.

Tiers:
    - direct: single-identifier lookup for SKU / GTIN / style id queries
    - style: ``style=<query>`` lookup for bare style numbers
    - filtered: full catalog fetch with client-side filtering

Each tier returns a tagged TierResult; what the selector does with it is
decided by SEARCH_POLICY rather than by exception handling.

Example:
    >>> service = SearchService(client)
    >>> outcome = await service.search(SearchCriteria(query="2000", limit=5))
    >>> outcome.strategy_used
    <SearchStrategy.STYLE: 'style'>
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Protocol

from ss_activewear.models.schemas import (
    IdentifierClass,
    ProductRecord,
    SearchCriteria,
    SearchOutcome,
    SearchStrategy,
)
from ss_activewear.services.catalog_client import identifier_path
from ss_activewear.services.identifiers import classify
from ss_activewear.services.normalizer import normalize
from ss_activewear.utils.errors import CatalogError
from ss_activewear.utils.logger import get_logger

logger = get_logger(__name__)

SEARCHABLE_FIELDS = (
    "sku",
    "styleName",
    "brandName",
    "colorName",
    "categoryName",
    "description",
)


class Fetcher(Protocol):
    async def fetch(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        ...


# =============================================================================
# Tier Results and Policy
# =============================================================================

class TierStatus(str, Enum):
    OK = "ok"
    SKIP = "skip"
    FAIL = "fail"


class PolicyAction(str, Enum):
    RETURN = "return"
    CONTINUE = "continue"
    RAISE = "raise"


@dataclass(frozen=True)
class TierResult:
    """Tagged outcome of one search tier."""
    status: TierStatus
    records: list[ProductRecord] = field(default_factory=list)
    error: Optional[CatalogError] = None

    @classmethod
    def ok(cls, records: list[ProductRecord]) -> "TierResult":
        return cls(TierStatus.OK, records=records)

    @classmethod
    def skip(cls) -> "TierResult":
        return cls(TierStatus.SKIP)

    @classmethod
    def fail(cls, error: CatalogError) -> "TierResult":
        return cls(TierStatus.FAIL, error=error)


# Only a direct-tier failure falls through to the next tier.
SEARCH_POLICY: dict[tuple[SearchStrategy, TierStatus], PolicyAction] = {
    (SearchStrategy.DIRECT, TierStatus.OK): PolicyAction.RETURN,
    (SearchStrategy.DIRECT, TierStatus.SKIP): PolicyAction.CONTINUE,
    (SearchStrategy.DIRECT, TierStatus.FAIL): PolicyAction.CONTINUE,
    (SearchStrategy.STYLE, TierStatus.OK): PolicyAction.RETURN,
    (SearchStrategy.STYLE, TierStatus.SKIP): PolicyAction.CONTINUE,
    (SearchStrategy.STYLE, TierStatus.FAIL): PolicyAction.RAISE,
    (SearchStrategy.FILTERED, TierStatus.OK): PolicyAction.RETURN,
    (SearchStrategy.FILTERED, TierStatus.SKIP): PolicyAction.CONTINUE,
    (SearchStrategy.FILTERED, TierStatus.FAIL): PolicyAction.RAISE,
}


# =============================================================================
# Client-side Filtering
# =============================================================================

def _text(value: Any) -> str:
    return "" if value is None else str(value)


def matches_query(record: ProductRecord, query: str) -> bool:
    """Case-insensitive substring match over the searchable text fields."""
    if not query:
        return True
    haystack = " ".join(_text(record.get(name)) for name in SEARCHABLE_FIELDS)
    return query.casefold() in haystack.casefold()


def matches_field(record: ProductRecord, field_name: str, wanted: Optional[str]) -> bool:
    """Case-insensitive substring test of one field; no filter matches all."""
    if not wanted:
        return True
    return wanted.casefold() in _text(record.get(field_name)).casefold()


def apply_filters(
    records: list[ProductRecord],
    criteria: SearchCriteria,
    match_query: bool = False,
) -> list[ProductRecord]:
    """Filter by brand/category (and optionally query), then truncate to the limit."""
    selected = []
    for record in records:
        if len(selected) >= criteria.limit:
            break
        if not isinstance(record, dict):
            continue
        if match_query and not matches_query(record, criteria.query):
            continue
        if not matches_field(record, "brandName", criteria.brand):
            continue
        if not matches_field(record, "categoryName", criteria.category):
            continue
        selected.append(record)
    return selected


# =============================================================================
# Search Service
# =============================================================================

class SearchService:
    """
    Resolves a SearchCriteria to catalog records.

    Tiers run strictly one after another; each issues at most one fetch.
    """

    def __init__(self, client: Fetcher):
        self.client = client
        self._tiers: list[tuple[SearchStrategy, Callable[..., Awaitable[TierResult]]]] = [
            (SearchStrategy.DIRECT, self._direct_tier),
            (SearchStrategy.STYLE, self._style_tier),
            (SearchStrategy.FILTERED, self._filtered_tier),
        ]

    async def _direct_tier(
        self, criteria: SearchCriteria, identifier_class: IdentifierClass
    ) -> TierResult:
        if identifier_class != IdentifierClass.DIRECT_IDENTIFIER:
            return TierResult.skip()
        try:
            raw = await self.client.fetch(identifier_path("products", criteria.query))
            records = [r for r in normalize(raw) if isinstance(r, dict)]
        except CatalogError as e:
            return TierResult.fail(e)
        if not records:
            return TierResult.skip()
        return TierResult.ok(records[: criteria.limit])

    async def _style_tier(
        self, criteria: SearchCriteria, identifier_class: IdentifierClass
    ) -> TierResult:
        if identifier_class != IdentifierClass.STYLE_NAME_PATTERN:
            return TierResult.skip()
        try:
            raw = await self.client.fetch("products/", {"style": criteria.query})
            records = normalize(raw)
        except CatalogError as e:
            return TierResult.fail(e)
        return TierResult.ok(apply_filters(records, criteria))

    async def _filtered_tier(
        self, criteria: SearchCriteria, identifier_class: IdentifierClass
    ) -> TierResult:
        try:
            raw = await self.client.fetch("products/")
            records = normalize(raw)
        except CatalogError as e:
            return TierResult.fail(e)
        return TierResult.ok(apply_filters(records, criteria, match_query=True))

    async def search(self, criteria: SearchCriteria) -> SearchOutcome:
        """
        Run the tiers in order and apply the search policy.

        Args:
            criteria: Query, optional brand/category filters and result limit.

        Returns:
            SearchOutcome with the records and the tier that produced them.

        Raises:
            CatalogError: A tier whose failures are not recoverable failed.
        """
        identifier_class = classify(criteria.query)
        logger.info(
            "Searching catalog",
            query=criteria.query,
            identifier_class=identifier_class.value,
            brand=criteria.brand,
            category=criteria.category,
            limit=criteria.limit,
        )

        for strategy, tier in self._tiers:
            result = await tier(criteria, identifier_class)
            action = SEARCH_POLICY[(strategy, result.status)]

            if action is PolicyAction.RETURN:
                logger.info(
                    "Search completed",
                    strategy=strategy.value,
                    results_count=len(result.records),
                )
                return SearchOutcome(records=result.records, strategy_used=strategy)

            if action is PolicyAction.RAISE:
                logger.error("Search tier failed", strategy=strategy.value, error=str(result.error))
                raise result.error

            if result.status is TierStatus.FAIL:
                logger.warning(
                    "Search tier failed, falling back",
                    strategy=strategy.value,
                    error=str(result.error),
                )

        # The filtered tier always applies, so this is only reachable if it skips.
        return SearchOutcome(records=[], strategy_used=SearchStrategy.FILTERED)
