"""
Pydantic models and schemas for the S&S Activewear catalog bridge.

Catalog records themselves are schema-less JSON mappings (ProductRecord);
the models here describe the request-scoped values that flow through the
search engine and the shapes handed back to callers.

Models:
    - IdentifierClass: Classification of a free-form query string
    - SearchStrategy: Tier that produced a search result
    - SearchCriteria: Validated search request
    - SearchOutcome: Records plus the tier that produced them
    - InventoryEntry / PricingEntry: Reshaped handler output
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field, field_validator


# A raw catalog record: scalar, nested mapping or list of mappings per field.
ProductRecord = dict[str, Any]

# One flattened export row.
FlatRow = dict[str, Union[str, int, float, bool]]


# =============================================================================
# Base Configuration
# =============================================================================

class BaseModel(PydanticBaseModel):
    """Base model with common configuration for all schemas."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=False,
    )

    def to_dict(self, **kwargs) -> dict[str, Any]:
        """Serialize model to a JSON-compatible dictionary using API field names."""
        return self.model_dump(mode="json", by_alias=True, **kwargs)


# =============================================================================
# Enums
# =============================================================================

class IdentifierClass(str, Enum):
    """What a search string looks like."""
    DIRECT_IDENTIFIER = "direct_identifier"
    STYLE_NAME_PATTERN = "style_name_pattern"
    FREE_TEXT = "free_text"


class SearchStrategy(str, Enum):
    """Search tier, in fallback order."""
    DIRECT = "direct"
    STYLE = "style"
    FILTERED = "filtered"


class ExportFormat(str, Enum):
    """Supported catalog download formats."""
    CSV = "csv"
    XML = "xml"
    JSON = "json"


# =============================================================================
# Search Models
# =============================================================================

class SearchCriteria(BaseModel):
    """Immutable search request."""

    model_config = ConfigDict(frozen=True)

    query: str = ""
    brand: Optional[str] = None
    category: Optional[str] = None
    limit: int = Field(default=20, ge=0)

    @field_validator("brand", "category", mode="before")
    @classmethod
    def blank_filter_as_none(cls, v: Optional[str]) -> Optional[str]:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class SearchOutcome(BaseModel):
    """Result of a tiered search."""
    records: list[ProductRecord] = Field(default_factory=list)
    strategy_used: SearchStrategy

    @property
    def total(self) -> int:
        return len(self.records)


# =============================================================================
# Handler Output Models
# =============================================================================

class InventoryEntry(BaseModel):
    """Per-SKU inventory with warehouse breakdown."""
    sku: Optional[Union[str, int]] = None
    gtin: Optional[Union[str, int]] = None
    style_id: Optional[Union[int, str]] = Field(default=None, alias="styleID")
    warehouses: list[dict[str, Any]] = Field(default_factory=list)
    total_qty: int = Field(default=0, alias="totalQty")


class PriceBreaks(BaseModel):
    """Price columns the S&S API reports per SKU."""
    piece_price: Optional[float] = Field(default=None, alias="piecePrice")
    dozen_price: Optional[float] = Field(default=None, alias="dozenPrice")
    case_price: Optional[float] = Field(default=None, alias="casePrice")
    customer_price: Optional[float] = Field(default=None, alias="customerPrice")
    map_price: Optional[float] = Field(default=None, alias="mapPrice")
    sale_price: Optional[float] = Field(default=None, alias="salePrice")


class PricingEntry(BaseModel):
    """Pricing summary for one SKU at a requested quantity."""
    sku: Optional[Union[str, int]] = None
    brand_name: Optional[Union[str, int]] = Field(default=None, alias="brandName")
    style_name: Optional[Union[str, int]] = Field(default=None, alias="styleName")
    color_name: Optional[Union[str, int]] = Field(default=None, alias="colorName")
    size_name: Optional[Union[str, int]] = Field(default=None, alias="sizeName")
    quantity: int = 1
    pricing: PriceBreaks = Field(default_factory=PriceBreaks)
    unit_price: Optional[float] = Field(default=None, alias="unitPrice")
    extended_price: Optional[float] = Field(default=None, alias="extendedPrice")
