"""
Search string classification.

Decides whether a query names a catalog item directly (SKU, GTIN or numeric
style id), looks like a bare style number, or is free text.
"""

import re
from typing import Any

from ss_activewear.models.schemas import IdentifierClass

# ASCII only, matched against the whole string.
SKU_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9]+")
GTIN_PATTERN = re.compile(r"[0-9]{13,14}")
NUMERIC_STYLE_ID_PATTERN = re.compile(r"[0-9]{1,9}")
STYLE_NAME_PATTERN = re.compile(r"[0-9]{3,4}[A-Za-z]?")


def is_style_name(query: str) -> bool:
    """Bare style number such as ``2000`` or ``5000L``."""
    return bool(STYLE_NAME_PATTERN.fullmatch(query))


def is_direct_identifier(query: str) -> bool:
    """SKU, GTIN or numeric style id.

    Bare 3-4 digit numbers are style numbers, not style ids.
    """
    if SKU_PATTERN.fullmatch(query) or GTIN_PATTERN.fullmatch(query):
        return True
    return bool(NUMERIC_STYLE_ID_PATTERN.fullmatch(query)) and not is_style_name(query)


def classify(query: Any) -> IdentifierClass:
    """
    Classify a search string.

    Never raises: empty or non-string input is free text.

    >>> classify("B00760004")
    <IdentifierClass.DIRECT_IDENTIFIER: 'direct_identifier'>
    >>> classify("2000")
    <IdentifierClass.STYLE_NAME_PATTERN: 'style_name_pattern'>
    """
    if not isinstance(query, str) or not query:
        return IdentifierClass.FREE_TEXT
    if is_direct_identifier(query):
        return IdentifierClass.DIRECT_IDENTIFIER
    if is_style_name(query):
        return IdentifierClass.STYLE_NAME_PATTERN
    return IdentifierClass.FREE_TEXT
