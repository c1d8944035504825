"""Parser for the pipe-delimited raw catalog paste format.

Operators paste one product per line in a human-friendly shorthand::

    name | sku | price | category | stock | description | tags

where ``tags`` is itself a semicolon separated list and may be omitted.
Lines that do not fit the layout are skipped so one typo never costs the
whole batch; numeric cells that cannot be read fall back to zero.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from aurora.core.schema import CatalogSheet, ParsedCatalogRecord

logger = logging.getLogger(__name__)

CATALOG_FIELDS = ["name", "sku", "price", "category", "stock", "description", "tags"]
MIN_FIELDS = len(CATALOG_FIELDS) - 1
MAX_FIELDS = len(CATALOG_FIELDS)

SAMPLE_CATALOG = """Aurora Performance Tee | AUR-TEE-01 | 799 | Activewear | 120 | Quick dry fabric with reflective strip | sports;running;fitness
Nebula Luxe Saree | NBL-SAE-23 | 1499 | Ethnic Wear | 80 | Soft silk blend with zari border | festive;wedding;traditional
Lumos Night Lamp | LUM-LMP-09 | 1299 | Home Decor | 60 | Rechargeable, 3 brightness modes | lighting;home;gift"""


def _safe_decimal(value: Any) -> Decimal:
    try:
        result = Decimal(str(value).strip().replace(",", ""))
    except (InvalidOperation, TypeError, ValueError):
        return Decimal("0")
    if not result.is_finite():
        return Decimal("0")
    # "1e3" is kept as 1000, never in exponent form
    return Decimal(format(result, "f"))


def _safe_int(value: Any) -> int:
    return int(_safe_decimal(value))


def _split_tags(value: str) -> list[str]:
    return [tag.strip() for tag in value.split(";") if tag.strip()]


def parse_line(line: str, delimiter: str = "|") -> ParsedCatalogRecord | None:
    """Decompose one raw line, returning ``None`` when it is malformed."""

    fields = [cell.strip() for cell in line.split(delimiter)]
    if not MIN_FIELDS <= len(fields) <= MAX_FIELDS:
        return None
    if len(fields) < MAX_FIELDS:
        fields.append("")

    name, sku, price, category, stock, description, tags = fields
    if not name or not sku:
        return None

    return ParsedCatalogRecord(
        name=name,
        sku=sku,
        price=_safe_decimal(price),
        category=category,
        stock=_safe_int(stock),
        description=description,
        tags=_split_tags(tags),
    )


def parse_catalog_sheet(text: str | None, delimiter: str = "|") -> CatalogSheet | None:
    if not text or not text.strip():
        return None

    records: list[ParsedCatalogRecord] = []
    for number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        record = parse_line(line, delimiter)
        if record is None:
            logger.debug("Skipping malformed catalog line %d: %r", number, line)
            continue
        records.append(record)

    if not records:
        return None
    return CatalogSheet(headers=list(CATALOG_FIELDS), rows=records)
