from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from aurora.core.marketplaces import get_profile, hint_tokens
from aurora.core.schema import CatalogOutputRow, MarketplaceProfile, ParsedCatalogRecord


class _Slots(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit]


def _category_tokens(category: str) -> list[str]:
    category = category.strip().lower()
    if not category:
        return []
    words = category.split()
    if len(words) == 1:
        return [category]
    return [category, *words]


def _dedupe(tokens: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for token in tokens:
        token = token.strip()
        key = token.casefold()
        if not token or key in seen:
            continue
        seen.add(key)
        unique.append(token)
    return unique


def format_price(value: Decimal) -> str:
    """Plain positional notation, shared by descriptions and the CSV export."""

    return format(value, "f")


def render_description(record: ParsedCatalogRecord, profile: MarketplaceProfile) -> str:
    slots = _Slots(description=record.description, category=record.category, price=format_price(record.price))
    return profile.description_template.format_map(slots)


def render_record(record: ParsedCatalogRecord, marketplace: str, profile: MarketplaceProfile) -> CatalogOutputRow:
    keywords = _dedupe([*record.tags, *_category_tokens(record.category), *hint_tokens(profile)])
    return CatalogOutputRow(
        sku=record.sku,
        platform=marketplace,
        title=_truncate(record.name, profile.title_max_length),
        description=render_description(record, profile),
        keywords=keywords,
        price=record.price,
        stock=record.stock,
    )


def render_for_marketplace(records: Iterable[ParsedCatalogRecord], marketplace: str) -> list[CatalogOutputRow]:
    profile = get_profile(marketplace)
    return [render_record(record, marketplace, profile) for record in records]
