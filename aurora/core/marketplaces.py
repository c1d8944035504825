from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from aurora.core.schema import MARKETPLACE_KEYS, MarketplaceProfile

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"

DEFAULT_PROFILES: dict[str, dict[str, object]] = {
    "amazon": {
        "name": "Amazon",
        "title_max_length": 150,
        "description_template": "{description}. Built for {category} shoppers who expect reliable quality. Price: INR {price}.",
        "keyword_hint": "prime eligible, best seller",
    },
    "flipkart": {
        "name": "Flipkart",
        "title_max_length": 120,
        "description_template": "{description} | Category: {category} | Special price INR {price} with assured delivery.",
        "keyword_hint": "flipkart assured, deal of the day",
    },
    "meesho": {
        "name": "Meesho",
        "title_max_length": 90,
        "description_template": "Trending {category} pick: {description}. Only INR {price}, cash on delivery available.",
        "keyword_hint": "budget, cod, trending",
    },
    "myntra": {
        "name": "Myntra",
        "title_max_length": 70,
        "description_template": "{description}. Curated {category} style at INR {price}.",
        "keyword_hint": "fashion, new season",
    },
}


def _profiles_path() -> Path:
    override = os.getenv("AURORA_MARKETPLACES_FILE")
    if override:
        return Path(override).expanduser().resolve()
    return CONFIG_DIR / "marketplaces.yaml"


def _load_profiles() -> dict[str, MarketplaceProfile]:
    path = _profiles_path()
    raw: dict = {}
    if path.exists():
        with path.open("r", encoding="utf-8") as fp:
            raw = yaml.safe_load(fp) or {}
    else:
        logger.warning("Marketplace profile file %s not found, using built-in defaults", path)

    profiles: dict[str, MarketplaceProfile] = {}
    for key in MARKETPLACE_KEYS:
        data = raw.get(key) or DEFAULT_PROFILES[key]
        profiles[key] = MarketplaceProfile(**data)
    return profiles


MARKETPLACE_PROFILES = _load_profiles()


def get_profile(marketplace: str) -> MarketplaceProfile:
    """Return the static profile for ``marketplace``.

    Raises ``KeyError`` for keys outside the four supported channels.
    """

    return MARKETPLACE_PROFILES[marketplace]


def is_marketplace(value: object) -> bool:
    return isinstance(value, str) and value in MARKETPLACE_PROFILES


def hint_tokens(profile: MarketplaceProfile) -> list[str]:
    return [token.strip() for token in profile.keyword_hint.split(",") if token.strip()]
