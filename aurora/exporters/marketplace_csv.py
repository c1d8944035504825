from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pandas as pd

from aurora.core.catalog import format_price
from aurora.core.schema import CatalogOutputRow

EXPORT_COLUMNS = ["sku", "platform", "title", "description", "keywords", "price", "stock"]


def _to_frame(rows: Iterable[CatalogOutputRow]) -> pd.DataFrame:
    records = []
    for row in rows:
        data = row.model_dump()
        data["keywords"] = ";".join(data["keywords"])
        data["price"] = format_price(row.price)
        records.append({column: data[column] for column in EXPORT_COLUMNS})
    return pd.DataFrame(records, columns=EXPORT_COLUMNS)


def export_to_csv(rows: Iterable[CatalogOutputRow]) -> str:
    return _to_frame(rows).to_csv(index=False, lineterminator="\n")


def export_filename(marketplace: str, timestamp_ms: int) -> str:
    return f"{marketplace}-catalog-{timestamp_ms}.csv"


def write_catalog_export(path: Path, rows: Iterable[CatalogOutputRow]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(export_to_csv(rows), encoding="utf-8")
    return path
