"""Preview parser for uploaded marketplace templates.

Uploaded templates are standard comma separated files (or Excel workbooks
exported by the marketplaces' seller portals).  They are only inspected so the
operator can see which headers the channel expects; nothing here feeds the
listing generator.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pandas as pd

from aurora.core.schema import TemplatePreview

logger = logging.getLogger(__name__)

CSV_SUFFIXES = {".csv", ".txt"}
EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}


def _frame_to_preview(frame: pd.DataFrame) -> TemplatePreview | None:
    frame = frame.rename(columns={col: str(col).strip() for col in frame.columns})
    frame = frame.dropna(how="all")
    headers = [str(col) for col in frame.columns]
    if not headers or frame.empty:
        return None
    frame = frame.fillna("").astype(str)
    rows = [{str(key): value for key, value in record.items()} for record in frame.to_dict(orient="records")]
    return TemplatePreview(headers=headers, rows=rows)


def parse_template(text: str | None) -> TemplatePreview | None:
    if not text or not text.strip():
        return None
    try:
        frame = pd.read_csv(io.StringIO(text), dtype=str, skip_blank_lines=True)
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as exc:
        logger.info("Template text could not be parsed: %s", exc)
        return None
    return _frame_to_preview(frame)


def parse_excel_template(payload: bytes, sheet_name: str | int = 0) -> TemplatePreview | None:
    try:
        frame = pd.read_excel(io.BytesIO(payload), sheet_name=sheet_name, dtype=str)
    except Exception as exc:  # pandas/openpyxl raise a wide range of errors for bad workbooks
        logger.info("Excel template could not be parsed: %s", exc)
        return None
    return _frame_to_preview(frame)


def parse_template_file(filename: str, payload: bytes) -> TemplatePreview | None:
    """Route an uploaded template to the matching reader by file suffix."""

    suffix = Path(filename).suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        return parse_excel_template(payload)
    if suffix in CSV_SUFFIXES:
        try:
            text = payload.decode("utf-8-sig")
        except UnicodeDecodeError:
            logger.info("Template %s is not valid UTF-8", filename)
            return None
        return parse_template(text)
    logger.info("Unsupported template type for %s", filename)
    return None
