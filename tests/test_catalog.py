import csv
import io
import sys
from decimal import Decimal
from pathlib import Path

import pytest
from openpyxl import Workbook

sys.path.append(str(Path(__file__).resolve().parents[1]))

from aurora.core.catalog import render_for_marketplace
from aurora.core.marketplaces import MARKETPLACE_PROFILES, get_profile, hint_tokens
from aurora.core.schema import ParsedCatalogRecord
from aurora.exporters.marketplace_csv import (
    EXPORT_COLUMNS,
    export_filename,
    export_to_csv,
    write_catalog_export,
)
from aurora.extractors.catalog_sheet import CATALOG_FIELDS, SAMPLE_CATALOG, parse_catalog_sheet
from aurora.extractors.template_sheet import parse_template, parse_template_file


def _record(**overrides) -> ParsedCatalogRecord:
    data = {
        "name": "Aurora Performance Tee",
        "sku": "AUR-TEE-01",
        "price": Decimal("799"),
        "category": "Activewear",
        "stock": 120,
        "description": "Quick dry fabric",
        "tags": ["sports", "running"],
    }
    data.update(overrides)
    return ParsedCatalogRecord(**data)


# ----------------------------------------------------------------------
# raw paste parsing
# ----------------------------------------------------------------------
def test_parse_sample_catalog():
    sheet = parse_catalog_sheet(SAMPLE_CATALOG)

    assert sheet is not None
    assert sheet.headers == CATALOG_FIELDS
    assert [row.sku for row in sheet.rows] == ["AUR-TEE-01", "NBL-SAE-23", "LUM-LMP-09"]
    first = sheet.rows[0]
    assert first.name == "Aurora Performance Tee"
    assert first.price == Decimal("799")
    assert first.category == "Activewear"
    assert first.stock == 120
    assert first.description == "Quick dry fabric with reflective strip"
    assert first.tags == ["sports", "running", "fitness"]
    assert sheet.rows[2].description == "Rechargeable, 3 brightness modes"


@pytest.mark.parametrize("text", [None, "", "   ", "\n\n  \t\n"])
def test_parse_blank_text_returns_none(text):
    assert parse_catalog_sheet(text) is None


def test_parse_without_valid_lines_returns_none():
    assert parse_catalog_sheet("just some notes\nanother | line") is None


def test_malformed_lines_are_skipped():
    text = "\n".join(
        [
            "broken | line",
            "Lumos Night Lamp | LUM-LMP-09 | 1299 | Home Decor | 60 | Lamp | lighting",
            "a | b | c | d | e | f | g | h",
            " | NO-NAME | 10 | Misc | 1 | desc | tag",
            "",
        ]
    )
    sheet = parse_catalog_sheet(text)

    assert sheet is not None
    assert [row.sku for row in sheet.rows] == ["LUM-LMP-09"]


def test_bad_numbers_default_to_zero():
    sheet = parse_catalog_sheet("Tee | T-1 | cheap | Wear | lots | Soft | a;b")

    assert sheet is not None
    record = sheet.rows[0]
    assert record.price == Decimal("0")
    assert record.stock == 0


def test_thousands_separators_are_accepted():
    sheet = parse_catalog_sheet("Lamp | L-1 | 1,299.00 | Decor | 1,200 | Warm light")

    assert sheet is not None
    assert sheet.rows[0].price == Decimal("1299.00")
    assert sheet.rows[0].stock == 1200


def test_exponent_price_is_written_in_plain_notation():
    sheet = parse_catalog_sheet("Tee | T1 | 1e3 | Wear | 5 | Soft | cotton")
    row = render_for_marketplace(sheet.rows, "amazon")[0]

    assert "INR 1000." in row.description
    assert "E+" not in row.description
    body = list(csv.reader(io.StringIO(export_to_csv([row]))))[1]
    assert body[5] == "1000"


def test_export_formats_unnormalised_prices():
    row = render_for_marketplace([_record(price=Decimal("1.5E+3"))], "myntra")[0]

    assert "INR 1500." in row.description
    assert list(csv.reader(io.StringIO(export_to_csv([row]))))[1][5] == "1500"


def test_tags_column_is_optional():
    sheet = parse_catalog_sheet("Tee | T-1 | 499.50 | Wear | 7 | Soft cotton")

    assert sheet is not None
    assert sheet.rows[0].tags == []
    assert sheet.rows[0].price == Decimal("499.50")


# ----------------------------------------------------------------------
# marketplace rendering
# ----------------------------------------------------------------------
def test_profiles_cover_every_marketplace():
    assert set(MARKETPLACE_PROFILES) == {"amazon", "flipkart", "meesho", "myntra"}
    assert get_profile("amazon").name == "Amazon"
    with pytest.raises(KeyError):
        get_profile("ebay")


def test_long_title_truncated_to_exact_limit():
    limit = get_profile("amazon").title_max_length
    row = render_for_marketplace([_record(name="X" * (limit + 37))], "amazon")[0]

    assert len(row.title) == limit
    assert not row.title.endswith("...")


def test_short_title_kept_verbatim():
    row = render_for_marketplace([_record()], "myntra")[0]
    assert row.title == "Aurora Performance Tee"


def test_description_template_slots_filled():
    record = _record()
    profile = get_profile("meesho")
    row = render_for_marketplace([record], "meesho")[0]

    expected = profile.description_template.format(
        description="Quick dry fabric", category="Activewear", price="799"
    )
    assert row.description == expected
    assert "{" not in row.description


def test_keywords_merge_tags_category_and_hints_without_duplicates():
    record = _record(category="Ethnic Wear", tags=["Festive", "festive", "ETHNIC wear", "silk"])
    profile = get_profile("amazon")
    row = render_for_marketplace([record], "amazon")[0]

    assert row.keywords[:4] == ["Festive", "ETHNIC wear", "silk", "ethnic"]
    assert "wear" in row.keywords
    for hint in hint_tokens(profile):
        assert hint in row.keywords
    folded = [keyword.casefold() for keyword in row.keywords]
    assert len(folded) == len(set(folded))


def test_render_carries_identity_fields():
    row = render_for_marketplace([_record()], "flipkart")[0]

    assert row.sku == "AUR-TEE-01"
    assert row.platform == "flipkart"
    assert row.price == Decimal("799")
    assert row.stock == 120


def test_render_is_deterministic():
    sheet = parse_catalog_sheet(SAMPLE_CATALOG)
    first = render_for_marketplace(sheet.rows, "myntra")
    second = render_for_marketplace(sheet.rows, "myntra")

    assert [row.model_dump() for row in first] == [row.model_dump() for row in second]
    assert export_to_csv(first) == export_to_csv(second)


# ----------------------------------------------------------------------
# export
# ----------------------------------------------------------------------
def test_export_round_trip_keeps_every_sku_once():
    sheet = parse_catalog_sheet(SAMPLE_CATALOG)
    rows = render_for_marketplace(sheet.rows, "amazon")

    text = export_to_csv(rows)
    parsed = list(csv.reader(io.StringIO(text)))

    assert parsed[0] == EXPORT_COLUMNS
    assert text.splitlines()[0] == "sku,platform,title,description,keywords,price,stock"
    body = parsed[1:]
    assert len(body) == len(sheet.rows)
    skus = [line[0] for line in body]
    assert sorted(skus) == sorted(record.sku for record in sheet.rows)
    assert len(set(skus)) == len(skus)
    lamp = next(line for line in body if line[0] == "LUM-LMP-09")
    assert lamp[3] == rows[2].description
    assert lamp[4] == ";".join(rows[2].keywords)
    assert lamp[5] == "1299"
    assert lamp[6] == "60"


def test_export_quotes_delimiters_and_quotes():
    record = _record(name='Tee, "Pro" edition', description="Soft")
    rows = render_for_marketplace([record], "myntra")

    text = export_to_csv(rows)

    assert '"Tee, ""Pro"" edition"' in text
    assert list(csv.reader(io.StringIO(text)))[1][2] == 'Tee, "Pro" edition'


def test_export_of_no_rows_is_header_only():
    assert export_to_csv([]) == "sku,platform,title,description,keywords,price,stock\n"


def test_export_filename_convention():
    assert export_filename("meesho", 1700000000000) == "meesho-catalog-1700000000000.csv"


def test_write_catalog_export(tmp_path):
    rows = render_for_marketplace(parse_catalog_sheet(SAMPLE_CATALOG).rows, "amazon")
    target = write_catalog_export(tmp_path / "exports" / "amazon.csv", rows)

    assert target.exists()
    assert target.read_text(encoding="utf-8") == export_to_csv(rows)


# ----------------------------------------------------------------------
# template preview
# ----------------------------------------------------------------------
def test_parse_template_reports_headers_and_rows():
    preview = parse_template("item_sku,item_name,standard_price\nA-1,Tee,799\nA-2,Saree,1499\n")

    assert preview is not None
    assert preview.headers == ["item_sku", "item_name", "standard_price"]
    assert preview.row_count == 2
    assert preview.rows[0] == {"item_sku": "A-1", "item_name": "Tee", "standard_price": "799"}


@pytest.mark.parametrize("text", ["", "   ", "item_sku,item_name\n"])
def test_parse_template_without_data_returns_none(text):
    assert parse_template(text) is None


def test_parse_template_file_reads_excel():
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["Seller SKU ID", "Product Title"])
    sheet.append(["F-1", "Tee"])
    sheet.append(["F-2", "Lamp"])
    buffer = io.BytesIO()
    workbook.save(buffer)

    preview = parse_template_file("flipkart.xlsx", buffer.getvalue())

    assert preview is not None
    assert preview.headers == ["Seller SKU ID", "Product Title"]
    assert preview.row_count == 2


def test_parse_template_file_handles_bom_and_unknown_types():
    payload = "\ufeffsku,title\nS-1,Tee\n".encode("utf-8")
    preview = parse_template_file("template.csv", payload)

    assert preview is not None
    assert preview.headers == ["sku", "title"]
    assert parse_template_file("notes.pdf", payload) is None
    assert parse_template_file("broken.xlsx", b"not a workbook") is None
