#!/usr/bin/env python
from __future__ import annotations

import argparse
import csv
from pathlib import Path

from openpyxl import Workbook


HEADERS = {
    "amazon": ["item_sku", "item_name", "brand_name", "standard_price", "quantity", "bullet_point1", "generic_keywords"],
    "flipkart": ["Seller SKU ID", "Product Title", "Brand", "Selling Price", "Stock", "Description", "Search Keywords"],
    "meesho": ["SKU", "Product Name", "Category", "Meesho Price", "Inventory", "Product Description"],
    "myntra": ["styleId", "productDisplayName", "brand", "mrp", "inventory", "styleNote", "tags"],
}


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a marketplace upload template (.csv or .xlsx)")
    parser.add_argument("--marketplace", choices=sorted(HEADERS), default="amazon", help="template layout")
    parser.add_argument("--output", required=True, help="output file path (.csv or .xlsx)")
    parser.add_argument("--rows", type=int, default=2, help="number of placeholder rows")
    args = parser.parse_args()

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    header = HEADERS[args.marketplace]
    rows = [[f"{column}-{index + 1}" for column in header] for index in range(args.rows)]

    if output.suffix.lower() == ".xlsx":
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = args.marketplace
        sheet.append(header)
        for row in rows:
            sheet.append(row)
        workbook.save(output)
    else:
        with output.open("w", newline="", encoding="utf-8") as fp:
            writer = csv.writer(fp)
            writer.writerow(header)
            writer.writerows(rows)

    print(f"{args.marketplace} template written: {output}")


if __name__ == "__main__":
    main()
