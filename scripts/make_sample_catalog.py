#!/usr/bin/env python
from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from aurora.extractors.catalog_sheet import SAMPLE_CATALOG


def main() -> None:
    parser = argparse.ArgumentParser(description="Write the pipe-delimited sample catalog paste")
    parser.add_argument("--output", required=True, help="output file path (.txt)")
    parser.add_argument("--repeat", type=int, default=1, help="how many copies of the sample block to write")
    args = parser.parse_args()

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    lines = []
    for copy in range(max(args.repeat, 1)):
        for line in SAMPLE_CATALOG.splitlines():
            if copy == 0:
                lines.append(line)
                continue
            # keep SKUs unique across copies
            fields = [cell.strip() for cell in line.split("|")]
            fields[1] = f"{fields[1]}-{copy + 1}"
            lines.append(" | ".join(fields))
    output.write_text("\n".join(lines) + "\n", encoding="utf-8")

    print(f"Sample catalog written: {output}")


if __name__ == "__main__":
    main()
