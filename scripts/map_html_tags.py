#!/usr/bin/env python3
"""
Map every HTML tag used in the published pages and posts of a WordPress
export and write a (tag, count) summary.  When tags that the MDX
conversion strips or cannot render are found (script, form, iframe), a
companion CSV lists the records they appear in.

Usage:
  python scripts/map_html_tags.py \\
    --input drmatildaaevanseducationalfoundation.WordPress.2025-12-29.xml \\
    --output reports/html_tags_counts.csv

If the arguments are omitted, the configured export path and the output
above are used.
"""

from __future__ import annotations

import argparse
import csv
import os
import sys
from collections import Counter
from pathlib import Path
from typing import Iterable, List, Tuple

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from bs4 import BeautifulSoup

from models.content import ExportRecord, RecordKind
from mdx_migrator.config import CONFIG_FILE, load_config
from mdx_migrator.extractors.wordpress_extractor import extract_records_from_xml

FLAGGED_TAGS = frozenset({"script", "form", "iframe"})


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Map the HTML tags used in a WordPress export's pages and posts."
    )
    parser.add_argument("--input", default=None, help="WordPress XML export (default: configured export_path)")
    parser.add_argument(
        "--output",
        default="reports/html_tags_counts.csv",
        help="CSV file to write with (tag,count)",
    )
    return parser.parse_args()


def iter_html_bodies(records: Iterable[ExportRecord]) -> Iterable[Tuple[ExportRecord, str]]:
    for record in records:
        if record.kind in (RecordKind.PAGE, RecordKind.POST) and record.content.strip():
            yield record, record.content


def count_html_tags(records: Iterable[ExportRecord]) -> Tuple[Counter, List[Tuple[str, str, str, str]]]:
    """Count tags and collect (kind, slug, tag, src) rows for flagged tags."""
    counter: Counter = Counter()
    flagged: List[Tuple[str, str, str, str]] = []
    for record, html in iter_html_bodies(records):
        soup = BeautifulSoup(html, "html.parser")
        for el in soup.find_all(True):
            counter[el.name] += 1
            if el.name in FLAGGED_TAGS:
                src = el.get("src") or el.get("action") or ""
                flagged.append((record.kind.value, record.slug, el.name, src))
    return counter, flagged


def write_counts_csv(counter: Counter, out_path: Path) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["tag", "count"])
        for tag, count in sorted(counter.items(), key=lambda x: (-x[1], x[0])):
            writer.writerow([tag, count])


def write_flagged_csv(rows: List[Tuple[str, str, str, str]], out_path: Path) -> Path:
    details_path = out_path.with_name(out_path.stem + "_details.csv")
    with details_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["kind", "slug", "tag", "src"])
        writer.writerows(rows)
    return details_path


def main() -> None:
    args = parse_args()
    in_path = Path(args.input or load_config(config_file=CONFIG_FILE)["migration"]["export_path"])
    out_path = Path(args.output)

    if not in_path.exists():
        raise SystemExit(f"Export file not found: {in_path}")

    counts, flagged = count_html_tags(extract_records_from_xml(str(in_path)))
    write_counts_csv(counts, out_path)
    if flagged:
        details = write_flagged_csv(flagged, out_path)
        print(f"Flagged tags listed in: {details}")

    print(f"Unique tags: {len(counts)}")
    print(f"Output written to: {out_path}")


if __name__ == "__main__":
    main()
