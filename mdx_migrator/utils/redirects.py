"""
Generation of redirect mapping CSV files.

The :func:`generate_redirects_csv` helper writes a CSV file containing the
mapping of WordPress permalinks to the routes of the new site.  The
resulting file is used to configure 301 redirects so that existing links
keep working after the migration.
"""

from __future__ import annotations

import csv
import os
from typing import Dict, Iterable


def generate_redirects_csv(
    entries: Iterable[Dict[str, str]], *, old_domain: str, out_path: str
) -> str:
    """Generate a CSV mapping old WordPress URLs to new site routes.

    Parameters
    ----------
    entries:
        Iterable of dictionaries with ``Slug`` and ``NewURL`` keys.
        ``Permalink`` is used if available to determine the original URL.
    old_domain:
        Domain of the legacy WordPress site.  If an entry has no
        ``Permalink`` this domain is combined with the ``Slug`` to
        construct the old URL.
    out_path:
        Location of the CSV file to be written.  The parent directory is
        created automatically.

    Returns
    -------
    str
        The path of the generated CSV file.
    """
    base = old_domain.rstrip("/")
    if base and "://" not in base:
        base = f"https://{base}"
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["OldURL", "NewURL"])
        for entry in entries:
            slug = entry.get("Slug", "")
            old_url = entry.get("Permalink")
            if not old_url and base:
                old_url = f"{base}/{slug}" if slug else base
            writer.writerow([old_url or "", entry["NewURL"]])
    return out_path
