#!/usr/bin/env python3
"""
Audit the generated MDX content against the WordPress export and the
local image directory, and write ``IMAGE_AUDIT_REPORT.md``.

Exits with status 1 when an image expected by the export is missing
locally or when a document references a local image that does not exist,
so it can gate a build.  Unused local images are reported only.

Usage:
  python scripts/verify_images.py [--config config/migration_config.json]
"""

from __future__ import annotations

import argparse
import os
import sys

# Allow running as `python scripts/verify_images.py` from the project root.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from mdx_migrator.audit import audit_images, write_audit_report
from mdx_migrator.config import CONFIG_FILE, load_config
from mdx_migrator.utils.errors import MigrationError, log_message


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Verify generated MDX image references.")
    parser.add_argument("--config", default=CONFIG_FILE, help="Path to the migration config JSON")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    settings = load_config(config_file=args.config)["migration"]
    log_file = settings.get("log_file")

    try:
        result = audit_images(settings["export_path"], settings["images_dir"], settings["content_dir"])
    except MigrationError as e:
        log_message(str(e), level="ERROR", log_file=log_file)
        return 1

    path = write_audit_report(result, settings["content_dir"])
    log_message(f"Image audit report written to {path}", log_file=log_file)

    if result.has_errors:
        log_message(
            f"Image audit failed: {len(result.missing_expected)} expected images missing, "
            f"{len(result.broken_references)} broken references.",
            level="ERROR",
            log_file=log_file,
        )
        return 1
    log_message(f"Image audit passed ({len(result.unused_images)} unused images).", log_file=log_file)
    return 0


if __name__ == "__main__":
    sys.exit(main())
