"""
Configuration loading shared by the migration and the image audit.

Configuration is a JSON file (``config/migration_config.json`` by
default) or a dictionary.  Every key under ``migration`` has a default,
so an empty or missing file runs the migration with the conventional
layout: the export at the project root, images in ``images/`` and the
generated tree in ``content/``.
"""

from __future__ import annotations

import copy
import json
import os
from typing import Any, Dict, Optional

from mdx_migrator.utils.errors import DEFAULT_LOG_FILE

CONFIG_FILE = os.path.join("config", "migration_config.json")

DEFAULT_EXPORT_FILE = "drmatildaaevanseducationalfoundation.WordPress.2025-12-29.xml"


def load_config(config: Optional[Dict[str, Any]] = None, *, config_file: Optional[str] = None) -> Dict[str, Any]:
    if config_file and os.path.exists(config_file):
        with open(config_file, "r", encoding="utf-8") as f:
            config = json.load(f)
    elif config is None:
        config = {}
    else:
        config = copy.deepcopy(config)

    config.setdefault("migration", {})
    migration = config["migration"]
    migration.setdefault("export_path", os.getenv("WP_EXPORT_PATH", DEFAULT_EXPORT_FILE))
    migration.setdefault("images_dir", os.getenv("WP_IMAGES_DIR", "images"))
    migration.setdefault("public_images_dir", os.path.join("public", "images"))
    migration.setdefault("content_dir", "content")
    migration.setdefault("site_domain", "drmatildaevansfoundation.org")
    migration.setdefault("home_slug", "home")
    migration.setdefault("posts_route", "/dr-evans-academy")
    migration.setdefault("media_prefix", "/images/")
    migration.setdefault("log_file", DEFAULT_LOG_FILE)
    return config
