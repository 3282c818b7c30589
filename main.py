"""
Entry point for the WordPress → MDX migration.
"""

import sys

from mdx_migrator.config import CONFIG_FILE
from mdx_migrator.migration_tool import MDXMigrationTool
from mdx_migrator.utils.errors import MigrationError


def main() -> int:
    """
    Regenerate the content tree from the WordPress export and the local
    image directory named in the configuration.
    """
    tool = MDXMigrationTool(config_file=CONFIG_FILE)
    settings = tool.settings
    tool.log_message("Starting WordPress to MDX migration.")

    try:
        report = tool.run(
            settings["export_path"],
            settings["images_dir"],
            settings["content_dir"],
        )
    except MigrationError as e:
        tool.log_message(str(e), level="ERROR")
        return 1

    tool.log_message(
        f"Migration process finished: {len(report.page_slugs)} pages, "
        f"{len(report.post_slugs)} posts, "
        f"{len(report.missing_by_basename())} missing images."
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
