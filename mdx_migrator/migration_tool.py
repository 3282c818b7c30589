"""
High-level orchestration of the WordPress → MDX migration.

This module defines a :class:`MDXMigrationTool` class that ties together
the extractor, the HTML rewriter, the menu builder and the writers into
one run.  A run reads a WordPress export and a directory of
pre-downloaded images and regenerates the whole content tree:

* ``pages/<slug>.mdx`` and ``posts/<slug>.mdx``
* ``data/attachments.json``, ``data/menu.json`` and ``data/redirects.csv``
* ``MIGRATION_REPORT.md``

Inputs are validated and fully read before anything is written, so a
missing export or image directory aborts the run without touching the
previous output.  Problems with individual references (an image that
cannot be matched, a body that ends up empty) never abort the run; they
are collected in a :class:`~mdx_migrator.utils.report.MigrationReport`
and written to the report at the end.

Configuration is supplied via a JSON file path or directly as a
dictionary; see :func:`mdx_migrator.config.load_config`.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from models.content import ContentDocument, ExportRecord, RecordKind
from mdx_migrator.config import load_config
from mdx_migrator.extractors.wordpress_extractor import extract_records_from_xml, records_of_kind
from mdx_migrator.migrators.mdx_writer import (
    build_attachment_inventory,
    copy_public_images,
    reset_content_dir,
    write_content_document,
    write_json,
)
from mdx_migrator.parsers.mdx_parser import RewriteContext, convert_html_to_mdx, is_empty_body
from mdx_migrator.utils.errors import MissingInputError, log_message
from mdx_migrator.utils.images import LocalImageIndex, read_local_images
from mdx_migrator.utils.menu import build_menu
from mdx_migrator.utils.redirects import generate_redirects_csv
from mdx_migrator.utils.report import FlaggedRecord, MigrationReport, render_migration_report

REPORT_FILE = "MIGRATION_REPORT.md"


class MDXMigrationTool:
    """
    Encapsulates the settings and behavior required to turn one WordPress
    export into the MDX content tree.  Paths to the export, the images
    and the output directory are passed to :meth:`run` explicitly; the
    remaining settings (site domain, routes, media prefix, log file) come
    from the configuration.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, *, config_file: Optional[str] = None) -> None:
        self.config = load_config(config, config_file=config_file)
        self.settings: Dict[str, Any] = self.config["migration"]

    def log_message(self, message: str, level: str = "INFO") -> None:
        log_message(message, level, log_file=self.settings.get("log_file"))

    def _convert_record(
        self,
        item: ExportRecord,
        local_images: LocalImageIndex,
        report: MigrationReport,
    ) -> ContentDocument:
        doc = ContentDocument(
            title=item.title,
            slug=item.slug,
            type=item.kind.value,
            date=item.date,
            updated=item.modified,
            wp_id=item.id,
            wp_link=item.link,
        )
        context = RewriteContext(kind=doc.type, slug=doc.slug, title=doc.title)
        self.log_message(f"Converting {context.where}", level="DEBUG")
        missing_before = len(report.missing_images)
        try:
            body = convert_html_to_mdx(
                item.content,
                local_images,
                context,
                report,
                site_domain=self.settings["site_domain"],
                media_prefix=self.settings["media_prefix"],
            )
        except Exception as e:
            report.conversion_errors.append(FlaggedRecord(context.where, doc.title, str(e)))
            self.log_message(f"Failed to convert {context.where}: {e}", level="ERROR")
            body = ""

        for missing in report.missing_images[missing_before:]:
            self.log_message(f"Missing image {missing.basename} in {missing.where}", level="WARNING")
        if is_empty_body(body):
            report.empty_pages.append(FlaggedRecord(context.where, doc.title))
            body = ""
        return doc.model_copy(update={"body": body})

    def _route_for(self, doc: ContentDocument) -> str:
        if doc.type == "post":
            return f"{self.settings['posts_route'].rstrip('/')}/{doc.slug}"
        return "/" if doc.slug == self.settings["home_slug"] else f"/{doc.slug}"

    def run(self, export_path: str, images_dir: str, content_dir: str) -> MigrationReport:
        """
        Regenerate the content tree in ``content_dir`` from ``export_path``
        and the images found in ``images_dir``.

        :raises MissingInputError: if the export or image directory is missing.
        :raises ExportParseError: if the export is not valid XML.
        :return: The report of the run, already written to disk.
        """
        if not os.path.isfile(export_path):
            raise MissingInputError("EXPORT_NOT_FOUND", export_path)
        if not os.path.isdir(images_dir):
            raise MissingInputError("IMAGES_DIR_NOT_FOUND", images_dir)

        local_images = read_local_images(images_dir)
        self.log_message(f"Indexed {len(local_images.all_files)} local images from {images_dir}")
        records = extract_records_from_xml(export_path)
        self.log_message(f"Extracted {len(records)} records from {export_path}")

        pages = records_of_kind(records, RecordKind.PAGE)
        posts = records_of_kind(records, RecordKind.POST)
        attachments = records_of_kind(records, RecordKind.ATTACHMENT)
        nav_items = records_of_kind(records, RecordKind.NAV_MENU_ITEM)

        report = MigrationReport()
        report.counts = {
            "pages": len(pages),
            "posts": len(posts),
            "attachments": len(attachments),
            "navMenuItems": len(nav_items),
        }

        page_slugs: Dict[int, str] = {}
        post_slugs: Dict[int, str] = {}
        redirects: List[Dict[str, str]] = []
        for kind, items, slug_map, slugs in (
            ("pages", pages, page_slugs, report.page_slugs),
            ("posts", posts, post_slugs, report.post_slugs),
        ):
            out_dir = os.path.join(content_dir, kind)
            reset_content_dir(out_dir)
            group: List[Dict[str, str]] = []
            for item in items:
                doc = self._convert_record(item, local_images, report)
                write_content_document(doc, out_dir)
                slug_map[item.id] = doc.slug
                slugs.append(doc.slug)
                group.append({"Slug": doc.slug, "Permalink": doc.wp_link, "NewURL": self._route_for(doc)})
            redirects.extend(sorted(group, key=lambda r: r["Slug"]))

        data_dir = os.path.join(content_dir, "data")
        inventory = build_attachment_inventory(attachments, local_images)
        write_json(
            os.path.join(data_dir, "attachments.json"),
            [a.model_dump(by_alias=True) for a in inventory],
        )

        menu = build_menu(
            nav_items,
            page_slugs,
            post_slugs,
            home_slug=self.settings["home_slug"],
            posts_route=self.settings["posts_route"],
        )
        write_json(os.path.join(data_dir, "menu.json"), {"items": [n.model_dump() for n in menu]})

        generate_redirects_csv(
            redirects,
            old_domain=self.settings["site_domain"],
            out_path=os.path.join(data_dir, "redirects.csv"),
        )

        public_dir = self.settings.get("public_images_dir")
        if public_dir:
            copied = copy_public_images(local_images, images_dir, public_dir)
            self.log_message(f"Copied {copied} images to {public_dir}")

        report_path = os.path.join(content_dir, REPORT_FILE)
        with open(report_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(render_migration_report(report, posts_route=self.settings["posts_route"]))

        self.log_message(f"Migration summary: {report.summary()}")
        return report
