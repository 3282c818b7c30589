"""
Writers for the generated content tree.

This module is the target side of the migration: it writes MDX
documents, the attachment inventory, the menu data and any other JSON
artifact, and copies the local images into the static directory served
as ``/images/``.  Functions here only touch the filesystem; deciding
*what* to write is left to :mod:`mdx_migrator.migration_tool`.

Usage example::

    from mdx_migrator.migrators.mdx_writer import reset_content_dir, write_content_document

    reset_content_dir("content/pages")
    write_content_document(doc, "content/pages")
"""

from __future__ import annotations

import json
import os
import shutil
from typing import Any, Iterable, List

from models.content import AttachmentRecord, ContentDocument, ExportRecord
from mdx_migrator.utils.images import LocalImageIndex, basename_from_url, match_local_image

MDX_SUFFIX = ".mdx"


def reset_content_dir(directory: str) -> None:
    """Create ``directory`` and remove any ``.mdx`` left by a previous run."""
    os.makedirs(directory, exist_ok=True)
    for entry in os.scandir(directory):
        if entry.is_file() and entry.name.endswith(MDX_SUFFIX):
            os.remove(entry.path)


def write_content_document(doc: ContentDocument, directory: str) -> str:
    path = os.path.join(directory, f"{doc.slug}{MDX_SUFFIX}")
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(doc.to_mdx())
    return path


def write_json(path: str, data: Any) -> str:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")
    return path


def build_attachment_inventory(
    attachments: Iterable[ExportRecord], index: LocalImageIndex
) -> List[AttachmentRecord]:
    """Match every attachment of the export against the local images."""
    inventory: List[AttachmentRecord] = []
    for item in attachments:
        original = item.attachment_url
        basename = basename_from_url(original or item.guid)
        match = match_local_image(index, basename)
        inventory.append(
            AttachmentRecord(
                original_url=original,
                basename=basename,
                local_match=match.matched,
                local_path=f"./images/{match.file}" if match.matched else None,
            )
        )
    return inventory


def copy_public_images(index: LocalImageIndex, images_dir: str, public_dir: str) -> int:
    """Copy every indexed image into ``public_dir``.  Returns the file count."""
    os.makedirs(public_dir, exist_ok=True)
    for name in index.all_files:
        shutil.copyfile(os.path.join(images_dir, name), os.path.join(public_dir, name))
    return len(index.all_files)
