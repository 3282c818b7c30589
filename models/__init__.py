"""
Pydantic models shared by the migration and the image audit.

* :class:`ExportRecord` – one parsed item of the WordPress export
* :class:`ContentDocument` – one generated MDX page or post
* :class:`MenuNode` – one entry of the navigation tree
* :class:`AttachmentRecord` – one row of the attachment inventory
"""

from .content import (
    AttachmentRecord,
    ContentDocument,
    ExportRecord,
    MenuNode,
    RecordKind,
)

__all__ = ["AttachmentRecord", "ContentDocument", "ExportRecord", "MenuNode", "RecordKind"]
