import os
import xml.etree.ElementTree as ET
from typing import Dict, Iterable, List, Optional

from models.content import ExportRecord, RecordKind
from mdx_migrator.utils.errors import ExportParseError, MissingInputError

CONTENT_NS = "http://purl.org/rss/1.0/modules/content/"
# WXR 1.0, 1.1 and 1.2 only differ in the version segment of this URI.
WP_NS_PREFIX = "http://wordpress.org/export/"

PUBLISHED_STATUS = "publish"

_KINDS_BY_POST_TYPE = {kind.value: kind for kind in RecordKind}


def safe_text(element: Optional[ET.Element]) -> str:
    """Return the text of ``element`` as a plain string.

    CDATA sections, plain text and text split across nested nodes all
    collapse into one string; a missing element yields ``""``.
    """
    if element is None:
        return ""
    return "".join(element.itertext())


def _local_name(tag: str) -> str:
    """Map ``{namespace}name`` to the ``prefix:name`` form used in WXR files."""
    if not tag.startswith("{"):
        return tag
    uri, _, name = tag[1:].partition("}")
    if uri == CONTENT_NS:
        return f"content:{name}"
    if uri.startswith(WP_NS_PREFIX):
        prefix = "excerpt" if uri.rstrip("/").endswith("excerpt") else "wp"
        return f"{prefix}:{name}"
    return name


def _to_int(value: str) -> int:
    try:
        return int(value.strip())
    except (AttributeError, ValueError):
        return 0


def _item_fields(item: ET.Element) -> Dict[str, ET.Element]:
    fields: Dict[str, ET.Element] = {}
    for child in item:
        # Repeated elements (postmeta, category) are read separately.
        fields.setdefault(_local_name(child.tag), child)
    return fields


def parse_postmeta(item: ET.Element) -> Dict[str, str]:
    """Flatten the repeated ``wp:postmeta`` key/value pairs of ``item``."""
    meta: Dict[str, str] = {}
    for child in item:
        if _local_name(child.tag) != "wp:postmeta":
            continue
        key = value = ""
        for part in child:
            name = _local_name(part.tag)
            if name == "wp:meta_key":
                key = safe_text(part)
            elif name == "wp:meta_value":
                value = safe_text(part)
        if key:
            meta[key] = value
    return meta


def _record_from_item(item: ET.Element) -> Optional[ExportRecord]:
    fields = _item_fields(item)

    def text(name: str) -> str:
        return safe_text(fields.get(name))

    kind = _KINDS_BY_POST_TYPE.get(text("wp:post_type"))
    if kind is None:
        return None
    status = text("wp:status")
    if kind in (RecordKind.PAGE, RecordKind.POST) and status != PUBLISHED_STATUS:
        return None

    return ExportRecord(
        kind=kind,
        id=_to_int(text("wp:post_id")),
        title=text("title"),
        content=text("content:encoded") if kind in (RecordKind.PAGE, RecordKind.POST) else "",
        date=text("wp:post_date"),
        modified=text("wp:post_modified"),
        status=status,
        slug=text("wp:post_name"),
        link=text("link"),
        guid=text("guid"),
        attachment_url=text("wp:attachment_url"),
        menu_order=_to_int(text("wp:menu_order")),
        meta=parse_postmeta(item) if kind is RecordKind.NAV_MENU_ITEM else {},
    )


def extract_records_from_xml(file_path: str) -> List[ExportRecord]:
    """Parse a WordPress WXR export into :class:`ExportRecord` objects.

    Only pages, posts, attachments and navigation menu items are kept.
    Pages and posts are kept only when published; drafts, pending and
    trashed items are dropped here so no later stage ever sees them.

    Args:
        file_path (str): Path to the XML export.

    Returns:
        list: Records in document order.

    Raises:
        MissingInputError: If ``file_path`` does not exist.
        ExportParseError: If the file is not well-formed XML.
    """
    if not os.path.isfile(file_path):
        raise MissingInputError("EXPORT_NOT_FOUND", file_path)
    try:
        root = ET.parse(file_path).getroot()
    except ET.ParseError as e:
        raise ExportParseError(file_path, str(e)) from e

    records = []
    for item in root.findall("./channel/item"):
        record = _record_from_item(item)
        if record is not None:
            records.append(record)
    return records


def records_of_kind(records: Iterable[ExportRecord], kind: RecordKind) -> List[ExportRecord]:
    return [r for r in records if r.kind is kind]
