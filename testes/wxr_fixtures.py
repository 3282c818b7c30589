"""Helpers that render small WordPress WXR exports for tests."""

from pathlib import Path
from typing import Dict, Iterable, Optional

WXR_HEADER = """<?xml version="1.0" encoding="UTF-8" ?>
<rss version="2.0"
    xmlns:excerpt="http://wordpress.org/export/1.2/excerpt/"
    xmlns:content="http://purl.org/rss/1.0/modules/content/"
    xmlns:dc="http://purl.org/dc/elements/1.1/"
    xmlns:wp="http://wordpress.org/export/1.2/">
<channel>
<title>Foundation</title>
<link>https://site.test</link>
"""

WXR_FOOTER = "</channel>\n</rss>\n"


def item(
    post_id: int,
    post_type: str,
    *,
    title: str = "",
    slug: str = "",
    status: str = "publish",
    content: str = "",
    link: str = "",
    date: str = "2024-01-05 10:00:00",
    modified: str = "2024-02-01 09:30:00",
    attachment_url: str = "",
    menu_order: int = 0,
    meta: Optional[Dict[str, str]] = None,
) -> str:
    parts = [
        "<item>",
        f"<title><![CDATA[{title}]]></title>",
        f"<link>{link}</link>",
        f'<guid isPermaLink="false">{attachment_url or link}</guid>',
        f"<content:encoded><![CDATA[{content}]]></content:encoded>",
        f"<wp:post_id>{post_id}</wp:post_id>",
        f"<wp:post_date><![CDATA[{date}]]></wp:post_date>",
        f"<wp:post_modified><![CDATA[{modified}]]></wp:post_modified>",
        f"<wp:post_name><![CDATA[{slug}]]></wp:post_name>",
        f"<wp:status><![CDATA[{status}]]></wp:status>",
        f"<wp:menu_order>{menu_order}</wp:menu_order>",
        f"<wp:post_type><![CDATA[{post_type}]]></wp:post_type>",
    ]
    if attachment_url:
        parts.append(f"<wp:attachment_url><![CDATA[{attachment_url}]]></wp:attachment_url>")
    for key, value in (meta or {}).items():
        parts.append(
            "<wp:postmeta>"
            f"<wp:meta_key><![CDATA[{key}]]></wp:meta_key>"
            f"<wp:meta_value><![CDATA[{value}]]></wp:meta_value>"
            "</wp:postmeta>"
        )
    parts.append("</item>")
    return "\n".join(parts)


def nav_item(
    post_id: int,
    title: str,
    *,
    parent: int = 0,
    order: int = 0,
    item_type: str = "custom",
    obj: str = "custom",
    object_id: int = 0,
    url: str = "",
) -> str:
    return item(
        post_id,
        "nav_menu_item",
        title=title,
        slug=str(post_id),
        menu_order=order,
        meta={
            "_menu_item_type": item_type,
            "_menu_item_menu_item_parent": str(parent),
            "_menu_item_object_id": str(object_id),
            "_menu_item_object": obj,
            "_menu_item_url": url,
        },
    )


def write_export(path: Path, items: Iterable[str]) -> Path:
    path.write_text(WXR_HEADER + "\n".join(items) + "\n" + WXR_FOOTER, encoding="utf-8")
    return path


def make_images(directory: Path, names: Iterable[str]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for name in names:
        (directory / name).write_bytes(b"\x89PNG")
    return directory
