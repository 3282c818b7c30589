"""
Rebuild the navigation tree from WordPress ``nav_menu_item`` records.

WordPress stores a menu as a flat list; each entry points at its parent
through the ``_menu_item_menu_item_parent`` meta value (``0`` for the top
level) and at its target through ``_menu_item_type``,
``_menu_item_object`` and ``_menu_item_object_id``.  The export does not
guarantee any useful order, so entries are grouped by parent id and each
sibling group is sorted by ``menu_order`` before the tree is assembled.

Entries whose parent id does not exist are never reached from the root
and are left out of the result.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Mapping

from models.content import ExportRecord, MenuNode

_EXTERNAL_URL = re.compile(r"^(?:https?://|mailto:|tel:)", re.IGNORECASE)

ROOT_PARENT_ID = 0


@dataclass(frozen=True)
class NavRecord:
    id: int
    parent_id: int
    title: str
    menu_order: int
    type: str
    object: str
    object_id: int
    url: str


def _to_int(value: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def to_nav_record(item: ExportRecord) -> NavRecord:
    meta = item.meta
    return NavRecord(
        id=item.id,
        parent_id=_to_int(meta.get("_menu_item_menu_item_parent", "0")),
        title=item.title or item.slug or "Untitled",
        menu_order=item.menu_order,
        type=meta.get("_menu_item_type", ""),
        object=meta.get("_menu_item_object", ""),
        object_id=_to_int(meta.get("_menu_item_object_id", "0")),
        url=meta.get("_menu_item_url", ""),
    )


def is_external_url(url: str) -> bool:
    return bool(_EXTERNAL_URL.match(url or ""))


def resolve_menu_url(
    record: NavRecord,
    page_slugs: Mapping[int, str],
    post_slugs: Mapping[int, str],
    *,
    home_slug: str = "home",
    posts_route: str = "/dr-evans-academy",
) -> str:
    """Site-relative URL for a page/post target, the stored URL otherwise."""
    if record.type == "post_type" and record.object == "page":
        slug = page_slugs.get(record.object_id)
        if slug:
            return "/" if slug == home_slug else f"/{slug}"
    elif record.type == "post_type" and record.object == "post":
        slug = post_slugs.get(record.object_id)
        if slug:
            return f"{posts_route.rstrip('/')}/{slug}"
    return record.url


def build_menu(
    nav_items: Iterable[ExportRecord],
    page_slugs: Mapping[int, str],
    post_slugs: Mapping[int, str],
    *,
    home_slug: str = "home",
    posts_route: str = "/dr-evans-academy",
) -> List[MenuNode]:
    """Return the top-level menu nodes with their children attached.

    Sibling order depends only on ``(menu_order, id)``, never on the order
    of ``nav_items``.
    """
    children_by_parent: Dict[int, List[NavRecord]] = {}
    for item in nav_items:
        record = to_nav_record(item)
        children_by_parent.setdefault(record.parent_id, []).append(record)
    for siblings in children_by_parent.values():
        siblings.sort(key=lambda r: (r.menu_order, r.id))

    def to_node(record: NavRecord, ancestors: FrozenSet[int]) -> MenuNode:
        url = resolve_menu_url(
            record, page_slugs, post_slugs, home_slug=home_slug, posts_route=posts_route
        )
        path = ancestors | {record.id}
        kids = [
            to_node(child, path)
            for child in children_by_parent.get(record.id, [])
            if child.id not in path
        ]
        return MenuNode(title=record.title, url=url, external=is_external_url(url), children=kids)

    return [
        to_node(record, frozenset({ROOT_PARENT_ID}))
        for record in children_by_parent.get(ROOT_PARENT_ID, [])
    ]
