from __future__ import annotations

import io
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

UNTITLED_SLUG = "untitled"
UNTITLED_TITLE = "Untitled"


class RecordKind(str, Enum):
    PAGE = "page"
    POST = "post"
    ATTACHMENT = "attachment"
    NAV_MENU_ITEM = "nav_menu_item"


class ExportRecord(BaseModel):
    """One ``<item>`` of a WordPress export, reduced to plain strings."""

    model_config = ConfigDict(frozen=True)

    kind: RecordKind
    id: int = 0
    title: str = ""
    content: str = ""
    date: str = ""
    modified: str = ""
    status: str = ""
    slug: str = ""
    link: str = ""
    guid: str = ""
    attachment_url: str = ""
    menu_order: int = 0
    meta: Dict[str, str] = Field(default_factory=dict)


class ContentDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = UNTITLED_TITLE
    slug: str = UNTITLED_SLUG
    type: Literal["page", "post"]
    date: str = ""
    updated: str = ""
    wp_id: int = Field(0, alias="wpId")
    wp_link: str = Field("", alias="wpLink")
    body: str = ""

    @field_validator("slug", mode="before")
    @classmethod
    def _ensure_slug(cls, v: Optional[str]) -> str:
        text = (v or "").strip()
        return text or UNTITLED_SLUG

    @field_validator("title", mode="before")
    @classmethod
    def _ensure_title(cls, v: Optional[str]) -> str:
        return v or UNTITLED_TITLE

    @field_validator("date", "updated", mode="before")
    @classmethod
    def _day_only(cls, v: Optional[str]) -> str:
        # WordPress timestamps look like "2024-01-05 10:00:00"
        return (v or "")[:10]

    def frontmatter(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude={"body"})

    def to_mdx(self) -> str:
        buf = io.StringIO()
        yaml.safe_dump(self.frontmatter(), buf, sort_keys=False, allow_unicode=True, width=4096)
        text = f"---\n{buf.getvalue()}---\n"
        if self.body:
            text += f"\n{self.body}\n"
        return text


class MenuNode(BaseModel):
    title: str
    url: str = ""
    external: bool = False
    children: List[MenuNode] = Field(default_factory=list)


MenuNode.model_rebuild()


class AttachmentRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    original_url: str = Field("", alias="originalUrl")
    basename: str = ""
    local_match: bool = Field(False, alias="localMatch")
    local_path: Optional[str] = Field(None, alias="localPath")
