"""
HTML → MDX conversion for exported pages and posts.

The conversion runs in two stages.  :func:`sanitize_html` works on a
BeautifulSoup tree: it drops page-builder cruft, points every upload
reference at the local media directory (recording the ones it cannot
resolve), collects off-site links and finally self-closes void elements,
because MDX parses inline HTML as JSX.  :func:`html_to_markdown` then
turns the cleaned HTML into Markdown with :mod:`markdownify`, keeping
images and figure captions as Markdown and blockquotes as literal HTML.

:func:`convert_html_to_mdx` chains both stages and is what the migration
tool calls for every record.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from bs4 import BeautifulSoup, Tag
from markdownify import MarkdownConverter, abstract_inline_conversion

from mdx_migrator.utils.images import LocalImageIndex, basename_from_url, match_local_image
from mdx_migrator.utils.report import MigrationReport

DEFAULT_MEDIA_PREFIX = "/images/"

REMOVED_TAGS = [
    "style", "script", "noscript",
    "form", "input", "textarea", "select", "button",
    "wbr",
]
STRIPPED_ATTRIBUTES = ("style", "class", "id")
LAZY_SRC_ATTRIBUTES = ("data-src", "data-lazy-src", "data-original")
MEDIA_TAGS = ["img", "iframe", "video", "audio"]
VOID_TAGS = ("img", "br", "hr", "input", "meta", "link", "source")

_UPLOADS_URL = re.compile(r"/wp-content/uploads/", re.IGNORECASE)
_HTTP_URL = re.compile(r"^https?://", re.IGNORECASE)
_VOID_TAG_PATTERNS = [re.compile(rf"<{tag}(\s[^>]*?)?>", re.IGNORECASE) for tag in VOID_TAGS]


@dataclass(frozen=True)
class RewriteContext:
    kind: str
    slug: str
    title: str = ""

    @property
    def where(self) -> str:
        return f"{self.kind}:{self.slug}"


def is_uploads_url(url: str) -> bool:
    return bool(_UPLOADS_URL.search(url or ""))


def is_external_link(href: str, site_domain: str) -> bool:
    if not _HTTP_URL.match(href or ""):
        return False
    return not site_domain or site_domain.lower() not in href.lower()


def local_media_path(filename: str, media_prefix: str = DEFAULT_MEDIA_PREFIX) -> str:
    return f"{media_prefix}{quote(filename)}"


class _MediaRewriter:
    """Resolves upload URLs against the local index for one record."""

    def __init__(self, index: LocalImageIndex, context: RewriteContext,
                 report: MigrationReport, media_prefix: str) -> None:
        self.index = index
        self.context = context
        self.report = report
        self.media_prefix = media_prefix

    def rewrite(self, raw: str) -> Optional[str]:
        """Local path for ``raw``, or ``None`` when it is not rewritten."""
        if not raw or not is_uploads_url(raw):
            return None
        basename = basename_from_url(raw)
        match = match_local_image(self.index, basename)
        if match.matched and match.file:
            return local_media_path(match.file, self.media_prefix)
        self.report.add_missing_image(basename, self.context.where, raw)
        return None

    def rewrite_img(self, img: Tag) -> None:
        src = img.get("src") or ""
        lazy_src = next((img.get(a) for a in LAZY_SRC_ATTRIBUTES if img.get(a)), "")
        new_src = self.rewrite(src) or self.rewrite(lazy_src)
        if new_src:
            img["src"] = new_src
            for attr in LAZY_SRC_ATTRIBUTES:
                img.attrs.pop(attr, None)

        srcset = img.get("srcset")
        if srcset:
            img["srcset"] = ", ".join(self._rewrite_srcset_entry(p) for p in srcset.split(",") if p.strip())

    def _rewrite_srcset_entry(self, entry: str) -> str:
        parts = entry.split()
        url = parts[0]
        url = self.rewrite(url) or url
        return f"{url} {parts[1]}" if len(parts) > 1 else url

    def rewrite_link(self, a: Tag, site_domain: str) -> None:
        href = a.get("href") or ""
        if is_external_link(href, site_domain):
            self.report.external_links.add(href)
        new_href = self.rewrite(href)
        if new_href:
            a["href"] = new_href


def _decompose_all(soup: BeautifulSoup, names) -> None:
    for el in soup.find_all(names):
        # Children of an element removed earlier in the loop are gone already.
        if not el.decomposed:
            el.decompose()


def _remove_empty_paragraphs(soup: BeautifulSoup) -> None:
    for p in soup.find_all("p"):
        if p.decomposed:
            continue
        if not p.get_text().strip() and p.find(MEDIA_TAGS) is None:
            p.decompose()


def mdxify_html(html: str) -> str:
    """Self-close every void element: ``<img ...>`` → ``<img ... />``."""
    out = html
    for pattern in _VOID_TAG_PATTERNS:
        out = pattern.sub(lambda m: m.group(0) if m.group(0).endswith("/>") else m.group(0)[:-1] + " />", out)
    return out


def sanitize_html(
    html: str,
    local_images: LocalImageIndex,
    context: RewriteContext,
    report: MigrationReport,
    *,
    site_domain: str = "",
    media_prefix: str = DEFAULT_MEDIA_PREFIX,
) -> str:
    """Clean ``html`` and rewrite its media references.

    Missing images and external links are recorded on ``report``; the
    returned HTML has every void element self-closed.
    """
    soup = BeautifulSoup(html or "", "html.parser")

    _decompose_all(soup, REMOVED_TAGS)
    for el in soup.find_all(True):
        for attr in STRIPPED_ATTRIBUTES:
            el.attrs.pop(attr, None)

    media = _MediaRewriter(local_images, context, report, media_prefix)
    for img in soup.find_all("img"):
        media.rewrite_img(img)
    for a in soup.find_all("a", href=True):
        media.rewrite_link(a, site_domain)

    _remove_empty_paragraphs(soup)

    body = soup.body.decode_contents() if soup.body else str(soup)
    return mdxify_html(body.strip())


def _image_markdown(img: Optional[Tag]) -> str:
    if img is None:
        return ""
    src = (img.get("src") or "").strip()
    alt = (img.get("alt") or "").strip()
    alt = alt.replace("[", "\\[").replace("]", "\\]")
    return f"![{alt}]({src})" if src else ""


class MDXConverter(MarkdownConverter):
    """markdownify converter with the image, figure and blockquote rules MDX needs."""

    # Emphasis is written with underscores, strong stays "**".
    convert_em = abstract_inline_conversion(lambda self: "_")
    convert_i = convert_em

    def convert_img(self, el, text, parent_tags):
        return _image_markdown(el)

    def convert_figure(self, el, text, parent_tags):
        image = _image_markdown(el.find("img"))
        caption_el = el.find("figcaption")
        caption = caption_el.get_text().strip() if caption_el else ""
        caption_md = f"\n\n_{caption}_" if caption else ""
        return f"\n\n{image}{caption_md}\n\n"

    def convert_blockquote(self, el, text, parent_tags):
        return f"\n\n{el}\n\n"


def html_to_markdown(html: str) -> str:
    converter = MDXConverter(heading_style="atx", bullets="-")
    md = converter.convert(html)
    return re.sub(r"\n{3,}", "\n\n", md).strip()


def convert_html_to_mdx(
    html: str,
    local_images: LocalImageIndex,
    context: RewriteContext,
    report: MigrationReport,
    *,
    site_domain: str = "",
    media_prefix: str = DEFAULT_MEDIA_PREFIX,
) -> str:
    """Convert one record's HTML body to an MDX body."""
    sanitized = sanitize_html(
        html, local_images, context, report, site_domain=site_domain, media_prefix=media_prefix
    )
    return html_to_markdown(sanitized)


def is_empty_body(body: str) -> bool:
    return not re.sub(r"<[^>]+>", "", body or "").strip()
