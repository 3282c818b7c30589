"""
Image audit: check the generated content tree against the export and the
local image directory.

Two independent checks gate a build:

* every image attachment in the export must have a local counterpart
  (compared by canonical key, so any rendition will do);
* every ``/images/...`` reference in a generated ``.mdx`` file must name a
  file that exists, byte for byte.

Local images that no document references are listed as well, but only
for information; they never fail the audit.
"""

from __future__ import annotations

import glob
import os
import re
from dataclasses import dataclass, field
from typing import Dict, List, Set

from models.content import RecordKind
from mdx_migrator.extractors.wordpress_extractor import extract_records_from_xml, records_of_kind
from mdx_migrator.utils.images import basename_from_url, canonicalize_filename, read_local_images

IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg"})
LOCAL_IMAGE_PREFIXES = ("/images/", "images/", "./images/")
AUDIT_REPORT_FILE = "IMAGE_AUDIT_REPORT.md"

_SRC_ATTR = re.compile(r"""\bsrc\s*=\s*["']([^"']+)["']""", re.IGNORECASE)
_SRCSET_ATTR = re.compile(r"""\bsrcset\s*=\s*["']([^"']+)["']""", re.IGNORECASE)
_LAZY_SRC_ATTR = re.compile(r"""\bdata-(?:src|lazy-src|original)\s*=\s*["']([^"']+)["']""", re.IGNORECASE)
_MARKDOWN_IMAGE = re.compile(r"""!\[(?:\\.|[^\]\\])*]\(([^)\s]+)(?:\s+["'][^"']*["'])?\)""")


@dataclass(frozen=True)
class BrokenReference:
    file: str
    ref: str


@dataclass
class ImageAuditResult:
    expected_basenames: Set[str] = field(default_factory=set)
    expected_by_canonical: Dict[str, List[str]] = field(default_factory=dict)
    local_files: Set[str] = field(default_factory=set)
    scanned_files: List[str] = field(default_factory=list)
    referenced_files: Set[str] = field(default_factory=set)
    missing_expected: List[str] = field(default_factory=list)
    broken_references: List[BrokenReference] = field(default_factory=list)
    unused_images: List[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.missing_expected or self.broken_references)


def _srcset_urls(srcset: str) -> List[str]:
    return [part.split()[0] for part in srcset.split(",") if part.strip()]


def extract_image_refs(text: str) -> List[str]:
    """Every image URL in ``text``: HTML attributes and Markdown images."""
    refs = [m.group(1) for m in _SRC_ATTR.finditer(text)]
    for m in _SRCSET_ATTR.finditer(text):
        refs.extend(_srcset_urls(m.group(1)))
    refs.extend(m.group(1) for m in _LAZY_SRC_ATTR.finditer(text))
    refs.extend(m.group(1) for m in _MARKDOWN_IMAGE.finditer(text))
    return refs


def is_local_image_ref(url: str) -> bool:
    return url.startswith(LOCAL_IMAGE_PREFIXES)


def list_mdx_files(content_dir: str) -> List[str]:
    files: List[str] = []
    for kind in ("pages", "posts"):
        files.extend(sorted(glob.glob(os.path.join(content_dir, kind, "*.mdx"))))
    return files


def audit_images(export_path: str, images_dir: str, content_dir: str) -> ImageAuditResult:
    """Run both checks.  Fatal input problems raise like the migration does."""
    result = ImageAuditResult()

    records = extract_records_from_xml(export_path)
    for item in records_of_kind(records, RecordKind.ATTACHMENT):
        url = item.attachment_url or item.guid
        if not url:
            continue
        base = basename_from_url(url)
        if os.path.splitext(base)[1].lower() not in IMAGE_EXTENSIONS:
            continue
        result.expected_basenames.add(base)
        result.expected_by_canonical.setdefault(canonicalize_filename(base), []).append(base)

    local = read_local_images(images_dir)
    result.local_files = set(local.all_files)

    for path in list_mdx_files(content_dir):
        result.scanned_files.append(path)
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        for ref in extract_image_refs(text):
            if not is_local_image_ref(ref):
                continue
            basename = basename_from_url(ref)
            result.referenced_files.add(basename)
            if basename not in result.local_files:
                result.broken_references.append(
                    BrokenReference(os.path.relpath(path, content_dir), ref)
                )

    result.missing_expected = sorted(
        key for key in result.expected_by_canonical if key not in local.by_canonical
    )
    result.unused_images = sorted(result.local_files - result.referenced_files)
    return result


def render_audit_report(result: ImageAuditResult) -> str:
    lines: List[str] = ["# Image Audit Report", ""]
    lines.append(f"- **Expected attachments (from XML)**: {len(result.expected_basenames)}")
    lines.append(f"- **Local images present**: {len(result.local_files)}")
    lines.append(f"- **MDX files scanned**: {len(result.scanned_files)}")
    lines.append(f"- **Referenced local images**: {len(result.referenced_files)}")

    lines += ["", "## Missing images (expected by XML but not found locally)", ""]
    if not result.missing_expected:
        lines.append("None")
    for key in result.missing_expected:
        lines += [f"- {b}" for b in sorted(result.expected_by_canonical[key])]

    lines += ["", "## Broken references (MDX points to a non-existent local file)", ""]
    if not result.broken_references:
        lines.append("None")
    lines += [f"- **{br.file}** → `{br.ref}`" for br in result.broken_references]

    lines += ["", "## Unused local images (present but never referenced in MDX)", ""]
    if not result.unused_images:
        lines.append("None")
    lines += [f"- {b}" for b in result.unused_images]

    lines.append("")
    return "\n".join(lines) + "\n"


def write_audit_report(result: ImageAuditResult, content_dir: str) -> str:
    os.makedirs(content_dir, exist_ok=True)
    path = os.path.join(content_dir, AUDIT_REPORT_FILE)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(render_audit_report(result))
    return path
