"""
In-memory accumulator for a migration run and its Markdown rendering.

Nothing is written while the pipeline runs: the rewriter records missing
images and external links here, the orchestrator records slugs and empty
pages, and :func:`render_migration_report` turns the whole thing into
``MIGRATION_REPORT.md`` at the end.  Every listing is sorted so two runs
over the same inputs produce the same file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Set


@dataclass(frozen=True)
class MissingImage:
    basename: str
    where: str
    original: str


@dataclass(frozen=True)
class FlaggedRecord:
    where: str
    title: str
    detail: str = ""


@dataclass
class MigrationReport:
    external_links: Set[str] = field(default_factory=set)
    missing_images: List[MissingImage] = field(default_factory=list)
    empty_pages: List[FlaggedRecord] = field(default_factory=list)
    conversion_errors: List[FlaggedRecord] = field(default_factory=list)
    page_slugs: List[str] = field(default_factory=list)
    post_slugs: List[str] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)

    def add_missing_image(self, basename: str, where: str, original: str) -> None:
        self.missing_images.append(MissingImage(basename, where, original))

    def missing_by_basename(self) -> Dict[str, List[MissingImage]]:
        grouped: Dict[str, List[MissingImage]] = {}
        for m in self.missing_images:
            grouped.setdefault(m.basename, []).append(m)
        return {k: grouped[k] for k in sorted(grouped)}

    def summary(self) -> Dict[str, int]:
        return {**self.counts, "missingImages": len(self.missing_by_basename())}


def render_migration_report(report: MigrationReport, *, posts_route: str) -> str:
    lines: List[str] = ["# WordPress → MDX Migration Report", ""]
    lines.append(f"- **Pages migrated**: {report.counts.get('pages', 0)}")
    lines.append(f"- **Posts migrated**: {report.counts.get('posts', 0)}")
    lines.append(f"- **Attachments found**: {report.counts.get('attachments', 0)}")
    lines.append(f"- **Menu items found**: {report.counts.get('navMenuItems', 0)}")
    lines += ["", "## Slugs created", "", "### Pages", ""]
    lines += [f"- `/{slug}`" for slug in sorted(report.page_slugs)]
    lines += ["", "### Posts", ""]
    lines += [f"- `{posts_route.rstrip('/')}/{slug}`" for slug in sorted(report.post_slugs)]

    lines += ["", "## External links discovered", ""]
    lines += [f"- {url}" for url in sorted(report.external_links)]

    lines += ["", "## Missing images", ""]
    missing = report.missing_by_basename()
    if not missing:
        lines.append("None")
    for basename, refs in missing.items():
        lines.append(f"- **{basename}**")
        lines += [f"  - {ref.where}: {ref.original}" for ref in refs]

    lines += ["", "## Pages with empty content", ""]
    if not report.empty_pages:
        lines.append("None")
    lines += [f"- `{p.where}` — {p.title}" for p in report.empty_pages]

    if report.conversion_errors:
        lines += ["", "## Conversion errors", ""]
        lines += [f"- `{e.where}` — {e.title}: {e.detail}" for e in report.conversion_errors]

    lines.append("")
    return "\n".join(lines) + "\n"
