"""
Local image index and filename matching.

WordPress keeps several renditions of every upload (``photo-300x200.jpg``,
``photo-scaled.jpg``, ``photo-e1612345.jpg``) and people who download a
media library by hand add their own (``photo (1).jpg``, ``photo-1.jpg``).
This module groups all of those under one *canonical key* so a reference
found in exported HTML can be resolved to whichever rendition actually
exists in the local image directory.

Resolution is two-tier: an exact, case-insensitive filename match always
wins; only when there is none do we fall back to the canonical bucket.
"""

from __future__ import annotations

import os
import posixpath
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
from urllib.parse import unquote, urlsplit

from .errors import MissingInputError

_DIMENSIONS_SUFFIX = re.compile(r"-\d{2,4}x\d{2,4}$")
_SCALED_SUFFIX = re.compile(r"-scaled$")
_EDITED_SUFFIX = re.compile(r"-e\d+$")
_COPY_SUFFIX = re.compile(r"\s*\(\d+\)$")
_NUMERIC_SUFFIX = re.compile(r"-(\d+)$")

# Scoring patterns run against the whole lower-cased filename.
_SCORE_PATTERNS = (
    re.compile(r"-\d{2,4}x\d{2,4}(?=\.[^.]+$)"),
    re.compile(r"-scaled(?=\.[^.]+$)"),
    re.compile(r"-e\d+(?=-|\.|$)"),
    re.compile(r"\(\d+\)(?=\.[^.]+$)"),
)

# Trailing "-<n>" values treated as download duplicates.  Anything else
# (e.g. "-2") may be a genuinely different image and is kept.
DUPLICATE_NUMBER_SUFFIXES = frozenset({"1"})


def _strip_duplicate_number(name: str) -> str:
    def _replace(m: re.Match) -> str:
        return "" if m.group(1) in DUPLICATE_NUMBER_SUFFIXES else m.group(0)

    return _NUMERIC_SUFFIX.sub(_replace, name)


def _strip_variant_suffixes(name: str) -> str:
    name = _DIMENSIONS_SUFFIX.sub("", name)
    name = _SCALED_SUFFIX.sub("", name)
    name = _EDITED_SUFFIX.sub("", name)
    name = _COPY_SUFFIX.sub("", name)
    name = _strip_duplicate_number(name)
    return re.sub(r"\s+", " ", name).strip()


def canonicalize_filename(filename: str) -> str:
    """Return the dedup key for ``filename``.

    ``photo-300x200.jpg``, ``photo-scaled.jpg``, ``photo-e123.jpg``,
    ``Photo (1).JPG`` and ``photo.jpg`` all map to ``photo.jpg``.
    Suffixes are stripped until the stem stops changing, so stacked
    variants such as ``photo-scaled-1024x768.jpg`` collapse as well.
    """
    stem, ext = os.path.splitext(filename)
    name = stem.lower()
    while True:
        stripped = _strip_variant_suffixes(name)
        if stripped == name:
            break
        name = stripped
    return f"{name}{ext.lower()}"


def score_candidate(filename: str) -> float:
    """Preference score for a bucket member.  Lower is better."""
    lower = filename.lower()
    score = sum(10 for pattern in _SCORE_PATTERNS if pattern.search(lower))
    return score + len(lower) / 1000


@dataclass(frozen=True)
class LocalImageIndex:
    by_exact_lower: Dict[str, str]
    by_canonical: Dict[str, Tuple[str, ...]]
    all_files: Tuple[str, ...]


@dataclass(frozen=True)
class ImageMatch:
    matched: bool
    file: Optional[str] = None


def read_local_images(images_dir: str) -> LocalImageIndex:
    """Scan ``images_dir`` (non-recursively) and build the lookup maps.

    :raises MissingInputError: if the directory does not exist.
    """
    if not os.path.isdir(images_dir):
        raise MissingInputError("IMAGES_DIR_NOT_FOUND", images_dir)

    all_files = sorted(
        entry.name for entry in os.scandir(images_dir) if entry.is_file()
    )

    by_exact_lower: Dict[str, str] = {}
    buckets: Dict[str, List[str]] = {}
    for name in all_files:
        by_exact_lower[name.lower()] = name
        buckets.setdefault(canonicalize_filename(name), []).append(name)

    by_canonical = {
        key: tuple(sorted(names, key=lambda n: (score_candidate(n), n)))
        for key, names in buckets.items()
    }
    return LocalImageIndex(
        by_exact_lower=by_exact_lower,
        by_canonical=by_canonical,
        all_files=tuple(all_files),
    )


def basename_from_url(url: str) -> str:
    """Last path segment of ``url`` with query/fragment removed, percent-decoded."""
    path = urlsplit(url or "").path
    return unquote(posixpath.basename(path))


def match_local_image(index: LocalImageIndex, filename_or_url: str) -> ImageMatch:
    """Resolve a filename or URL to a file in ``index``."""
    basename = basename_from_url(filename_or_url)
    if not basename:
        return ImageMatch(False)

    exact = index.by_exact_lower.get(basename.lower())
    if exact:
        return ImageMatch(True, exact)

    candidates = index.by_canonical.get(canonicalize_filename(basename))
    if candidates:
        return ImageMatch(True, candidates[0])

    return ImageMatch(False)
