import os
import sys

# Ensure project root is on sys.path for imports when running tests directly
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest

from mdx_migrator.utils.errors import MissingInputError
from mdx_migrator.utils.images import (
    basename_from_url,
    canonicalize_filename,
    match_local_image,
    read_local_images,
)
from wxr_fixtures import make_images

VARIANTS = ["photo-300x200.jpg", "photo-scaled.jpg", "photo-e123.jpg", "photo (1).jpg", "photo.jpg"]


@pytest.mark.parametrize("name", VARIANTS + ["Photo-1.JPG", "photo-1024x768-1.jpg", "photo-scaled-300x200.jpg"])
def test_wordpress_variants_share_one_key(name):
    assert canonicalize_filename(name) == "photo.jpg"


def test_numeric_suffix_other_than_one_is_kept():
    assert canonicalize_filename("banner-2.png") == "banner-2.png"
    assert canonicalize_filename("banner-2-1.png") == "banner-2.png"


def test_inner_whitespace_is_collapsed():
    assert canonicalize_filename("Board   Meeting (2).JPEG") == "board meeting.jpeg"


@pytest.mark.parametrize(
    "name",
    VARIANTS
    + [
        "photo-300x200-1.jpg",
        "a-1-1.png",
        "x (3) (1).gif",
        "report-e1612345-scaled.webp",
        ".hidden",
        "no-extension",
        "IMG 2020 -1.jpg",
    ],
)
def test_canonicalize_is_idempotent(name):
    once = canonicalize_filename(name)
    assert canonicalize_filename(once) == once


def test_bucket_prefers_the_original(tmp_path):
    images = make_images(tmp_path / "images", VARIANTS)
    index = read_local_images(str(images))
    bucket = index.by_canonical["photo.jpg"]
    assert bucket[0] == "photo.jpg"
    assert sorted(bucket) == sorted(VARIANTS)
    assert len(index.by_canonical) == 1


def test_every_file_lands_in_exactly_one_bucket(tmp_path):
    names = VARIANTS + ["logo.png", "logo-150x150.png", "Logo-2.png"]
    images = make_images(tmp_path / "images", names)
    (images / "nested").mkdir()
    index = read_local_images(str(images))

    bucketed = [n for bucket in index.by_canonical.values() for n in bucket]
    assert sorted(bucketed) == sorted(names)
    assert sorted(index.all_files) == sorted(names)
    assert "nested" not in index.all_files


def test_exact_match_wins_over_canonical_bucket(tmp_path):
    images = make_images(tmp_path / "images", ["Photo.JPG", "photo-1.jpg"])
    index = read_local_images(str(images))
    match = match_local_image(index, "photo.jpg")
    assert match.matched and match.file == "Photo.JPG"


def test_canonical_fallback_for_resized_reference(tmp_path):
    images = make_images(tmp_path / "images", ["a.jpg"])
    index = read_local_images(str(images))
    match = match_local_image(index, "https://site.test/wp-content/uploads/2024/a-300x200.jpg?ver=2")
    assert match.matched and match.file == "a.jpg"


def test_unmatched_reference(tmp_path):
    images = make_images(tmp_path / "images", ["a.jpg"])
    index = read_local_images(str(images))
    match = match_local_image(index, "https://site.test/wp-content/uploads/zzz.jpg")
    assert not match.matched
    assert match.file is None


def test_basename_from_url_handles_urls_and_paths():
    assert basename_from_url("https://x.test/wp-content/uploads/2024/01/a%20b.jpg?x=1#f") == "a b.jpg"
    assert basename_from_url("uploads/pic.png#top") == "pic.png"
    assert basename_from_url("") == ""


def test_missing_directory_is_fatal(tmp_path):
    with pytest.raises(MissingInputError) as exc:
        read_local_images(str(tmp_path / "nope"))
    assert "nope" in str(exc.value)
