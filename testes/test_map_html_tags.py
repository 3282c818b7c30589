import os
import sys

# The script lives in 'scripts/', which is not a package.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
for path in (PROJECT_ROOT, os.path.join(PROJECT_ROOT, "scripts")):
    if path not in sys.path:
        sys.path.insert(0, path)

import pytest

pytest.importorskip("bs4")

from map_html_tags import count_html_tags, write_counts_csv
from models.content import ExportRecord, RecordKind


def test_counts_and_flags_unsupported_tags(tmp_path):
    records = [
        ExportRecord(kind=RecordKind.PAGE, slug="contact",
                     content='<p>Write us</p><form action="/send"><input name="q"></form>'),
        ExportRecord(kind=RecordKind.POST, slug="video",
                     content='<p>Watch</p><iframe src="https://video.test/e/1"></iframe>'),
        ExportRecord(kind=RecordKind.ATTACHMENT, slug="ignored", content="<p>x</p>"),
        ExportRecord(kind=RecordKind.PAGE, slug="empty", content="   "),
    ]

    counts, flagged = count_html_tags(records)

    assert counts["p"] == 2
    assert counts["form"] == 1 and counts["input"] == 1 and counts["iframe"] == 1
    assert flagged == [
        ("page", "contact", "form", "/send"),
        ("post", "video", "iframe", "https://video.test/e/1"),
    ]

    out = tmp_path / "reports" / "tags.csv"
    write_counts_csv(counts, out)
    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "tag,count"
    assert lines[1] == "p,2"
