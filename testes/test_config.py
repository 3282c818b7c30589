import json
import os
import sys

# verify_images lives in 'scripts/', which is not a package.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
for path in (PROJECT_ROOT, os.path.join(PROJECT_ROOT, "scripts")):
    if path not in sys.path:
        sys.path.insert(0, path)

import pytest

import verify_images
from mdx_migrator.config import DEFAULT_EXPORT_FILE, load_config
from mdx_migrator.utils.errors import DEFAULT_LOG_FILE
from wxr_fixtures import item, make_images, write_export


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    monkeypatch.delenv("WP_EXPORT_PATH", raising=False)
    monkeypatch.delenv("WP_IMAGES_DIR", raising=False)


def test_defaults_when_file_is_missing(tmp_path):
    settings = load_config(config_file=str(tmp_path / "absent.json"))["migration"]
    assert settings == {
        "export_path": DEFAULT_EXPORT_FILE,
        "images_dir": "images",
        "public_images_dir": os.path.join("public", "images"),
        "content_dir": "content",
        "site_domain": "drmatildaevansfoundation.org",
        "home_slug": "home",
        "posts_route": "/dr-evans-academy",
        "media_prefix": "/images/",
        "log_file": DEFAULT_LOG_FILE,
    }


def test_json_file_values_win_over_defaults(tmp_path):
    config_file = tmp_path / "migration_config.json"
    config_file.write_text(
        json.dumps({"migration": {"content_dir": "out", "posts_route": "/news", "log_file": None}}),
        encoding="utf-8",
    )
    settings = load_config(config_file=str(config_file))["migration"]
    assert settings["content_dir"] == "out"
    assert settings["posts_route"] == "/news"
    assert settings["log_file"] is None
    assert settings["home_slug"] == "home"


def test_env_overrides_fill_input_paths(monkeypatch):
    monkeypatch.setenv("WP_EXPORT_PATH", "/data/export.xml")
    monkeypatch.setenv("WP_IMAGES_DIR", "/data/images")
    settings = load_config()["migration"]
    assert settings["export_path"] == "/data/export.xml"
    assert settings["images_dir"] == "/data/images"


def test_explicit_values_win_over_env(monkeypatch):
    monkeypatch.setenv("WP_EXPORT_PATH", "/data/export.xml")
    settings = load_config({"migration": {"export_path": "mine.xml"}})["migration"]
    assert settings["export_path"] == "mine.xml"


def test_caller_dict_is_not_modified():
    given = {"migration": {"content_dir": "out"}}
    config = load_config(given)
    assert given == {"migration": {"content_dir": "out"}}
    assert config["migration"]["home_slug"] == "home"


def write_tree(tmp_path, attachments, images, body):
    export = write_export(
        tmp_path / "export.xml",
        [
            item(i, "attachment", title=name, slug=name, status="inherit",
                 attachment_url=f"https://site.test/wp-content/uploads/{name}")
            for i, name in enumerate(attachments, start=1)
        ],
    )
    images_dir = make_images(tmp_path / "images", images)
    content = tmp_path / "content"
    (content / "pages").mkdir(parents=True)
    (content / "pages" / "about.mdx").write_text(f"---\nslug: about\n---\n\n{body}\n", encoding="utf-8")

    config_file = tmp_path / "config.json"
    config_file.write_text(
        json.dumps(
            {
                "migration": {
                    "export_path": str(export),
                    "images_dir": str(images_dir),
                    "content_dir": str(content),
                    "log_file": None,
                }
            }
        ),
        encoding="utf-8",
    )
    return config_file, content


def run_verify(monkeypatch, config_file):
    monkeypatch.setattr(sys, "argv", ["verify_images.py", "--config", str(config_file)])
    return verify_images.main()


def test_verify_images_passes_on_clean_tree(tmp_path, monkeypatch):
    config_file, content = write_tree(tmp_path, ["photo.jpg"], ["photo.jpg"], "![](/images/photo.jpg)")
    assert run_verify(monkeypatch, config_file) == 0
    assert (content / "IMAGE_AUDIT_REPORT.md").exists()


def test_verify_images_fails_on_missing_expected_image(tmp_path, monkeypatch):
    config_file, content = write_tree(
        tmp_path, ["photo.jpg", "gone.jpg"], ["photo.jpg"], "![](/images/photo.jpg)"
    )
    assert run_verify(monkeypatch, config_file) == 1
    assert "- gone.jpg" in (content / "IMAGE_AUDIT_REPORT.md").read_text(encoding="utf-8")


def test_verify_images_fails_on_broken_reference(tmp_path, monkeypatch):
    config_file, _ = write_tree(tmp_path, ["photo.jpg"], ["photo.jpg"], "![](/images/nope.jpg)")
    assert run_verify(monkeypatch, config_file) == 1


def test_verify_images_fails_on_missing_input(tmp_path, monkeypatch):
    config_file = tmp_path / "config.json"
    config_file.write_text(
        json.dumps({"migration": {"export_path": str(tmp_path / "none.xml"), "log_file": None}}),
        encoding="utf-8",
    )
    assert run_verify(monkeypatch, config_file) == 1
