import os
import sys
import unittest

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import yaml

from models.content import AttachmentRecord, ContentDocument, MenuNode


class TestContentDocument(unittest.TestCase):

    def make_doc(self, **kwargs):
        fields = dict(
            title="About",
            slug="about",
            type="page",
            date="2024-01-05 10:00:00",
            updated="2024-02-01 09:30:00",
            wp_id=1,
            wp_link="https://site.test/about/",
        )
        fields.update(kwargs)
        return ContentDocument(**fields)

    def split(self, text):
        self.assertTrue(text.startswith("---\n"))
        head, _, body = text[4:].partition("---\n")
        return yaml.safe_load(head), body

    def test_frontmatter_fields_and_order(self):
        doc = self.make_doc(body="Hello")
        meta, body = self.split(doc.to_mdx())
        self.assertEqual(list(meta), ["title", "slug", "type", "date", "updated", "wpId", "wpLink"])
        self.assertEqual(str(meta["date"]), "2024-01-05")
        self.assertEqual(str(meta["updated"]), "2024-02-01")
        self.assertEqual(meta["wpLink"], "https://site.test/about/")
        self.assertEqual(body, "\nHello\n")

    def test_empty_body_writes_frontmatter_only(self):
        text = self.make_doc().to_mdx()
        self.assertTrue(text.endswith("---\n"))
        self.assertEqual(text.count("---\n"), 2)

    def test_missing_title_and_slug_get_placeholders(self):
        doc = self.make_doc(title="", slug="  ")
        self.assertEqual(doc.title, "Untitled")
        self.assertEqual(doc.slug, "untitled")

    def test_titles_needing_quotes_survive(self):
        doc = self.make_doc(title='Board: "2024" & beyond, ñ')
        meta, _ = self.split(doc.to_mdx())
        self.assertEqual(meta["title"], 'Board: "2024" & beyond, ñ')


class TestSerializedShapes(unittest.TestCase):

    def test_attachment_aliases(self):
        record = AttachmentRecord(original_url="u", basename="a.jpg", local_match=True, local_path="./images/a.jpg")
        self.assertEqual(
            record.model_dump(by_alias=True),
            {"originalUrl": "u", "basename": "a.jpg", "localMatch": True, "localPath": "./images/a.jpg"},
        )

    def test_menu_node_nesting(self):
        node = MenuNode(title="About", url="/about", children=[MenuNode(title="Team", url="/team")])
        dumped = node.model_dump()
        self.assertFalse(dumped["external"])
        self.assertEqual(dumped["children"][0]["title"], "Team")
        self.assertEqual(dumped["children"][0]["children"], [])


if __name__ == '__main__':
    unittest.main()
