"""
Extractors for WordPress export files.

This subpackage parses a WordPress WXR (XML) export into
:class:`models.content.ExportRecord` objects.  Every text field is
reduced to a plain string at this boundary, so the rewriter and the menu
builder never deal with CDATA sections or namespaced element lookups.
"""

from .wordpress_extractor import extract_records_from_xml, records_of_kind, safe_text

__all__ = ["extract_records_from_xml", "records_of_kind", "safe_text"]
