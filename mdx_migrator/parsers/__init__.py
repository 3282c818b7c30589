"""
Parsers and converters used by the migration pipeline.

This subpackage exposes ``convert_html_to_mdx`` and its two stages,
``sanitize_html`` and ``html_to_markdown``, from
:mod:`mdx_migrator.parsers.mdx_parser`.
"""

from .mdx_parser import (
    RewriteContext,
    convert_html_to_mdx,
    html_to_markdown,
    is_empty_body,
    mdxify_html,
    sanitize_html,
)

__all__ = [
    "RewriteContext",
    "convert_html_to_mdx",
    "html_to_markdown",
    "is_empty_body",
    "mdxify_html",
    "sanitize_html",
]
