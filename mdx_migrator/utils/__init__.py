"""
Utility helpers used by the migration tool.

This subpackage exposes the local image index and matcher, the menu tree
builder, the run report, error types and redirect map generation.
"""

from .errors import ERRORS, ExportParseError, MigrationError, MissingInputError, log_message
from .images import LocalImageIndex, canonicalize_filename, match_local_image, read_local_images
from .menu import build_menu
from .redirects import generate_redirects_csv
from .report import MigrationReport

__all__ = [
    "ERRORS",
    "ExportParseError",
    "LocalImageIndex",
    "MigrationError",
    "MigrationReport",
    "MissingInputError",
    "build_menu",
    "canonicalize_filename",
    "generate_redirects_csv",
    "log_message",
    "match_local_image",
    "read_local_images",
]
