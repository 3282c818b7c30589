"""
Error types and run logging for the migration.

The :mod:`mdx_migrator.utils.errors` module centralizes the two ways a
run can go wrong.  Setup problems (an export file or image directory
that does not exist, an export that is not valid XML) are raised as
subclasses of :class:`MigrationError` before any output is written.
Everything else (an image that cannot be matched, a page whose body is
empty) is collected in a report and never raised.

``log_message``
    Print a ``[LEVEL] message`` line and append it to the run log file.

The ``ERRORS`` dictionary maps event codes to human readable messages.
Codes not present in the dictionary fall back to the code itself.
"""

from __future__ import annotations

import os
from typing import Dict, Optional

# Mapping of event codes used throughout the migration to descriptive messages.
ERRORS: Dict[str, str] = {
    "EXPORT_NOT_FOUND": "WordPress export file not found",
    "IMAGES_DIR_NOT_FOUND": "Local image directory not found",
    "EXPORT_PARSE": "WordPress export could not be parsed",
    "MISSING_IMAGE": "Referenced image has no local counterpart",
    "EMPTY_CONTENT": "Rewritten body is empty",
    "CONVERSION_FAILED": "HTML to MDX conversion failed",
}

DEFAULT_LOG_FILE = os.path.join("reports", "migration", "migration.log")


class MigrationError(Exception):
    """Base class for fatal migration errors."""

    code = "MIGRATION"

    @property
    def message(self) -> str:
        return ERRORS.get(self.code, self.code)


class MissingInputError(MigrationError, FileNotFoundError):
    """An input path required by the run does not exist."""

    def __init__(self, code: str, path: str) -> None:
        self.code = code
        self.path = path
        super().__init__(f"{ERRORS.get(code, code)}: {path}")


class ExportParseError(MigrationError, ValueError):
    """The export file exists but is not a readable WXR document."""

    code = "EXPORT_PARSE"

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"{ERRORS[self.code]}: {path} ({reason})")


def log_message(message: str, level: str = "INFO", *, log_file: Optional[str] = DEFAULT_LOG_FILE) -> None:
    """Print ``message`` and append it to ``log_file``.

    Passing ``log_file=None`` keeps the message on stdout only.
    """
    print(f"[{level}] {message}")
    if not log_file:
        return
    os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
    with open(log_file, "a", encoding="utf-8") as f:
        f.write(f"{level}: {message}\n")
