"""
Filename Sanitizer
==================

Maps display labels (query names) to filesystem-safe tokens.
"""

import os


# =============================================================================
# CONSTANTS
# =============================================================================

WINDOWS_INVALID_FILENAME_CHARS = frozenset('"<>|:*?\\/' + "".join(chr(i) for i in range(32)))
POSIX_INVALID_FILENAME_CHARS = frozenset("/\0")

# Excel worksheet title constraints
INVALID_SHEET_CHARS = frozenset("[]:*?/\\")
MAX_SHEET_NAME_LENGTH = 31


def invalid_filename_chars(platform_name: str) -> frozenset:
    """Characters not allowed in a file name for an os.name value."""
    if platform_name == "nt":
        return WINDOWS_INVALID_FILENAME_CHARS
    return POSIX_INVALID_FILENAME_CHARS


INVALID_FILENAME_CHARS = invalid_filename_chars(os.name)


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

def sanitize_filename(label: str) -> str:
    """
    Replace spaces with hyphens, then drop every character that is invalid
    in a file name on this platform.

    Idempotent: sanitize_filename(sanitize_filename(x)) == sanitize_filename(x).
    """
    label = label.replace(" ", "-")
    return "".join(ch for ch in label if ch not in INVALID_FILENAME_CHARS)


def sanitize_sheet_name(label: str) -> str:
    """Make a label usable as an Excel worksheet title."""
    cleaned = "".join("_" if ch in INVALID_SHEET_CHARS else ch for ch in label)
    cleaned = cleaned.strip("'")[:MAX_SHEET_NAME_LENGTH]
    return cleaned or "Sheet"
