"""
Tests for file name and sheet name sanitizing.
"""

import pytest

from diagexport.export import sanitizer
from diagexport.export.sanitizer import (
    MAX_SHEET_NAME_LENGTH,
    invalid_filename_chars,
    sanitize_filename,
    sanitize_sheet_name,
)


LABELS = [
    "Top Queries",
    "Missing Indexes/All Databases",
    "CPU\0Usage by Database",
    "  leading and trailing  ",
    "Already-Clean",
    "Waits <by> \"Type\": a|b*c?d\\e\x01\x1f",
    "",
]


@pytest.fixture(params=["nt", "posix"])
def invalid_chars(request, monkeypatch):
    """Run a test against the invalid-character set of each platform."""
    chars = invalid_filename_chars(request.param)
    monkeypatch.setattr(sanitizer, "INVALID_FILENAME_CHARS", chars)
    return chars


def test_platform_sets():
    windows = invalid_filename_chars("nt")
    posix = invalid_filename_chars("posix")

    assert set('"<>|:*?\\/') <= windows
    assert all(chr(i) in windows for i in range(32))
    assert posix == frozenset("/\0")
    assert sanitizer.INVALID_FILENAME_CHARS in (windows, posix)


def test_spaces_become_hyphens():
    assert sanitize_filename("Top Queries") == "Top-Queries"
    assert sanitize_filename("a  b") == "a--b"


def test_invalid_characters_removed(invalid_chars):
    result = sanitize_filename("Missing Indexes/All\0 Databases")
    assert result == "Missing-IndexesAll-Databases"
    assert not any(ch in invalid_chars for ch in result)


def test_windows_characters_removed(monkeypatch):
    monkeypatch.setattr(sanitizer, "INVALID_FILENAME_CHARS", invalid_filename_chars("nt"))
    assert sanitize_filename('Waits <by> "Type": a|b\x01') == "Waits-by-Type-ab"


def test_posix_keeps_windows_only_characters(monkeypatch):
    monkeypatch.setattr(sanitizer, "INVALID_FILENAME_CHARS", invalid_filename_chars("posix"))
    assert sanitize_filename("a<b>:c") == "a<b>:c"


@pytest.mark.parametrize("label", LABELS)
def test_keeps_relative_order_of_valid_characters(label, invalid_chars):
    expected = "".join(
        ch for ch in label.replace(" ", "-") if ch not in invalid_chars
    )
    result = sanitize_filename(label)
    assert result == expected
    assert not any(ch in invalid_chars for ch in result)


@pytest.mark.parametrize("label", LABELS)
def test_idempotent(label, invalid_chars):
    once = sanitize_filename(label)
    assert sanitize_filename(once) == once


def test_sheet_name_replaces_excel_reserved_characters():
    assert sanitize_sheet_name("IO [Stats]: a/b\\c*?") == "IO _Stats__ a_b_c__"


def test_sheet_name_truncated_and_never_empty():
    assert len(sanitize_sheet_name("x" * 50)) == MAX_SHEET_NAME_LENGTH
    assert sanitize_sheet_name("") == "Sheet"
