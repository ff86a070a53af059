"""
Tests for the CSV exporter.
"""

import csv

import pytest

from diagexport.export.csv_exporter import export_to_csv, format_cell
from diagexport.export.errors import CsvExportError
from diagexport.export.models import Record


def _read(path):
    with open(path, "r", newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


def test_header_and_rows(out_dir):
    target = out_dir / "q.csv"
    export_to_csv([Record({"A": 1, "B": None}), Record({"A": 2, "B": "x"})], target)

    assert _read(target) == [["A", "B"], ["1", ""], ["2", "x"]]


def test_append_does_not_repeat_header(out_dir):
    target = out_dir / "q.csv"
    export_to_csv([Record({"A": 1})], target)
    export_to_csv([Record({"A": 2})], target)

    assert _read(target) == [["A"], ["1"], ["2"]]


def test_append_follows_existing_column_order(out_dir):
    target = out_dir / "q.csv"
    export_to_csv([Record({"A": 1, "B": 2})], target)
    export_to_csv([Record({"B": 4, "A": 3})], target)

    assert _read(target)[-1] == ["3", "4"]


def test_append_with_unknown_column_fails(out_dir):
    target = out_dir / "q.csv"
    export_to_csv([Record({"A": 1})], target)

    with pytest.raises(CsvExportError) as exc_info:
        export_to_csv([Record({"A": 2, "Z": 9})], target)
    assert exc_info.value.path == str(target)


def test_header_is_union_of_record_columns(out_dir):
    target = out_dir / "q.csv"
    export_to_csv([Record({"A": 1}), Record({"A": 2, "B": 3})], target)
    assert _read(target) == [["A", "B"], ["1", ""], ["2", "3"]]


def test_format_cell():
    assert format_cell(None) == ""
    assert format_cell(["a", "b"]) == "a\nb"
    assert format_cell(b"abc") == "abc"
    assert format_cell(1.5) == "1.5"


def test_unencodable_value_leaves_existing_file_unchanged(out_dir):
    target = out_dir / "q.csv"
    export_to_csv([Record({"A": 1})], target)
    before = target.read_bytes()

    with pytest.raises(CsvExportError) as exc_info:
        export_to_csv([Record({"A": 2}), Record({"A": "x\ud800y"})], target)

    assert exc_info.value.path == str(target)
    assert target.read_bytes() == before


def test_unencodable_value_creates_no_file(out_dir):
    target = out_dir / "q.csv"
    with pytest.raises(CsvExportError):
        export_to_csv([Record({"A": "x\ud800y"})], target)
    assert not target.exists()
