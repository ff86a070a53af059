"""
Shared fixtures for the export tests.
"""

import pytest


def make_row(**overrides):
    """Build an upstream-style diagnostic row (PascalCase keys)."""
    row = {
        "Name": "Top Queries",
        "Number": 1,
        "SqlInstance": "HOST\\INST",
        "DatabaseName": None,
        "DatabaseSpecific": False,
        "Result": [{"A": 1, "Query Plan": ["<plan1/>"]}],
    }
    row.update(overrides)
    return row


@pytest.fixture
def row_factory():
    return make_row


@pytest.fixture
def out_dir(tmp_path):
    path = tmp_path / "out"
    path.mkdir()
    return path
