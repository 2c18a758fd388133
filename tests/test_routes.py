from __future__ import annotations

import pytest

from doc_intake.routes import (
    is_dashboard_path,
    parse_intake_path,
    parse_processing_path,
    processing_path,
    tool_path,
)


def test_processing_path_is_parameterised_by_tool():
    assert processing_path("ocr") == "/tool/ocr/processing"
    assert parse_processing_path("/tool/ocr/processing") == "ocr"
    assert parse_processing_path("/tool/ocr") is None


@pytest.mark.parametrize(
    ("pathname", "expected"),
    [
        ("/tool/ocr", "ocr"),
        ("/tool/pdf-tools/", "pdf-tools"),
        ("/dashboard/pdf-merge", "pdf-merge"),
        ("/tool/ocr?ref=home", "ocr"),
        ("/dashboard", None),
        ("/tool/ocr/processing", None),
        ("/elsewhere/ocr", None),
        (None, None),
    ],
)
def test_parse_intake_path(pathname, expected):
    assert parse_intake_path(pathname) == expected


def test_dashboard_paths():
    assert is_dashboard_path("/")
    assert is_dashboard_path("/dashboard")
    assert is_dashboard_path(None)
    assert not is_dashboard_path(tool_path("ocr"))
