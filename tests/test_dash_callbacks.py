from __future__ import annotations

import base64
from pathlib import Path

import dash
import pytest
from dash import no_update

from doc_intake.app import callbacks, create_app
from doc_intake.app.state import dump_controller, load_controller
from doc_intake.controller import IntakeController
from doc_intake.models import FileSource, SelectedFile


def _data_uri(payload: bytes, mime: str = "application/octet-stream") -> str:
    return f"data:{mime};base64,{base64.b64encode(payload).decode()}"


@pytest.fixture()
def upload_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    target = tmp_path / "dash_uploads"
    target.mkdir()
    monkeypatch.setattr(callbacks, "UPLOAD_DIR", target)
    return target


def _intake_store(tool_id: str) -> dict:
    _page, store = callbacks._render_route(f"/tool/{tool_id}", None)
    return store


def test_create_app_builds_layout():
    app = create_app()
    assert app.title == "DocTool Studio"
    layout_repr = repr(app.layout)
    assert "page-content" in layout_repr
    assert "confirm-leave" in layout_repr


def test_dashboard_route_clears_intake_store():
    page, store = callbacks._render_route("/dashboard", {"tool_id": "ocr", "dirty": True})
    assert store is None
    assert "/tool/document-to-pdf" in repr(page)


def test_intake_route_starts_clean_controller():
    page, store = callbacks._render_route("/tool/ocr", None)
    assert store["tool_id"] == "ocr"
    assert store["dirty"] is False
    assert store["selected_name"] is None
    assert "Upload image for text extraction" in repr(page)
    assert "upload-dropzone" in repr(page)


def test_catalog_route_lists_sub_tools():
    page, store = callbacks._render_route("/tool/pdf-tools", None)
    assert store["tool_id"] == "pdf-tools"
    page_repr = repr(page)
    for href in ("/dashboard/pdf-merge", "/dashboard/pdf-split", "/dashboard/document-to-pdf"):
        assert href in page_repr


def test_catalog_destination_opens_intake_screen():
    _page, store = callbacks._render_route("/dashboard/pdf-merge", None)
    assert store["tool_id"] == "pdf-merge"


def test_processing_route_keeps_store():
    store = {"tool_id": "ocr", "selected_name": "scan.png", "dirty": True}
    page, new_store = callbacks._render_route("/tool/ocr/processing", store)
    assert new_store is no_update
    assert "scan.png" in repr(page)


def test_unknown_route_renders_not_found():
    page, store = callbacks._render_route("/elsewhere/entirely/deep", None)
    assert store is None
    assert "Page not found" in repr(page)


def test_browse_selection_is_validated(upload_dir: Path):
    store = _intake_store("document-to-pdf")

    rejected = callbacks._apply_selection(store, FileSource.BROWSE, _data_uri(b"%PDF"), "report.pdf")

    assert rejected["error"] == "Unsupported file type. Allowed: .doc, .docx, .ppt, .pptx, .xls, .xlsx"
    assert rejected["selected_name"] is None
    assert list(upload_dir.iterdir()) == []

    accepted = callbacks._apply_selection(rejected, FileSource.BROWSE, _data_uri(b"doc"), "letter.DOCX")

    assert accepted["error"] is None
    assert accepted["selected_name"] == "letter.DOCX"
    assert accepted["dirty"] is True
    saved = Path(accepted["selected_handle"])
    assert saved.parent == upload_dir
    assert saved.read_bytes() == b"doc"


def test_drop_selection_skips_validation(upload_dir: Path):
    store = _intake_store("pdf-merge")
    result = callbacks._apply_selection(store, FileSource.DROP, _data_uri(b"text"), "notes.txt")
    assert result["selected_name"] == "notes.txt"
    assert result["dirty"] is True


def test_selection_without_contents_prevents_update(upload_dir: Path):
    store = _intake_store("ocr")
    with pytest.raises(dash.exceptions.PreventUpdate):
        callbacks._apply_selection(store, FileSource.BROWSE, None, None)


def test_blank_upload_filename_prevents_update(upload_dir: Path):
    store = _intake_store("ocr")
    with pytest.raises(dash.exceptions.PreventUpdate):
        callbacks._apply_selection(store, FileSource.BROWSE, _data_uri(b"x"), "   ")
    assert list(upload_dir.iterdir()) == []


def test_browse_upload_has_no_drop_styling():
    page, _store = callbacks._render_route("/tool/ocr", None)
    uploads = {upload.id: upload for upload in page.children if getattr(upload, "id", None)}
    browse = uploads["upload-browse"]

    assert browse.accept == ".jpg,.jpeg,.png"
    assert getattr(browse, "className_active", None) is None
    assert uploads["upload-dropzone"].className_active == "upload-dropzone dragging"


def test_selection_off_intake_screen_prevents_update(upload_dir: Path):
    with pytest.raises(dash.exceptions.PreventUpdate):
        callbacks._apply_selection(None, FileSource.DROP, _data_uri(b"x"), "x.pdf")


def test_back_navigation_without_unsaved_work_leaves_directly():
    assert callbacks._back_navigation(_intake_store("ocr")) == ("/dashboard", False)


def test_back_navigation_with_unsaved_work_opens_dialog():
    store = {"tool_id": "ocr", "selected_name": "scan.png", "selected_handle": "uploads/scan.png", "dirty": True}
    pathname, show_dialog = callbacks._back_navigation(store)
    assert pathname is no_update
    assert show_dialog is True
    assert callbacks._confirmed_back_navigation(store) == "/dashboard"


def test_submit_routes_to_processing():
    store = {"tool_id": "ocr", "selected_name": "scan.png", "dirty": True}
    assert callbacks._submit_destination(store) == "/tool/ocr/processing"


def test_submit_without_file_prevents_update():
    with pytest.raises(dash.exceptions.PreventUpdate):
        callbacks._submit_destination(_intake_store("ocr"))


def test_guard_state_follows_dirty_flag_on_intake_screen():
    clean = _intake_store("ocr")
    dirty = {"tool_id": "ocr", "selected_name": "scan.png", "dirty": True}

    assert callbacks._guard_state("/tool/ocr", clean) == {"intercept": False}
    assert callbacks._guard_state("/tool/ocr", dirty) == {"intercept": True}
    assert callbacks._guard_state("/tool/ocr/processing", dirty) == {"intercept": False}
    assert callbacks._guard_state("/dashboard", None) == {"intercept": False}
    assert len(callbacks.UNLOAD_GUARDS) == 0


def test_store_round_trip():
    controller = IntakeController("ocr")
    controller.select_file(SelectedFile(name="scan.png", handle="uploads/scan.png"), FileSource.BROWSE)

    restored = load_controller(dump_controller(controller))

    assert restored.selected_file.handle == "uploads/scan.png"
    assert restored.dirty is True
    assert load_controller(None) is None
    assert load_controller({"unexpected": True}) is None
