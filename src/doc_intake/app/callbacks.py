"""Dash callbacks for the intake screen."""

from __future__ import annotations

import base64
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import dash
from dash import Dash, Input, Output, State, callback_context, no_update

from ..config import get_settings
from ..controller import IntakeController
from ..guard import UNLOAD_GUARDS
from ..logging_config import get_logger
from ..models import FileSource, IntakeSnapshot, SelectedFile, SelectionOutcome
from ..routes import DASHBOARD_PATH, is_dashboard_path, parse_intake_path, parse_processing_path
from . import ids
from .layout import catalog_page, dashboard_page, intake_page, intake_status, not_found_page, processing_page
from .state import dump_controller, load_controller

SETTINGS = get_settings()
UPLOAD_DIR = SETTINGS.uploads_dir
UPLOAD_DIR.mkdir(parents=True, exist_ok=True)

logger = get_logger(__name__)

UPLOAD_SOURCES = {
    ids.UPLOAD_DROPZONE: FileSource.DROP,
    ids.UPLOAD_BROWSE: FileSource.BROWSE,
}

INSTALL_UNLOAD_GUARD = """
function(guardState) {
    var intercept = Boolean(guardState && guardState.intercept);
    window.onbeforeunload = intercept ? function(event) {
        event.preventDefault();
        event.returnValue = "";
        return "";
    } : null;
    return intercept;
}
"""


def _save_upload(contents: str, filename: str) -> Path:
    if not contents:
        raise ValueError("No contents to save")
    data = contents.split(",", 1)[1]
    decoded = base64.b64decode(data)
    ext = Path(filename).suffix or ".tmp"
    path = UPLOAD_DIR / f"upload_{uuid.uuid4().hex}{ext}"
    path.write_bytes(decoded)
    return path


def _render_route(pathname: Optional[str], store_data: Optional[Dict[str, Any]]) -> Tuple[Any, Any]:
    """Return page children and the new intake store for a route."""
    if is_dashboard_path(pathname):
        return dashboard_page(), None

    processing_tool = parse_processing_path(pathname)
    if processing_tool is not None:
        snapshot = IntakeSnapshot.model_validate(store_data) if store_data else None
        return processing_page(processing_tool, snapshot), no_update

    tool_id = parse_intake_path(pathname)
    if tool_id is None:
        return not_found_page(pathname), None

    controller = IntakeController(tool_id)
    view = controller.view()
    page = catalog_page(view) if view.is_catalog else intake_page(view)
    return page, dump_controller(controller)


def _apply_selection(
    store_data: Optional[Dict[str, Any]],
    source: FileSource,
    contents: Optional[str],
    filename: Optional[str],
) -> Dict[str, Any]:
    controller = load_controller(store_data)
    if controller is None:
        raise dash.exceptions.PreventUpdate

    candidate = SelectedFile(name=filename) if contents and filename and filename.strip() else None
    outcome = controller.select_file(candidate, source)
    if outcome is SelectionOutcome.ACCEPTED:
        path = _save_upload(contents, filename)
        logger.info("Stored upload", tool_id=controller.tool_id, filename=filename, path=path)
        return dump_controller(controller, selected_handle=str(path))
    if outcome is SelectionOutcome.REJECTED:
        return dump_controller(controller)
    raise dash.exceptions.PreventUpdate


def _back_navigation(store_data: Optional[Dict[str, Any]]) -> Tuple[Any, bool]:
    """Return (pathname, show_confirm) for a click on the back button."""
    prompts: List[str] = []

    def _defer_to_dialog(message: str) -> bool:
        prompts.append(message)
        return False

    controller = load_controller(store_data, confirm=_defer_to_dialog)
    if controller is None:
        return DASHBOARD_PATH, False
    request = controller.request_back_navigation()
    if request is not None:
        return request.destination, False
    return no_update, bool(prompts)


def _confirmed_back_navigation(store_data: Optional[Dict[str, Any]]) -> str:
    controller = load_controller(store_data, confirm=lambda _message: True)
    if controller is None:
        return DASHBOARD_PATH
    request = controller.request_back_navigation()
    return request.destination if request is not None else DASHBOARD_PATH


def _submit_destination(store_data: Optional[Dict[str, Any]]) -> str:
    controller = load_controller(store_data)
    if controller is None or controller.selected_file is None:
        raise dash.exceptions.PreventUpdate
    return controller.submit().destination


def _guard_state(pathname: Optional[str], store_data: Optional[Dict[str, Any]]) -> Dict[str, bool]:
    controller = load_controller(store_data)
    if controller is None or parse_intake_path(pathname) != controller.tool_id:
        return {"intercept": False}
    with controller.mounted(UNLOAD_GUARDS) as guard:
        return {"intercept": guard.intercepting()}


def register_callbacks(app: Dash) -> None:
    @app.callback(
        Output(ids.PAGE_CONTENT, "children"),
        Output(ids.STORE_INTAKE, "data"),
        Input(ids.URL, "pathname"),
        State(ids.STORE_INTAKE, "data"),
    )
    def render_page(pathname, store_data):
        return _render_route(pathname, store_data)

    @app.callback(
        Output(ids.STORE_INTAKE, "data", allow_duplicate=True),
        Input(ids.UPLOAD_DROPZONE, "contents"),
        Input(ids.UPLOAD_BROWSE, "contents"),
        State(ids.UPLOAD_DROPZONE, "filename"),
        State(ids.UPLOAD_BROWSE, "filename"),
        State(ids.STORE_INTAKE, "data"),
        prevent_initial_call=True,
    )
    def handle_selection(drop_contents, browse_contents, drop_name, browse_name, store_data):
        triggered_id = callback_context.triggered_id
        source = UPLOAD_SOURCES.get(triggered_id)
        if source is None:
            raise dash.exceptions.PreventUpdate
        if source is FileSource.DROP:
            return _apply_selection(store_data, source, drop_contents, drop_name)
        return _apply_selection(store_data, source, browse_contents, browse_name)

    @app.callback(
        Output(ids.INTAKE_STATUS, "children"),
        Input(ids.STORE_INTAKE, "data"),
        prevent_initial_call=True,
    )
    def render_intake_status(store_data):
        controller = load_controller(store_data)
        if controller is None or controller.is_catalog:
            raise dash.exceptions.PreventUpdate
        return intake_status(controller.view())

    @app.callback(
        Output(ids.URL, "pathname", allow_duplicate=True),
        Output(ids.CONFIRM_LEAVE, "displayed"),
        Input(ids.BUTTON_BACK, "n_clicks"),
        State(ids.STORE_INTAKE, "data"),
        prevent_initial_call=True,
    )
    def handle_back(n_clicks, store_data):
        if not n_clicks:
            raise dash.exceptions.PreventUpdate
        return _back_navigation(store_data)

    @app.callback(
        Output(ids.URL, "pathname", allow_duplicate=True),
        Input(ids.CONFIRM_LEAVE, "submit_n_clicks"),
        State(ids.STORE_INTAKE, "data"),
        prevent_initial_call=True,
    )
    def confirm_leave(submit_n_clicks, store_data):
        if not submit_n_clicks:
            raise dash.exceptions.PreventUpdate
        return _confirmed_back_navigation(store_data)

    @app.callback(
        Output(ids.URL, "pathname", allow_duplicate=True),
        Input(ids.BUTTON_PROCESS, "n_clicks"),
        State(ids.STORE_INTAKE, "data"),
        prevent_initial_call=True,
    )
    def submit_file(n_clicks, store_data):
        if not n_clicks:
            raise dash.exceptions.PreventUpdate
        return _submit_destination(store_data)

    @app.callback(
        Output(ids.STORE_UNLOAD_GUARD, "data"),
        Input(ids.URL, "pathname"),
        Input(ids.STORE_INTAKE, "data"),
    )
    def sync_unload_guard(pathname, store_data):
        return _guard_state(pathname, store_data)

    app.clientside_callback(
        INSTALL_UNLOAD_GUARD,
        Output(ids.UNLOAD_GUARD_SINK, "data"),
        Input(ids.STORE_UNLOAD_GUARD, "data"),
    )
