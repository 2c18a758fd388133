"""Dash layout composition."""

from __future__ import annotations

from typing import Optional

import dash_bootstrap_components as dbc
from dash import dcc, html
from dash.development.base_component import Component

from ..controller import LEAVE_CONFIRMATION
from ..models import IntakeSnapshot, IntakeView, ToolDescriptor
from ..routes import DASHBOARD_PATH, tool_path
from ..tools import TOOL_RULES, get_tool_rule
from . import ids


def build_layout() -> Component:
    """Compose the root layout: router, stores, confirm dialog and page slot."""
    return html.Div(
        [
            dcc.Location(id=ids.URL, refresh=False),
            dcc.Store(id=ids.STORE_INTAKE),
            dcc.Store(id=ids.STORE_UNLOAD_GUARD, data={"intercept": False}),
            dcc.Store(id=ids.UNLOAD_GUARD_SINK),
            dcc.ConfirmDialog(id=ids.CONFIRM_LEAVE, message=LEAVE_CONFIRMATION),
            html.Div(id=ids.PAGE_CONTENT, className="page-content"),
        ],
        className="app-root",
    )


def _back_button() -> Component:
    return dbc.Button("← Back", id=ids.BUTTON_BACK, color="link", className="back-button mb-4 px-0")


def dashboard_page() -> Component:
    cards = [
        dbc.Col(
            _tool_card(
                ToolDescriptor(
                    label=tool_id.replace("-", " ").title(),
                    description=rule.title,
                    href=tool_path(tool_id),
                )
            ),
            md=6,
            lg=4,
        )
        for tool_id, rule in TOOL_RULES.items()
    ]
    return dbc.Container(
        [
            html.H1("Dashboard", className="section-title mb-4"),
            dbc.Row(cards, className="g-4"),
        ],
        className="py-5",
    )


def catalog_page(view: IntakeView) -> Component:
    return dbc.Container(
        [
            _back_button(),
            html.H1(view.title, className="section-title mb-4"),
            dbc.Row([dbc.Col(_tool_card(entry), md=6) for entry in view.catalog], className="g-4 catalog-grid"),
        ],
        className="py-5",
    )


def _tool_card(descriptor: ToolDescriptor) -> Component:
    return dbc.Card(
        dbc.CardBody(
            [
                html.H5(descriptor.label, className="card-title"),
                html.P(descriptor.description, className="card-text"),
                dcc.Link("Open", href=descriptor.href, className="stretched-link tool-card-link"),
            ]
        ),
        className="tool-card h-100",
    )


def intake_page(view: IntakeView) -> Component:
    accepted = ", ".join(view.accepted_extensions) or "any file type"
    return dbc.Container(
        [
            _back_button(),
            html.H1(view.title, className="section-title mb-4"),
            dcc.Upload(
                id=ids.UPLOAD_DROPZONE,
                multiple=False,
                disable_click=True,
                children=html.Div(
                    [
                        html.Span("Drag & drop a file here", className="upload-label"),
                        html.Small(f"Accepted: {accepted}", className="upload-hint d-block"),
                    ],
                    className="upload-inner",
                ),
                className="upload-dropzone",
                # hover state is browser-only; drag events never reach the server
                className_active="upload-dropzone dragging",
            ),
            # no drop styling here: a file dropped on the button goes through browse validation
            dcc.Upload(
                id=ids.UPLOAD_BROWSE,
                multiple=False,
                accept=",".join(view.accepted_extensions) or None,
                children=dbc.Button("Browse files", color="secondary", outline=True),
                className="upload-browse mt-3",
            ),
            html.Div(intake_status(view), id=ids.INTAKE_STATUS, className="mt-4"),
        ],
        className="py-5 intake-container",
    )


def intake_status(view: IntakeView) -> Component:
    children = []
    if view.selected_file_name:
        children.append(
            html.Div(
                [
                    html.P(view.selected_file_name, className="selected-file-name"),
                    dbc.Button("Process File", id=ids.BUTTON_PROCESS, color="primary", className="mt-2"),
                ],
                className="selected-file",
            )
        )
    if view.error:
        children.append(dbc.Alert(view.error, color="danger", className="file-error mt-2"))
    return html.Div(children)


def processing_page(tool_id: str, snapshot: Optional[IntakeSnapshot]) -> Component:
    rule = get_tool_rule(tool_id)
    name = snapshot.selected_name if snapshot and snapshot.tool_id == tool_id else None
    body = (
        html.P(f"{name} has been handed to the processing stage.", className="processing-file")
        if name
        else html.P("No file was selected for this tool.", className="processing-empty")
    )
    return dbc.Container(
        [
            html.H1(rule.title, className="section-title mb-4"),
            body,
            dcc.Link("Return to dashboard", href=DASHBOARD_PATH),
        ],
        className="py-5",
    )


def not_found_page(pathname: Optional[str]) -> Component:
    return dbc.Container(
        [
            html.H1("Page not found", className="section-title mb-4"),
            html.P(f"No screen at {pathname}."),
            dcc.Link("Return to dashboard", href=DASHBOARD_PATH),
        ],
        className="py-5",
    )
