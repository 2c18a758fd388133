"""Navigation destinations for the intake screen."""

from __future__ import annotations

from typing import Optional

DASHBOARD_PATH = "/dashboard"
TOOL_PREFIX = "/tool"


def tool_path(tool_id: str) -> str:
    return f"{TOOL_PREFIX}/{tool_id}"


def processing_path(tool_id: str) -> str:
    return f"{TOOL_PREFIX}/{tool_id}/processing"


def dashboard_tool_path(tool_id: str) -> str:
    return f"{DASHBOARD_PATH}/{tool_id}"


def _segments(pathname: Optional[str]) -> list[str]:
    if not pathname:
        return []
    return [segment for segment in pathname.split("?", 1)[0].split("/") if segment]


def parse_intake_path(pathname: Optional[str]) -> Optional[str]:
    """Return the tool identifier for an intake screen path, or None.

    Both ``/tool/<id>`` and the catalog destinations ``/dashboard/<id>`` open
    the intake screen.
    """
    segments = _segments(pathname)
    if len(segments) == 2 and segments[0] in {TOOL_PREFIX.strip("/"), DASHBOARD_PATH.strip("/")}:
        return segments[1]
    return None


def parse_processing_path(pathname: Optional[str]) -> Optional[str]:
    segments = _segments(pathname)
    if len(segments) == 3 and segments[0] == TOOL_PREFIX.strip("/") and segments[2] == "processing":
        return segments[1]
    return None


def is_dashboard_path(pathname: Optional[str]) -> bool:
    segments = _segments(pathname)
    return not segments or segments == [DASHBOARD_PATH.strip("/")]
