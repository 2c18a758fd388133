"""Lightweight analytics logger (opt-in)."""

from __future__ import annotations

import csv
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from .config import get_settings

EVENT_FIELDS = ["timestamp", "event", "tool_id", "source", "outcome", "destination"]


def _analytics_dir() -> Path:
    settings = get_settings()
    path = settings.logs_dir / "analytics"
    path.mkdir(parents=True, exist_ok=True)
    return path


def log_event(event: str, payload: Dict[str, Any] | None = None) -> None:
    settings = get_settings()
    if not settings.enable_analytics:
        return

    record = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "event": event,
    }
    if payload:
        record.update({key: value for key, value in payload.items() if key in EVENT_FIELDS})

    events_file = _analytics_dir() / "events.csv"
    write_header = not events_file.exists()

    with events_file.open("a", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=EVENT_FIELDS)
        if write_header:
            writer.writeheader()
        writer.writerow(record)


def summarise_events() -> Dict[str, Any]:
    events_file = _analytics_dir() / "events.csv"
    if not events_file.exists():
        return {"total_events": 0, "by_event": {}}

    counts: Dict[str, int] = {}
    outcomes: Dict[str, int] = {}
    by_tool: Dict[str, int] = {}

    with events_file.open(newline="") as handle:
        reader = csv.DictReader(handle)
        for row in reader:
            event = row.get("event") or "unknown"
            counts[event] = counts.get(event, 0) + 1
            if event == "file_selected":
                outcome = row.get("outcome") or "unknown"
                outcomes[outcome] = outcomes.get(outcome, 0) + 1
                tool_id = row.get("tool_id") or "unknown"
                by_tool[tool_id] = by_tool.get(tool_id, 0) + 1

    summary: Dict[str, Any] = {
        "total_events": sum(counts.values()),
        "by_event": counts,
    }
    if outcomes:
        summary["selection_outcomes"] = outcomes
        summary["selections_by_tool"] = by_tool
        decided = outcomes.get("accepted", 0) + outcomes.get("rejected", 0)
        if decided:
            summary["acceptance_rate"] = outcomes.get("accepted", 0) / decided
    return summary
