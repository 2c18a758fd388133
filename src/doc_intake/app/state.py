"""Round-trip the intake controller through a ``dcc.Store``."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..controller import Confirm, IntakeController
from ..models import IntakeSnapshot


def load_controller(data: Optional[Dict[str, Any]], *, confirm: Optional[Confirm] = None) -> Optional[IntakeController]:
    """Rebuild the controller for the current screen, or None off the intake screen."""
    if not data:
        return None
    try:
        snapshot = IntakeSnapshot.model_validate(data)
    except ValidationError:
        return None
    return IntakeController.from_snapshot(snapshot, confirm=confirm)


def dump_controller(controller: IntakeController, **overrides: Any) -> Dict[str, Any]:
    snapshot = controller.snapshot()
    if overrides:
        snapshot = snapshot.model_copy(update=overrides)
    return snapshot.model_dump(mode="json")
