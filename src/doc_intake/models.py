"""Pydantic models for the intake screen.

These models describe the tool rules, the file reference handed between the
host and the controller, and the state contract exposed to the rendering layer.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FileSource(str, Enum):
    """How a candidate file reached the screen."""

    BROWSE = "browse"
    DROP = "drop"


class SelectionOutcome(str, Enum):
    """Result of a select-file call."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EMPTY = "empty"
    IGNORED = "ignored"


class NavigationTrigger(str, Enum):
    BACK = "back"
    SUBMIT = "submit"
    CATALOG = "catalog"


class SelectedFile(BaseModel):
    """A file reference. Only ``name`` is ever inspected."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="File name including its extension.")
    handle: Any = Field(default=None, description="Opaque handle passed forward untouched.")

    @field_validator("name")
    @classmethod
    def _no_empty_names(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("File name must be a non-empty string.")
        return value


class ToolRule(BaseModel):
    """Display title and accepted extensions for one tool identifier."""

    model_config = ConfigDict(frozen=True)

    title: str
    accepted_extensions: Tuple[str, ...] = ()

    @field_validator("accepted_extensions")
    @classmethod
    def _normalise_extensions(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        normalised = []
        for ext in value:
            ext = ext.strip().lower()
            if not ext:
                continue
            normalised.append(ext if ext.startswith(".") else f".{ext}")
        return tuple(normalised)

    @property
    def accepts_anything(self) -> bool:
        return not self.accepted_extensions


class ToolDescriptor(BaseModel):
    """Navigable entry in the tool catalog."""

    model_config = ConfigDict(frozen=True)

    label: str
    description: str = ""
    href: str


class NavigationRequest(BaseModel):
    """A destination the host should route to."""

    model_config = ConfigDict(frozen=True)

    destination: str
    trigger: NavigationTrigger


class IntakeView(BaseModel):
    """Rendered state contract consumed by the presentation layer."""

    tool_id: str
    title: str
    accepted_extensions: List[str] = Field(default_factory=list)
    selected_file_name: Optional[str] = None
    error: Optional[str] = None
    drag_active: bool = False
    dirty: bool = False
    can_submit: bool = False
    catalog: List[ToolDescriptor] = Field(default_factory=list)

    @property
    def is_catalog(self) -> bool:
        return bool(self.catalog)


class IntakeSnapshot(BaseModel):
    """Serializable controller state for hosts that keep no server-side session."""

    tool_id: str
    selected_name: Optional[str] = None
    selected_handle: Optional[str] = None
    error: Optional[str] = None
    drag_active: bool = False
    dirty: bool = False
