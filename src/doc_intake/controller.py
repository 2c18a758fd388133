"""Intake controller: file selection, drag state and navigation guarding.

The controller owns all mutable state of one intake screen visit. Hosts call
its handler methods in response to UI events and re-render from :meth:`view`.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional

from .analytics import log_event
from .exceptions import NoFileSelectedError, ScreenLifecycleError, UnsupportedFileTypeError
from .guard import UNLOAD_GUARDS, UnloadGuard, UnloadGuardRegistry
from .models import (
    FileSource,
    IntakeSnapshot,
    IntakeView,
    NavigationRequest,
    NavigationTrigger,
    SelectedFile,
    SelectionOutcome,
    ToolDescriptor,
)
from .routes import DASHBOARD_PATH, processing_path
from .tools import catalog_entries, get_tool_rule, is_catalog_tool, validate_extension

logger = logging.getLogger(__name__)

LEAVE_CONFIRMATION = "You have unsaved work. Leave?"

Confirm = Callable[[str], bool]
Navigate = Callable[[NavigationRequest], None]


class IntakeController:
    """State machine behind the tool upload screen.

    ``confirm`` is called synchronously with :data:`LEAVE_CONFIRMATION` when
    the user leaves with unsaved work. ``navigate`` receives every navigation
    request the controller issues; the same request is also returned to the
    caller.
    """

    def __init__(
        self,
        tool_id: str,
        *,
        confirm: Optional[Confirm] = None,
        navigate: Optional[Navigate] = None,
    ) -> None:
        self.tool_id = tool_id
        self.rule = get_tool_rule(tool_id)
        self._confirm = confirm
        self._navigate = navigate
        self._selected: Optional[SelectedFile] = None
        self._error: Optional[str] = None
        self._drag_active = False
        self._dirty = False
        self._guard: Optional[UnloadGuard] = None

    @classmethod
    def from_snapshot(
        cls,
        snapshot: IntakeSnapshot,
        *,
        confirm: Optional[Confirm] = None,
        navigate: Optional[Navigate] = None,
    ) -> "IntakeController":
        controller = cls(snapshot.tool_id, confirm=confirm, navigate=navigate)
        if snapshot.selected_name:
            controller._selected = SelectedFile(name=snapshot.selected_name, handle=snapshot.selected_handle)
        controller._error = snapshot.error
        controller._drag_active = snapshot.drag_active
        controller._dirty = snapshot.dirty or controller._selected is not None
        return controller

    def snapshot(self) -> IntakeSnapshot:
        handle = self._selected.handle if self._selected else None
        return IntakeSnapshot(
            tool_id=self.tool_id,
            selected_name=self._selected.name if self._selected else None,
            selected_handle=handle if isinstance(handle, str) else None,
            error=self._error,
            drag_active=self._drag_active,
            dirty=self._dirty,
        )

    @property
    def title(self) -> str:
        return self.rule.title

    @property
    def accepted_extensions(self) -> List[str]:
        return list(self.rule.accepted_extensions)

    @property
    def selected_file(self) -> Optional[SelectedFile]:
        return self._selected

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def drag_active(self) -> bool:
        return self._drag_active

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def is_catalog(self) -> bool:
        return is_catalog_tool(self.tool_id)

    @property
    def catalog(self) -> List[ToolDescriptor]:
        return catalog_entries(self.tool_id)

    # -- file intake -------------------------------------------------------

    def select_file(
        self,
        candidate: Optional[SelectedFile],
        source: FileSource = FileSource.BROWSE,
    ) -> SelectionOutcome:
        """Offer a candidate file from the picker or a drop.

        Browse selections are validated against the accepted extensions; a
        rejection records an error and keeps the previous selection. Drops are
        accepted without validation and leave any error untouched.
        """
        source = FileSource(source)
        if source is FileSource.DROP:
            self._drag_active = False

        if self.is_catalog:
            logger.debug("Ignoring %s selection on catalog screen %s", source.value, self.tool_id)
            return SelectionOutcome.IGNORED
        if candidate is None:
            return SelectionOutcome.EMPTY

        if source is FileSource.BROWSE:
            try:
                validate_extension(candidate.name, self.rule.accepted_extensions)
            except UnsupportedFileTypeError as exc:
                self._error = exc.message
                logger.info("Rejected %s for tool %s: %s", candidate.name, self.tool_id, exc.message)
                self._record_selection(source, SelectionOutcome.REJECTED)
                return SelectionOutcome.REJECTED
            self._error = None

        self._selected = candidate
        self._dirty = True
        logger.info("Accepted %s for tool %s via %s", candidate.name, self.tool_id, source.value)
        self._record_selection(source, SelectionOutcome.ACCEPTED)
        return SelectionOutcome.ACCEPTED

    def drag_enter(self) -> None:
        self._drag_active = True

    def drag_leave(self) -> None:
        self._drag_active = False

    # -- navigation --------------------------------------------------------

    def request_back_navigation(self, confirm: Optional[Confirm] = None) -> Optional[NavigationRequest]:
        """Leave for the dashboard, asking first if there is unsaved work.

        Returns the navigation request, or None when the user stays.
        """
        if self._dirty:
            prompt = confirm or self._confirm
            if prompt is None:
                logger.warning("No confirmation handler for %s; staying on screen", self.tool_id)
                return None
            if not prompt(LEAVE_CONFIRMATION):
                logger.debug("Back navigation declined on %s", self.tool_id)
                return None
        return self._issue(NavigationRequest(destination=DASHBOARD_PATH, trigger=NavigationTrigger.BACK))

    def submit(self) -> NavigationRequest:
        if self._selected is None:
            raise NoFileSelectedError(f"No file selected for tool '{self.tool_id}'")
        return self._issue(
            NavigationRequest(destination=processing_path(self.tool_id), trigger=NavigationTrigger.SUBMIT)
        )

    def open_tool(self, descriptor: ToolDescriptor) -> NavigationRequest:
        return self._issue(NavigationRequest(destination=descriptor.href, trigger=NavigationTrigger.CATALOG))

    def _issue(self, request: NavigationRequest) -> NavigationRequest:
        logger.info("Navigating from %s to %s (%s)", self.tool_id, request.destination, request.trigger.value)
        log_event(
            "navigation",
            {"tool_id": self.tool_id, "destination": request.destination, "outcome": request.trigger.value},
        )
        if self._navigate is not None:
            self._navigate(request)
        return request

    def _record_selection(self, source: FileSource, outcome: SelectionOutcome) -> None:
        log_event("file_selected", {"tool_id": self.tool_id, "source": source.value, "outcome": outcome.value})

    # -- unload guard lifecycle --------------------------------------------

    def mount(self, registry: Optional[UnloadGuardRegistry] = None, *, screen_id: Optional[str] = None) -> UnloadGuard:
        if self._guard is not None and self._guard.active:
            raise ScreenLifecycleError(f"Intake screen for '{self.tool_id}' is already mounted")
        registry = registry if registry is not None else UNLOAD_GUARDS
        self._guard = registry.register(lambda: self._dirty, screen_id=screen_id)
        return self._guard

    def unmount(self) -> None:
        if self._guard is not None:
            self._guard.release()
            self._guard = None

    @contextmanager
    def mounted(
        self,
        registry: Optional[UnloadGuardRegistry] = None,
        *,
        screen_id: Optional[str] = None,
    ) -> Iterator[UnloadGuard]:
        guard = self.mount(registry, screen_id=screen_id)
        try:
            yield guard
        finally:
            self.unmount()

    @property
    def intercepts_unload(self) -> bool:
        return self._guard is not None and self._guard.intercepting()

    def view(self) -> IntakeView:
        return IntakeView(
            tool_id=self.tool_id,
            title=self.title,
            accepted_extensions=self.accepted_extensions,
            selected_file_name=self._selected.name if self._selected else None,
            error=self._error,
            drag_active=self._drag_active,
            dirty=self._dirty,
            can_submit=self._selected is not None and not self.is_catalog,
            catalog=self.catalog,
        )
