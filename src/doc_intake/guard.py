"""Reload/close interception scoped to a mounted intake screen."""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Callable, Dict, List, Optional

from .exceptions import ScreenLifecycleError

logger = logging.getLogger(__name__)


class UnloadGuard:
    """Registration handle returned by :meth:`UnloadGuardRegistry.register`.

    The guard intercepts reload/close only while it is active and its
    ``is_dirty`` predicate reports unsaved work. Use it as a context manager so
    release happens on every exit path.
    """

    def __init__(self, registry: "UnloadGuardRegistry", screen_id: str, is_dirty: Callable[[], bool]) -> None:
        self._registry = registry
        self.screen_id = screen_id
        self._is_dirty = is_dirty
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def intercepting(self) -> bool:
        return self._active and bool(self._is_dirty())

    def release(self) -> None:
        if not self._active:
            return
        self._active = False
        self._registry._discard(self)

    def __enter__(self) -> "UnloadGuard":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"UnloadGuard(screen_id={self.screen_id!r}, active={self._active})"


class UnloadGuardRegistry:
    def __init__(self) -> None:
        self._guards: Dict[str, UnloadGuard] = {}
        self._lock = threading.Lock()

    def register(self, is_dirty: Callable[[], bool], *, screen_id: Optional[str] = None) -> UnloadGuard:
        screen_id = screen_id or uuid.uuid4().hex
        with self._lock:
            if screen_id in self._guards:
                raise ScreenLifecycleError(f"Unload guard already registered for screen '{screen_id}'")
            guard = UnloadGuard(self, screen_id, is_dirty)
            self._guards[screen_id] = guard
        logger.debug("Registered unload guard %s", screen_id)
        return guard

    def _discard(self, guard: UnloadGuard) -> None:
        with self._lock:
            if self._guards.get(guard.screen_id) is guard:
                del self._guards[guard.screen_id]
        logger.debug("Released unload guard %s", guard.screen_id)

    def should_intercept(self) -> bool:
        """Return True if any mounted screen currently has unsaved work."""
        with self._lock:
            guards: List[UnloadGuard] = list(self._guards.values())
        return any(guard.intercepting() for guard in guards)

    def active_screens(self) -> List[str]:
        with self._lock:
            return list(self._guards)

    def __len__(self) -> int:
        with self._lock:
            return len(self._guards)


UNLOAD_GUARDS = UnloadGuardRegistry()
