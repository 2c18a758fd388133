from __future__ import annotations

from pathlib import Path
from typing import Callable, List

import pytest

from doc_intake.guard import UnloadGuardRegistry
from doc_intake.models import NavigationRequest, SelectedFile


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    uploads_dir = tmp_path / "uploads"
    logs_dir = tmp_path / "logs"
    monkeypatch.setenv("UPLOADS_DIR", str(uploads_dir))
    monkeypatch.setenv("LOGS_DIR", str(logs_dir))
    monkeypatch.delenv("ENABLE_ANALYTICS", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)

    from doc_intake import config as config_module

    config_module.get_settings.cache_clear()
    yield config_module.get_settings()
    config_module.get_settings.cache_clear()


@pytest.fixture()
def make_file() -> Callable[..., SelectedFile]:
    def _make(name: str, handle: object = None) -> SelectedFile:
        return SelectedFile(name=name, handle=handle if handle is not None else object())

    return _make


@pytest.fixture()
def registry() -> UnloadGuardRegistry:
    return UnloadGuardRegistry()


@pytest.fixture()
def navigations() -> List[NavigationRequest]:
    return []
