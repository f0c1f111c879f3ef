# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from jot.config import Settings
from jot.core.state import AppState
from jot.tasks.action_queue import ActionQueue
from jot.workspace import Workspace

from .fakes import EditBody


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings pointing at a per-test workspace.

    Built directly rather than from the environment, to keep tests isolated and deterministic.
    """
    return Settings(
        app_name="jot-test",
        log_level="DEBUG",
        workspace=tmp_path / "workspace",
        editor="true",
        data_dir=tmp_path / "data",
        log_dir=tmp_path / "data",
        queue_max_steps=0,
    )


@pytest.fixture()
def workspace(settings: Settings) -> Workspace:
    assert settings.workspace is not None
    settings.workspace.mkdir(parents=True, exist_ok=True)
    return Workspace(settings.workspace)


@pytest.fixture()
def state(settings: Settings, workspace: Workspace) -> AppState:
    """AppState wired with a real workspace and a deterministic in-process "editor"."""
    return AppState(
        settings=settings,
        queue=ActionQueue(),
        transform=EditBody("edited in test"),
        workspace=workspace,
    )
