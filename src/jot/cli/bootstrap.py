# src/jot/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the workspace directory exists,
- wires concrete implementations (queue, editor transform, workspace) into AppState.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..core.state import AppState
from ..documents.editor import EditorTransform
from ..tasks.action_queue import ActionQueue
from ..workspace import Workspace

logger = logging.getLogger(__name__)


def create_initial_state(*, settings: Settings | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    workspace = None
    if settings.workspace is not None:
        settings.workspace.mkdir(parents=True, exist_ok=True)
        workspace = Workspace(settings.workspace)
        logger.debug("Workspace root=%s", workspace.root)

    return AppState(
        settings=settings,
        queue=ActionQueue(),
        transform=EditorTransform(settings.editor),
        workspace=workspace,
    )
