# src/jot/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..config import Settings
from ..errors import ConfigError
from ..tasks.action_queue import ActionQueue
from ..workspace import Workspace
from .ports import Transform


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Settings

    queue: ActionQueue
    transform: Transform
    workspace: Workspace | None = None

    def require_workspace(self) -> Workspace:
        if self.workspace is None:
            raise ConfigError("JOT_WORKSPACE (or J_WORKSPACE) is not set")
        return self.workspace
