# src/jot/documents/editor.py

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

from ..errors import TransformFailure

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class EditorTransform:
    """
    Transform that opens a file in the user's editor and waits for it to exit.

    `command` may carry arguments (e.g. "code --wait"); the file path is appended last.
    The editor inherits the terminal.
    """

    command: str

    def argv(self, path: Path) -> list[str]:
        parts = shlex.split(self.command)
        if not parts:
            raise TransformFailure("no editor configured")
        return [*parts, str(path)]

    def __call__(self, path: Path) -> None:
        argv = self.argv(path)
        logger.debug("Opening editor argv=%s", argv)
        try:
            proc = subprocess.run(argv, check=False)
        except OSError as exc:
            raise TransformFailure(f"failed to start editor {argv[0]!r}: {exc}") from exc

        if proc.returncode != 0:
            raise TransformFailure(f"editor {argv[0]!r} exited with status {proc.returncode}")
