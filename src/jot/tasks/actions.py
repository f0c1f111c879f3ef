# src/jot/tasks/actions.py

from __future__ import annotations

"""
Workspace actions.

Each action is one unit of work for the ActionQueue:
- CaptureThought: new thought -> editor -> save to thoughts/to_review (unless unchanged)
- CaptureJournalEntry: same flow for a journal entry
- ReviewThoughts: expands into one ReviewThought per pending thought
- ReviewThought: edit one pending thought, then move it to its new bucket or discard it
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from ..core.ports import Transform
from ..documents.model import Document, new_journal_entry, new_thought
from ..errors import JotError
from ..workspace import Workspace, describe
from .action_queue import ActionResult

logger = logging.getLogger(__name__)


def _capture(workspace: Workspace, obj: Document, transform: Transform) -> Path | None:
    """Edit a fresh object; save it only if the edit changed something."""
    before = obj.marshal()
    obj.mutate(transform)
    if obj.marshal() == before:
        logger.info("No change to %s document; discarding", obj.meta.class_name)
        return None
    return workspace.save(obj)


@dataclass(slots=True)
class CaptureThought:
    workspace: Workspace
    transform: Transform

    def run(self) -> ActionResult:
        thought = new_thought(id=self.workspace.new_thought_id())
        thought.pending_review = True
        try:
            path = _capture(self.workspace, thought, self.transform)
        except (JotError, OSError) as exc:
            return ActionResult(error=exc)

        if path is not None:
            logger.info("Captured %s at %s", describe(thought), path)
        return ActionResult()


@dataclass(slots=True)
class CaptureJournalEntry:
    workspace: Workspace
    transform: Transform
    now: datetime | None = None

    def run(self) -> ActionResult:
        entry = new_journal_entry(id=self.workspace.new_journal_id(self.now))
        try:
            path = _capture(self.workspace, entry, self.transform)
        except (JotError, OSError) as exc:
            return ActionResult(error=exc)

        if path is not None:
            logger.info("Captured %s at %s", describe(entry), path)
        return ActionResult()


@dataclass(slots=True)
class ReviewThought:
    workspace: Workspace
    path: Path
    transform: Transform

    def run(self) -> ActionResult:
        try:
            obj = self.workspace.load(self.path)
            obj.mutate(self.transform)
        except (JotError, OSError) as exc:
            # The file stays in to_review; the next review picks it up again.
            return ActionResult(error=exc)

        if not obj.body.strip():
            self.workspace.discard(self.path)
            logger.info("Discarded empty %s", describe(obj))
            return ActionResult()

        try:
            self.workspace.save(obj, previous=self.path)
        except OSError as exc:
            return ActionResult(error=exc)
        return ActionResult()


@dataclass(slots=True)
class ReviewThoughts:
    workspace: Workspace
    transform: Transform

    def run(self) -> ActionResult:
        pending = self.workspace.pending_thoughts()
        logger.info("Review started thoughts=%d", len(pending))
        return ActionResult(
            offspring=[ReviewThought(self.workspace, path, self.transform) for path in pending]
        )
