# src/jot/workspace.py

from __future__ import annotations

import logging
import os
import uuid
from datetime import datetime
from pathlib import Path

from .core.ports import StoredObject
from .documents.model import Document, load_object

logger = logging.getLogger(__name__)

CLASS_DIRS: dict[str, str] = {
    "thought": "thoughts",
    "journal-entry": "journal",
}

REVIEW_BUCKET = "to_review"


class Workspace:
    """
    Flat-file store for documents.

    Layout: <root>/<class dir>/<bucket>/<id>.md, e.g. thoughts/to_review/<uuid>.md.
    Saving an object whose bucket changed moves its file.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).expanduser()

    def class_dir(self, class_name: str) -> Path:
        # Unknown classes get a directory named after the class.
        return self.root / CLASS_DIRS.get(class_name, class_name)

    def path_for(self, obj: Document) -> Path:
        if not obj.id:
            raise ValueError("object has no id; assign one before saving")
        directory = self.class_dir(obj.meta.class_name)
        bucket = obj.bucket()
        if bucket:
            directory = directory / bucket
        return directory / f"{obj.id}.md"

    def save(self, obj: Document, *, previous: Path | None = None) -> Path:
        """Write obj to its bucket path atomically and remove `previous` if it moved."""
        path = self.path_for(obj)
        path.parent.mkdir(parents=True, exist_ok=True)

        tmp = path.with_name(path.name + ".tmp")
        try:
            tmp.write_bytes(obj.marshal())
            os.replace(tmp, path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
        logger.debug("Saved %s id=%s path=%s", obj.meta.class_name, obj.id, path)

        if previous is not None and Path(previous) != path:
            self.discard(Path(previous))
            logger.info("Moved %s id=%s from %s to %s", obj.meta.class_name, obj.id, previous, path)

        return path

    def load(self, path: str | Path) -> Document:
        path = Path(path)
        return load_object(path.read_bytes(), id=path.stem)

    def discard(self, path: Path) -> None:
        path.unlink(missing_ok=True)
        logger.debug("Discarded %s", path)

    def pending_thoughts(self) -> list[Path]:
        review_dir = self.class_dir("thought") / REVIEW_BUCKET
        if not review_dir.is_dir():
            return []
        return sorted(p for p in review_dir.glob("*.md") if p.is_file())

    @staticmethod
    def new_thought_id() -> str:
        return str(uuid.uuid4())

    @staticmethod
    def new_journal_id(now: datetime | None = None) -> str:
        return (now or datetime.now()).strftime("%Y_%m_%d_%H_%M_%S")


def describe(obj: StoredObject) -> str:
    return f"{type(obj).__name__}(id={obj.id}, bucket={obj.bucket() or '-'})"
