# src/jot/documents/model.py

from __future__ import annotations

"""
Document model.

Every stored object is a Document: a YAML header (class, tags, class-specific fields)
followed by a Markdown body. The set of document classes is closed; new_object() is the
only place that maps a class name to a variant.
"""

import contextlib
import logging
import os
import tempfile
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar

from ..core.ports import Transform
from ..errors import MalformedDocument, MutationIOFailure, UnknownDocumentClass
from .frontmatter import Header, ParsedDocument, decode_document, encode_document

logger = logging.getLogger(__name__)

TEMP_PREFIX = "jt_"


@dataclass
class Meta:
    """Attributes shared by every document class."""

    class_name: str
    tags: list[str] = field(default_factory=list)

    def update(self, header: Header) -> None:
        """
        Apply a decoded header.

        The class is fixed at creation: a different class in the header is logged and
        ignored. Absent tags leave the current tags alone.
        """
        if header.class_name is not None and header.class_name != self.class_name:
            logger.warning(
                "Cannot change class of object from=%s to=%s", self.class_name, header.class_name
            )

        if header.tags is not None:
            self.tags = list(header.tags)


@contextlib.contextmanager
def _scratch_file(data: bytes) -> Iterator[Path]:
    """Write data to a fresh temp file and remove it on exit, whatever happens."""
    try:
        fd, name = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=".md")
    except OSError as exc:
        raise MutationIOFailure(f"failed to create temp file: {exc}") from exc

    path = Path(name).resolve()
    try:
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
        except OSError as exc:
            raise MutationIOFailure(f"failed to write object to temp file {path}: {exc}") from exc
        yield path
    finally:
        try:
            path.unlink(missing_ok=True)
        except OSError:
            logger.warning("Failed to remove temp file %s", path, exc_info=True)


@dataclass
class Document:
    """
    Base class for document variants.

    Subclasses set CLASS_NAME and extend _header_fields() / _apply() with their own fields.
    """

    CLASS_NAME: ClassVar[str] = ""

    id: str = ""
    # Never ends in a newline, even when unmarshaled from a file that does.
    body: str = ""
    meta: Meta = field(init=False)

    def __post_init__(self) -> None:
        self.meta = Meta(class_name=self.CLASS_NAME)

    def bucket(self) -> str:
        """Sub-directory the object belongs in; "" means the class's default directory."""
        return ""

    def _header_fields(self) -> dict[str, Any]:
        return {
            "class": self.meta.class_name,
            "tags": list(self.meta.tags),
        }

    def _apply(self, parsed: ParsedDocument) -> None:
        self.body = parsed.body
        self.meta.update(parsed.header)

    def marshal(self) -> bytes:
        return encode_document(self._header_fields(), self.body)

    def unmarshal(self, data: bytes) -> None:
        """Replace the object's state with the decoded document, or raise and change nothing."""
        self._apply(decode_document(data))

    def mutate(self, transform: Transform) -> None:
        """
        Let `transform` edit the object through a temporary file.

        The object is marshaled into a fresh temp file and `transform` is called with its path.
        When it returns, the file is read back and unmarshaled into the object. Exceptions
        from the transform propagate unchanged. On any failure the object is left exactly as
        it was, and the temp file is always removed.
        """
        with _scratch_file(self.marshal()) as path:
            transform(path)
            try:
                data = path.read_bytes()
            except OSError as exc:
                raise MutationIOFailure(f"failed to read temp file after mutation: {exc}") from exc

        self.unmarshal(data)


@dataclass
class Thought(Document):
    """An object of class 'thought'."""

    CLASS_NAME: ClassVar[str] = "thought"

    pending_review: bool = False

    def bucket(self) -> str:
        return "to_review" if self.pending_review else ""

    def _header_fields(self) -> dict[str, Any]:
        fields = super()._header_fields()
        fields["pending_review"] = self.pending_review
        return fields

    def _apply(self, parsed: ParsedDocument) -> None:
        if parsed.header.pending_review is not None:
            self.pending_review = parsed.header.pending_review
        super()._apply(parsed)


@dataclass
class JournalEntry(Document):
    """An object of class 'journal-entry'. Always lives in the journal's default bucket."""

    CLASS_NAME: ClassVar[str] = "journal-entry"


_VARIANTS: dict[str, type[Document]] = {
    Thought.CLASS_NAME: Thought,
    JournalEntry.CLASS_NAME: JournalEntry,
}


def new_thought(id: str = "") -> Thought:
    return Thought(id=id)


def new_journal_entry(id: str = "") -> JournalEntry:
    return JournalEntry(id=id)


def new_object(class_name: str, id: str = "") -> Document:
    try:
        cls = _VARIANTS[class_name]
    except KeyError:
        raise UnknownDocumentClass(f"unknown document class '{class_name}'") from None
    return cls(id=id)


def load_object(data: bytes, id: str = "") -> Document:
    """Build the variant named by the document's `class` field and populate it from data."""
    parsed = decode_document(data)
    class_name = parsed.header.class_name
    if class_name is None:
        raise MalformedDocument("frontmatter has no 'class' field")

    obj = new_object(class_name, id=id)
    obj._apply(parsed)
    return obj
