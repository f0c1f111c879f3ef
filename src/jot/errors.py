# src/jot/errors.py

"""Exception hierarchy shared by the document model, the action queue and the CLI."""

from __future__ import annotations


class JotError(Exception):
    """Base class for every error raised by jot."""


class MalformedDocument(JotError):
    """Input bytes are not a valid header + body document."""


class FieldTypeMismatch(MalformedDocument):
    """A recognized header field holds a value of the wrong type."""

    def __init__(self, field: str, expected: str, got: object) -> None:
        self.field = field
        self.expected = expected
        self.got_type = type(got).__name__
        super().__init__(f"field '{field}' has wrong type '{self.got_type}' (expected {expected})")


class UnknownDocumentClass(JotError):
    """No document variant exists for the given class name."""


class MutationIOFailure(JotError):
    """The temporary file used by mutate() could not be created, written or read back."""


class TransformFailure(JotError):
    """A transform passed to mutate() could not complete."""


class QueueError(JotError):
    pass


class EmptyQueue(QueueError):
    """run_next() was called with nothing pending."""


class NoSelectableAction(QueueError):
    """The discipline could not pick an action from a non-empty queue."""


class ConfigError(JotError):
    """Required configuration is missing or invalid."""
