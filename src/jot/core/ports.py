# src/jot/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) shared across jot.

The queue and the document model depend on Protocols instead of concrete classes,
so new document classes, actions and disciplines can be plugged in without touching them.
"""

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.action_queue import ActionResult

Transform = Callable[[Path], None]
# Receives the path of a temp file holding a marshaled object; may rewrite it in place.
# Signals failure by raising.


class StoredObject(Protocol):
    """Something that can be stored in the workspace (a thought, a journal entry, ...)."""

    @property
    def id(self) -> str: ...

    def bucket(self) -> str: ...
    def mutate(self, transform: Transform) -> None: ...
    def marshal(self) -> bytes: ...
    def unmarshal(self, data: bytes) -> None: ...


class Action(Protocol):
    """A unit of work. Running it may produce offspring actions."""

    def run(self) -> ActionResult: ...


class Discipline(Protocol):
    """
    Picks the index of the next action to run.

    Returns None when no action can be selected (e.g. the sequence is empty).
    """

    def __call__(self, actions: Sequence[Action]) -> int | None: ...
