# src/jot/tasks/action_queue.py

from __future__ import annotations

"""
Action queue.

Holds pending actions and runs them one at a time. Which action runs next is decided by a
pluggable discipline, re-evaluated on every run_next() against the current pending list.
An action may return offspring; they are appended to the queue after it runs, even when
the action also reports an error (offspring can be remedial follow-up work).
"""

import logging
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..core.ports import Action, Discipline
from ..errors import EmptyQueue, NoSelectableAction

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ActionResult:
    """What running an action produced."""

    offspring: list[Action] = field(default_factory=list)
    error: BaseException | None = None


@dataclass(slots=True, frozen=True)
class RunResult:
    """
    Outcome of one run_next() call.

    - action: the action that ran
    - error: the action's own error (None on success)
    - final: True when nothing is pending after this step
    """

    action: Action
    error: BaseException | None
    final: bool

    @property
    def ok(self) -> bool:
        return self.error is None


def fifo_discipline(actions: Sequence[Action]) -> int | None:
    """Always pick the oldest action."""
    if not actions:
        return None
    return 0


def lifo_discipline(actions: Sequence[Action]) -> int | None:
    """Always pick the newest action."""
    if not actions:
        return None
    return len(actions) - 1


class PriorityDiscipline:
    """Pick the action with the highest key(action); ties go to the oldest."""

    def __init__(self, key: Callable[[Action], Any]) -> None:
        self._key = key

    def __call__(self, actions: Sequence[Action]) -> int | None:
        best: int | None = None
        best_key: Any = None
        for idx, action in enumerate(actions):
            k = self._key(action)
            if best is None or k > best_key:
                best, best_key = idx, k
        return best


class ActionQueue:
    """
    Thread-safe queue of actions.

    A single lock guards the pending list and the whole select/remove/run/requeue step,
    so two actions never run concurrently through the same queue. A long-running action
    blocks every other queue operation until it finishes.
    """

    def __init__(self, discipline: Discipline = fifo_discipline) -> None:
        self._lock = threading.Lock()
        self._discipline = discipline
        self._actions: list[Action] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._actions)

    def is_empty(self) -> bool:
        return len(self) == 0

    def pending(self) -> tuple[Action, ...]:
        """Snapshot of the pending actions, in append order."""
        with self._lock:
            return tuple(self._actions)

    def enqueue(self, action: Action) -> None:
        with self._lock:
            self._actions.append(action)

    def run_next(self) -> RunResult:
        """
        Run the action chosen by the discipline.

        Raises EmptyQueue when nothing is pending and NoSelectableAction when the
        discipline cannot pick one. The action's own error is not raised; it is returned
        in the RunResult after any offspring have been queued.
        """
        with self._lock:
            if not self._actions:
                raise EmptyQueue("run_next called on empty queue")

            idx = self._discipline(self._actions)
            if idx is None or not 0 <= idx < len(self._actions):
                raise NoSelectableAction(f"unable to pick next action (discipline returned {idx!r})")

            action = self._actions.pop(idx)

            try:
                result = action.run()
            except Exception as exc:
                result = ActionResult(error=exc)

            self._actions.extend(result.offspring)
            if result.offspring:
                logger.debug("Action %r queued %d offspring", action, len(result.offspring))

            return RunResult(action=action, error=result.error, final=not self._actions)


def drain_queue(queue: ActionQueue, *, max_steps: int | None = None) -> list[RunResult]:
    """
    Run actions until the queue is empty (or max_steps actions have run).

    Failed actions are logged and returned; they never stop the drain.
    """
    failures: list[RunResult] = []
    steps = 0

    while not queue.is_empty():
        if max_steps is not None and steps >= max_steps:
            logger.warning("Stopping drain after %d steps; %d actions left", steps, len(queue))
            break

        result = queue.run_next()
        steps += 1

        if not result.ok:
            logger.error("Action %r failed", result.action, exc_info=result.error)
            failures.append(result)

        if result.final:
            break

    return failures
