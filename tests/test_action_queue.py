# tests/test_action_queue.py

from __future__ import annotations

import threading
import time

import pytest

from jot.errors import EmptyQueue, NoSelectableAction
from jot.tasks.action_queue import (
    ActionQueue,
    ActionResult,
    PriorityDiscipline,
    drain_queue,
    fifo_discipline,
    lifo_discipline,
)

from .fakes import RecordingAction


def test_run_next_on_fresh_queue_raises_empty_queue() -> None:
    q = ActionQueue(fifo_discipline)
    with pytest.raises(EmptyQueue):
        q.run_next()
    assert len(q) == 0
    assert q.is_empty()


def test_fifo_runs_in_enqueue_order() -> None:
    log: list[str] = []
    q = ActionQueue(fifo_discipline)
    for name in ("A", "B", "C"):
        q.enqueue(RecordingAction(name, log))

    finals = [q.run_next().final for _ in range(3)]

    assert log == ["A", "B", "C"]
    assert finals == [False, False, True]


def test_lifo_runs_newest_first() -> None:
    log: list[str] = []
    q = ActionQueue(lifo_discipline)
    for name in ("A", "B", "C"):
        q.enqueue(RecordingAction(name, log))

    drain_queue(q)
    assert log == ["C", "B", "A"]


def test_priority_discipline_prefers_highest_and_oldest_on_tie() -> None:
    log: list[str] = []
    q = ActionQueue(PriorityDiscipline(lambda a: a.priority))
    q.enqueue(RecordingAction("low", log, priority=1))
    q.enqueue(RecordingAction("high-1", log, priority=5))
    q.enqueue(RecordingAction("high-2", log, priority=5))

    drain_queue(q)
    assert log == ["high-1", "high-2", "low"]


def test_discipline_sees_offspring_on_next_call() -> None:
    log: list[str] = []
    q = ActionQueue(PriorityDiscipline(lambda a: a.priority))
    urgent = RecordingAction("urgent-child", log, priority=9)
    q.enqueue(RecordingAction("parent", log, offspring=[urgent], priority=2))
    q.enqueue(RecordingAction("sibling", log, priority=1))

    drain_queue(q)
    assert log == ["parent", "urgent-child", "sibling"]


@pytest.mark.parametrize("error", [None, RuntimeError("partial failure")])
def test_offspring_are_queued_regardless_of_error(error) -> None:
    log: list[str] = []
    child = RecordingAction("child", log)
    q = ActionQueue()
    q.enqueue(RecordingAction("parent", log, offspring=[child], error=error))

    first = q.run_next()
    assert first.error is error
    assert first.final is False
    assert q.pending() == (child,)

    second = q.run_next()
    assert second.ok
    assert second.final is True
    assert log == ["parent", "child"]


def test_raising_action_is_reported_not_raised() -> None:
    log: list[str] = []
    boom = ValueError("boom")
    q = ActionQueue()
    q.enqueue(RecordingAction("A", log, raises=boom))

    result = q.run_next()
    assert result.error is boom
    assert result.final is True
    assert not result.ok


def test_discipline_returning_none_raises_and_keeps_actions() -> None:
    log: list[str] = []
    q = ActionQueue(lambda actions: None)
    q.enqueue(RecordingAction("A", log))

    with pytest.raises(NoSelectableAction):
        q.run_next()
    assert log == []
    assert len(q) == 1


def test_discipline_returning_out_of_range_index_raises() -> None:
    q = ActionQueue(lambda actions: len(actions))
    q.enqueue(RecordingAction("A", []))
    with pytest.raises(NoSelectableAction):
        q.run_next()


def test_builtin_disciplines_on_empty_input() -> None:
    assert fifo_discipline([]) is None
    assert lifo_discipline([]) is None
    assert PriorityDiscipline(lambda a: 0)([]) is None


def test_drain_collects_failures_and_runs_everything() -> None:
    log: list[str] = []
    q = ActionQueue()
    q.enqueue(RecordingAction("ok", log))
    q.enqueue(RecordingAction("bad", log, error=RuntimeError("nope")))
    q.enqueue(RecordingAction("after", log))

    failures = drain_queue(q)

    assert log == ["ok", "bad", "after"]
    assert [f.action.name for f in failures] == ["bad"]
    assert q.is_empty()


def test_drain_max_steps_bounds_self_expanding_work() -> None:
    log: list[str] = []

    class Forever:
        def run(self) -> ActionResult:
            log.append("tick")
            return ActionResult(offspring=[Forever()])

    q = ActionQueue()
    q.enqueue(Forever())

    drain_queue(q, max_steps=5)
    assert len(log) == 5
    assert len(q) == 1


def test_actions_never_run_concurrently() -> None:
    active = 0
    overlap = False
    counter_lock = threading.Lock()
    ran: list[int] = []

    class Slow:
        def __init__(self, n: int) -> None:
            self.n = n

        def run(self) -> ActionResult:
            nonlocal active, overlap
            with counter_lock:
                active += 1
                overlap = overlap or active > 1
            time.sleep(0.002)
            with counter_lock:
                active -= 1
                ran.append(self.n)
            return ActionResult()

    q = ActionQueue()
    for n in range(40):
        q.enqueue(Slow(n))

    def consume() -> None:
        while True:
            try:
                q.run_next()
            except EmptyQueue:
                return

    threads = [threading.Thread(target=consume) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)

    assert not overlap
    assert sorted(ran) == list(range(40))
