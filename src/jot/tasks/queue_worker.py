# src/jot/tasks/queue_worker.py

from __future__ import annotations

"""
Queue worker.

A small polling loop that:
- runs the next action whenever the queue has one,
- logs failed actions (their offspring are already queued by the queue itself),
- sleeps while the queue is empty.

Actions are blocking, so each run_next() happens in a worker thread. To stop the worker,
cancel the coroutine/task, or pass stop_when_empty=True.
"""

import asyncio
import logging

from ..errors import EmptyQueue
from .action_queue import ActionQueue, RunResult

logger = logging.getLogger(__name__)


async def run_queue_worker(
        queue: ActionQueue,
        *,
        interval_seconds: float = 1.0,
        stop_when_empty: bool = False,
) -> list[RunResult]:
    """
    Drain `queue` forever (or until it is empty, with stop_when_empty).

    Returns the failed results collected before stopping; cancellation propagates as usual.
    """
    sleep_s = max(0.01, float(interval_seconds))
    failures: list[RunResult] = []

    while True:
        if queue.is_empty():
            if stop_when_empty:
                return failures
            await asyncio.sleep(sleep_s)
            continue

        try:
            result = await asyncio.to_thread(queue.run_next)
        except EmptyQueue:
            # Another consumer emptied the queue between the check and the run.
            continue

        if result.ok:
            logger.info("Action %r done (final=%s)", result.action, result.final)
        else:
            logger.error("Action %r failed", result.action, exc_info=result.error)
            failures.append(result)
