# src/jot/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..core.ports import Action
from ..core.state import AppState
from ..tasks.action_queue import drain_queue
from ..tasks.actions import CaptureJournalEntry, CaptureThought, ReviewThoughts

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class CommandReply:
    text: str
    exit_code: int = 0


CommandHandler = Callable[[AppState, list[str]], CommandReply]


class CommandRegistry:
    """Simple command registry used by the CLI (ta, tr, ja, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, argv: list[str]) -> CommandReply:
        """Dispatch argv ("ta", "tr", ...) to its handler."""
        if not argv:
            return CommandReply(self.build_help())

        name = argv[0].lower()
        args = argv[1:]

        handler = self._handlers.get(name)
        if not handler:
            return CommandReply(f"Unknown command: {name}. Use 'jot help' to list commands.", 2)

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  {name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _run(state: AppState, action: Action) -> CommandReply:
    """Enqueue one action and drain the queue, including any offspring."""
    state.queue.enqueue(action)
    max_steps = state.settings.queue_max_steps or None
    failures = drain_queue(state.queue, max_steps=max_steps)
    if failures:
        first = failures[0].error
        return CommandReply(f"{len(failures)} action(s) failed: {first}", 1)
    return CommandReply("")


def cmd_help(state: AppState, args: list[str]) -> CommandReply:
    return CommandReply(registry.build_help())


def cmd_thought_add(state: AppState, args: list[str]) -> CommandReply:
    return _run(state, CaptureThought(state.require_workspace(), state.transform))


def cmd_thought_review(state: AppState, args: list[str]) -> CommandReply:
    workspace = state.require_workspace()
    total = len(workspace.pending_thoughts())
    reply = _run(state, ReviewThoughts(workspace, state.transform))
    if reply.exit_code:
        return reply
    logger.info("Review complete reviews=%d", total)
    return CommandReply(f"Reviewed {total} thought(s).")


def cmd_journal_add(state: AppState, args: list[str]) -> CommandReply:
    return _run(state, CaptureJournalEntry(state.require_workspace(), state.transform))


def cmd_pending(state: AppState, args: list[str]) -> CommandReply:
    paths = state.require_workspace().pending_thoughts()
    if not paths:
        return CommandReply("No thoughts pending review.")
    return CommandReply("\n".join(str(p) for p in paths))


registry.register("help", cmd_help, "show this help", aliases=["-h", "--help"])
registry.register("ta", cmd_thought_add, "capture a new thought (opens $EDITOR)")
registry.register("tr", cmd_thought_review, "review thoughts pending review")
registry.register("ja", cmd_journal_add, "add a journal entry (opens $EDITOR)")
registry.register("pending", cmd_pending, "list thoughts pending review")
