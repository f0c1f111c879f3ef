# tests/test_commands.py

from __future__ import annotations

from dataclasses import replace

import pytest

from jot.cli.commands import CommandRegistry, CommandReply, registry
from jot.core.state import AppState
from jot.errors import ConfigError
from jot.tasks.action_queue import ActionQueue


def test_command_registry_routes_names_and_aliases(state: AppState) -> None:
    reg = CommandRegistry()
    called: list[list[str]] = []

    def handler(state, args):
        called.append(args)
        return CommandReply("ok")

    reg.register("go", handler, "go somewhere", aliases=["g"])

    assert reg.handle(state, ["go", "x"]).text == "ok"
    assert reg.handle(state, ["G"]).text == "ok"
    assert called == [["x"], []]


def test_command_registry_unknown_and_empty(state: AppState) -> None:
    reg = CommandRegistry()
    reg.register("go", lambda s, a: CommandReply("ok"), "go somewhere")

    unknown = reg.handle(state, ["nope"])
    assert unknown.exit_code == 2
    assert "Unknown command" in unknown.text

    assert "go - go somewhere" in reg.handle(state, []).text


def test_thought_add_then_review(state: AppState) -> None:
    assert registry.handle(state, ["ta"]) == CommandReply("")
    pending = registry.handle(state, ["pending"]).text
    assert pending.endswith(".md")

    reply = registry.handle(state, ["tr"])
    assert reply == CommandReply("Reviewed 1 thought(s).")
    assert state.queue.is_empty()


def test_journal_add(state: AppState) -> None:
    assert registry.handle(state, ["ja"]).exit_code == 0
    assert state.workspace is not None
    assert len(list((state.workspace.root / "journal").glob("*.md"))) == 1


def test_failed_action_sets_exit_code(state: AppState) -> None:
    def broken_editor(path):
        path.write_text("not a document", "utf-8")

    state.transform = broken_editor
    reply = registry.handle(state, ["ta"])
    assert reply.exit_code == 1
    assert "1 action(s) failed" in reply.text


def test_commands_require_workspace(settings) -> None:
    state = AppState(
        settings=replace(settings, workspace=None),
        queue=ActionQueue(),
        transform=lambda path: None,
    )
    assert "Available commands" in registry.handle(state, ["help"]).text
    with pytest.raises(ConfigError):
        registry.handle(state, ["ta"])
