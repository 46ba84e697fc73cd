# tests/test_commands.py

from __future__ import annotations

import pytest

from taskbook.cli.commands import CommandRegistry, registry
from taskbook.core.state import AppState
from taskbook.tasks.task_errors import (
    InvalidPriority,
    InvalidStatus,
    NotFound,
    ParseFailure,
    ValidationFailure,
)
from taskbook.tasks.task_models import Priority, Status


def test_command_registry_routes_and_marks_dirty(state: AppState) -> None:
    reg = CommandRegistry()
    called: list[list[str]] = []

    def read(state, args):
        called.append(args)
        return "read"

    def write(state, args):
        called.append(args)
        return "write"

    reg.register("r", read, usage="r", help_text="read")
    reg.register("w", write, usage="w", help_text="write", mutates=True, aliases=["ww"])

    assert reg.handle(state, "r x y") == "read"
    assert state.dirty is False
    assert reg.handle(state, "/WW 'a b'") == "write"
    assert state.dirty is True
    assert called == [["x", "y"], ["a b"]]


def test_command_registry_unknown_and_blank(state: AppState) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "   ") is None
    assert "Unknown command: nope" in (reg.handle(state, "nope") or "")


def test_unbalanced_quotes_are_parse_failure(state: AppState) -> None:
    with pytest.raises(ParseFailure):
        registry.handle(state, 'add "Write report high')


def test_add_and_list(state: AppState) -> None:
    assert registry.handle(state, 'add "Write report" high work') == (
        "Task #1 created: Write report [HIGH]"
    )
    assert registry.handle(state, "add Review medium") == "Task #2 created: Review [MEDIUM]"
    assert state.dirty is True

    out = registry.handle(state, "list") or ""
    assert out.splitlines() == [
        "Tasks (2):",
        "  [1] [PENDING] [HIGH] Write report (work)",
        "  [2] [PENDING] [MEDIUM] Review",
    ]

    assert "Tasks (1):" in (registry.handle(state, "list category=work") or "")
    assert registry.handle(state, "list priority=low") == "No tasks found."
    # Unparseable filter values are ignored.
    assert "Tasks (2):" in (registry.handle(state, "list status=bogus") or "")


def test_add_usage_and_bad_priority(state: AppState) -> None:
    with pytest.raises(ValidationFailure, match="Usage: add"):
        registry.handle(state, "add lonely")
    with pytest.raises(InvalidPriority):
        registry.handle(state, "add title urgent")
    with pytest.raises(ValidationFailure, match="cannot contain"):
        registry.handle(state, "add 'a|b' low")
    assert state.store.count_tasks() == 0
    assert state.dirty is False


def test_add_after_delete_does_not_reuse_ids(state: AppState) -> None:
    for title in ("a", "b", "c"):
        registry.handle(state, f"add {title} low")
    registry.handle(state, "delete 2")
    assert registry.handle(state, "add d low") == "Task #4 created: d [LOW]"


def test_update_complete_delete(state: AppState) -> None:
    registry.handle(state, "add 'Buy milk' low")

    assert registry.handle(state, "update 1 status in_progress") == (
        "Task #1 updated: status = IN_PROGRESS"
    )
    assert registry.handle(state, "update 1 priority Critical") == (
        "Task #1 updated: priority = CRITICAL"
    )
    assert registry.handle(state, "update 1 title Buy oat milk") == (
        "Task #1 updated: title = Buy oat milk"
    )
    task = state.store.require_task(1)
    assert (task.status, task.priority, task.title) == (
        Status.IN_PROGRESS,
        Priority.CRITICAL,
        "Buy oat milk",
    )

    assert registry.handle(state, "complete 1") == "Task #1 marked as completed"
    assert task.is_completed()

    assert registry.handle(state, "delete 1") == "Task #1 deleted"
    assert state.store.count_tasks() == 0


def test_update_errors(state: AppState) -> None:
    registry.handle(state, "add x low")

    with pytest.raises(ValidationFailure, match="Usage: update"):
        registry.handle(state, "update 1 status")
    with pytest.raises(ValidationFailure, match="Unknown field: color"):
        registry.handle(state, "update 1 color red")
    with pytest.raises(InvalidStatus):
        registry.handle(state, "update 1 status done")
    with pytest.raises(ParseFailure, match="Invalid task ID"):
        registry.handle(state, "update one status pending")
    with pytest.raises(NotFound):
        registry.handle(state, "update 9 status pending")


def test_show(state: AppState) -> None:
    registry.handle(state, "add Report high work")
    out = registry.handle(state, "show 1") or ""
    assert out.splitlines()[:6] == [
        "Task #1:",
        "  Title: Report",
        "  Status: PENDING",
        "  Priority: HIGH",
        "  Category: work",
        "  Description: None",
    ]
    with pytest.raises(NotFound):
        registry.handle(state, "show 2")
    with pytest.raises(ValidationFailure):
        registry.handle(state, "show")


@pytest.mark.parametrize("line", ["complete -1", "delete 1.5", "show abc"])
def test_bad_ids(state: AppState, line: str) -> None:
    with pytest.raises(ParseFailure):
        registry.handle(state, line)


def test_stats(state: AppState) -> None:
    assert registry.handle(state, "stats") == "No tasks to show statistics for."

    registry.handle(state, "add a high")
    registry.handle(state, "add b low")
    registry.handle(state, "complete 1")

    out = registry.handle(state, "stats") or ""
    assert "Total Tasks: 2" in out
    assert "  Pending: 1" in out
    assert "  Completed: 1" in out
    lines = out.splitlines()
    assert lines[lines.index("By Priority:") + 1 :] == [
        "  Critical: 0",
        "  High: 1",
        "  Medium: 0",
        "  Low: 1",
    ]


def test_help_lists_every_command(state: AppState) -> None:
    out = registry.handle(state, "?") or ""
    for name in ("add", "list", "show", "update", "complete", "delete", "stats", "help", "quit"):
        assert f"  {name}" in out


def test_show_distinguishes_empty_category_from_absent(state: AppState) -> None:
    registry.handle(state, 'add tagged low ""')
    registry.handle(state, "add untagged low")

    assert "  Category: \n" in (registry.handle(state, "show 1") or "")
    assert "  Category: None\n" in (registry.handle(state, "show 2") or "")
