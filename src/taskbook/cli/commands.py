# src/taskbook/cli/commands.py

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable
from dataclasses import dataclass

from ..core.state import AppState
from ..tasks.task_api import create_task, filter_tasks, task_stats
from ..tasks.task_errors import InvalidPriority, InvalidStatus, ParseFailure, ValidationFailure
from ..tasks.task_models import FIELD_SEP, MAX_TASK_ID, Priority, Status

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class _Command:
    handler: CommandHandler
    usage: str
    help_text: str
    mutates: bool


class CommandRegistry:
    """
    Line-command registry used by the console (add, list, help, ...).

    Handlers raise TaskError subclasses on bad input; the caller decides how
    to show them. A handler registered with mutates=True marks the state
    dirty when it returns normally.
    """

    def __init__(self) -> None:
        self._commands: dict[str, _Command] = {}
        self._help_order: list[str] = []

    def register(
        self,
        name: str,
        handler: CommandHandler,
        *,
        usage: str,
        help_text: str,
        mutates: bool = False,
        aliases: list[str] | None = None,
    ) -> None:
        cmd = _Command(handler=handler, usage=usage, help_text=help_text, mutates=mutates)
        key = name.lower()
        self._commands[key] = cmd
        self._help_order.append(key)
        for alias in aliases or []:
            self._commands[alias.lower()] = cmd

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a line like "add 'Buy milk' high home" (a leading "/" is accepted).
        Returns a reply string, or None for a blank line.
        """
        text = line.strip()
        if text.startswith("/"):
            text = text[1:]

        try:
            parts = shlex.split(text)
        except ValueError as e:
            raise ParseFailure(f"Cannot parse command line: {e}") from None

        if not parts:
            return None

        name = parts[0].lower()
        args = parts[1:]

        cmd = self._commands.get(name)
        if cmd is None:
            return f"Unknown command: {name}. Type 'help' for available commands."

        reply = cmd.handler(state, args)
        if cmd.mutates:
            state.dirty = True
        logger.debug("Command handled name=%s mutates=%s", name, cmd.mutates)
        return reply

    def build_help(self) -> str:
        width = max((len(self._commands[n].usage) for n in self._help_order), default=0)
        lines = ["Available commands:"]
        for name in self._help_order:
            cmd = self._commands[name]
            lines.append(f"  {cmd.usage.ljust(width)}  - {cmd.help_text}")
        lines.append(f"  {'quit'.ljust(width)}  - Exit the application")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(raw: str) -> int:
    if not raw.isascii() or not raw.isdigit() or int(raw) > MAX_TASK_ID:
        raise ParseFailure("Invalid task ID")
    return int(raw)


def _check_text(value: str, what: str) -> str:
    # The task file format has no escaping; refuse values it cannot hold.
    if FIELD_SEP in value or "\n" in value or "\r" in value:
        raise ValidationFailure(f"{what} cannot contain '{FIELD_SEP}' or line breaks")
    return value


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        raise ValidationFailure("Usage: add <title> <priority> [category]")

    priority = Priority.parse(args[1])
    title = _check_text(args[0], "Title")
    category = _check_text(args[2], "Category") if len(args) > 2 else None

    task = create_task(state.store, title, priority, category=category)
    return f"Task #{task.id} created: {task.title} [{task.priority}]"


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    list                         -> all tasks
    list status=pending          -> filter (status=, priority=, category=)

    A filter value that does not parse is ignored rather than rejected.
    """
    status: Status | None = None
    priority: Priority | None = None
    category: str | None = None

    for arg in args:
        key, sep, value = arg.partition("=")
        if not sep:
            continue
        key = key.lower()
        if key == "status":
            try:
                status = Status.parse(value)
            except InvalidStatus:
                status = None
        elif key == "priority":
            try:
                priority = Priority.parse(value)
            except InvalidPriority:
                priority = None
        elif key == "category":
            category = value

    tasks = filter_tasks(
        state.store.list_tasks(), status=status, priority=priority, category=category
    )
    if not tasks:
        return "No tasks found."

    lines = [f"Tasks ({len(tasks)}):"]
    lines.extend(f"  {t.render()}" for t in tasks)
    return "\n".join(lines)


def cmd_show(state: AppState, args: list[str]) -> str:
    if not args:
        raise ValidationFailure("Usage: show <id>")

    task = state.store.require_task(_parse_id(args[0]))
    return (
        f"Task #{task.id}:\n"
        f"  Title: {task.title}\n"
        f"  Status: {task.status}\n"
        f"  Priority: {task.priority}\n"
        f"  Category: {'None' if task.category is None else task.category}\n"
        f"  Description: {'None' if task.description is None else task.description}\n"
        f"  Created: {task.created_at}"
    )


def cmd_update(state: AppState, args: list[str]) -> str:
    """
    update <id> status <value>
    update <id> priority <value>
    update <id> title <words...>
    """
    if len(args) < 3:
        raise ValidationFailure("Usage: update <id> <field> <value>")

    task_id = _parse_id(args[0])
    task = state.store.require_task(task_id)
    field_name = args[1].lower()

    if field_name == "status":
        task.set_status(Status.parse(args[2]))
        return f"Task #{task_id} updated: status = {task.status}"

    if field_name == "priority":
        task.set_priority(Priority.parse(args[2]))
        return f"Task #{task_id} updated: priority = {task.priority}"

    if field_name == "title":
        task.set_title(_check_text(" ".join(args[2:]), "Title"))
        return f"Task #{task_id} updated: title = {task.title}"

    raise ValidationFailure(
        f"Unknown field: {args[1]}. Valid fields: status, priority, title"
    )


def cmd_complete(state: AppState, args: list[str]) -> str:
    if not args:
        raise ValidationFailure("Usage: complete <id>")

    task_id = _parse_id(args[0])
    state.store.require_task(task_id).set_status(Status.COMPLETED)
    return f"Task #{task_id} marked as completed"


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        raise ValidationFailure("Usage: delete <id>")

    task_id = _parse_id(args[0])
    state.store.remove_task(task_id)
    return f"Task #{task_id} deleted"


def cmd_stats(state: AppState, args: list[str]) -> str:
    stats = task_stats(state.store.list_tasks())
    if stats.total == 0:
        return "No tasks to show statistics for."

    lines = [
        "=== Task Statistics ===",
        f"Total Tasks: {stats.total}",
        f"  Pending: {stats.by_status[Status.PENDING]}",
        f"  In Progress: {stats.by_status[Status.IN_PROGRESS]}",
        f"  Completed: {stats.by_status[Status.COMPLETED]}",
        "",
        "By Priority:",
    ]
    # Most severe first.
    for p in reversed(Priority):
        lines.append(f"  {p.value.capitalize()}: {stats.by_priority[p]}")
    return "\n".join(lines)


registry.register(
    "add",
    cmd_add,
    usage="add <title> <priority> [category]",
    help_text="Add a new task (priority: low, medium, high, critical)",
    mutates=True,
)
registry.register(
    "list",
    cmd_list,
    usage="list [filter]",
    help_text="List tasks (filters: status=<s>, priority=<p>, category=<c>)",
    aliases=["ls"],
)
registry.register("show", cmd_show, usage="show <id>", help_text="Show detailed task information")
registry.register(
    "update",
    cmd_update,
    usage="update <id> <field> <value>",
    help_text="Update task field (status, priority, title)",
    mutates=True,
)
registry.register(
    "complete", cmd_complete, usage="complete <id>", help_text="Mark task as completed", mutates=True
)
registry.register(
    "delete", cmd_delete, usage="delete <id>", help_text="Delete a task", mutates=True, aliases=["rm"]
)
registry.register("stats", cmd_stats, usage="stats", help_text="Show task statistics")
registry.register(
    "help", cmd_help, usage="help", help_text="Show this help message", aliases=["h", "?"]
)
