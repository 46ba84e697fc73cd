# src/taskbook/tasks/task_api.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .task_models import Priority, Status, Task
from .task_store import TaskStore


def create_task(
    store: TaskStore[Task],
    title: str,
    priority: Priority,
    *,
    category: str | None = None,
    description: str | None = None,
    created_at: str | None = None,
) -> Task:
    """
    Convenience helper: build a Pending task and add it to the store.

    The id passed to Task.new is a placeholder; the store stamps the real one.
    Returns the stored task.
    """
    task = Task.new(0, title, priority, created_at=created_at)
    if category is not None:
        task = task.with_category(category)
    if description is not None:
        task = task.with_description(description)

    task_id = store.add_task(task)
    return store.require_task(task_id)


def filter_tasks(
    tasks: Iterable[Task],
    *,
    status: Status | None = None,
    priority: Priority | None = None,
    category: str | None = None,
) -> list[Task]:
    """Tasks matching every given filter, in their original order."""
    out: list[Task] = []
    for t in tasks:
        if status is not None and t.status is not status:
            continue
        if priority is not None and t.priority is not priority:
            continue
        if category is not None and t.category != category:
            continue
        out.append(t)
    return out


@dataclass(slots=True)
class TaskStats:
    total: int = 0
    by_status: dict[Status, int] = field(default_factory=lambda: dict.fromkeys(Status, 0))
    by_priority: dict[Priority, int] = field(default_factory=lambda: dict.fromkeys(Priority, 0))


def task_stats(tasks: Iterable[Task]) -> TaskStats:
    stats = TaskStats()
    for t in tasks:
        stats.total += 1
        stats.by_status[t.status] += 1
        stats.by_priority[t.priority] += 1
    return stats
