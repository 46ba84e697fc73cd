# src/taskbook/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the file storage and the in-memory store into AppState,
- loads persisted tasks (a broken file means starting empty, not crashing).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_errors import TaskError
from ..tasks.task_models import Task
from ..tasks.task_storage import FileStorage
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    storage: FileStorage[Task] = FileStorage(
        settings.tasks_path,
        Task,
        atomic=getattr(settings, "atomic_save", True),
    )
    store: TaskStore[Task] = TaskStore()

    try:
        store.load_tasks(storage.load())
    except TaskError as e:
        logger.warning("Could not load tasks from %s: %s. Starting with an empty list.", storage.path, e)
        store.load_tasks([])

    return AppState(settings=settings, store=store, storage=storage)


def save_tasks(state: AppState) -> None:
    """Rewrite the task file from the store. Raises TaskError; `dirty` stays set on failure."""
    state.storage.save(state.store.list_tasks())
    state.dirty = False
    logger.info("Saved %d tasks", state.store.count_tasks())
