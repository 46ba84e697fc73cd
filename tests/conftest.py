# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskbook.core.state import AppState
from taskbook.tasks.task_models import Task
from taskbook.tasks.task_storage import FileStorage
from taskbook.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="taskbook-test",
        log_level="DEBUG",
        log_to_file=False,
        data_dir=tmp_path / "data",
        tasks_path=tmp_path / "data" / "tasks.txt",
        atomic_save=True,
    )


@pytest.fixture()
def store() -> TaskStore[Task]:
    return TaskStore()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore[Task]) -> AppState:
    """
    AppState wired with the real file storage under tmp_path.

    NOTE: FileStorage is kept real here because what lands on disk after a
    command is part of what we want to test.
    """
    return AppState(
        settings=settings,
        store=store,
        storage=FileStorage(settings.tasks_path, Task),
    )
