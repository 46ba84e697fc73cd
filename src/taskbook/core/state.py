# src/taskbook/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.ports import Storage
from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Settings are kept on the state so commands can read them without globals.
    settings: Any

    store: TaskStore[Task]
    storage: Storage[Task]

    # True while in-memory tasks differ from what was last written to disk.
    dirty: bool = False
