# src/taskbook/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Generic

from ..core.ports import R
from .task_errors import NotFound, SerializationFailure, ValidationFailure
from .task_models import MAX_TASK_ID

logger = logging.getLogger(__name__)


class TaskStore(Generic[R]):
    """
    In-memory ordered task store.

    Identifiers:
    - assigned by the store from its own counter (add_task re-stamps records),
    - never derived from the current size,
    - never reused: the counter only moves forward, load_tasks sets it to max(id) + 1.

    Thread-safety:
    - none; the store has a single owner.
    """

    def __init__(self) -> None:
        self._records: list[R] = []
        self._next_id = 1

    @property
    def next_id(self) -> int:
        return self._next_id

    # ---- public API ----

    def count_tasks(self) -> int:
        return len(self._records)

    def add_task(self, record: R) -> int:
        task_id = self._next_id
        if task_id > MAX_TASK_ID:
            raise ValidationFailure("Task id space exhausted")
        self._records.append(record.with_id(task_id))
        self._next_id += 1
        logger.debug("Task added id=%s total=%s", task_id, len(self._records))
        return task_id

    def get_task(self, task_id: int) -> R | None:
        """
        Return the stored record (not a copy) or None.

        Mutating the returned object mutates the store.
        """
        for record in self._records:
            if record.id == task_id:
                return record
        return None

    def require_task(self, task_id: int) -> R:
        record = self.get_task(task_id)
        if record is None:
            raise NotFound(task_id)
        return record

    def remove_task(self, task_id: int) -> R:
        for pos, record in enumerate(self._records):
            if record.id == task_id:
                del self._records[pos]
                logger.debug("Task removed id=%s total=%s", task_id, len(self._records))
                return record
        raise NotFound(task_id)

    def list_tasks(self) -> list[R]:
        return list(self._records)

    def load_tasks(self, records: Iterable[R]) -> None:
        """Replace the whole collection (startup only; never merges)."""
        incoming = list(records)
        seen: set[int] = set()
        for r in incoming:
            if r.id in seen:
                raise SerializationFailure(f"Duplicate task id {r.id}")
            seen.add(r.id)

        self._records = incoming
        self._next_id = max((r.id for r in self._records), default=0) + 1
        logger.info("TaskStore loaded total=%s next_id=%s", len(self._records), self._next_id)
