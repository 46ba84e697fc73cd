# tests/fakes.py

from __future__ import annotations

from collections.abc import Sequence

from taskbook.tasks.task_errors import IoFailure
from taskbook.tasks.task_models import Task


class FakeStorage:
    """
    In-memory Storage used by command/console tests.

    - Captures every save for assertions
    - fail_saves=True makes save() raise IoFailure like a read-only disk
    """

    def __init__(self, initial: list[Task] | None = None, *, fail_saves: bool = False) -> None:
        self.saved: list[list[str]] = []
        self._lines = [t.encode() for t in initial or []]
        self.fail_saves = fail_saves

    def save(self, records: Sequence[Task]) -> None:
        if self.fail_saves:
            raise IoFailure(PermissionError(13, "Permission denied"))
        self._lines = [r.encode() for r in records]
        self.saved.append(list(self._lines))

    def load(self) -> list[Task]:
        return [Task.decode(line) for line in self._lines]
