# src/taskbook/tasks/task_storage.py

from __future__ import annotations

import contextlib
import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Generic

from ..core.ports import R
from .task_errors import IoFailure
from .task_models import Task

logger = logging.getLogger(__name__)


class FileStorage(Generic[R]):
    """
    Flat-file storage: one encoded record per line, whole file rewritten on save.

    - missing file on load => empty collection (first run)
    - first undecodable line aborts the load (no partial results)
    - atomic=True writes a sibling .tmp file and os.replace()s it over the target
    """

    def __init__(
        self,
        path: str | Path,
        record_type: type[Any] = Task,
        *,
        atomic: bool = True,
    ) -> None:
        self._path = Path(path)
        self._record_type = record_type
        self._atomic = atomic

    @property
    def path(self) -> Path:
        return self._path

    def save(self, records: Sequence[R]) -> None:
        # Encode everything first so a bad record never truncates the file.
        content = "\n".join(r.encode() for r in records)

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            if not self._atomic:
                self._path.write_text(content, "utf-8")
            else:
                tmp = self._path.with_name(self._path.name + ".tmp")
                try:
                    tmp.write_text(content, "utf-8")
                    os.replace(tmp, self._path)
                except OSError:
                    with contextlib.suppress(OSError):
                        tmp.unlink(missing_ok=True)
                    raise
        except OSError as e:
            raise IoFailure(e) from e

        logger.debug("Saved %d records to %s", len(records), self._path)

    def load(self) -> list[R]:
        if not self._path.exists():
            logger.info("No task file at %s; starting empty.", self._path)
            return []

        try:
            content = self._path.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise IoFailure(e) from e

        records: list[R] = []
        # Only "\n" ends a record (CRLF files keep working); other Unicode
        # line boundaries are ordinary field text.
        for line in content.split("\n"):
            line = line.removesuffix("\r")
            if not line.strip():
                continue
            records.append(self._record_type.decode(line))

        logger.info("Loaded %d records from %s", len(records), self._path)
        return records
