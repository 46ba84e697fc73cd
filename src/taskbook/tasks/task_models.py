# src/taskbook/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum

from .task_errors import (
    InvalidPriority,
    InvalidStatus,
    ParseFailure,
    SerializationFailure,
    ValidationFailure,
)

FIELD_SEP = "|"
NONE_TOKEN = "None"
FIELD_COUNT = 7
MAX_TASK_ID = 0xFFFFFFFF

_ID_RE = re.compile(r"[0-9]+")
_FORBIDDEN_IN_FIELD = (FIELD_SEP, "\n", "\r")


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


class Priority(StrEnum):
    """
    Task priority.

    Declaration order is severity order (LOW -> CRITICAL); it is only used
    for display, nothing compares priorities.
    """

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @classmethod
    def parse(cls, raw: str) -> Priority:
        try:
            return cls(raw.upper())
        except ValueError:
            raise InvalidPriority(raw) from None


_STATUS_ALIASES = {
    "pending": "PENDING",
    "in_progress": "IN_PROGRESS",
    "inprogress": "IN_PROGRESS",
    "completed": "COMPLETED",
    "complete": "COMPLETED",
}


class Status(StrEnum):
    """
    Task lifecycle status.

    Notes:
    - any status may follow any other; there is no transition table.
    """

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"

    @classmethod
    def parse(cls, raw: str) -> Status:
        value = _STATUS_ALIASES.get(raw.lower())
        if value is None:
            raise InvalidStatus(raw)
        return cls(value)


def _check_title(title: str) -> None:
    if not title or not title.strip():
        raise ValidationFailure("Title cannot be empty")


@dataclass(slots=True)
class Task:
    id: int
    title: str
    priority: Priority
    status: Status = Status.PENDING
    description: str | None = None
    category: str | None = None
    created_at: str = ""

    def __post_init__(self) -> None:
        _check_title(self.title)

    def __setattr__(self, name: str, value: object) -> None:
        # id belongs to the store: set once by __init__, re-keyed only via with_id().
        if name == "id" and hasattr(self, "id"):
            raise AttributeError("Task.id cannot be reassigned; use with_id()")
        object.__setattr__(self, name, value)

    @classmethod
    def new(
        cls,
        task_id: int,
        title: str,
        priority: Priority,
        *,
        created_at: str | None = None,
    ) -> Task:
        """
        Build a fresh Pending task.

        created_at defaults to the local wall-clock time; pass it explicitly
        for deterministic construction.
        """
        return cls(
            id=task_id,
            title=title,
            priority=priority,
            created_at=created_at if created_at is not None else _ts_local(),
        )

    # ---- builders (return a modified copy) ----

    def with_description(self, text: str) -> Task:
        return replace(self, description=text)

    def with_category(self, text: str) -> Task:
        return replace(self, category=text)

    def with_id(self, task_id: int) -> Task:
        return replace(self, id=task_id)

    # ---- in-place updates ----

    def set_status(self, status: Status) -> None:
        self.status = status

    def set_priority(self, priority: Priority) -> None:
        self.priority = priority

    def set_title(self, title: str) -> None:
        _check_title(title)
        self.title = title

    def is_completed(self) -> bool:
        return self.status is Status.COMPLETED

    def render(self) -> str:
        suffix = f" ({self.category})" if self.category is not None else ""
        return f"[{self.id}] [{self.status}] [{self.priority}] {self.title}{suffix}"

    # ---- line codec ----

    def encode(self) -> str:
        """
        Serialize as `id|title|description|priority|status|category|created_at`.

        Fields are not escaped, so a value containing the separator or a line
        break is refused instead of producing a row that cannot be read back.
        """
        if not 0 <= self.id <= MAX_TASK_ID:
            raise SerializationFailure(f"Task id {self.id} is outside 0..{MAX_TASK_ID}")

        fields = [
            str(self.id),
            self.title,
            NONE_TOKEN if self.description is None else self.description,
            self.priority.value,
            self.status.value,
            NONE_TOKEN if self.category is None else self.category,
            self.created_at,
        ]
        for value in fields:
            if any(ch in value for ch in _FORBIDDEN_IN_FIELD):
                raise SerializationFailure(
                    f"Task #{self.id}: field {value!r} contains '|' or a line break"
                )
        return FIELD_SEP.join(fields)

    @classmethod
    def decode(cls, line: str) -> Task:
        parts = line.split(FIELD_SEP)
        if len(parts) != FIELD_COUNT:
            raise SerializationFailure(f"Expected {FIELD_COUNT} fields, got {len(parts)}")

        raw_id, title, desc, raw_priority, raw_status, cat, created_at = parts

        if not _ID_RE.fullmatch(raw_id) or int(raw_id) > MAX_TASK_ID:
            raise ParseFailure("Invalid ID")

        return cls(
            id=int(raw_id),
            title=title,
            description=None if desc == NONE_TOKEN else desc,
            priority=Priority.parse(raw_priority),
            status=Status.parse(raw_status),
            category=None if cat == NONE_TOKEN else cat,
            created_at=created_at,
        )
