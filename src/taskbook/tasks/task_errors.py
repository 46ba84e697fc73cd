# src/taskbook/tasks/task_errors.py

"""
Failure kinds shared by the task layers.

Every error raised by the model, store or storage derives from TaskError,
so the command boundary can catch the whole family with one clause while
still telling NotFound apart from I/O or parse problems.
"""

from __future__ import annotations


class TaskError(Exception):
    """Base class for all task-manager failures."""


class IoFailure(TaskError):
    """Underlying file-system error (the original OSError is kept on .cause)."""

    def __init__(self, cause: OSError | UnicodeError) -> None:
        self.cause = cause
        super().__init__(f"IO error: {cause}")


class ParseFailure(TaskError):
    def __init__(self, context: str) -> None:
        self.context = context
        super().__init__(f"Parse error: {context}")


class ValidationFailure(TaskError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Validation error: {message}")


class NotFound(TaskError):
    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task #{task_id} not found")


class InvalidPriority(TaskError):
    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Invalid priority: {text}")


class InvalidStatus(TaskError):
    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Invalid status: {text}")


class SerializationFailure(TaskError):
    """A persisted record is malformed, or a record cannot be written as one line."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Serialization error: {message}")
