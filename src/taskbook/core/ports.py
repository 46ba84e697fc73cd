# src/taskbook/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task layers.

The store and the storage depend on Protocols instead of on Task directly.
This keeps the container reusable for other record types and lets tests
swap the file storage for an in-memory fake.
"""

from collections.abc import Sequence
from typing import Protocol, TypeVar

R = TypeVar("R", bound="IdentifiedRecord")


class IdentifiedRecord(Protocol):
    """
    A record the store can key, re-key and serialize.

    - id: store-assigned identifier
    - with_id: copy of the record carrying a new identifier
    - encode/decode: one-line text codec used by the file storage
    """

    @property
    def id(self) -> int: ...

    def with_id(self: R, task_id: int) -> R: ...

    def encode(self) -> str: ...

    @classmethod
    def decode(cls: type[R], line: str) -> R: ...


class Storage(Protocol[R]):
    """Whole-collection persistence: save everything, load everything."""

    def save(self, records: Sequence[R]) -> None: ...
    def load(self) -> list[R]: ...
