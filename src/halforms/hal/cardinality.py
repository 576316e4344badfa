"""Single-or-many wrappers for relation values.

A HAL relation is either declared as a single object or as an array, and that
choice is kept as parsed: ``One`` for the former, ``Many`` for the latter
(even when the array holds a single element).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class One(Generic[T]):
    """A relation declared as a single object."""

    value: T

    def items(self) -> tuple[T, ...]:
        return (self.value,)


@dataclass(frozen=True)
class Many(Generic[T]):
    """A relation declared as an array."""

    values: tuple[T, ...]

    def items(self) -> tuple[T, ...]:
        return self.values


Cardinal = Union[One[T], Many[T]]
