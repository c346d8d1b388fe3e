"""Insertion-ordered unique container."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, MutableSet
from typing import Generic, TypeVar

T = TypeVar("T")


class OrderedSet(MutableSet[T], Generic[T]):
    """Set that iterates in order of first insertion.

    Re-adding an existing item keeps its original position.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: dict[T, None] = dict.fromkeys(items)

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add(self, value: T) -> None:
        self._items.setdefault(value, None)

    def discard(self, value: T) -> None:
        self._items.pop(value, None)

    def update(self, values: Iterable[T]) -> None:
        for value in values:
            self.add(value)

    def to_tuple(self) -> tuple[T, ...]:
        return tuple(self._items)

    def __repr__(self) -> str:
        return f"OrderedSet({list(self._items)!r})"
