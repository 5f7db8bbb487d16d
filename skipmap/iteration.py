"""Ordered iteration over level-0 links.

Both :class:`~skipmap.skiplist.SkipListMap` and
:class:`~skipmap.rangeview.RangeView` expose ``_iter_nodes()``; the views
below only rely on that, so the same classes serve maps and windows.

Mutating the map while a cursor or view iterator is open gives an unspecified
traversal order. Iteration stops early, instead of failing, when it reaches a
node that has been unlinked in the meantime.
"""
from __future__ import annotations

from collections import abc
from collections.abc import Iterator
from typing import Generic, Optional, TypeVar

from .node import _Node

__all__ = ["Cursor", "ItemsView", "ValuesView"]

K = TypeVar("K")
V = TypeVar("V")


class Cursor(Generic[K, V]):
    """Bidirectional cursor yielding ``(key, value)`` pairs.

    The cursor sits *between* two entries. :meth:`__next__` returns the entry
    after it and moves forward, :meth:`prev` returns the entry before it and
    moves back. Both raise :class:`StopIteration` at the ends.

    `low` and `high` pin the first and last node the cursor may visit; when
    omitted the walk runs until it meets a sentinel.
    """

    def __init__(
        self,
        start: Optional[_Node[K, V]],
        low: Optional[_Node[K, V]] = None,
        high: Optional[_Node[K, V]] = None,
    ):
        self._low = low
        self._high = high
        self._next = start
        self._prev: Optional[_Node[K, V]] = None

    def __iter__(self) -> "Cursor[K, V]":
        return self

    def has_next(self) -> bool:
        return self._next is not None and self._next.is_data

    def has_prev(self) -> bool:
        return self._prev is not None and self._prev.is_data

    def __next__(self) -> tuple[K, V]:
        if not self.has_next():
            raise StopIteration
        x = self._next
        self._prev = x
        self._next = None if x is self._high else x.next[0]  # type: ignore[union-attr]
        return x.key, x.value  # type: ignore[union-attr,return-value]

    def prev(self) -> tuple[K, V]:
        if not self.has_prev():
            raise StopIteration
        x = self._prev
        self._next = x
        self._prev = None if x is self._low else x.prev[0]  # type: ignore[union-attr]
        return x.key, x.value  # type: ignore[union-attr,return-value]


class ItemsView(abc.ItemsView, Generic[K, V]):
    """``(key, value)`` pairs in key order, read straight off the nodes."""

    def __iter__(self) -> Iterator[tuple[K, V]]:
        for x in self._mapping._iter_nodes():
            yield x.key, x.value


class ValuesView(abc.ValuesView, Generic[V]):
    def __iter__(self) -> Iterator[V]:
        for x in self._mapping._iter_nodes():
            yield x.value
