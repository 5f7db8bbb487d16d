"""Ordered map backed by a doubly-linked skip list.

The structure is bounded by two sentinel nodes, *head* and *tail*, linked to
each other at all 32 levels when the map is empty. Every node keeps both a
forward and a backward link per level, so deletion never has to search for
predecessors and the map can be walked in either direction.

Complexities (average case):
    • search   – O(log n)
    • insert   – O(log n)
    • delete   – O(log n)
    • iterate  – O(n)

All lookups, predecessor/successor queries and the insertion trace go through
a single search routine, :meth:`SkipListMap._find`.

The map is *not* thread-safe; callers sharing one across threads must provide
their own locking.
"""
from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Generic, Optional, TypeVar

from .errors import EmptyMapError, NullKeyError
from .iteration import Cursor, ItemsView, ValuesView
from .node import HEAD, MAX_LEVEL, TAIL, RandomSource, Relation, _key_or_none, _Node, random_level
from .ordering import Comparator, make_compare
from .rangeview import UNBOUNDED, RangeView

__all__ = ["SkipListMap"]

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


class SkipListMap(MutableMapping, Generic[K, V]):
    """Mutable mapping keeping its keys sorted.

    Parameters
    ----------
    items:
        Optional mapping or iterable of ``(key, value)`` pairs to load.
    comparator:
        ``cmp(a, b) -> int`` defining the key order. ``None`` means the keys'
        natural ordering (``<``), in which case ``None`` keys are rejected.
    rng:
        Random source used to pick node heights; anything with a ``random()``
        method. Pass a seeded :class:`random.Random` for reproducible layouts.
    """

    def __init__(
        self,
        items: Mapping[K, V] | Iterable[tuple[K, V]] | None = None,
        *,
        comparator: Optional[Comparator] = None,
        rng: Optional[RandomSource] = None,
    ):
        self._comparator = comparator
        self._compare = make_compare(comparator)
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self._head: _Node[K, V] = _Node(HEAD, None, MAX_LEVEL)
        self._tail: _Node[K, V] = _Node(TAIL, None, MAX_LEVEL)
        self._level = 0
        self._size = 0
        self._link_sentinels()
        if items:
            self.update(items)

    @property
    def comparator(self) -> Optional[Comparator]:
        """The ordering function, or ``None`` for natural ordering."""
        return self._comparator

    # ---------------------------------------------------------------------
    # Mutation API
    # ---------------------------------------------------------------------
    def put(self, key: K, value: V) -> Optional[V]:
        """Insert or update `key`; return the previous value or ``None``."""
        update: list[_Node[K, V]] = [self._head] * MAX_LEVEL
        x = self._find(key, Relation.EQ, update)
        if x is not None:  # Update
            old, x.value = x.value, value
            return old
        lvl = random_level(self._rng)
        if lvl > self._level:
            for i in range(self._level, lvl):
                update[i] = self._head
            logger.debug("skip list height %d -> %d", self._level, lvl)
            self._level = lvl
        new_node: _Node[K, V] = _Node(key, value, lvl)
        for i in range(lvl):
            pred = update[i]
            succ = pred.next[i]
            new_node.next[i] = succ
            new_node.prev[i] = pred
            succ.prev[i] = new_node  # type: ignore[union-attr]
            pred.next[i] = new_node
        self._size += 1
        return None

    def remove(self, key: K) -> Optional[V]:
        """Delete `key` if present; return its value or ``None``."""
        x = self._find(key, Relation.EQ)
        if x is None:
            return None
        self._delete_node(x)
        return x.value

    def clear(self) -> None:
        x = self._head.next[0]
        while x is not self._tail:
            nxt = x.next[0]  # type: ignore[union-attr]
            x.unlink()  # type: ignore[union-attr]
            x = nxt
        self._link_sentinels()
        logger.debug("cleared %d entries", self._size)
        self._level = 0
        self._size = 0

    def __setitem__(self, key: K, value: V) -> None:
        self.put(key, value)

    def __delitem__(self, key: K) -> None:
        x = self._find(key, Relation.EQ)
        if x is None:
            raise KeyError(key)
        self._delete_node(x)

    # ---------------------------------------------------------------------
    # Query API
    # ---------------------------------------------------------------------
    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        x = self._find(key, Relation.EQ)
        return default if x is None else x.value

    def __getitem__(self, key: K) -> V:
        x = self._find(key, Relation.EQ)
        if x is None:
            raise KeyError(key)
        return x.value  # type: ignore[return-value]

    def __contains__(self, key: object) -> bool:
        return self._find(key, Relation.EQ) is not None  # type: ignore[arg-type]

    def contains_key(self, key: K) -> bool:
        return key in self

    def __len__(self) -> int:
        return self._size

    def size(self) -> int:
        return self._size

    def first_key(self) -> K:
        return self.first_item()[0]

    def last_key(self) -> K:
        return self.last_item()[0]

    def first_item(self) -> tuple[K, V]:
        x = self._first_node()
        if x is None:
            raise EmptyMapError("first_key() on an empty map")
        return x.key, x.value  # type: ignore[return-value]

    def last_item(self) -> tuple[K, V]:
        x = self._last_node()
        if x is None:
            raise EmptyMapError("last_key() on an empty map")
        return x.key, x.value  # type: ignore[return-value]

    def floor_key(self, key: K) -> Optional[K]:
        """Greatest key less than or equal to `key`."""
        return _key_or_none(self._find(key, Relation.LE))

    def ceiling_key(self, key: K) -> Optional[K]:
        """Smallest key greater than or equal to `key`."""
        return _key_or_none(self._find(key, Relation.GE))

    def lower_key(self, key: K) -> Optional[K]:
        """Greatest key strictly less than `key`."""
        return _key_or_none(self._find(key, Relation.LT))

    def higher_key(self, key: K) -> Optional[K]:
        """Smallest key strictly greater than `key`."""
        return _key_or_none(self._find(key, Relation.GT))

    # ------------------------------------------------------------------
    # Range views
    # ------------------------------------------------------------------
    def sub_range(self, lower: K, upper: K) -> RangeView[K, V]:
        """View of the keys in ``[lower, upper)``."""
        return RangeView(self, lower, upper)

    def head_range(self, upper: K) -> RangeView[K, V]:
        """View of the keys strictly less than `upper`."""
        return RangeView(self, UNBOUNDED, upper)

    def tail_range(self, lower: K) -> RangeView[K, V]:
        """View of the keys greater than or equal to `lower`."""
        return RangeView(self, lower, UNBOUNDED)

    # ------------------------------------------------------------------
    # Iteration helpers (ordered)
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[K]:
        for x in self._iter_nodes():
            yield x.key

    def __reversed__(self) -> Iterator[K]:
        x = self._tail.prev[0]
        while x is not self._head and x.next:  # type: ignore[union-attr]
            prv = x.prev[0]  # type: ignore[union-attr]
            yield x.key  # type: ignore[union-attr,misc]
            x = prv

    def items(self) -> ItemsView[K, V]:  # type: ignore[override]
        return ItemsView(self)

    def values(self) -> ValuesView[V]:  # type: ignore[override]
        return ValuesView(self)

    def cursor(self) -> Cursor[K, V]:
        """Bidirectional cursor positioned before the first entry."""
        return Cursor(self._head.next[0])

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"{type(self).__name__}({{{body}}})"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _link_sentinels(self) -> None:
        for i in range(MAX_LEVEL):
            self._head.next[i] = self._tail
            self._tail.prev[i] = self._head

    def _iter_nodes(self) -> Iterator[_Node[K, V]]:
        x = self._head.next[0]
        # A node unlinked while suspended has empty link lists; stop there.
        while x is not self._tail and x.next:  # type: ignore[union-attr]
            nxt = x.next[0]  # type: ignore[union-attr]
            yield x  # type: ignore[misc]
            x = nxt

    def _first_node(self) -> Optional[_Node[K, V]]:
        return self._data_or_none(self._head.next[0])

    def _last_node(self) -> Optional[_Node[K, V]]:
        return self._data_or_none(self._tail.prev[0])

    def _data_or_none(self, x: Optional[_Node[K, V]]) -> Optional[_Node[K, V]]:
        if x is None or x is self._head or x is self._tail:
            return None
        return x

    def _find(
        self,
        key: K,
        relation: Relation,
        update: Optional[list[_Node[K, V]]] = None,
    ) -> Optional[_Node[K, V]]:
        """Locate the node standing in `relation` to `key`.

        Walks down from the top level, recording the last node before `key`
        on each level into `update` when one is given.
        """
        if key is None and self._comparator is None:
            raise NullKeyError()
        compare = self._compare
        tail = self._tail
        x = self._head
        for i in reversed(range(self._level)):
            while (nxt := x.next[i]) is not tail and compare(nxt.key, key) < 0:  # type: ignore[union-attr]
                x = nxt  # type: ignore[assignment]
            if update is not None:
                update[i] = x
        nxt = x.next[0]
        if relation == Relation.GT:
            # Strictly greater: step over an exact match.
            if nxt is not tail and compare(nxt.key, key) == 0:  # type: ignore[union-attr]
                nxt = nxt.next[0]  # type: ignore[union-attr]
            return self._data_or_none(nxt)
        if relation == Relation.GE:
            return self._data_or_none(nxt)
        if relation == Relation.LT:
            return self._data_or_none(x)
        exact = nxt if nxt is not tail and compare(nxt.key, key) == 0 else None  # type: ignore[union-attr]
        if relation == Relation.EQ:
            return exact
        # LE
        return exact if exact is not None else self._data_or_none(x)

    def _delete_node(self, x: _Node[K, V]) -> None:
        for i in range(x.height):
            pred, succ = x.prev[i], x.next[i]
            pred.next[i] = succ  # type: ignore[union-attr]
            succ.prev[i] = pred  # type: ignore[union-attr]
        x.unlink()
        level = self._level
        while self._level > 0 and self._head.next[self._level - 1] is self._tail:
            self._level -= 1
        if self._level != level:
            logger.debug("skip list height %d -> %d", level, self._level)
        self._size -= 1
