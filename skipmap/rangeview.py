"""Bounded windows over a :class:`~skipmap.skiplist.SkipListMap`.

A view stores nothing but a reference to its backing map and two bounds,
``lower`` (inclusive) and ``upper`` (exclusive), either of which may be
:data:`UNBOUNDED`. Every query is answered by the backing map's search routine,
so building a view is O(1) and it always reflects the current contents.

Narrowing a view (``view.sub_range``, ``view.head_range``,
``view.tail_range``) yields another view over the same backing map; the new
bounds must lie inside the parent's window, otherwise
:class:`~skipmap.errors.InvalidRangeError` is raised.
"""
from __future__ import annotations

from collections.abc import Iterator, MutableMapping
from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar

from .errors import EmptyMapError, InvalidRangeError
from .iteration import Cursor, ItemsView, ValuesView
from .node import Relation, _key_or_none, _Node, _Sentinel
from .ordering import Comparator

if TYPE_CHECKING:
    from .skiplist import SkipListMap

__all__ = ["RangeView", "UNBOUNDED"]

K = TypeVar("K")
V = TypeVar("V")

UNBOUNDED: Any = _Sentinel("unbounded")


class RangeView(MutableMapping, Generic[K, V]):
    """Live window ``[lower, upper)`` over a skip-list map."""

    def __init__(self, backing: SkipListMap[K, V], lower: K = UNBOUNDED, upper: K = UNBOUNDED):
        self._map = backing
        self._lower = lower
        self._upper = upper
        for bound in (lower, upper):
            if bound is not UNBOUNDED:
                self._check_comparable(bound)
        if not self._open_start and not self._open_end:
            if backing._compare(lower, upper) > 0:
                raise InvalidRangeError(f"lower bound {lower!r} > upper bound {upper!r}")

    @property
    def _open_start(self) -> bool:
        return self._lower is UNBOUNDED

    @property
    def _open_end(self) -> bool:
        return self._upper is UNBOUNDED

    @property
    def comparator(self) -> Optional[Comparator]:
        return self._map.comparator

    @property
    def lower(self) -> K:
        """Inclusive lower bound, :data:`UNBOUNDED` when the window is open at the start."""
        return self._lower

    @property
    def upper(self) -> K:
        """Exclusive upper bound, :data:`UNBOUNDED` when the window is open at the end."""
        return self._upper

    # ------------------------------------------------------------------
    # Narrowing
    # ------------------------------------------------------------------
    def sub_range(self, lower: K, upper: K) -> RangeView[K, V]:
        self._check_bound(lower)
        self._check_bound(upper)
        return RangeView(self._map, lower, upper)

    def head_range(self, upper: K) -> RangeView[K, V]:
        self._check_bound(upper)
        return RangeView(self._map, self._lower, upper)

    def tail_range(self, lower: K) -> RangeView[K, V]:
        self._check_bound(lower)
        return RangeView(self._map, lower, self._upper)

    # ------------------------------------------------------------------
    # Query API
    # ------------------------------------------------------------------
    def __contains__(self, key: object) -> bool:
        return self._in_range(key) and key in self._map  # type: ignore[arg-type]

    def contains_key(self, key: K) -> bool:
        return key in self

    def __getitem__(self, key: K) -> V:
        if not self._in_range(key):
            raise KeyError(key)
        return self._map[key]

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        if not self._in_range(key):
            return default
        return self._map.get(key, default)

    def __len__(self) -> int:
        if self._open_start and self._open_end:
            return len(self._map)
        return sum(1 for _ in self._iter_nodes())

    def size(self) -> int:
        return len(self)

    def is_empty(self) -> bool:
        """True when no entry of the backing map falls inside the window."""
        return self._bounds()[0] is None

    def __bool__(self) -> bool:
        return not self.is_empty()

    def first_key(self) -> K:
        return self.first_item()[0]

    def last_key(self) -> K:
        return self.last_item()[0]

    def first_item(self) -> tuple[K, V]:
        low, _ = self._bounds()
        if low is None:
            raise EmptyMapError("first_key() on an empty range")
        return low.key, low.value  # type: ignore[return-value]

    def last_item(self) -> tuple[K, V]:
        _, high = self._bounds()
        if high is None:
            raise EmptyMapError("last_key() on an empty range")
        return high.key, high.value  # type: ignore[return-value]

    def floor_key(self, key: K) -> Optional[K]:
        return _key_or_none(self._find(key, Relation.LE))

    def ceiling_key(self, key: K) -> Optional[K]:
        return _key_or_none(self._find(key, Relation.GE))

    def lower_key(self, key: K) -> Optional[K]:
        return _key_or_none(self._find(key, Relation.LT))

    def higher_key(self, key: K) -> Optional[K]:
        return _key_or_none(self._find(key, Relation.GT))

    # ------------------------------------------------------------------
    # Mutation API (forwarded to the backing map)
    # ------------------------------------------------------------------
    def put(self, key: K, value: V) -> Optional[V]:
        if not self._in_range(key):
            raise InvalidRangeError(f"key {key!r} out of range {self._describe()}")
        return self._map.put(key, value)

    def __setitem__(self, key: K, value: V) -> None:
        self.put(key, value)

    def remove(self, key: K) -> Optional[V]:
        if not self._in_range(key):
            return None
        return self._map.remove(key)

    def __delitem__(self, key: K) -> None:
        if not self._in_range(key):
            raise KeyError(key)
        del self._map[key]

    def clear(self) -> None:
        for key in list(self):
            self._map.remove(key)

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[K]:
        for x in self._iter_nodes():
            yield x.key

    def __reversed__(self) -> Iterator[K]:
        low, high = self._bounds()
        x = high
        while x is not None and x.is_data:
            prv = x.prev[0]
            yield x.key  # type: ignore[misc]
            if x is low:
                return
            x = prv

    def items(self) -> ItemsView[K, V]:  # type: ignore[override]
        return ItemsView(self)

    def values(self) -> ValuesView[V]:  # type: ignore[override]
        return ValuesView(self)

    def cursor(self) -> Cursor[K, V]:
        low, high = self._bounds()
        return Cursor(low, low, high)

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"{type(self).__name__}{self._describe()}({{{body}}})"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _describe(self) -> str:
        lo = "-inf" if self._open_start else repr(self._lower)
        hi = "+inf" if self._open_end else repr(self._upper)
        return f"[{lo}, {hi})"

    def _check_comparable(self, bound: K) -> None:
        # Surface a bad bound now rather than on the first read of the view.
        self._map._compare(bound, bound)
        first = self._map._first_node()
        if first is not None:
            self._map._compare(first.key, bound)

    def _above_lower(self, key: Any) -> bool:
        return self._open_start or self._map._compare(key, self._lower) >= 0

    def _below_upper(self, key: Any) -> bool:
        return self._open_end or self._map._compare(key, self._upper) < 0

    def _in_range(self, key: Any) -> bool:
        return self._above_lower(key) and self._below_upper(key)

    def _check_bound(self, key: K) -> None:
        # Narrowing bounds are checked against the closed window [lower, upper].
        inside = self._above_lower(key) and (
            self._open_end or self._map._compare(key, self._upper) <= 0
        )
        if not inside:
            raise InvalidRangeError(f"{key!r} lies outside {self._describe()}")

    def _lowest(self) -> Optional[_Node[K, V]]:
        if self._open_start:
            return self._map._first_node()
        return self._map._find(self._lower, Relation.GE)

    def _highest(self) -> Optional[_Node[K, V]]:
        if self._open_end:
            return self._map._last_node()
        return self._map._find(self._upper, Relation.LT)

    def _bounds(self) -> tuple[Optional[_Node[K, V]], Optional[_Node[K, V]]]:
        """First and last node of the window, ``(None, None)`` when empty."""
        low = self._lowest()
        high = self._highest()
        if low is None or high is None or self._map._compare(low.key, high.key) > 0:
            return None, None
        return low, high

    def _iter_nodes(self) -> Iterator[_Node[K, V]]:
        low, high = self._bounds()
        x = low
        while x is not None and x.is_data:
            nxt = x.next[0]
            yield x
            if x is high:
                return
            x = nxt

    def _find(self, key: K, relation: Relation) -> Optional[_Node[K, V]]:
        """Backing-map search clamped to the window."""
        if relation & Relation.LT:
            x = self._map._find(key, relation) if self._below_upper(key) else self._highest()
            return x if x is not None and self._above_lower(x.key) else None
        x = self._map._find(key, relation) if self._above_lower(key) else self._lowest()
        return x if x is not None and self._below_upper(x.key) else None
