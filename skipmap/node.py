"""Skip-list building blocks: nodes, search relations and random leveling.

Node heights follow the Redis ZSET scheme: start at 1 and keep growing with
probability 1/4, capped at 32 levels. That gives an expected height of ~1.33
and comfortably supports billions of entries.
"""
from __future__ import annotations

import enum
from typing import Any, Generic, Optional, Protocol, TypeVar

K = TypeVar("K")
V = TypeVar("V")

__all__ = ["MAX_LEVEL", "P", "Relation", "RandomSource", "random_level"]

MAX_LEVEL = 32
P = 0.25


class RandomSource(Protocol):
    def random(self) -> float: ...


class Relation(enum.IntFlag):
    """Which neighbour of a target key the search primitive returns."""

    EQ = 1
    GT = 2
    GE = EQ | GT
    LT = 4
    LE = EQ | LT


def random_level(rng: RandomSource) -> int:
    lvl = 1
    while rng.random() < P and lvl < MAX_LEVEL:
        lvl += 1
    return lvl


class _Sentinel:
    """Marker used as the key of the head/tail nodes."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:  # pragma: no cover
        return f"<{self.name}>"


HEAD = _Sentinel("head")
TAIL = _Sentinel("tail")


class _Node(Generic[K, V]):
    __slots__ = ("key", "value", "next", "prev")

    def __init__(self, key: K | _Sentinel, value: Optional[V], level: int):
        self.key = key
        self.value = value
        self.next: list[Optional[_Node[K, V]]] = [None] * level
        self.prev: list[Optional[_Node[K, V]]] = [None] * level

    @property
    def height(self) -> int:
        return len(self.next)

    @property
    def is_data(self) -> bool:
        """True for a node holding a user entry that is still linked."""
        return bool(self.next) and not isinstance(self.key, _Sentinel)

    def unlink(self) -> None:
        """Drop every link so the node can't be mistaken for a live one."""
        self.next.clear()
        self.prev.clear()

    def __repr__(self) -> str:  # pragma: no cover
        return f"Node<{self.key!r}:{self.value!r}>"


def _key_or_none(x: Optional[_Node[Any, Any]]) -> Any:
    return None if x is None else x.key
