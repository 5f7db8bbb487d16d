"""skipmap: an ordered, in-memory map backed by a skip list.

The package exposes :class:`skipmap.SkipListMap`, a ``MutableMapping`` whose
keys iterate in sorted order, together with live range views
(``sub_range``/``head_range``/``tail_range``) and predecessor/successor
queries. msgpack serialisation lives in :mod:`skipmap.codec`.
"""

from __future__ import annotations

__all__ = [
    "SkipListMap",
    "RangeView",
    "UNBOUNDED",
    "Cursor",
    "reverse_order",
    "SkipMapError",
    "UncomparableKeyError",
    "NullKeyError",
    "EmptyMapError",
    "InvalidRangeError",
]

from .errors import (
    EmptyMapError,
    InvalidRangeError,
    NullKeyError,
    SkipMapError,
    UncomparableKeyError,
)
from .iteration import Cursor
from .ordering import reverse_order
from .rangeview import UNBOUNDED, RangeView
from .skiplist import SkipListMap
