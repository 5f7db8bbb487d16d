"""Key ordering helpers.

A comparator is a ``cmp``-style callable returning a negative number, zero or
a positive number, the same contract ``functools.cmp_to_key`` accepts.
"""
from __future__ import annotations

from typing import Any, Callable, Optional

from .errors import NullKeyError, UncomparableKeyError

__all__ = ["Comparator", "natural_compare", "reverse_order", "make_compare"]

Comparator = Callable[[Any, Any], int]


def natural_compare(lhs: Any, rhs: Any) -> int:
    if lhs is None or rhs is None:
        raise NullKeyError()
    try:
        if lhs < rhs:
            return -1
        if rhs < lhs:
            return 1
    except TypeError as exc:
        raise UncomparableKeyError(lhs, rhs) from exc
    return 0


def reverse_order(comparator: Optional[Comparator] = None) -> Comparator:
    """Return a comparator imposing the reverse of *comparator* (or natural order)."""
    base = comparator or natural_compare

    def _reversed(lhs: Any, rhs: Any) -> int:
        return base(rhs, lhs)

    return _reversed


def make_compare(comparator: Optional[Comparator]) -> Comparator:
    """Wrap a user comparator so type errors surface as UncomparableKeyError."""
    if comparator is None:
        return natural_compare

    def _compare(lhs: Any, rhs: Any) -> int:
        try:
            return comparator(lhs, rhs)
        except (NullKeyError, UncomparableKeyError):
            raise
        except TypeError as exc:
            raise UncomparableKeyError(lhs, rhs) from exc

    return _compare
