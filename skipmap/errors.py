"""Exceptions raised by skipmap.

Every error subclasses the built-in exception a plain ``dict``/``sorted``
user would expect (``TypeError`` for bad keys, ``KeyError`` for missing
entries, ``ValueError`` for bad bounds) so existing handlers keep working.
"""
from __future__ import annotations

__all__ = [
    "SkipMapError",
    "UncomparableKeyError",
    "NullKeyError",
    "EmptyMapError",
    "InvalidRangeError",
]


class SkipMapError(Exception):
    """Base class of all skipmap errors."""


class UncomparableKeyError(SkipMapError, TypeError):
    def __init__(self, lhs: object, rhs: object):
        super().__init__(f"cannot compare {lhs!r} with {rhs!r}")
        self.lhs = lhs
        self.rhs = rhs


class NullKeyError(SkipMapError, TypeError):
    def __init__(self) -> None:
        super().__init__("None is not a valid key under natural ordering")


class EmptyMapError(SkipMapError, KeyError):
    def __str__(self) -> str:
        return self.args[0] if self.args else "map is empty"


class InvalidRangeError(SkipMapError, ValueError):
    pass
