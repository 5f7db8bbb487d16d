"""Shared fixtures for the skipmap test-suite."""
import pytest

from skipmap import SkipListMap
from skipmap.node import MAX_LEVEL


class ScriptedRandom:
    """Random source that makes the next inserted nodes take chosen heights."""

    def __init__(self, heights=()):
        self._values: list[float] = []
        for h in heights:
            self.push(h)

    def push(self, height: int) -> None:
        self._values.extend([0.0] * (height - 1) + [0.99])

    def random(self) -> float:
        return self._values.pop(0) if self._values else 0.99


def _check_links(m: SkipListMap) -> None:
    head, tail = m._head, m._tail
    level0 = []
    x = head.next[0]
    while x is not tail:
        assert x.next[0].prev[0] is x
        level0.append(x)
        x = x.next[0]
    assert len(level0) == len(m)
    keys = [n.key for n in level0]
    for a, b in zip(keys, keys[1:]):
        assert m._compare(a, b) < 0
    for i in range(m._level):
        expected = [n for n in level0 if n.height > i]
        got = []
        x = head.next[i]
        while x is not tail:
            assert x.next[i].prev[i] is x
            got.append(x)
            x = x.next[i]
        assert got == expected
    for i in range(m._level, MAX_LEVEL):
        assert head.next[i] is tail
        assert tail.prev[i] is head


@pytest.fixture
def scripted():
    """Factory for a ScriptedRandom forcing the given node heights."""
    return ScriptedRandom


@pytest.fixture
def check_links():
    """Assert every level of a map is a well-formed sorted doubly-linked list."""
    return _check_links


@pytest.fixture
def hundred():
    """Map holding keys 0..99 mapped to their string form."""
    m = SkipListMap()
    for i in range(100):
        m.put(i, str(i))
    return m
