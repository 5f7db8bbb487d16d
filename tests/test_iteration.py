"""Tests for the bidirectional cursor."""
import pytest

from skipmap import SkipListMap


@pytest.fixture
def abc():
    m = SkipListMap()
    for k in "cab":
        m.put(k, k.upper())
    return m


def test_cursor_forward(abc):
    cur = abc.cursor()
    assert cur.has_next()
    assert not cur.has_prev()
    assert list(cur) == [("a", "A"), ("b", "B"), ("c", "C")]
    assert not cur.has_next()
    with pytest.raises(StopIteration):
        next(cur)


def test_cursor_back_and_forth(abc):
    cur = abc.cursor()
    assert next(cur) == ("a", "A")
    assert next(cur) == ("b", "B")
    assert cur.prev() == ("b", "B")
    assert cur.prev() == ("a", "A")
    assert not cur.has_prev()
    with pytest.raises(StopIteration):
        cur.prev()
    assert next(cur) == ("a", "A")


def test_cursor_backward_from_end(abc):
    cur = abc.cursor()
    for _ in cur:
        pass
    assert [cur.prev() for _ in range(3)] == [("c", "C"), ("b", "B"), ("a", "A")]


def test_empty_cursor():
    cur = SkipListMap().cursor()
    assert not cur.has_next()
    assert not cur.has_prev()
    assert list(cur) == []


def test_view_cursor_is_bounded():
    m = SkipListMap((i, i * i) for i in range(10))
    cur = m.sub_range(3, 6).cursor()
    assert list(cur) == [(3, 9), (4, 16), (5, 25)]
    assert cur.prev() == (5, 25)
    assert cur.prev() == (4, 16)
    assert cur.prev() == (3, 9)
    assert not cur.has_prev()
    assert list(m.sub_range(3, 3).cursor()) == []


def test_cursor_stops_at_unlinked_node(abc):
    cur = abc.cursor()
    next(cur)
    abc.remove("b")
    assert not cur.has_next()
    assert list(cur) == []
