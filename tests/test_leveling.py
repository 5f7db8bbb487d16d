"""Tests for randomized node heights and skip-list level maintenance."""
import random

from skipmap import SkipListMap
from skipmap.node import MAX_LEVEL, Relation, random_level


def test_height_distribution():
    """Heights are geometric with p=1/4: mean ~4/3, never above the cap."""
    rng = random.Random(2024)
    heights = [random_level(rng) for _ in range(100_000)]
    assert min(heights) == 1
    assert max(heights) <= MAX_LEVEL
    mean = sum(heights) / len(heights)
    assert abs(mean - 4 / 3) < 0.02


def test_height_capped(scripted):
    class AlwaysGrow:
        def random(self):
            return 0.0

    assert random_level(AlwaysGrow()) == MAX_LEVEL
    assert random_level(scripted([32])) == MAX_LEVEL
    assert random_level(scripted([5])) == 5


def test_forced_heights(scripted, check_links):
    m = SkipListMap(rng=scripted([1, 5, 2, 3]))
    for k in (10, 20, 30, 40):
        m.put(k, None)
    assert [m._find(k, Relation.EQ).height for k in (10, 20, 30, 40)] == [1, 5, 2, 3]
    assert m._level == 5
    check_links(m)


def test_update_does_not_relevel(scripted):
    rng = scripted([3])
    m = SkipListMap(rng=rng)
    m.put(1, "a")
    node = m._first_node()
    rng.push(7)
    assert m.put(1, "b") == "a"
    assert m._first_node() is node
    assert node.height == 3
    assert m._level == 3


def test_insert_leaves_higher_levels_alone(scripted):
    m = SkipListMap(rng=scripted([4, 1]))
    m.put(10, None)
    tall = m._first_node()
    m.put(5, None)
    short = m._first_node()
    assert short.height == 1
    assert m._head.next[0] is short
    for i in range(1, 4):
        assert m._head.next[i] is tall


def test_delete_shrinks_height(scripted, check_links):
    m = SkipListMap(rng=scripted([1, 5, 2]))
    for k in (1, 2, 3):
        m.put(k, None)
    assert m._level == 5
    m.remove(2)
    assert m._level == 2
    check_links(m)
    m.remove(3)
    assert m._level == 1
    m.remove(1)
    assert m._level == 0
    check_links(m)


def test_seeded_layout_reproducible():
    a = SkipListMap(rng=random.Random(5))
    b = SkipListMap(rng=random.Random(5))
    for i in range(500):
        a.put(i, None)
        b.put(i, None)
    heights_a = [a._find(i, Relation.EQ).height for i in range(500)]
    heights_b = [b._find(i, Relation.EQ).height for i in range(500)]
    assert heights_a == heights_b
