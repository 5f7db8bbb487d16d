"""Tests for msgpack serialisation of skip-list maps."""
import io

import pytest

from skipmap import SkipListMap, reverse_order
from skipmap.codec import dump, load, pack, unpack


@pytest.fixture
def sample():
    m = SkipListMap()
    m.put("key3", b"\x00\x01")
    m.put("key1", {"nested": [1, 2]})
    m.put("key2", None)
    return m


def test_pack_unpack(sample):
    restored = unpack(pack(sample))
    assert list(restored.items()) == list(sample.items())
    assert restored.comparator is None


def test_unpack_with_comparator():
    m = SkipListMap(((i, str(i)) for i in range(10)), comparator=reverse_order())
    restored = unpack(pack(m), comparator=reverse_order())
    assert list(restored) == list(range(9, -1, -1))


def test_dump_load_stream(sample):
    buf = io.BytesIO()
    assert dump(sample, buf) == 3
    buf.seek(0)
    restored = load(buf)
    assert restored == sample
    assert list(restored) == ["key1", "key2", "key3"]


def test_dump_load_file(tmp_path):
    m = SkipListMap((i, i * 2) for i in range(1000))
    path = tmp_path / "map.bin"
    with open(path, "wb") as fp:
        dump(m, fp)
    with open(path, "rb") as fp:
        restored = load(fp)
    assert len(restored) == 1000
    assert restored.sub_range(10, 13) == {10: 20, 11: 22, 12: 24}


def test_empty_stream():
    assert len(load(io.BytesIO(b""))) == 0


def test_truncated_stream(sample):
    buf = io.BytesIO()
    dump(sample, buf)
    data = buf.getvalue()
    with pytest.raises(ValueError):
        load(io.BytesIO(data[:-1]))
    with pytest.raises(ValueError):
        load(io.BytesIO(data[:2]))
