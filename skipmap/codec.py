"""msgpack serialisation for :class:`~skipmap.skiplist.SkipListMap`.

Lives outside the core: the map itself never imports this module.

Two encodings are offered:

• ``pack``/``unpack`` – one msgpack array of ``[key, value]`` pairs, in key
  order.
• ``dump``/``load`` – a stream of records ``<u32 length><msgpack [key, value]>``
  so large maps can be written and read back entry by entry.

Comparators are plain callables and are not serialised; pass the same one to
``unpack``/``load`` that the original map used. msgpack turns tuples into
lists, so tuple keys come back as lists.
"""
from __future__ import annotations

import logging
from typing import Any, BinaryIO, Optional

import msgpack

from .node import RandomSource
from .ordering import Comparator
from .skiplist import SkipListMap

__all__ = ["pack", "unpack", "dump", "load"]

logger = logging.getLogger(__name__)

_LEN_BYTES = 4


def pack(m: SkipListMap[Any, Any]) -> bytes:
    return msgpack.packb([[k, v] for k, v in m.items()], use_bin_type=True)


def unpack(
    blob: bytes,
    *,
    comparator: Optional[Comparator] = None,
    rng: Optional[RandomSource] = None,
) -> SkipListMap[Any, Any]:
    pairs = msgpack.unpackb(blob, raw=False)
    out: SkipListMap[Any, Any] = SkipListMap(comparator=comparator, rng=rng)
    for k, v in pairs:
        out.put(k, v)
    return out


def dump(m: SkipListMap[Any, Any], fp: BinaryIO) -> int:
    """Write every entry of `m` to `fp`; return the number of records."""
    count = 0
    for k, v in m.items():
        rec = msgpack.packb((k, v), use_bin_type=True)
        # Prepend length for streaming reads.
        fp.write(len(rec).to_bytes(_LEN_BYTES, "big") + rec)
        count += 1
    logger.debug("dumped %d records", count)
    return count


def load(
    fp: BinaryIO,
    *,
    comparator: Optional[Comparator] = None,
    rng: Optional[RandomSource] = None,
) -> SkipListMap[Any, Any]:
    """Rebuild a map from records written by :func:`dump`."""
    out: SkipListMap[Any, Any] = SkipListMap(comparator=comparator, rng=rng)
    while True:
        nbytes = fp.read(_LEN_BYTES)
        if not nbytes:
            break
        if len(nbytes) < _LEN_BYTES:
            raise ValueError("truncated record header")
        length = int.from_bytes(nbytes, "big")
        blob = fp.read(length)
        if len(blob) < length:
            raise ValueError("truncated record body")
        key, value = msgpack.unpackb(blob, raw=False)
        out.put(key, value)
    logger.debug("loaded %d records", len(out))
    return out
