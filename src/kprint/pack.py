"""
``kprint.pack``: Whole value serialisation
==========================================

Write and read back whole values on binary streams. The encoding is
`MessagePack <https://msgpack.org/>`_; every value is framed by its length
so that :func:`input_value` never reads past the end of the value it
returns.

Integers that don't fit in msgpack's 64 bits are stored in an extension
(:attr:`Ext.LONG`) as two's complement little-endian bytes.
"""
from __future__ import annotations

import pickle
from typing import Any, BinaryIO, Final

import msgpack

__all__ = ("output_value", "input_value", "Ext")

#: Size of the little-endian length that precedes every frame
HEADER_SIZE: Final = 8

MAX_RAW_INT: Final = 2**64 - 1
MIN_RAW_INT: Final = -(2**63)

encode_long: Final = pickle.encode_long
decode_long: Final = pickle.decode_long


class Ext:
    """The msgpack extensions used by :func:`output_value`

    Attributes:

      LONG(): An :class:`int` outside of msgpack's range.
    """

    LONG: Final = 0


def _default(obj: Any) -> msgpack.ExtType:
    # msgpack calls this for integers out of range and unsupported types
    if isinstance(obj, int) and not MIN_RAW_INT <= obj <= MAX_RAW_INT:
        return msgpack.ExtType(Ext.LONG, encode_long(obj))
    raise TypeError(f"Cannot serialise value of type {type(obj).__name__!r}")


def _ext_hook(code: int, data: bytes) -> Any:
    if code == Ext.LONG:
        return decode_long(data)
    raise ValueError(f"Unknown msgpack extension: {code}")


def output_value(out: BinaryIO, v: Any) -> None:
    """Write *v* to *out*

    Raises:
      TypeError: if *v* contains a value msgpack cannot encode
    """
    payload = msgpack.packb(v, use_bin_type=True, default=_default)
    out.write(len(payload).to_bytes(HEADER_SIZE, "little"))
    out.write(payload)


def _really_read(inp: BinaryIO, size: int) -> bytes:
    chunks = []
    while size > 0:
        chunk = inp.read(size)
        if not chunk:
            raise EOFError("Input truncated")
        chunks.append(chunk)
        size -= len(chunk)
    return b"".join(chunks)


def input_value(inp: BinaryIO) -> Any:
    """Read back a value written by :func:`output_value`

    Raises:
      EOFError: if *inp* ends before the end of the value
    """
    size = int.from_bytes(_really_read(inp, HEADER_SIZE), "little")
    return msgpack.unpackb(
        _really_read(inp, size),
        raw=False,
        strict_map_key=False,
        ext_hook=_ext_hook,
    )
