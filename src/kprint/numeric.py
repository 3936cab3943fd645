"""
``kprint.numeric``: Integer algebra and digit rendering
=======================================================

The digit renderer only needs a handful of operations on the integer type it
renders. :class:`NumericOps` bundles them so a single algorithm can serve the
four integer widths we support.

Python integers are unbounded; each :class:`NumericOps` instance therefore
also knows how to wrap an arbitrary :class:`int` into its width (two's
complement) and how to reinterpret a negative value as unsigned.
"""
from __future__ import annotations

import dataclasses
import struct
import sys
from typing import Callable, Final

__all__ = (
    "NumericOps",
    "INT",
    "INT32",
    "INT64",
    "NATIVEINT",
    "digits",
    "dec_digit",
    "oct_digit",
    "lhex_digit",
    "uhex_digit",
)

DigitFn = Callable[[int], str]


def _compare(a: int, b: int) -> int:
    return (a > b) - (a < b)


# Machine integers truncate towards zero, python's `//` and `%` round towards
# negative infinity.
def _tdiv(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _tmod(a: int, b: int) -> int:
    return a - b * _tdiv(a, b)


@dataclasses.dataclass(frozen=True, slots=True)
class NumericOps:
    """The operations needed to extract the digits of a fixed width integer.

    Attributes:
      name(str): Name of the integer type (used in error messages and reprs)
      bits(int): Width of the integer type in bits
      zero(int):
      compare: Total order returning -1, 0 or 1
      modulo: Remainder of the truncating division
      div: Truncating division
      to_int: Conversion to a machine ``int``
    """

    name: str
    bits: int
    zero: int = 0
    compare: Callable[[int, int], int] = _compare
    modulo: Callable[[int, int], int] = _tmod
    div: Callable[[int, int], int] = _tdiv
    to_int: Callable[[int], int] = int

    @property
    def min_int(self) -> int:
        return -(1 << (self.bits - 1))

    @property
    def max_int(self) -> int:
        return (1 << (self.bits - 1)) - 1

    def of_int(self, x: int) -> int:
        """Wrap *x* into this width (two's complement)."""
        mask = (1 << self.bits) - 1
        x &= mask
        if x > self.max_int:
            x -= 1 << self.bits
        return x

    def to_unsigned(self, x: int) -> int:
        """Reinterpret the signed value *x* as an unsigned value of this width.

        >>> INT32.to_unsigned(-1)
        4294967295
        """
        return self.of_int(x) & ((1 << self.bits) - 1)


#: Tagged native integers: one bit narrower than the host's word.
INT: Final = NumericOps("int", sys.maxsize.bit_length())

INT32: Final = NumericOps("int32", 32)

INT64: Final = NumericOps("int64", 64)

#: The host's word size.
NATIVEINT: Final = NumericOps("nativeint", struct.calcsize("P") * 8)


def digits(mk_digit: DigitFn, base: int, ops: NumericOps, n: int) -> list[str]:
    """Render *n* as a list of glyphs, most significant digit first.

    The digits come out least significant first; the list is reversed once
    at the end rather than prepending to it.

    Args:
      mk_digit: Maps a digit value to its glyph
      base(int):
      ops(NumericOps):
      n(int): The value to render. Callers are expected to pass a
        non-negative magnitude; negative values yield whatever the truncating
        ``modulo`` produces.

    Returns:
      list[str]:
    """
    if ops.compare(n, ops.zero) == 0:
        return ["0"]
    acc: list[str] = []
    while ops.compare(n, ops.zero) != 0:
        acc.append(mk_digit(ops.to_int(ops.modulo(n, base))))
        n = ops.div(n, base)
    acc.reverse()
    return acc


def _check_digit(x: int, base: int) -> None:
    if not 0 <= x < base:
        raise ValueError(f"Not a base {base} digit: {x!r}")


def dec_digit(x: int) -> str:
    _check_digit(x, 10)
    return chr(ord("0") + x)


def oct_digit(x: int) -> str:
    _check_digit(x, 8)
    return dec_digit(x)


def lhex_digit(x: int) -> str:
    if x < 10:
        return dec_digit(x)
    _check_digit(x, 16)
    return chr(ord("a") + x - 10)


def uhex_digit(x: int) -> str:
    if x < 10:
        return dec_digit(x)
    _check_digit(x, 16)
    return chr(ord("A") + x - 10)
