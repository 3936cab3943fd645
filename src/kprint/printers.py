"""
``kprint.printers``: Typed printers
===================================

Every printer has the same shape: it takes a continuation and a value, builds
a single :data:`~kprint.sink.WriteAction` and returns whatever the
continuation returns when given that action::

    >>> from kprint.sink import run
    >>> printer_d(run, -42)
    '-42'
    >>> from kprint.flags import printer_flags
    >>> printer_lX(run, 48879, flags=printer_flags(width=6, padding_char="0"))
    '00BEEF'

Integer printers come in four widths: ``printer_d`` (native int),
``printer_ld`` (32 bits), ``printer_Ld`` (64 bits) and ``printer_nd`` (the
host's word size). Each width has ``d``/``i`` (signed decimal), ``u``
(unsigned decimal), ``x``/``X`` (hexadecimal) and ``o`` (octal) variants.
"""
from __future__ import annotations

import typing
from typing import Any, Callable, Final, Protocol, TypeVar

from . import numeric
from .flags import Justify, PrinterFlags, default_flags
from .numeric import INT, INT32, INT64, NATIVEINT, NumericOps
from .sink import Continuation, Sink, WriteAction

if typing.TYPE_CHECKING:  # pragma: no cover
    from .fmt import Format

__all__ = (
    "StringLike",
    "ReadOnlyString",
    "Printable",
    "escaped",
    "quote",
    "printer_s",
    "printer_sc",
    "printer_S",
    "printer_Sc",
    "printer_unum",
    "printer_snum",
    "printer_a",
    "printer_t",
    "printer_B",
    "printer_c",
    "printer_C",
    "printer_f",
    "printer_e",
    "printer_F",
    "printer_rope",
    "printer_utf8",
    "printer_obj",
    "printer_exn",
    "printer_format",
    *(
        f"printer_{w}{d}"
        for w in ("", "l", "L", "n")
        for d in ("d", "i", "u", "x", "X", "o")
    ),
    "printer_int",
    "printer_uint",
    "printer_hex",
    "printer_HEX",
    "printer_oct",
)

R = TypeVar("R")
T = TypeVar("T")


class Printable(Protocol):
    "Values that know how to write themselves to a sink"

    def print(self, sink: Sink, /) -> None:
        ...


@typing.runtime_checkable
class StringLike(Printable, Protocol):
    """Text whose length and output are defined by the value itself.

    Lets :func:`printer_sc` pad representations other than :class:`str`
    without knowing what they are.
    """

    def __len__(self) -> int:
        ...


class ReadOnlyString:
    "A string that can be printed and measured but not modified"

    __slots__ = ("_value",)

    _value: str

    def __init__(self, value: str) -> None:
        self._value = value

    def __len__(self) -> int:
        return len(self._value)

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"ReadOnlyString({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReadOnlyString):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def print(self, sink: Sink, /) -> None:
        sink.nwrite(self._value)


_ESCAPES: Final = {
    "\\": "\\\\",
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
    "\b": "\\b",
}


def escaped(c: str, quote_char: str = '"') -> str:
    r"""Escape a character so it can be put between *quote_char*.

    >>> escaped("\n")
    '\\n'
    """
    if c == quote_char:
        return "\\" + c
    if c in _ESCAPES:
        return _ESCAPES[c]
    if not c.isprintable():
        return f"\\x{ord(c):02x}" if ord(c) < 0x100 else f"\\u{ord(c):04x}"
    return c


def quote(s: str) -> str:
    r"""Put *s* in double quotes, escaping it as needed.

    >>> print(quote('say "hi"'))
    "say \"hi\""
    """
    return '"' + "".join(escaped(c) for c in s) + '"'


def _pad(flags: PrinterFlags, length: int, emit: WriteAction) -> WriteAction:
    # Width is a minimum: content longer than the field is written as is.
    if flags.width is None or length >= flags.width:
        return emit
    padding = flags.padding_char * (flags.width - length)
    match flags.justify:
        case Justify.RIGHT:

            def right(oc: Sink) -> None:
                oc.nwrite(padding)
                emit(oc)

            return right
        case Justify.LEFT:

            def left(oc: Sink) -> None:
                emit(oc)
                oc.nwrite(padding)

            return left
    assert False, flags.justify  # pragma: no cover


def printer_s(
    k: Continuation[R], x: str, *, flags: PrinterFlags | None = None
) -> R:
    """Print a string, padded according to *flags*."""
    flags = default_flags() if flags is None else flags
    return k(_pad(flags, len(x), lambda oc: oc.nwrite(x)))


def printer_sc(
    k: Continuation[R], x: StringLike, *, flags: PrinterFlags | None = None
) -> R:
    """Like :func:`printer_s` for any :class:`StringLike` value."""
    flags = default_flags() if flags is None else flags
    return k(_pad(flags, len(x), x.print))


def printer_S(
    k: Continuation[R], x: str, *, flags: PrinterFlags | None = None
) -> R:
    "Print a quoted string. The quotes count towards the width."
    return printer_s(k, quote(x), flags=flags)


def printer_Sc(
    k: Continuation[R], x: StringLike, *, flags: PrinterFlags | None = None
) -> R:
    return printer_s(k, quote(str(x)), flags=flags)


def printer_unum(
    mk_digit: numeric.DigitFn,
    base: int,
    ops: NumericOps,
    k: Continuation[R],
    x: int,
    *,
    flags: PrinterFlags | None = None,
) -> R:
    """Print an integer without a sign.

    Negative values are shown as their unsigned counterpart in the width of
    *ops* (``-1`` is ``ffffffff`` for 32 bits integers).
    """
    if ops.compare(x, ops.zero) < 0:
        x = ops.to_unsigned(x)
    return printer_s(
        k, "".join(numeric.digits(mk_digit, base, ops, x)), flags=flags
    )


def printer_snum(
    mk_digit: numeric.DigitFn,
    base: int,
    ops: NumericOps,
    k: Continuation[R],
    x: int,
    *,
    flags: PrinterFlags | None = None,
) -> R:
    """Print a signed integer.

    Negative numbers get a ``-``; other numbers get the positive prefix from
    *flags*, if any. The sign is part of the padded field.
    """
    flags = default_flags() if flags is None else flags
    negative = ops.compare(x, ops.zero) < 0
    # Negate as an unbounded int so the minimum value of the width has a
    # magnitude.
    glyphs = numeric.digits(mk_digit, base, ops, -x if negative else x)
    if negative:
        glyphs.insert(0, "-")
    elif flags.positive_prefix is not None:
        glyphs.insert(0, flags.positive_prefix)
    return printer_s(k, "".join(glyphs), flags=flags)


class IntPrinter(Protocol):
    def __call__(
        self,
        k: Continuation[R],
        x: int,
        *,
        flags: PrinterFlags | None = None,
    ) -> R:
        ...


def _int_printer(
    name: str,
    num_printer: Callable[..., Any],
    mk_digit: numeric.DigitFn,
    base: int,
    ops: NumericOps,
) -> IntPrinter:
    def printer(
        k: Continuation[R], x: int, *, flags: PrinterFlags | None = None
    ) -> R:
        return num_printer(mk_digit, base, ops, k, ops.of_int(x), flags=flags)

    printer.__name__ = printer.__qualname__ = name
    printer.__doc__ = (
        f"Print a {ops.name} in base {base}"
        + (" with its sign" if num_printer is printer_snum else "")
    )
    return printer


dec, lhex, uhex, octal = (
    numeric.dec_digit,
    numeric.lhex_digit,
    numeric.uhex_digit,
    numeric.oct_digit,
)
snum, unum = printer_snum, printer_unum

printer_d: Final = _int_printer("printer_d", snum, dec, 10, INT)
printer_i: Final = _int_printer("printer_i", snum, dec, 10, INT)
printer_u: Final = _int_printer("printer_u", unum, dec, 10, INT)
printer_x: Final = _int_printer("printer_x", unum, lhex, 16, INT)
printer_X: Final = _int_printer("printer_X", unum, uhex, 16, INT)
printer_o: Final = _int_printer("printer_o", unum, octal, 8, INT)

printer_ld: Final = _int_printer("printer_ld", snum, dec, 10, INT32)
printer_li: Final = _int_printer("printer_li", snum, dec, 10, INT32)
printer_lu: Final = _int_printer("printer_lu", unum, dec, 10, INT32)
printer_lx: Final = _int_printer("printer_lx", unum, lhex, 16, INT32)
printer_lX: Final = _int_printer("printer_lX", unum, uhex, 16, INT32)
printer_lo: Final = _int_printer("printer_lo", unum, octal, 8, INT32)

printer_Ld: Final = _int_printer("printer_Ld", snum, dec, 10, INT64)
printer_Li: Final = _int_printer("printer_Li", snum, dec, 10, INT64)
printer_Lu: Final = _int_printer("printer_Lu", unum, dec, 10, INT64)
printer_Lx: Final = _int_printer("printer_Lx", unum, lhex, 16, INT64)
printer_LX: Final = _int_printer("printer_LX", unum, uhex, 16, INT64)
printer_Lo: Final = _int_printer("printer_Lo", unum, octal, 8, INT64)

printer_nd: Final = _int_printer("printer_nd", snum, dec, 10, NATIVEINT)
printer_ni: Final = _int_printer("printer_ni", snum, dec, 10, NATIVEINT)
printer_nu: Final = _int_printer("printer_nu", unum, dec, 10, NATIVEINT)
printer_nx: Final = _int_printer("printer_nx", unum, lhex, 16, NATIVEINT)
printer_nX: Final = _int_printer("printer_nX", unum, uhex, 16, NATIVEINT)
printer_no: Final = _int_printer("printer_no", unum, octal, 8, NATIVEINT)

printer_int: Final = printer_i
printer_uint: Final = printer_u
printer_hex: Final = printer_x
printer_HEX: Final = printer_X
printer_oct: Final = printer_o

del dec, lhex, uhex, octal, snum, unum


def printer_a(k: Continuation[R], f: Callable[[Sink, T], None], x: T) -> R:
    "Print *x* with a user supplied function"
    return k(lambda oc: f(oc, x))


def printer_t(k: Continuation[R], f: Callable[[Sink], None]) -> R:
    "Run a user supplied output function"
    return k(lambda oc: f(oc))


def printer_B(k: Continuation[R], x: bool) -> R:
    return k(lambda oc: oc.nwrite("true" if x else "false"))


def printer_c(k: Continuation[R], x: str) -> R:
    if len(x) != 1:
        raise ValueError(f"Expected a single character, got {x!r}")
    return k(lambda oc: oc.write(x))


def printer_C(k: Continuation[R], x: str) -> R:
    "Print a character between single quotes"
    if len(x) != 1:
        raise ValueError(f"Expected a single character, got {x!r}")

    def action(oc: Sink) -> None:
        oc.write("'")
        oc.nwrite(escaped(x, "'"))
        oc.write("'")

    return k(action)


def printer_f(k: Continuation[R], x: float) -> R:
    "Decimal notation with six digits after the point"
    return k(lambda oc: oc.nwrite(f"{x:f}"))


def printer_e(k: Continuation[R], x: float) -> R:
    "Exponential notation with six digits after the point"
    return k(lambda oc: oc.nwrite(f"{x:e}"))


def printer_F(k: Continuation[R], x: float) -> R:
    "Shortest notation that reads back as the same float"
    return k(lambda oc: oc.nwrite(repr(float(x))))


def printer_rope(k: Continuation[R], x: Printable) -> R:
    return k(lambda oc: x.print(oc))


def printer_utf8(k: Continuation[R], x: str) -> R:
    return k(lambda oc: oc.nwrite(x))


def printer_obj(k: Continuation[R], x: Printable) -> R:
    "Let the object print itself"
    return k(x.print)


def describe_exception(x: BaseException) -> str:
    """Short description of an exception.

    >>> describe_exception(ValueError("boom"))
    'ValueError: boom'
    """
    cls = type(x)
    name = cls.__qualname__
    if cls.__module__ not in ("builtins", "__main__"):
        name = f"{cls.__module__}.{name}"
    # Same line as the one traceback ends with, minus the source location of
    # SyntaxErrors and any notes.
    if isinstance(x, SyntaxError) and x.msg:
        msg = x.msg
    else:
        msg = str(x)
    return f"{name}: {msg}" if msg else name


def printer_exn(k: Continuation[R], x: BaseException) -> R:
    return k(lambda oc: oc.nwrite(describe_exception(x)))


def printer_format(k: Continuation[R], fmt: Format) -> Callable[..., R]:
    """Embed a format.

    Returns a function waiting for the arguments of *fmt*.
    """
    return fmt.printer(fmt.pattern, k)
