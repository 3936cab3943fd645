"""
``kprint.values``: Value printers
=================================

Value printers write a whole value in a readable, syntax-like form. They take
a *paren* argument that tells them whether they appear in a position where a
compound output (eg: ``Some 3`` or ``-1``) must be wrapped in parentheses::

    >>> from kprint.sink import BufferSink
    >>> out = BufferSink()
    >>> option_printer(int_printer)(True, out, -1)
    >>> out.getvalue()
    '(Some (-1))'

Printers for new types can be added via :func:`register`;
:func:`print_value` picks the printer registered for the closest type in the
value's MRO.
"""
from __future__ import annotations

import inspect
import math
import typing
from typing import (
    Any,
    Callable,
    Iterable,
    Sequence,
    Type,
    TypeAlias,
    TypeVar,
)

from . import numeric, printers
from .numeric import NumericOps
from .sink import Continuation, Sink

__all__ = (
    "ValuePrinter",
    "register",
    "value_printer",
    "print_value",
    "printer_v",
    "bool_printer",
    "int_printer",
    "int32_printer",
    "int64_printer",
    "nativeint_printer",
    "float_printer",
    "string_printer",
    "list_printer",
    "array_printer",
    "tuple_printer",
    "option_printer",
    "maybe_printer",
    "exn_printer",
)

R = TypeVar("R")
T = TypeVar("T")

ValuePrinter: TypeAlias = Callable[[bool, Sink, T], None]

DISPATCH_TABLE: dict[Type[Any], ValuePrinter[Any]] = {}


def _infer_value_type(f: ValuePrinter[T]) -> Type[T]:
    values = list(inspect.signature(f, eval_str=True).parameters.values())
    if len(values) != 3:
        raise ValueError(
            "Value printers should take three arguments: paren, out and the "
            "value"
        )
    ty: Any = values[2].annotation
    if ty is inspect.Parameter.empty:
        raise ValueError(
            f"Cannot infer the type printed by {f.__qualname__}: the value "
            "argument has no annotation"
        )
    origin = typing.get_origin(ty)
    if origin is not None:
        ty = origin
    return typing.cast(Type[T], ty)


@typing.overload
def register(
    function: ValuePrinter[T], /
) -> ValuePrinter[T]:  # pragma: no cover
    ...


@typing.overload
def register(
    *, type: Type[T] | None = None
) -> Callable[[ValuePrinter[T]], ValuePrinter[T]]:  # pragma: no cover
    ...


def register(
    function: ValuePrinter[T] | None = None,
    /,
    *,
    type: Type[T] | None = None,
) -> ValuePrinter[T] | Callable[[ValuePrinter[T]], ValuePrinter[T]]:
    """Register the value printer to use for a given type.

    If *type* is not specified, :func:`register` uses the type annotation on
    the value argument (the third one) of *function*::

        >>> @register
        ... def _print_complex(paren: bool, out: Sink, c: complex) -> None:
        ...     out.nwrite(f"{c.real}+{c.imag}i")

    Args:

      function: The printer we are registering

      type: The type we are registering the function for
    """

    def wrapper(function: ValuePrinter[T]) -> ValuePrinter[T]:
        cls = _infer_value_type(function) if type is None else type
        DISPATCH_TABLE[cls] = function
        return function

    if function is None:
        return wrapper
    return wrapper(function)


def value_printer(x: Any) -> ValuePrinter[Any]:
    """Find the printer for *x*

    Raises:
      LookupError: when no printer is registered for any type in the MRO of
        *x*
    """
    for cls in type(x).__mro__:
        res = DISPATCH_TABLE.get(cls)
        if res is not None:
            return res
    raise LookupError(f"No value printer for type {type(x).__qualname__!r}")


def print_value(paren: bool, out: Sink, x: Any) -> None:
    value_printer(x)(paren, out, x)


def printer_v(k: Continuation[R], x: Any) -> R:
    "Print any value that has a registered value printer"
    # Fail when the printer is called, not when the action is applied.
    vp = value_printer(x)
    return k(lambda oc: vp(False, oc, x))


def _parens(paren: bool, out: Sink, body: Callable[[], None]) -> None:
    if paren:
        out.write("(")
    body()
    if paren:
        out.write(")")


@register
def bool_printer(paren: bool, out: Sink, x: bool) -> None:
    out.nwrite("true" if x else "false")


def _int_value_printer(
    name: str, ops: NumericOps, wrap: bool = True
) -> ValuePrinter[int]:
    def printer(paren: bool, out: Sink, x: int) -> None:
        if wrap:
            x = ops.of_int(x)
        text = "".join(numeric.digits(numeric.dec_digit, 10, ops, abs(x)))
        if x < 0:
            _parens(paren, out, lambda: out.nwrite("-" + text))
        else:
            out.nwrite(text)

    printer.__name__ = printer.__qualname__ = name
    return printer


int_printer = _int_value_printer("int_printer", numeric.INT)
int32_printer = _int_value_printer("int32_printer", numeric.INT32)
int64_printer = _int_value_printer("int64_printer", numeric.INT64)
nativeint_printer = _int_value_printer("nativeint_printer", numeric.NATIVEINT)

# Python ints are unbounded: the generic printer does not wrap them.
register(type=int)(_int_value_printer("_print_int", numeric.INT, wrap=False))


@register
def float_printer(paren: bool, out: Sink, x: float) -> None:
    text = repr(float(x))
    if math.copysign(1.0, x) < 0 and not math.isnan(x):
        _parens(paren, out, lambda: out.nwrite(text))
    else:
        out.nwrite(text)


@register
def string_printer(paren: bool, out: Sink, x: str) -> None:
    out.nwrite(printers.quote(x))


def _join(
    out: Sink, elt: ValuePrinter[Any], xs: Iterable[Any], opar: str, cpar: str
) -> None:
    out.nwrite(opar)
    first = True
    for x in xs:
        if not first:
            out.nwrite(", ")
        else:
            first = False
        elt(False, out, x)
    out.nwrite(cpar)


def list_printer(elt: ValuePrinter[T]) -> ValuePrinter[list[T]]:
    """``[x1, x2, ...]``"""

    def printer(paren: bool, out: Sink, xs: list[T]) -> None:
        _join(out, elt, xs, "[", "]")

    return printer


def array_printer(elt: ValuePrinter[T]) -> ValuePrinter[Sequence[T]]:
    """``[|x1, x2, ...|]``"""

    def printer(paren: bool, out: Sink, xs: Sequence[T]) -> None:
        _join(out, elt, xs, "[|", "|]")

    return printer


def tuple_printer(*elts: ValuePrinter[Any]) -> ValuePrinter[tuple[Any, ...]]:
    """``(x1, x2, ...)`` with one printer per component"""

    def printer(paren: bool, out: Sink, xs: tuple[Any, ...]) -> None:
        if len(xs) != len(elts):
            raise ValueError(
                f"Expected a tuple of length {len(elts)}, got {len(xs)}"
            )
        out.write("(")
        for idx, (elt, x) in enumerate(zip(elts, xs)):
            if idx:
                out.nwrite(", ")
            elt(False, out, x)
        out.write(")")

    return printer


def option_printer(elt: ValuePrinter[T]) -> ValuePrinter[T | None]:
    """``None`` or ``Some x``"""

    def printer(paren: bool, out: Sink, x: T | None) -> None:
        if x is None:
            out.nwrite("None")
            return

        def body() -> None:
            out.nwrite("Some ")
            elt(True, out, x)

        _parens(paren, out, body)

    return printer


def maybe_printer(elt: ValuePrinter[T]) -> ValuePrinter[T | None]:
    "Print nothing for ``None``"

    def printer(paren: bool, out: Sink, x: T | None) -> None:
        if x is not None:
            elt(paren, out, x)

    return printer


@register
def exn_printer(paren: bool, out: Sink, x: BaseException) -> None:
    _parens(paren, out, lambda: out.nwrite(printers.describe_exception(x)))


@register
def _print_list(paren: bool, out: Sink, x: list[Any]) -> None:
    _join(out, print_value, x, "[", "]")


@register
def _print_tuple(paren: bool, out: Sink, x: tuple[Any, ...]) -> None:
    _join(out, print_value, x, "(", ")")


@register(type=type(None))
def _print_none(paren: bool, out: Sink, x: None) -> None:
    out.nwrite("None")
