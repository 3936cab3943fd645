"""
``kprint.fmt``: Format strings
==============================

Format strings glue printers together. Each ``%`` directive names one of the
printers from :mod:`kprint.printers`, optionally preceded by flags and a
field width::

    >>> sprintf("%-6s|%05d|%+d", "ab", 42, 7)
    'ab    |00042|+7'

Directive syntax: ``%[flags][width]name``

+ flags: ``-`` (left justify), ``0`` (pad with zeros), ``+`` (write ``+``
  before non-negative numbers), space (write a space before non-negative
  numbers)
+ names: ``d i u x X o`` (native int), the same with an ``l`` (32 bits),
  ``L`` (64 bits) or ``n`` (native word) prefix, ``s S c C B f e F v``,
  ``a`` (takes a function and a value), ``t`` (takes a function) and ``%%``
  for a literal ``%``.

Formats are parsed once and cached. Every call builds a single
:data:`~kprint.sink.WriteAction` for the whole format and hands it to the
continuation.
"""
from __future__ import annotations

import dataclasses
import functools
import sys
from typing import Any, Callable, Final, TypeVar

from . import printers, sink, values
from .flags import Justify, default_flags, printer_flags
from .sink import Continuation, Sink, WriteAction

__all__ = (
    "FormatError",
    "Format",
    "compile",
    "interpret",
    "ksprintf",
    "sprintf",
    "fprintf",
    "printf",
    "eprintf",
)

R = TypeVar("R")


class FormatError(ValueError):
    pass


@dataclasses.dataclass(frozen=True, slots=True)
class _Spec:
    # How a directive consumes its arguments
    fn: Callable[..., Any]
    arity: int
    accepts_flags: bool


def _int_specs() -> dict[str, _Spec]:
    res = {}
    for prefix in ("", "l", "L", "n"):
        for conv in "diuxXo":
            name = prefix + conv
            res[name] = _Spec(getattr(printers, f"printer_{name}"), 1, True)
    return res


DIRECTIVES: Final[dict[str, _Spec]] = {
    **_int_specs(),
    "s": _Spec(printers.printer_s, 1, True),
    "S": _Spec(printers.printer_S, 1, True),
    "c": _Spec(printers.printer_c, 1, False),
    "C": _Spec(printers.printer_C, 1, False),
    "B": _Spec(printers.printer_B, 1, False),
    "f": _Spec(printers.printer_f, 1, False),
    "e": _Spec(printers.printer_e, 1, False),
    "F": _Spec(printers.printer_F, 1, False),
    "v": _Spec(values.printer_v, 1, False),
    "a": _Spec(printers.printer_a, 2, False),
    "t": _Spec(printers.printer_t, 1, False),
}

_FLAG_CHARS: Final = "-0+ "


@dataclasses.dataclass(frozen=True, slots=True)
class _Directive:
    name: str
    spec: _Spec
    overrides: tuple[tuple[str, Any], ...]

    def action(self, args: tuple[Any, ...]) -> WriteAction:
        if not self.overrides:
            return self.spec.fn(sink.keep, *args)
        flags = printer_flags(default_flags(), **dict(self.overrides))
        return self.spec.fn(sink.keep, *args, flags=flags)


_Piece = str | _Directive


def _parse_directive(pattern: str, pos: int) -> tuple[_Directive, int]:
    # *pos* points just after the '%'
    start = pos - 1
    overrides: dict[str, Any] = {}
    while pos < len(pattern) and pattern[pos] in _FLAG_CHARS:
        match pattern[pos]:
            case "-":
                overrides["justify"] = Justify.LEFT
            case "0":
                overrides["padding_char"] = "0"
            case "+":
                overrides["positive_prefix"] = "+"
            case " ":
                overrides.setdefault("positive_prefix", " ")
        pos += 1
    # Zero padding only makes sense in front of a number
    if overrides.get("justify") is Justify.LEFT:
        overrides.pop("padding_char", None)
    width_start = pos
    while pos < len(pattern) and pattern[pos].isdigit():
        pos += 1
    if pos > width_start:
        overrides["width"] = int(pattern[width_start:pos])
    for length in (2, 1):
        name = pattern[pos : pos + length]
        if len(name) == length and name in DIRECTIVES:
            break
    else:
        if pos >= len(pattern):
            raise FormatError(f"Unterminated directive at offset {start}")
        raise FormatError(
            f"Unknown directive {pattern[start:pos + 1]!r} at offset {start}"
        )
    spec = DIRECTIVES[name]
    if overrides and not spec.accepts_flags:
        raise FormatError(
            f"Directive %{name} doesn't take flags or a width "
            f"(at offset {start})"
        )
    return _Directive(name, spec, tuple(overrides.items())), pos + length


@functools.lru_cache(maxsize=256)
def parse(pattern: str) -> tuple[_Piece, ...]:
    """Split *pattern* into literal text and directives"""
    pieces: list[_Piece] = []
    lit: list[str] = []
    pos = 0
    while pos < len(pattern):
        c = pattern[pos]
        if c != "%":
            lit.append(c)
            pos += 1
            continue
        if pattern[pos + 1 : pos + 2] == "%":
            lit.append("%")
            pos += 2
            continue
        if lit:
            pieces.append("".join(lit))
            lit = []
        directive, pos = _parse_directive(pattern, pos + 1)
        pieces.append(directive)
    if lit:
        pieces.append("".join(lit))
    return tuple(pieces)


def _literal(s: str) -> WriteAction:
    def action(oc: Sink) -> None:
        oc.nwrite(s)

    return action


def arity(pattern: str) -> int:
    "Number of arguments expected by *pattern*"
    return sum(
        p.spec.arity for p in parse(pattern) if isinstance(p, _Directive)
    )


def interpret(pattern: str, k: Continuation[R]) -> Callable[..., R]:
    """Turn *pattern* into a function that takes the format's arguments and
    passes the resulting action to *k*."""
    pieces = parse(pattern)
    expected = arity(pattern)

    def apply(*args: Any) -> R:
        if len(args) != expected:
            raise TypeError(
                f"Format {pattern!r} expects {expected} argument(s), "
                f"got {len(args)}"
            )
        actions: list[WriteAction] = []
        pos = 0
        for piece in pieces:
            if isinstance(piece, str):
                actions.append(_literal(piece))
                continue
            n = piece.spec.arity
            actions.append(piece.action(args[pos : pos + n]))
            pos += n
        return k(sink.seq(*actions))

    return apply


@dataclasses.dataclass(frozen=True, slots=True)
class Format:
    """A format string and the function that interprets it.

    Use :func:`compile` to build one. Formats can be embedded in other
    outputs via :func:`kprint.printers.printer_format`.
    """

    pattern: str
    printer: Callable[[str, Continuation[Any]], Callable[..., Any]] = interpret

    @property
    def arity(self) -> int:
        return arity(self.pattern)


def compile(pattern: str) -> Format:
    """Check *pattern* and wrap it in a :class:`Format`

    Raises:
      FormatError: if *pattern* is malformed
    """
    parse(pattern)
    return Format(pattern)


def ksprintf(k: Continuation[R], fmt: Format | str, *args: Any) -> R:
    if isinstance(fmt, str):
        fmt = compile(fmt)
    return fmt.printer(fmt.pattern, k)(*args)


def sprintf(fmt: Format | str, *args: Any) -> str:
    "Format the arguments into a string"
    return ksprintf(sink.run, fmt, *args)


def fprintf(out: Sink, fmt: Format | str, *args: Any) -> None:
    "Format the arguments straight into *out*"
    ksprintf(sink.apply_to(out), fmt, *args)


def printf(fmt: Format | str, *args: Any) -> None:
    fprintf(sink.TextIOSink(sys.stdout), fmt, *args)


def eprintf(fmt: Format | str, *args: Any) -> None:
    fprintf(sink.TextIOSink(sys.stderr), fmt, *args)
