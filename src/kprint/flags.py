"""
``kprint.flags``: Printer flags
===============================

:class:`PrinterFlags` control how the string and integer printers lay out
their output: a minimum field width, a padding character, which side the
padding goes on and an optional sign glyph for non-negative numbers.

Printers called without explicit flags use the contextual default
(:func:`default_flags`), which can be overridden for a block of code::

    >>> from kprint import printers, sink
    >>> with using_flags(width=4, padding_char="0"):
    ...     printers.printer_d(sink.run, 7)
    '0007'
"""
from __future__ import annotations

import contextlib
import contextvars
import dataclasses
import enum
from typing import Any, Final, Iterator

__all__ = (
    "Justify",
    "PrinterFlags",
    "DEFAULT_FLAGS",
    "printer_flags",
    "default_flags",
    "using_flags",
)


class Justify(enum.Enum):
    "Which side of the field the content sits on"
    #: Padding goes after the content
    LEFT = enum.auto()
    #: Padding goes before the content
    RIGHT = enum.auto()


@dataclasses.dataclass(frozen=True, slots=True)
class PrinterFlags:
    """Layout of a printed field.

    Attributes:
      width(int | None): Minimum width of the field. Content is never
        truncated.
      padding_char(str): Character used to fill the field
      justify(Justify):
      positive_prefix(str | None): Glyph written before non-negative numbers
        (eg: ``+``)
    """

    width: int | None = None
    padding_char: str = " "
    justify: Justify = Justify.RIGHT
    positive_prefix: str | None = None

    def __post_init__(self) -> None:
        if self.width is not None and self.width < 0:
            raise ValueError(f"Negative field width: {self.width!r}")
        if len(self.padding_char) != 1:
            raise ValueError(
                f"Padding should be a single character: {self.padding_char!r}"
            )
        if self.positive_prefix is not None and len(self.positive_prefix) != 1:
            raise ValueError(
                "Positive prefix should be a single character: "
                f"{self.positive_prefix!r}"
            )


#: Right justified, no width, space padding and no positive prefix.
DEFAULT_FLAGS: Final = PrinterFlags()


def printer_flags(
    base: PrinterFlags | None = None, **kwargs: Any
) -> PrinterFlags:
    """Build flags by overriding fields of *base*.

    *base* defaults to :data:`DEFAULT_FLAGS`.

    >>> printer_flags(width=5, justify=Justify.LEFT)
    PrinterFlags(width=5, padding_char=' ', justify=<Justify.LEFT: 1>, \
positive_prefix=None)
    """
    if base is None:
        base = DEFAULT_FLAGS
    return dataclasses.replace(base, **kwargs)


_CurrentFlags: contextvars.ContextVar[PrinterFlags] = contextvars.ContextVar(
    "KprintDefaultFlags", default=DEFAULT_FLAGS
)


def default_flags() -> PrinterFlags:
    "The flags used by printers that weren't given any"
    return _CurrentFlags.get()


@contextlib.contextmanager
def using_flags(
    flags: PrinterFlags | None = None, /, **kwargs: Any
) -> Iterator[PrinterFlags]:
    """Change the default flags for the duration of a ``with`` block.

    The new flags are *flags* (or the current defaults) with the fields in
    *kwargs* replaced.
    """
    new = printer_flags(default_flags() if flags is None else flags, **kwargs)
    token = _CurrentFlags.set(new)
    try:
        yield new
    finally:
        _CurrentFlags.reset(token)
