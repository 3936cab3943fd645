"""
``kprint.sink``: Sinks, sources and the continuation protocol
=============================================================

Printers never write anything themselves. A printer builds a
:data:`WriteAction` (a function that writes to a :class:`Sink`) and hands it
to a continuation; the continuation decides whether to apply it right away,
keep it or fold it into a bigger action::

    >>> from kprint import printers
    >>> printers.printer_B(run, True)
    'true'
    >>> action = printers.printer_x(keep, 255)
    >>> run(action)
    'ff'

"""
from __future__ import annotations

import io
import typing
from typing import Callable, Protocol, TextIO, TypeVar

__all__ = (
    "Sink",
    "Source",
    "WriteAction",
    "Continuation",
    "BufferSink",
    "TextIOSink",
    "NullSink",
    "TextIOSource",
    "run",
    "keep",
    "apply_to",
    "seq",
)

R = TypeVar("R")


@typing.runtime_checkable
class Sink(Protocol):
    """Where write actions send their output.

    Sinks must not flush implicitly: printers issue several writes per action
    and rely on them landing in order.
    """

    def write(self, c: str, /) -> None:
        "Write a single character"

    def nwrite(self, s: str, /) -> None:
        "Write a run of characters"

    def write_bytes(self, b: bytes, /) -> None:
        "Write raw bytes"


@typing.runtime_checkable
class Source(Protocol):
    "What the surrounding I/O layer reads from. The printers never use it."

    def read(self) -> str:
        "Read one character, raises :exc:`EOFError` at the end of the input"

    def read_line(self) -> str:
        "Read a line without its terminator"


WriteAction = Callable[[Sink], None]

Continuation = Callable[[WriteAction], R]


class TextIOSink:
    "Send the output to a text stream"

    out: TextIO
    encoding: str

    def __init__(self, out: TextIO, encoding: str = "utf-8") -> None:
        self.out = out
        self.encoding = encoding

    def write(self, c: str, /) -> None:
        if len(c) != 1:
            raise ValueError(f"Expected a single character, got {c!r}")
        self.out.write(c)

    def nwrite(self, s: str, /) -> None:
        self.out.write(s)

    def write_bytes(self, b: bytes, /) -> None:
        self.out.write(b.decode(self.encoding))


class BufferSink(TextIOSink):
    "Accumulate the output in memory"

    out: io.StringIO

    def __init__(self, encoding: str = "utf-8") -> None:
        super().__init__(io.StringIO(), encoding)

    def getvalue(self) -> str:
        return self.out.getvalue()


class NullSink:
    "Discard everything"

    def write(self, c: str, /) -> None:
        pass

    def nwrite(self, s: str, /) -> None:
        pass

    def write_bytes(self, b: bytes, /) -> None:
        pass


class TextIOSource:
    "Read characters and lines from a text stream"

    inp: TextIO

    def __init__(self, inp: TextIO) -> None:
        self.inp = inp

    def read(self) -> str:
        c = self.inp.read(1)
        if not c:
            raise EOFError
        return c

    def read_line(self) -> str:
        line = self.inp.readline()
        if not line:
            raise EOFError
        return line.removesuffix("\n")


def run(action: WriteAction) -> str:
    "Continuation that applies *action* to a fresh buffer and returns the text"
    buf = BufferSink()
    action(buf)
    return buf.getvalue()


def keep(action: WriteAction) -> WriteAction:
    "Continuation that returns the action untouched"
    return action


def apply_to(sink: Sink) -> Continuation[None]:
    "Build a continuation that writes to *sink* immediately"

    def k(action: WriteAction) -> None:
        action(sink)

    return k


def seq(*actions: WriteAction) -> WriteAction:
    "Combine several actions into one that runs them in order"

    def action(sink: Sink) -> None:
        for a in actions:
            a(sink)

    return action
