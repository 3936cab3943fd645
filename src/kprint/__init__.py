"""Continuation passing printer combinators"""
from __future__ import annotations

from importlib import metadata

from .flags import (
    DEFAULT_FLAGS,
    Justify,
    PrinterFlags,
    default_flags,
    printer_flags,
    using_flags,
)
from .fmt import (
    Format,
    FormatError,
    eprintf,
    fprintf,
    ksprintf,
    printf,
    sprintf,
)
from .pack import input_value, output_value
from .printers import *  # noqa: F401,F403
from .printers import __all__ as _printers_all
from .sink import (
    BufferSink,
    NullSink,
    Sink,
    Source,
    TextIOSink,
    TextIOSource,
    WriteAction,
)
from .utils import Unimplemented, first, second, undefined, unique
from .values import print_value, printer_v, register

# https://packaging.python.org/en/latest/guides/single-sourcing-package-version/
__version__ = metadata.version(__name__)

__all__ = (
    "DEFAULT_FLAGS",
    "Justify",
    "PrinterFlags",
    "default_flags",
    "printer_flags",
    "using_flags",
    "Format",
    "FormatError",
    "ksprintf",
    "sprintf",
    "fprintf",
    "printf",
    "eprintf",
    "output_value",
    "input_value",
    "Sink",
    "Source",
    "WriteAction",
    "BufferSink",
    "NullSink",
    "TextIOSink",
    "TextIOSource",
    "Unimplemented",
    "undefined",
    "unique",
    "first",
    "second",
    "register",
    "print_value",
    "printer_v",
    *_printers_all,
)
