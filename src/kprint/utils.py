from __future__ import annotations

import itertools
import threading
import typing
from typing import Callable, TypeVar

__all__ = ("Unimplemented", "undefined", "unique", "first", "second")

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")


class Unimplemented(NotImplementedError):
    """Raised by :func:`undefined`.

    Marks code that hasn't been written yet; it is not meant to be caught.
    """

    message: str

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def undefined(message: str = "Undefined") -> typing.NoReturn:
    raise Unimplemented(message)


_counter = itertools.count()
_counter_lock = threading.Lock()


def unique() -> int:
    """Return a new integer on every call.

    Values start at 0 when the process starts. Calls from different threads
    never get the same value.
    """
    with _counter_lock:
        return next(_counter)


def first(f: Callable[[A], C], pair: tuple[A, B]) -> tuple[C, B]:
    x, y = pair
    return f(x), y


def second(f: Callable[[B], C], pair: tuple[A, B]) -> tuple[A, C]:
    x, y = pair
    return x, f(y)
