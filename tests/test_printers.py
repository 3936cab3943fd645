from __future__ import annotations

import json
import math

import pytest

from kprint import fmt, numeric, printers, sink
from kprint.flags import Justify, PrinterFlags, printer_flags, using_flags
from kprint.numeric import INT, INT32, INT64, NATIVEINT
from kprint.sink import BufferSink, run

INT_PRINTERS = [
    f"printer_{w}{d}"
    for w in ("", "l", "L", "n")
    for d in ("d", "i", "u", "x", "X", "o")
]


def snum(x, flags=None):
    return printers.printer_snum(
        numeric.dec_digit, 10, INT, run, x, flags=flags
    )


def test_scenarios():
    assert printers.printer_d(run, 0) == "0"
    assert printers.printer_x(run, 255) == "ff"
    assert (
        printers.printer_d(
            run, 42, flags=printer_flags(width=5, padding_char="0")
        )
        == "00042"
    )
    assert (
        printers.printer_u(
            run,
            7,
            flags=printer_flags(
                width=5, justify=Justify.LEFT, padding_char="."
            ),
        )
        == "7...."
    )
    plus = printer_flags(positive_prefix="+")
    assert snum(-5, plus) == "-5"
    assert snum(5, plus) == "+5"
    assert snum(0, plus) == "+0"


@pytest.mark.parametrize("name", INT_PRINTERS)
def test_int_printers_zero(name):
    assert getattr(printers, name)(run, 0) == "0"
    assert getattr(printers, name).__name__ == name


@pytest.mark.parametrize(
    "prefix, ops", (("", INT), ("l", INT32), ("L", INT64), ("n", NATIVEINT))
)
def test_int_printers(prefix, ops):
    def p(conv, x, **kwargs):
        return getattr(printers, f"printer_{prefix}{conv}")(run, x, **kwargs)

    assert p("d", 48879) == p("i", 48879) == "48879"
    assert p("u", 48879) == "48879"
    assert p("x", 48879) == "beef"
    assert p("X", 48879) == "BEEF"
    assert p("o", 8) == "10"
    assert p("d", -48879) == "-48879"
    # Extremal values have a magnitude
    assert p("d", ops.min_int) == str(ops.min_int)
    assert p("d", ops.max_int) == str(ops.max_int)
    # Unsigned printers show the two's complement representation
    assert p("u", -1) == str(2**ops.bits - 1)
    assert p("x", -1) == format(2**ops.bits - 1, "x")


def test_wrapping():
    assert printers.printer_ld(run, 2**31) == "-2147483648"
    assert printers.printer_lx(run, -1) == "ffffffff"
    assert printers.printer_LX(run, -1) == "F" * 16
    assert printers.printer_Lu(run, -1) == str(2**64 - 1)
    assert printers.printer_lo(run, -1) == "37777777777"


@pytest.mark.parametrize("x", (-1, -7, -255, -4096, -(2**40)))
def test_negative_is_sign_and_magnitude(x):
    assert printers.printer_d(run, x) == "-" + printers.printer_u(run, -x)
    assert printers.printer_Ld(run, x) == "-" + printers.printer_Lu(run, -x)


def test_sign_inside_field():
    def d(x, **kwargs):
        return printers.printer_d(run, x, flags=PrinterFlags(**kwargs))

    assert d(-42, width=5) == "  -42"
    assert d(-42, width=5, padding_char="0") == "00-42"
    assert d(42, width=4, positive_prefix="+") == " +42"
    assert d(-12345, width=3) == "-12345"


@pytest.mark.parametrize("s", ("", "a", "hello", "hello world"))
@pytest.mark.parametrize("width", (0, 1, 5, 12))
@pytest.mark.parametrize("justify", (Justify.LEFT, Justify.RIGHT))
def test_string_padding(s, width, justify):
    flags = PrinterFlags(width=width, padding_char="*", justify=justify)
    res = printers.printer_s(run, s, flags=flags)
    assert len(res) == max(width, len(s))
    if len(s) >= width:
        assert res == s
    elif justify is Justify.RIGHT:
        assert res == "*" * (width - len(s)) + s
    else:
        assert res == s + "*" * (width - len(s))


def test_string_no_width():
    assert printers.printer_s(run, "abc") == "abc"
    assert printers.printer_s(run, "abc", flags=PrinterFlags()) == "abc"


def test_string_like():
    ro = printers.ReadOnlyString("abc")
    assert isinstance(ro, printers.StringLike)
    assert printers.printer_sc(run, ro) == "abc"
    assert printers.printer_sc(run, ro, flags=PrinterFlags(width=5)) == "  abc"
    left = PrinterFlags(width=5, justify=Justify.LEFT, padding_char="-")
    assert printers.printer_sc(run, ro, flags=left) == "abc--"
    assert printers.printer_Sc(run, ro) == '"abc"'


def test_quoted():
    assert printers.printer_S(run, 'a"b') == '"a\\"b"'
    assert printers.printer_S(run, "a\nb") == '"a\\nb"'
    assert printers.printer_S(run, 'a"b', flags=PrinterFlags(width=8)) == (
        '  "a\\"b"'
    )
    assert printers.quote("\x01") == '"\\x01"'
    assert printers.escaped("é") == "é"


def test_chars():
    assert printers.printer_c(run, "x") == "x"
    assert printers.printer_C(run, "x") == "'x'"
    assert printers.printer_C(run, "'") == "'\\''"
    assert printers.printer_C(run, '"') == "'\"'"
    assert printers.printer_C(run, "\t") == "'\\t'"


@pytest.mark.parametrize("x", ("", "ab"))
def test_chars_are_checked_early(x):
    with pytest.raises(ValueError, match="single character"):
        printers.printer_c(sink.keep, x)
    with pytest.raises(ValueError, match="single character"):
        printers.printer_C(sink.keep, x)


def test_bool():
    assert printers.printer_B(run, True) == "true"
    assert printers.printer_B(run, False) == "false"


def test_floats():
    assert printers.printer_f(run, 1.5) == "1.500000"
    assert printers.printer_f(run, -0.25) == "-0.250000"
    assert printers.printer_e(run, 1.5) == "1.500000e+00"
    assert printers.printer_e(run, 12345.678) == "1.234568e+04"
    assert printers.printer_F(run, 1.0) == "1.0"
    assert printers.printer_F(run, 0.1) == "0.1"
    assert printers.printer_F(run, math.nan) == "nan"
    assert printers.printer_F(run, -math.inf) == "-inf"
    assert printers.printer_F(run, 3) == "3.0"


class Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y

    def print(self, sink):
        sink.write("<")
        printers.printer_d(lambda act: act(sink), self.x)
        sink.write(",")
        printers.printer_d(lambda act: act(sink), self.y)
        sink.write(">")


def test_objects():
    assert printers.printer_obj(run, Point(1, -2)) == "<1,-2>"
    assert printers.printer_rope(run, printers.ReadOnlyString("rope")) == "rope"
    assert printers.printer_utf8(run, "héllo ☃") == "héllo ☃"


def test_exceptions():
    assert printers.printer_exn(run, ValueError("boom")) == "ValueError: boom"
    assert printers.printer_exn(run, KeyError("k")) == "KeyError: 'k'"
    assert printers.printer_exn(run, StopIteration()) == "StopIteration"
    assert printers.printer_exn(run, json.JSONDecodeError("bad", "x", 0)) == (
        "json.decoder.JSONDecodeError: bad: line 1 column 1 (char 0)"
    )


def test_exceptions_on_one_line():
    err = SyntaxError("bad", ("f.py", 1, 1, "x y\n", 1, 2))
    assert printers.printer_exn(run, err) == "SyntaxError: bad"
    noted = ValueError("boom")
    noted.__notes__ = ["while printing"]
    assert printers.printer_exn(run, noted) == "ValueError: boom"


def test_user_functions():
    def twice(oc, x):
        oc.nwrite(x * 2)

    assert printers.printer_a(run, twice, "ab") == "abab"
    assert printers.printer_t(run, lambda oc: oc.nwrite("hi")) == "hi"


def test_format():
    f = fmt.compile("%d-%s")
    assert printers.printer_format(run, f)(1, "a") == "1-a"


def test_continuation_protocol():
    actions = []
    # The continuation's result is the printer's result
    assert printers.printer_s(actions.append, "abc") is None
    assert printers.printer_d(actions.append, 12) is None
    assert len(actions) == 2
    out = BufferSink()
    for action in actions:
        action(out)
    assert out.getvalue() == "abc12"


def test_action_is_deferred():
    writes = []

    class Recorder:
        def write(self, c):
            writes.append(c)

        def nwrite(self, s):
            writes.append(s)

        def write_bytes(self, b):
            writes.append(b)

    action = printers.printer_d(
        lambda a: a, 7, flags=PrinterFlags(width=3, padding_char="0")
    )
    assert writes == []
    action(Recorder())
    assert "".join(writes) == "007"


def test_contextual_flags():
    with using_flags(width=3):
        assert printers.printer_d(run, 7) == "  7"
        assert printers.printer_s(run, "ab") == " ab"
        # Explicit flags win
        assert printers.printer_d(run, 7, flags=PrinterFlags()) == "7"
    assert printers.printer_d(run, 7) == "7"


def test_exports():
    import kprint
    from kprint import flags

    assert "printer_flags" not in printers.__all__
    assert kprint.printer_flags is flags.printer_flags
    assert len(set(kprint.__all__)) == len(kprint.__all__)
    for name in INT_PRINTERS:
        assert getattr(kprint, name) is getattr(printers, name)
