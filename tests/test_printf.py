import io

import pytest

from sv39kit.printf import fprintf, printf, render


@pytest.mark.parametrize("n", [0, 1, -1, 42, -12345, 2**31 - 1, -(2**31)])
def test_decimal_matches_int(n):
    assert render("%d", n) == str(n)


@pytest.mark.parametrize("n", [0, 1, 255, 0xDEAD, 2**32 - 1])
def test_hex_round_trip(n):
    text = render("%x", n)
    assert int(text, 16) == n
    assert text == text.upper()


def test_hex_of_negative_is_unsigned_32_bit():
    assert int(render("%x", -1), 16) == 2**32 - 1


def test_pointer_is_sixteen_digits():
    text = render("%p", 0x1234)
    assert text.startswith("0x")
    assert len(text) == 18
    assert int(text, 16) == 0x1234


def test_long_truncates_to_32_bits():
    assert render("%l", 2**32 + 7) == render("%l", 7)


def test_null_string():
    assert render("%s", None) == "(null)"


def test_string_and_char():
    assert render("%s-%c", "abc", ord("z")) == "abc-z"


def test_percent_and_unknown_conversion():
    assert render("50%%") == "50%"
    assert render("%q") == "%q"


def test_missing_argument_raises():
    with pytest.raises(TypeError):
        render("%d %d", 1)


def test_fprintf_writes_to_stream():
    buf = io.StringIO()
    fprintf(buf, "%s=%d\n", "x", 5)
    assert buf.getvalue() == "x=5\n"


def test_printf_writes_stdout(capsys):
    printf("init: %s\n", "starting sh")
    assert capsys.readouterr().out == "init: starting sh\n"