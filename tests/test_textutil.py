import pytest

from raycube.textutil import clamp_trailing_space, is_space, parse_int, skip_space


@pytest.mark.parametrize("char", [" ", "\t", "\v", "\r", "\f", "\n"])
def test_is_space_true(char):
    assert is_space(char) is True


@pytest.mark.parametrize("char", ["a", "0", "", "  "])
def test_is_space_false(char):
    assert is_space(char) is False


def test_skip_space():
    assert skip_space(" \t\n NO ./a.xpm") == "NO ./a.xpm"
    assert skip_space("   ") == ""
    assert skip_space("F 1,2,3") == "F 1,2,3"


def test_clamp_trailing_space():
    assert clamp_trailing_space("10 1  \n") == ("10 1", 3)
    assert clamp_trailing_space("111") == ("111", 2)


def test_clamp_trailing_space_blank_line():
    text, last = clamp_trailing_space("   ")
    assert last == 0
    assert text == " "


@pytest.mark.parametrize(
    "text, expected",
    [
        ("42", 42),
        ("+7", 7),
        ("-0", 0),
        ("0", 0),
        ("000123", 123),
        ("2147483647", 2147483647),
        ("-2147483648", -2147483648),
        ("0000000000000000005", 5),
    ],
)
def test_parse_int_valid(text, expected):
    assert parse_int(text) == expected


@pytest.mark.parametrize(
    "text",
    ["", "-", "+", "1a", " 1", "1 ", "2147483648", "-2147483649", "123456789012", "1.5"],
)
def test_parse_int_invalid(text):
    with pytest.raises(ValueError):
        parse_int(text)


@pytest.mark.parametrize("value", [0, 1, 255, -255, 2147483647])
def test_parse_int_round_trip(value):
    assert parse_int(str(value)) == value