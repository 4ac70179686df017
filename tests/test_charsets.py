import pytest

from ascii_art.charsets import default_palettes, expand_char_range, expand_charset, parse_char_range
from ascii_art.errors import InvalidCharRange


@pytest.mark.parametrize(
    "expr, expected",
    [
        ("a", ("a", "a")),
        ("-", ("-", "-")),
        ("a-d", ("a", "d")),
        ("d-a", ("a", "d")),
        ("all", (" ", "~")),
        ("space", (" ", " ")),
    ],
)
def test_parse(expr, expected):
    assert parse_char_range(expr) == expected


@pytest.mark.parametrize("expr", ["", "ab", "a-bc", "a_b", "alll"])
def test_parse_invalid(expr):
    with pytest.raises(InvalidCharRange):
        parse_char_range(expr)


def test_expand_range():
    assert expand_char_range("0-9") == list("0123456789")
    assert len(expand_char_range("all")) == 95


def test_expand_palette():
    assert expand_charset("ascii_basic") == list(default_palettes()["ascii_basic"])
    assert expand_charset("x-z") == ["x", "y", "z"]


def test_palettes_have_no_duplicates():
    for chars in default_palettes().values():
        assert len(set(chars)) == len(chars)
