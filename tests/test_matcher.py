import pytest

from ascii_art.errors import EmptyCharacterSet
from ascii_art.matching.matcher import nearest_char

TABLE = {".": 0.0, "@": 1.0}


@pytest.mark.parametrize(
    "brightness, expected",
    [(0.0, "."), (1.0, "@"), (0.49, "."), (0.51, "@")],
)
def test_monotonic_two_char(brightness, expected):
    assert nearest_char(TABLE, brightness) == expected


def test_tie_goes_to_smallest_code_point():
    assert nearest_char(TABLE, 0.5) == "."
    assert nearest_char({"b": 0.25, "a": 0.75}, 0.5) == "a"


def test_picks_closest_of_many():
    table = {"a": 0.0, "b": 0.3, "c": 0.6, "d": 1.0}
    assert nearest_char(table, 0.35) == "b"
    assert nearest_char(table, 0.5) == "c"


def test_empty_table():
    with pytest.raises(EmptyCharacterSet):
        nearest_char({}, 0.5)
