#!/usr/bin/env python3
# ascii_art/charsets.py
"""
Character range parsing and named palettes.

Range expressions:
    "x"       single character
    "a-z"     inclusive range, either order ("z-a" is the same)
    "all"     printable ASCII, space through '~'
    "space"   the space character
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from ascii_art.errors import InvalidCharRange

__all__ = [
    "parse_char_range",
    "expand_char_range",
    "expand_charset",
    "default_palettes",
]

ALL_RANGE = (" ", "~")


def parse_char_range(expr: str) -> Tuple[str, str]:
    """Return the inclusive (first, last) characters named by *expr*."""
    if expr is None:
        raise InvalidCharRange("Invalid char range! Couldn't Parse")
    if len(expr) == 1:
        return expr, expr
    if expr == "all":
        return ALL_RANGE
    if expr == "space":
        return " ", " "
    if len(expr) == 3 and expr[1] == "-":
        a, b = expr[0], expr[2]
        return (a, b) if a <= b else (b, a)
    raise InvalidCharRange(f"Invalid char range {expr!r}! Couldn't Parse")


def expand_char_range(expr: str) -> List[str]:
    first, last = parse_char_range(expr)
    return [chr(i) for i in range(ord(first), ord(last) + 1)]


def default_palettes() -> Dict[str, str]:
    """Ready-made character sets, usable wherever a charset is expected."""
    return {
        "digits": "0123456789",
        "ascii_basic": " .:-=+*#%@",
        "ascii_dense": " .'`^\",:;Il!i~+_-?][}{1)(|\\/*tfjrxnuvczXYUJCLQ0OZmwqpdbkhao#MW&8%B@$",
        "blocks": " ▏▎▍▌▋▊▉█",
        "shades": " ░▒▓█",
    }


def expand_charset(spec: str) -> List[str]:
    """Characters named by a palette name or a range expression."""
    palettes = default_palettes()
    if spec in palettes:
        return list(dict.fromkeys(palettes[spec]))
    return expand_char_range(spec)
