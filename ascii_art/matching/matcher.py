#!/usr/bin/env python3
# ascii_art/matching/matcher.py
"""Nearest-density character lookup."""

from __future__ import annotations

from typing import Mapping

from ascii_art.errors import EmptyCharacterSet

__all__ = ["nearest_char"]


def nearest_char(table: Mapping[str, float], brightness: float) -> str:
    """
    Return the character whose density is closest to *brightness*.
    Equal distances go to the smallest code point.
    """
    if not table:
        raise EmptyCharacterSet("density table is empty")
    best = None
    best_dist = float("inf")
    for c in sorted(table):
        dist = abs(table[c] - brightness)
        if dist < best_dist:
            best, best_dist = c, dist
    return best
