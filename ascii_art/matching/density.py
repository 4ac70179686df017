#!/usr/bin/env python3
# ascii_art/matching/density.py
"""
Glyph density and min/max normalization.

Raw density of a character is its ink cell count divided by
chars_per_row ** 2 (see resolution_divisor). The divisor follows the
output width, not the glyph raster size, so doubling the resolution
quarters every raw density. Normalization stretches the raw values onto
[0, 1]; a set whose values are all equal has no stretch and is reported
as Degenerate, which a policy then resolves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Union

import numpy as np

from ascii_art.errors import DegenerateNormalization, EmptyCharacterSet
from ascii_art.glyphs import Rasterizer

__all__ = [
    "GLYPH_SIZE",
    "DEGENERATE_MIDPOINT",
    "Normal",
    "Degenerate",
    "DEGENERATE",
    "NormalizedDensity",
    "resolution_divisor",
    "glyph_density",
    "raw_densities",
    "normalize_densities",
    "resolve_densities",
    "density_table",
]

log = logging.getLogger(__name__)

GLYPH_SIZE = 16
DEGENERATE_MIDPOINT = 0.5


def resolution_divisor(chars_per_row: int) -> int:
    """Raw glyph densities are ink counts over chars_per_row squared."""
    return chars_per_row * chars_per_row


# -------------------------
# Tagged normalization result
# -------------------------

@dataclass(frozen=True)
class Normal:
    value: float


@dataclass(frozen=True)
class Degenerate:
    """All candidates had the same raw density; no stretch is defined."""


DEGENERATE = Degenerate()

NormalizedDensity = Union[Normal, Degenerate]


# -------------------------
# GlyphDensity
# -------------------------

def glyph_density(
    char: str,
    chars_per_row: int,
    rasterizer: Rasterizer,
    glyph_size: int = GLYPH_SIZE,
    font_name: str = "Courier New",
) -> float:
    bitmap = np.asarray(rasterizer(char, glyph_size, font_name), dtype=bool)
    return float(np.count_nonzero(bitmap)) / resolution_divisor(chars_per_row)


def raw_densities(
    charset: Iterable[str],
    chars_per_row: int,
    rasterizer: Rasterizer,
    glyph_size: int = GLYPH_SIZE,
    font_name: str = "Courier New",
) -> Dict[str, float]:
    return {
        c: glyph_density(c, chars_per_row, rasterizer, glyph_size, font_name)
        for c in sorted(set(charset))
    }


# -------------------------
# DensityNormalizer
# -------------------------

def normalize_densities(raw: Mapping[str, float]) -> Dict[str, NormalizedDensity]:
    """Linear min/max stretch of *raw* onto [0, 1]."""
    if not raw:
        raise EmptyCharacterSet("cannot normalize an empty character set")
    hi = max(raw.values())
    lo = min(raw.values())
    if hi == lo:
        return {c: DEGENERATE for c in raw}
    span = hi - lo
    return {c: Normal((v - lo) / span) for c, v in raw.items()}


def resolve_densities(
    normalized: Mapping[str, NormalizedDensity],
    policy: str = "midpoint",
) -> Dict[str, float]:
    """
    Collapse the tagged results into plain floats.

    policy "midpoint" maps Degenerate to 0.5 so every candidate is equally
    near any brightness and the tie-break picks the character. policy
    "raise" refuses degenerate sets with DegenerateNormalization.
    """
    if policy not in ("midpoint", "raise"):
        raise ValueError(f"unknown degenerate policy: {policy!r}")
    out: Dict[str, float] = {}
    for c, nd in normalized.items():
        if isinstance(nd, Normal):
            out[c] = nd.value
        elif policy == "raise":
            raise DegenerateNormalization(
                "all candidate characters have the same density: "
                + "".join(sorted(normalized))
            )
        else:
            out[c] = DEGENERATE_MIDPOINT
    return out


def density_table(
    charset: Iterable[str],
    chars_per_row: int,
    rasterizer: Rasterizer,
    glyph_size: int = GLYPH_SIZE,
    font_name: str = "Courier New",
    policy: str = "midpoint",
) -> Dict[str, float]:
    """Normalized density per character at the given resolution."""
    raw = raw_densities(charset, chars_per_row, rasterizer, glyph_size, font_name)
    table = resolve_densities(normalize_densities(raw), policy)
    log.debug("density table at %d chars/row: %s", chars_per_row, table)
    return table
