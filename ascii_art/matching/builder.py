#!/usr/bin/env python3
# ascii_art/matching/builder.py
"""
Brightness-matching engine.

AsciiGridBuilder.build(image, chars_per_row, charset):
- validates the resolution against the image and the character set
- builds the normalized density table for this resolution
- tiles the image into square regions of edge width // chars_per_row
- picks, per region, the character nearest its average luminance

The luminance cache belongs to the builder and survives across builds, so
re-rendering the same image only computes regions it has not seen.
"""

from __future__ import annotations

import logging
import operator
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional, Tuple

from ascii_art.errors import EmptyCharacterSet, InvalidResolution
from ascii_art.glyphs import Rasterizer, render_glyph
from ascii_art.image import Image
from ascii_art.matching.density import GLYPH_SIZE, density_table
from ascii_art.matching.luminance import LuminanceCache
from ascii_art.matching.matcher import nearest_char

__all__ = [
    "AsciiGrid",
    "MIN_PIXELS_PER_CHAR",
    "AsciiGridBuilder",
    "resolution_bounds",
    "build_ascii_grid",
]

log = logging.getLogger(__name__)

AsciiGrid = Tuple[Tuple[str, ...], ...]

MIN_PIXELS_PER_CHAR = 2


def resolution_bounds(width: int, height: int, min_pixels_per_char: int = MIN_PIXELS_PER_CHAR) -> Tuple[int, int]:
    """Return (min, max) chars per row allowed for a width x height image."""
    lo = max(1, width // height)
    hi = max(lo, width // min_pixels_per_char)
    return lo, hi


def _normalize_charset(charset: Iterable[str]) -> Tuple[str, ...]:
    chars = set()
    for c in charset:
        if not isinstance(c, str) or len(c) != 1:
            raise ValueError(f"character set entries must be single characters, got {c!r}")
        chars.add(c)
    return tuple(sorted(chars))


class AsciiGridBuilder:
    def __init__(
        self,
        rasterizer: Optional[Rasterizer] = None,
        font_name: str = "Courier New",
        glyph_size: int = GLYPH_SIZE,
        min_pixels_per_char: int = MIN_PIXELS_PER_CHAR,
        degenerate_policy: str = "midpoint",
        cache: Optional[LuminanceCache] = None,
        workers: int = 1,
    ):
        self.rasterizer = rasterizer or render_glyph
        self.font_name = font_name
        self.glyph_size = glyph_size
        self.min_pixels_per_char = min_pixels_per_char
        self.degenerate_policy = degenerate_policy
        self.cache = cache if cache is not None else LuminanceCache()
        self.workers = max(1, int(workers))

    @classmethod
    def from_config(cls, cfg, **overrides) -> "AsciiGridBuilder":
        options = dict(
            font_name=cfg["font"]["name"],
            glyph_size=cfg["font"]["glyph_size"],
            min_pixels_per_char=cfg["shell"]["min_pixels_per_char"],
            degenerate_policy=cfg["matching"]["degenerate_policy"],
            workers=cfg["matching"]["workers"],
        )
        options.update(overrides)
        return cls(**options)

    # -------------
    # Validation
    # -------------

    def tile_edge(self, image: Image, chars_per_row: int) -> int:
        """Validate chars_per_row for *image* and return the tile edge in px."""
        if isinstance(chars_per_row, bool):
            raise InvalidResolution(f"chars per row must be an integer, got {chars_per_row!r}")
        try:
            chars_per_row = operator.index(chars_per_row)
        except TypeError:
            raise InvalidResolution(f"chars per row must be an integer, got {chars_per_row!r}") from None
        lo, hi = resolution_bounds(image.width, image.height, self.min_pixels_per_char)
        if not lo <= chars_per_row <= hi:
            raise InvalidResolution(
                f"chars per row {chars_per_row} outside [{lo}, {hi}] for "
                f"{image.width}x{image.height} image"
            )
        if image.width % chars_per_row:
            raise InvalidResolution(
                f"chars per row {chars_per_row} does not divide image width {image.width}"
            )
        edge = image.width // chars_per_row
        if image.height % edge:
            raise InvalidResolution(
                f"tile edge {edge} does not divide image height {image.height}"
            )
        return edge

    # -------------
    # Build
    # -------------

    def build(self, image: Image, chars_per_row: int, charset: Iterable[str]) -> AsciiGrid:
        chars = _normalize_charset(charset)
        if not chars:
            raise EmptyCharacterSet("no characters to render with")
        edge = self.tile_edge(image, chars_per_row)
        chars_per_row = image.width // edge

        t0 = time.time()
        table = density_table(
            chars,
            chars_per_row,
            self.rasterizer,
            self.glyph_size,
            self.font_name,
            self.degenerate_policy,
        )
        cols = image.width // edge
        tiles = list(image.square_sub_images(edge))

        def pick(tile: Image) -> str:
            return nearest_char(table, self.cache.luminance(tile))

        if self.workers > 1 and len(tiles) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                cells = list(pool.map(pick, tiles))
        else:
            cells = [pick(tile) for tile in tiles]

        grid = tuple(tuple(cells[i:i + cols]) for i in range(0, len(cells), cols))
        log.info(
            "built %dx%d grid from %dx%d image in %.1fms",
            len(grid), cols, image.width, image.height, (time.time() - t0) * 1000.0,
        )
        log.debug(
            "luminance cache: %d entries, %d hits, %d misses",
            len(self.cache), self.cache.hits, self.cache.misses,
        )
        return grid


def build_ascii_grid(image: Image, chars_per_row: int, charset: Iterable[str], **options) -> AsciiGrid:
    """One-shot build with a throwaway builder."""
    return AsciiGridBuilder(**options).build(image, chars_per_row, charset)
