#!/usr/bin/env python3
# ascii_art/glyphs.py
"""
Glyph rasterizer backed by Pillow ImageFont.

render_glyph(char, size, font_name) draws one character centered in a
size x size canvas and returns a boolean bitmap where True marks ink.
Results are memoized; the same (char, size, font) is drawn once.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable

import numpy as np
from PIL import Image, ImageDraw, ImageFont

__all__ = ["Rasterizer", "render_glyph", "load_font"]

log = logging.getLogger(__name__)

# (char, size, font_name) -> bool array of shape (size, size)
Rasterizer = Callable[[str, int, str], np.ndarray]

# Grey level above which an anti-aliased pixel counts as ink.
INK_THRESHOLD = 127


@lru_cache(maxsize=32)
def load_font(font_name: str, size: int) -> ImageFont.ImageFont:
    """
    Resolve *font_name* to a Pillow font at *size* px.
    Accepts a file path or an installed family name; falls back to Pillow's
    bundled font when neither is found.
    """
    candidates = [font_name]
    if not font_name.lower().endswith((".ttf", ".otf", ".ttc")):
        base = font_name.replace(" ", "")
        candidates += [f"{font_name}.ttf", f"{base}.ttf", f"{base.lower()}.ttf", f"{font_name.lower()}.ttf"]
    for name in candidates:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    log.warning("Font %r not found; using Pillow default font", font_name)
    return ImageFont.load_default(size=size)


@lru_cache(maxsize=1024)
def _render_cached(char: str, size: int, font_name: str) -> bytes:
    font = load_font(font_name, size)
    canvas = Image.new("L", (size, size), color=0)
    draw = ImageDraw.Draw(canvas)
    left, top, right, bottom = draw.textbbox((0, 0), char, font=font)
    offset_x = (size - (right - left)) / 2 - left
    offset_y = (size - (bottom - top)) / 2 - top
    draw.text((offset_x, offset_y), char, fill=255, font=font)
    bitmap = np.asarray(canvas, dtype=np.uint8) > INK_THRESHOLD
    return np.packbits(bitmap).tobytes()


def render_glyph(char: str, size: int, font_name: str) -> np.ndarray:
    """Return a (size, size) boolean ink bitmap for *char*."""
    if len(char) != 1:
        raise ValueError(f"expected a single character, got {char!r}")
    if size < 1:
        raise ValueError("glyph size must be positive")
    packed = np.frombuffer(_render_cached(char, size, font_name), dtype=np.uint8)
    return np.unpackbits(packed, count=size * size).reshape(size, size).astype(bool)
