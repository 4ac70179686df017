#!/usr/bin/env python3
# ascii_art/image.py
"""
Immutable RGB image used by the matching engine.

Loads with Pillow, optionally pads to power-of-two dimensions on a white
canvas, and exposes pixels and row-major square sub-images backed by a
read-only numpy buffer.
"""

from __future__ import annotations

import hashlib
from typing import Iterator, Optional

import numpy as np
from PIL import Image as PILImage

from ascii_art.errors import InvalidResolution

__all__ = [
    "Image",
    "load_image",
    "pad_to_power_of_two",
    "next_power_of_two",
]

PAD_COLOR = (255, 255, 255)


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (n >= 1)."""
    p = 1
    while p < n:
        p <<= 1
    return p


def pad_to_power_of_two(img: PILImage.Image) -> PILImage.Image:
    """Center *img* on a white canvas whose sides are powers of two."""
    if img.mode != "RGB":
        img = img.convert("RGB")
    w = next_power_of_two(img.width)
    h = next_power_of_two(img.height)
    if (w, h) == img.size:
        return img
    canvas = PILImage.new("RGB", (w, h), PAD_COLOR)
    canvas.paste(img, ((w - img.width) // 2, (h - img.height) // 2))
    return canvas


class Image:
    """
    Rectangular RGB pixel grid.

    The pixel buffer has shape (height, width, 3), dtype uint8, and is
    marked read-only. Sub-images are views into the parent buffer.
    """

    __slots__ = ("_arr", "_fingerprint")

    def __init__(self, arr: np.ndarray):
        self._init(np.array(arr, dtype=np.uint8))

    def _init(self, arr: np.ndarray) -> None:
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise ValueError(f"expected (height, width, 3) array, got shape {arr.shape}")
        if arr.shape[0] < 1 or arr.shape[1] < 1:
            raise ValueError("image must be at least 1x1")
        arr = arr.view()
        arr.flags.writeable = False
        self._arr = arr
        self._fingerprint: Optional[str] = None

    # -------------
    # Constructors
    # -------------

    @classmethod
    def _view(cls, arr: np.ndarray) -> "Image":
        """Wrap a slice of an already read-only buffer without copying."""
        img = cls.__new__(cls)
        img._init(arr)
        return img

    @classmethod
    def from_array(cls, arr) -> "Image":
        return cls(arr)

    @classmethod
    def from_pil(cls, img: PILImage.Image) -> "Image":
        if img.mode != "RGB":
            img = img.convert("RGB")
        return cls(np.asarray(img, dtype=np.uint8))

    @classmethod
    def solid(cls, width: int, height: int, rgb) -> "Image":
        """Uniform image, handy for tests and previews."""
        arr = np.empty((height, width, 3), dtype=np.uint8)
        arr[...] = rgb
        return cls(arr)

    # -------------
    # Accessors
    # -------------

    @property
    def width(self) -> int:
        return int(self._arr.shape[1])

    @property
    def height(self) -> int:
        return int(self._arr.shape[0])

    @property
    def array(self) -> np.ndarray:
        return self._arr

    def pixels(self) -> np.ndarray:
        """All pixels as an (N, 3) array of RGB triples, row-major."""
        return self._arr.reshape(-1, 3)

    @property
    def fingerprint(self) -> str:
        """SHA1 over shape and content; equal regions share a fingerprint."""
        if self._fingerprint is None:
            h = hashlib.sha1(repr(self._arr.shape).encode("ascii"))
            h.update(np.ascontiguousarray(self._arr).tobytes())
            self._fingerprint = h.hexdigest()
        return self._fingerprint

    def square_sub_images(self, edge: int) -> Iterator["Image"]:
        """
        Yield edge x edge sub-images tiling this image, left-to-right then
        top-to-bottom.
        """
        if edge < 1 or self.width % edge or self.height % edge:
            raise InvalidResolution(
                f"tile edge {edge} does not divide image {self.width}x{self.height}"
            )
        for top in range(0, self.height, edge):
            for left in range(0, self.width, edge):
                yield Image._view(self._arr[top:top + edge, left:left + edge])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Image):
            return NotImplemented
        return self._arr.shape == other._arr.shape and bool(np.array_equal(self._arr, other._arr))

    def __hash__(self) -> int:
        return hash(self.fingerprint)

    def __repr__(self) -> str:
        return f"Image({self.width}x{self.height})"


def load_image(path: str, pad: bool = True) -> Image:
    """Open *path* as RGB, padded to power-of-two sides unless pad is False."""
    with PILImage.open(path) as src:
        img = src.convert("RGB")
    if pad:
        img = pad_to_power_of_two(img)
    return Image.from_pil(img)
