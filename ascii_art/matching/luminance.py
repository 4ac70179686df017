#!/usr/bin/env python3
# ascii_art/matching/luminance.py
"""
Average BT.709 luminance of image regions, with a per-engine cache.

LuminanceCache keys on the region fingerprint and is safe to share
between worker threads: each distinct region is computed at most once.
"""

from __future__ import annotations

import threading
from typing import Dict

import numpy as np

from ascii_art.image import Image

__all__ = ["LUMA_WEIGHTS", "region_luminance", "LuminanceCache"]

# ITU-R BT.709 (R, G, B)
LUMA_WEIGHTS = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)


def region_luminance(region: Image) -> float:
    """Mean luminance of *region* in [0, 1]."""
    px = region.pixels().astype(np.float64)
    total = float((px @ LUMA_WEIGHTS).sum())
    return (total / 255.0) / len(px)


class LuminanceCache:
    """
    Fingerprint -> luminance memo. No eviction; one image holds a bounded
    number of distinct regions.
    """

    def __init__(self):
        self._values: Dict[str, float] = {}
        self._key_locks: Dict[str, threading.Lock] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0
        self.computations = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def __contains__(self, region: Image) -> bool:
        with self._lock:
            return region.fingerprint in self._values

    def luminance(self, region: Image) -> float:
        key = region.fingerprint
        with self._lock:
            if key in self._values:
                self.hits += 1
                return self._values[key]
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            # Another thread may have finished while we waited.
            with self._lock:
                if key in self._values:
                    self.hits += 1
                    return self._values[key]
            value = region_luminance(region)
            with self._lock:
                self._values[key] = value
                self._key_locks.pop(key, None)
                self.misses += 1
                self.computations += 1
            return value

    def clear(self) -> None:
        with self._lock:
            self._values.clear()
            self.hits = self.misses = self.computations = 0
