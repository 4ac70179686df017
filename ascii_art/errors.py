#!/usr/bin/env python3
# ascii_art/errors.py
"""
Error types raised by the matching engine and its collaborators.

Every error here is a caller-input problem: none is retried, and the
interactive shell prints the message and keeps going.
"""

from __future__ import annotations

__all__ = [
    "AsciiArtError",
    "InvalidResolution",
    "DegenerateInputError",
    "EmptyCharacterSet",
    "DegenerateNormalization",
    "InvalidCharRange",
]


class AsciiArtError(Exception):
    """Base class for all ASCII Art errors."""


class InvalidResolution(AsciiArtError, ValueError):
    """chars_per_row is out of bounds or does not tile the image exactly."""


class DegenerateInputError(AsciiArtError, ValueError):
    """Input admits no meaningful min/max normalization."""


class EmptyCharacterSet(DegenerateInputError):
    """A grid build or normalization was requested with zero characters."""


class DegenerateNormalization(DegenerateInputError):
    """All candidate characters have the same raw density."""


class InvalidCharRange(AsciiArtError, ValueError):
    """A character range expression could not be parsed."""
