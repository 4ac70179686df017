#!/usr/bin/env python3
# ascii_art/output/renderer.py
"""
Output dispatcher and the two built-in outputs.

- Common API: OutputBackend.output(grid)
- Backends register by mode name via OutputDispatcher.register(mode, backend)
- "html" writes a standalone HTML page, "console" prints rows to a stream
"""

from __future__ import annotations

import html
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, TextIO

__all__ = [
    "OutputBackend",
    "HtmlAsciiOutput",
    "ConsoleAsciiOutput",
    "OutputDispatcher",
    "grid_lines",
]

log = logging.getLogger(__name__)

Grid = Sequence[Sequence[str]]


def grid_lines(grid: Grid) -> List[str]:
    return ["".join(row) for row in grid]


# -------------------------
# Backends
# -------------------------

class OutputBackend:
    """Interface for all outputs."""
    name: str = "base"

    def output(self, grid: Grid) -> None:
        raise NotImplementedError


_HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>ASCII Art</title>
</head>
<body>
<div style="font-family: '{font}', monospace; font-size: {font_size}px; line-height: {line_height}; white-space: pre;">{body}</div>
</body>
</html>
"""


class HtmlAsciiOutput(OutputBackend):
    """Write the grid as a monospace block into an HTML file."""

    name = "html"

    def __init__(self, path: str, font_name: str, font_size: int = 4, line_height: float = 1.0):
        self.path = path
        self.font_name = font_name
        self.font_size = font_size
        self.line_height = line_height

    def to_html(self, grid: Grid) -> str:
        body = "\n".join(html.escape(line, quote=False) for line in grid_lines(grid))
        return _HTML_TEMPLATE.format(
            font=html.escape(self.font_name),
            font_size=self.font_size,
            line_height=self.line_height,
            body=body,
        )

    def output(self, grid: Grid) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(self.to_html(grid))
        log.info("wrote %d rows to %s", len(grid), self.path)


class ConsoleAsciiOutput(OutputBackend):
    """Print one grid row per line."""

    name = "console"

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    def output(self, grid: Grid) -> None:
        stream = self._stream or sys.stdout
        for line in grid_lines(grid):
            stream.write(line + "\n")
        stream.flush()


# -------------------------
# Dispatcher
# -------------------------

@dataclass
class OutputDispatcher:
    """
    Output strategy holder.
    Use register() to add modes beyond 'html' and 'console'.
    """
    html_file: str = "out.html"
    font_name: str = "Courier New"
    stream: Optional[TextIO] = None
    _backends: Dict[str, OutputBackend] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self):
        self.register("html", HtmlAsciiOutput(self.html_file, self.font_name))
        self.register("console", ConsoleAsciiOutput(self.stream))

    def register(self, mode: str, backend: OutputBackend) -> None:
        self._backends[mode] = backend

    @property
    def modes(self) -> List[str]:
        return sorted(self._backends)

    def output(self, grid: Grid, mode: str = "html") -> None:
        backend = self._backends.get(mode)
        if backend is None:
            raise ValueError(f"Unknown output mode: {mode}")
        backend.output(grid)
