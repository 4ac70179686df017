#!/usr/bin/env python3
# ascii_art/shell.py
"""
Interactive command shell for rendering one image.

Commands:
    chars              show the current characters
    add <range>        add characters (x, a-z, all, space, or a palette name)
    remove <range>     remove characters
    res up|down        double / halve the characters per row
    console | html     choose the output
    render             build the grid and send it to the output
    help               list commands
    exit               quit
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Set, TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory, InMemoryHistory

from ascii_art.charsets import expand_charset
from ascii_art.config import Config
from ascii_art.errors import AsciiArtError
from ascii_art.image import Image
from ascii_art.matching.builder import AsciiGridBuilder, resolution_bounds
from ascii_art.output.renderer import OutputDispatcher

log = logging.getLogger(__name__)

CMD_EXIT = "exit"

_HELP_TEXT = (
    "Commands:\n"
    "  chars            Show the characters in use\n"
    "  add <range>      Add characters: x, a-z, all, space, or a palette name\n"
    "  remove <range>   Remove characters\n"
    "  res up|down      Double or halve the characters per row\n"
    "  console | html   Choose where render writes\n"
    "  render           Render the image\n"
    "  help             Show this list\n"
    "  exit             Quit\n"
)


@dataclass
class ShellState:
    """Mutable state of one shell session."""
    min_chars_in_row: int
    max_chars_in_row: int
    chars_in_row: int
    output_mode: str = "html"
    chars: Set[str] = field(default_factory=set)

    @classmethod
    def for_image(cls, image: Image, cfg: Config) -> "ShellState":
        sh = cfg["shell"]
        lo, hi = resolution_bounds(image.width, image.height, sh["min_pixels_per_char"])
        initial = max(min(int(sh["initial_chars_in_row"]), hi), lo)
        return cls(lo, hi, initial, cfg.output_mode)

    def res_up(self) -> bool:
        if self.chars_in_row * 2 > self.max_chars_in_row:
            return False
        self.chars_in_row *= 2
        return True

    def res_down(self) -> bool:
        if self.chars_in_row // 2 < self.min_chars_in_row:
            return False
        self.chars_in_row //= 2
        return True


class Shell:
    def __init__(
        self,
        image: Image,
        cfg: Config,
        builder: Optional[AsciiGridBuilder] = None,
        outputs: Optional[OutputDispatcher] = None,
        read_line: Optional[Callable[[str], str]] = None,
        out: Optional[TextIO] = None,
    ):
        self.image = image
        self.cfg = cfg
        self.out = out or sys.stdout
        self.state = ShellState.for_image(image, cfg)
        self.builder = builder or AsciiGridBuilder.from_config(cfg)
        self.outputs = outputs or OutputDispatcher(
            html_file=cfg["output"]["html_file"],
            font_name=cfg.font_name,
            stream=self.out,
        )
        self._commands: Dict[str, Callable[[str], None]] = {
            "chars": self._show_chars,
            "add": self._add_chars,
            "remove": self._remove_chars,
            "res": self._res_change,
            "console": lambda _param: self._set_output("console"),
            "html": lambda _param: self._set_output("html"),
            "render": self._render,
            "help": lambda _param: self._print(_HELP_TEXT, end=""),
        }
        self._read_line = read_line or self._make_prompt()
        self._add_chars(cfg["shell"]["initial_chars"])

    def _make_prompt(self) -> Callable[[str], str]:
        hist_file = self.cfg["shell"].get("history_file")
        history = FileHistory(hist_file) if hist_file else InMemoryHistory()
        session = PromptSession(
            history=history,
            completer=WordCompleter(sorted([CMD_EXIT, "up", "down", *self._commands])),
        )
        return session.prompt

    def _print(self, msg: str = "", end: str = "\n") -> None:
        self.out.write(msg + end)
        self.out.flush()

    # -------------
    # Loop
    # -------------

    def run(self) -> None:
        """Read and execute commands until 'exit', EOF or Ctrl-C."""
        prompt = self.cfg["shell"]["prompt"]
        while True:
            try:
                line = self._read_line(prompt)
            except (EOFError, KeyboardInterrupt):
                break
            if not self.execute(line):
                break

    def execute(self, line: str) -> bool:
        """Run one command line; return False when the shell should stop."""
        words = line.strip().split()
        if not words:
            return True
        cmd = words[0]
        if cmd == CMD_EXIT:
            return False
        param = words[1] if len(words) > 1 else ""
        try:
            handler = self._commands.get(cmd)
            if handler is None:
                raise AsciiArtError("Invalid input!")
            handler(param)
        except (AsciiArtError, OSError) as e:
            log.info("command %r failed: %s", line.strip(), e)
            self._print(str(e))
        return True

    # -------------
    # Commands
    # -------------

    def _show_chars(self, _param: str) -> None:
        self._print(" ".join(sorted(self.state.chars)))

    def _add_chars(self, param: str) -> None:
        self.state.chars.update(expand_charset(param))

    def _remove_chars(self, param: str) -> None:
        self.state.chars.difference_update(expand_charset(param))

    def _res_change(self, param: str) -> None:
        if param == "up":
            if self.state.res_up():
                self._print(f"Width set to {self.state.chars_in_row}")
            else:
                self._print("Max Resolution Reached")
        elif param == "down":
            if self.state.res_down():
                self._print(f"Width set to {self.state.chars_in_row}")
            else:
                self._print("Min Resolution Reached")
        else:
            raise AsciiArtError("Invalid Command for resolution change")

    def _set_output(self, mode: str) -> None:
        self.state.output_mode = mode

    def _render(self, _param: str) -> None:
        grid = self.builder.build(self.image, self.state.chars_in_row, self.state.chars)
        self.outputs.output(grid, self.state.output_mode)
