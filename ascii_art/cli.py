#!/usr/bin/env python3
# ascii_art/cli.py
"""
Entry point for ASCII Art.
Loads configuration and the image, then runs the Shell or renders once.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ascii_art.charsets import expand_charset
from ascii_art.config import OUTPUT_MODES, Config
from ascii_art.errors import AsciiArtError
from ascii_art.image import load_image
from ascii_art.logging_conf import setup_logging
from ascii_art.matching.builder import AsciiGridBuilder
from ascii_art.output.renderer import OutputDispatcher
from ascii_art.shell import Shell, ShellState
from ascii_art.version import version_info

log = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ascii-art",
        description="Convert an image to ASCII art by matching region brightness to glyph density.",
    )
    parser.add_argument("image", type=Path, help="Path to the source image file.")
    parser.add_argument("--config", default=None, help="Config file (default: per-user JSON).")
    parser.add_argument("--font", default=None, help="Font used to measure glyph density.")
    parser.add_argument("--chars-per-row", type=int, default=None, help="Initial characters per row.")
    parser.add_argument(
        "--charset",
        default=None,
        help="Initial characters: x, a-z, all, space, or a palette name (default: 0-9).",
    )
    parser.add_argument("--output", choices=OUTPUT_MODES, default=None, help="Where render writes.")
    parser.add_argument("--html-file", default=None, help="HTML output path (default: out.html).")
    parser.add_argument(
        "--render",
        action="store_true",
        help="Render once with the given settings and exit instead of starting the shell.",
    )
    parser.add_argument("--log-level", default=None, help="Override the configured log level.")
    parser.add_argument("--version", action="version", version=version_info())
    return parser


def _apply_overrides(cfg: Config, args: argparse.Namespace) -> None:
    partial = {"shell": {}, "font": {}, "output": {}}
    if args.font:
        partial["font"]["name"] = args.font
    if args.chars_per_row is not None:
        partial["shell"]["initial_chars_in_row"] = args.chars_per_row
    if args.charset:
        partial["shell"]["initial_chars"] = args.charset
    if args.output:
        partial["output"]["mode"] = args.output
    if args.html_file:
        partial["output"]["html_file"] = args.html_file
    cfg.update(partial)


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.chars_per_row is not None and args.chars_per_row < 1:
        parser.error("--chars-per-row must be >= 1")
    if not args.image.exists():
        parser.error(f"Image not found: {args.image}")

    cfg = Config.load(args.config, create_if_missing=args.config is None)
    _apply_overrides(cfg, args)
    setup_logging(cfg, args.log_level)

    try:
        image = load_image(str(args.image), pad=cfg["image"]["pad_to_power_of_two"])
    except OSError as e:
        parser.error(f"Cannot read image {args.image}: {e}")
    log.info("loaded %s as %dx%d", args.image, image.width, image.height)

    if not args.render:
        Shell(image, cfg).run()
        return 0

    builder = AsciiGridBuilder.from_config(cfg)
    outputs = OutputDispatcher(html_file=cfg["output"]["html_file"], font_name=cfg.font_name)
    try:
        charset = expand_charset(cfg["shell"]["initial_chars"])
        # An explicit --chars-per-row is validated as given; the default is clamped.
        if args.chars_per_row is not None:
            chars_per_row = args.chars_per_row
        else:
            chars_per_row = ShellState.for_image(image, cfg).chars_in_row
        grid = builder.build(image, chars_per_row, charset)
        outputs.output(grid, cfg.output_mode)
    except (AsciiArtError, OSError) as e:
        print(f"ascii-art: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
