#!/usr/bin/env python3
# ascii_art/config.py
"""
Config loader/saver and defaults for ASCII Art.

Goals:
- Single JSON file per user.
- Safe atomic writes.
- Deep-merge of user config over defaults.
- Basic validation with sane fallbacks.
- No external deps.

Usage:
    from ascii_art.config import Config, DEFAULT_CONFIG
    cfg = Config.load()                 # ~/.config/ascii_art/ascii_art.json or OS-specific
    font = cfg["font"]["name"]
    cfg["output"]["mode"] = "console"
    cfg.save()
"""

from __future__ import annotations

import json
import os
import platform
import shutil
import tempfile
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

# ----------------------------
# Defaults
# ----------------------------

DEFAULT_CONFIG: Dict[str, Any] = {
    "shell": {
        "initial_chars_in_row": 64,       # clamped to the image's [min, max]
        "initial_chars": "0-9",           # range expression, see charsets.parse_char_range
        "min_pixels_per_char": 2,
        "prompt": ">>> ",
        "history_file": None,             # path or None for in-memory history
    },
    "font": {
        "name": "Courier New",
        "glyph_size": 16,                 # glyphs are rasterized at size x size
    },
    "matching": {
        "degenerate_policy": "midpoint",  # midpoint | raise
        "workers": 1,                     # >1 computes tile luminance in a thread pool
    },
    "image": {
        "pad_to_power_of_two": True,
    },
    "output": {
        "mode": "html",                   # html | console
        "html_file": "out.html",
    },
    "logging": {
        "level": "WARNING",
        "file": None,                     # path or None
        "rotate_bytes": 5 * 1024 * 1024,
        "rotate_keep": 3,
    },
}

DEGENERATE_POLICIES = ("midpoint", "raise")
OUTPUT_MODES = ("html", "console")

# ----------------------------
# Helpers
# ----------------------------

def _os_config_home() -> str:
    """Return per-OS config base directory."""
    if platform.system() == "Windows":
        base = os.environ.get("APPDATA") or os.path.expanduser("~\\AppData\\Roaming")
        return os.path.join(base, "AsciiArt")
    if platform.system() == "Darwin":
        return os.path.join(os.path.expanduser("~/Library/Application Support"), "AsciiArt")
    return os.path.join(os.path.expanduser("~/.config"), "ascii_art")

def _default_config_path() -> str:
    """Resolve default config path, honoring ASCII_ART_CONFIG env override."""
    env = os.environ.get("ASCII_ART_CONFIG")
    if env:
        return os.path.expanduser(env)
    return os.path.join(_os_config_home(), "ascii_art.json")

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Return deep-merged copy of dicts: values in b override a."""
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out

def _atomic_write_json(path: str, data: Dict[str, Any]) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".tmp_cfg_", dir=os.path.dirname(path) or ".")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)
            f.write("\n")
        os.replace(tmp, path)
    except Exception:
        try:
            os.remove(tmp)
        except OSError:
            pass
        raise

def _coerce_int(v: Any, default: int, minmax: Optional[Tuple[int, int]] = None) -> int:
    try:
        x = int(v)
    except (TypeError, ValueError):
        return int(default)
    if minmax:
        lo, hi = minmax
        if x < lo: x = lo
        if x > hi: x = hi
    return x

def _coerce_bool(v: Any, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("1", "true", "yes", "on"): return True
        if s in ("0", "false", "no", "off"): return False
    return default

# ----------------------------
# Validation
# ----------------------------

def _validate(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Return validated copy with fallbacks applied."""
    c = _deep_merge(DEFAULT_CONFIG, cfg or {})

    # shell
    sh = c["shell"]
    sh["initial_chars_in_row"] = _coerce_int(sh.get("initial_chars_in_row"), 64, (1, 4096))
    sh["initial_chars"] = str(sh.get("initial_chars") or DEFAULT_CONFIG["shell"]["initial_chars"])
    sh["min_pixels_per_char"] = _coerce_int(sh.get("min_pixels_per_char"), 2, (1, 64))
    sh["prompt"] = str(sh.get("prompt") or DEFAULT_CONFIG["shell"]["prompt"])
    hf = sh.get("history_file")
    sh["history_file"] = str(hf) if hf else None

    # font
    f = c["font"]
    f["name"] = str(f.get("name") or DEFAULT_CONFIG["font"]["name"])
    f["glyph_size"] = _coerce_int(f.get("glyph_size"), 16, (4, 256))

    # matching
    m = c["matching"]
    if m.get("degenerate_policy") not in DEGENERATE_POLICIES:
        m["degenerate_policy"] = DEFAULT_CONFIG["matching"]["degenerate_policy"]
    m["workers"] = _coerce_int(m.get("workers"), 1, (1, 64))

    # image
    im = c["image"]
    im["pad_to_power_of_two"] = _coerce_bool(
        im.get("pad_to_power_of_two"), DEFAULT_CONFIG["image"]["pad_to_power_of_two"]
    )

    # output
    o = c["output"]
    if o.get("mode") not in OUTPUT_MODES:
        o["mode"] = DEFAULT_CONFIG["output"]["mode"]
    o["html_file"] = str(o.get("html_file") or DEFAULT_CONFIG["output"]["html_file"])

    # logging
    lg = c["logging"]
    if lg.get("level") not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"):
        lg["level"] = DEFAULT_CONFIG["logging"]["level"]
    lf = lg.get("file")
    lg["file"] = str(lf) if lf else None
    lg["rotate_bytes"] = _coerce_int(lg.get("rotate_bytes"), DEFAULT_CONFIG["logging"]["rotate_bytes"], (256 * 1024, 50 * 1024 * 1024))
    lg["rotate_keep"]  = _coerce_int(lg.get("rotate_keep"), DEFAULT_CONFIG["logging"]["rotate_keep"], (0, 50))

    return c

# ----------------------------
# Public API
# ----------------------------

@dataclass
class Config:
    """Thin wrapper around a nested dict with load/save/merge."""
    data: Dict[str, Any] = field(default_factory=lambda: json.loads(json.dumps(DEFAULT_CONFIG)))
    path: str = field(default_factory=_default_config_path)

    # --- Mapping-style access
    def __getitem__(self, k: str) -> Any:
        return self.data[k]

    def __setitem__(self, k: str, v: Any) -> None:
        self.data[k] = v

    def get(self, k: str, default: Any = None) -> Any:
        return self.data.get(k, default)

    # --- Ops
    @classmethod
    def load(cls, path: Optional[str] = None, create_if_missing: bool = True) -> "Config":
        cfg_path = os.path.expanduser(path) if path else _default_config_path()
        if not os.path.exists(cfg_path):
            cfg = _validate(DEFAULT_CONFIG)
            if create_if_missing:
                _atomic_write_json(cfg_path, cfg)
            return cls(cfg, cfg_path)

        try:
            with open(cfg_path, "r", encoding="utf-8") as f:
                user_cfg = json.load(f)
        except (OSError, ValueError):
            # Corrupt file. Backup and regenerate.
            backup = cfg_path + ".corrupt.bak"
            try:
                shutil.copyfile(cfg_path, backup)
            except OSError:
                pass
            user_cfg = {}

        if not isinstance(user_cfg, dict):
            user_cfg = {}
        return cls(_validate(user_cfg), cfg_path)

    def save(self) -> None:
        """Persist to JSON atomically."""
        full = _validate(self.data)
        _atomic_write_json(self.path, full)
        self.data = full  # sync in-memory with normalized values

    def update(self, partial: Dict[str, Any]) -> None:
        """Deep-merge a partial config then validate."""
        merged = _deep_merge(self.data, partial)
        self.data = _validate(merged)

    # Convenience getters
    @property
    def font_name(self) -> str:
        return self.data["font"]["name"]

    @property
    def output_mode(self) -> str:
        return self.data["output"]["mode"]


__all__ = [
    "Config",
    "DEFAULT_CONFIG",
    "DEGENERATE_POLICIES",
    "OUTPUT_MODES",
    "_default_config_path",
]
