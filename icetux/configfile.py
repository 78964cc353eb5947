"""Loading and saving the game's option file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from icetux.sexpr import Reader, SexprError, Symbol, read

logger = logging.getLogger(__name__)

_HEADER = "supertux-config"


@dataclass
class Config:
    """User options; only ``show_fps`` is stored in the file."""

    debug_mode: bool = False
    show_fps: bool = False


def load_config(path: str | os.PathLike[str]) -> Config:
    """Return the options in ``path``, falling back to defaults.

    A missing, unreadable or malformed file yields the default options.
    """
    config = Config()
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError:
        return config
    try:
        root = read(text)
    except SexprError:
        return config
    if not (isinstance(root, list) and root and isinstance(root[0], Symbol)
            and root[0] == _HEADER):
        return config

    show_fps = Reader(root[1:]).read_bool("show_fps")
    if show_fps is not None:
        config.show_fps = show_fps
    return config


def save_config(config: Config, path: str | os.PathLike[str]) -> None:
    """Write the options to ``path``; a file that cannot be opened is skipped."""
    text = (
        f"({_HEADER}\n"
        "\t;; the following options can be set to #t or #f:\n"
        f"\t(show_fps   {'#t' if config.show_fps else '#f'})\n"
        ")\n"
    )
    try:
        Path(path).write_text(text, encoding="utf-8")
    except OSError as exc:
        logger.warning("could not save config to %s: %s", path, exc)