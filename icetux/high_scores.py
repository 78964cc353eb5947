"""The single stored high score."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from icetux.sexpr import Reader, SexprError, Symbol, dumps, read

logger = logging.getLogger(__name__)

_HEADER = "supertux-highscore"


@dataclass
class HighScore:
    """The best score and the name of whoever made it."""

    name: str = "Grandma"
    score: int = 100


def load_highscore(path: str | os.PathLike[str]) -> HighScore:
    """Return the high score stored in ``path``, or the default one."""
    highscore = HighScore()
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("%s: %s", path, exc.strerror or exc)
        return highscore
    try:
        root = read(text)
    except SexprError:
        logger.error("HighScore: Parse Error in file %s", path)
        return highscore
    if not (isinstance(root, list) and root and isinstance(root[0], Symbol)
            and root[0] == _HEADER):
        return highscore

    reader = Reader(root[1:])
    score = reader.read_int("score")
    if score is None:
        # The score is written as a quoted number.
        written = reader.read_string("score")
        if written is not None:
            try:
                score = int(written.strip())
            except ValueError:
                score = None
    if score is not None:
        highscore.score = score
    name = reader.read_string("name")
    if name is not None:
        highscore.name = name
    return highscore


def save_highscore(highscore: HighScore, path: str | os.PathLike[str]) -> None:
    """Write ``highscore`` to ``path``, creating its directory if needed."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    text = (
        ";SuperTux HighScores\n"
        f"({_HEADER}\n"
        f"  (name {dumps(str(highscore.name))})\n"
        f"  (score {dumps(str(int(highscore.score)))})\n"
        ")"
    )
    target.write_text(text, encoding="utf-8")