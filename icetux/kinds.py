"""Kinds of enemies and their names in level files."""

from __future__ import annotations

import logging
from enum import IntEnum

logger = logging.getLogger(__name__)


class BadGuyKind(IntEnum):
    """The kinds of enemies, in level-file numbering order."""

    MRICEBLOCK = 0
    JUMPY = 1
    MRBOMB = 2
    BOMB = 3
    STALACTITE = 4
    FLAME = 5
    FISH = 6
    BOUNCINGSNOWBALL = 7
    FLYINGSNOWBALL = 8
    SPIKY = 9
    SNOWBALL = 10


# Names understood when reading; older maps used some alternative names.
_FROM_NAME: dict[str, BadGuyKind] = {
    "money": BadGuyKind.JUMPY,
    "jumpy": BadGuyKind.JUMPY,
    "laptop": BadGuyKind.MRICEBLOCK,
    "mriceblock": BadGuyKind.MRICEBLOCK,
    "mrbomb": BadGuyKind.MRBOMB,
    "stalactite": BadGuyKind.STALACTITE,
    "flame": BadGuyKind.FLAME,
    "fish": BadGuyKind.FISH,
    "bouncingsnowball": BadGuyKind.BOUNCINGSNOWBALL,
    "flyingsnowball": BadGuyKind.FLYINGSNOWBALL,
    "spiky": BadGuyKind.SPIKY,
    "snowball": BadGuyKind.SNOWBALL,
    "bsod": BadGuyKind.SNOWBALL,
}

_TO_NAME: dict[BadGuyKind, str] = {
    BadGuyKind.JUMPY: "jumpy",
    BadGuyKind.MRICEBLOCK: "mriceblock",
    BadGuyKind.MRBOMB: "mrbomb",
    BadGuyKind.STALACTITE: "stalactite",
    BadGuyKind.FLAME: "flame",
    BadGuyKind.FISH: "fish",
    BadGuyKind.BOUNCINGSNOWBALL: "bouncingsnowball",
    BadGuyKind.FLYINGSNOWBALL: "flyingsnowball",
    BadGuyKind.SPIKY: "spiky",
    BadGuyKind.SNOWBALL: "snowball",
}


def badguykind_from_string(name: str) -> BadGuyKind:
    """Return the kind for a level-file name; unknown names become SNOWBALL."""
    kind = _FROM_NAME.get(name)
    if kind is None:
        logger.warning("Couldn't convert badguy: '%s'", name)
        return BadGuyKind.SNOWBALL
    return kind


def badguykind_to_string(kind: BadGuyKind) -> str:
    """Return the level-file name of a kind; kinds without one give 'snowball'."""
    return _TO_NAME.get(kind, "snowball")