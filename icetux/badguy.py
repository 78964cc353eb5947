"""Enemy behaviour modes and the placement record stored in level files."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from icetux.kinds import BadGuyKind


class BadGuyMode(IntEnum):
    """The state an enemy is in; ``NORMAL`` is false in a boolean context."""

    NORMAL = 0
    FLAT = 1
    KICK = 2
    HELD = 3

    JUMPY_JUMP = 4

    BOMB_TICKING = 5
    BOMB_EXPLODE = 6

    STALACTITE_SHAKING = 7
    STALACTITE_FALL = 8

    FISH_WAIT = 9

    FLY_UP = 10
    FLY_DOWN = 11


@dataclass
class BadGuyData:
    """Where an enemy of a given kind starts in a level.

    Positions are whole pixels: fractional coordinates are truncated toward
    zero, as happens when an enemy's current position is recorded.
    """

    kind: BadGuyKind = BadGuyKind.SNOWBALL
    x: int = 0
    y: int = 0
    stay_on_platform: bool = False

    def __post_init__(self) -> None:
        self.kind = BadGuyKind(self.kind)
        self.x = int(self.x)
        self.y = int(self.y)
        self.stay_on_platform = bool(self.stay_on_platform)