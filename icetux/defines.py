"""Game-wide constants and small shared enumerations."""

from __future__ import annotations

from enum import IntEnum

VERSION = "0.1.1"

# Milliseconds per frame at 25 frames per second.
FPS = 1000 // 25

# Key and joystick states.
UP = 0
DOWN = 1

# Player sizes.
SMALL = 0
BIG = 1

# Speed constraints.
MAX_WALK_XM = 2.3
MAX_RUN_XM = 3.2
MAX_YM = 20.0
MAX_JUMP_TIME = 375
MAX_LIVES = 99

WALK_SPEED = 1.0
RUN_SPEED = 1.5
JUMP_SPEED = 1.2

# Gameplay.
START_LIVES = 4
MAX_BULLETS = 2

YM_FOR_JUMP = 6.0
WALK_ACCELERATION_X = 0.03
RUN_ACCELERATION_X = 0.04
KILL_BOUNCE_YM = 8.0

SKID_XM = 2.0
SKID_TIME = 200

# Size constraints.
OFFSCREEN_DISTANCE = 256
LEVEL_WIDTH = 375

# Timing constants in milliseconds.
KICKING_TIME = 200

# Scrolling text speeds.
SCROLL_SPEED_CREDITS = 1.2
SCROLL_SPEED_MESSAGE = 1.0


class Direction(IntEnum):
    """Horizontal facing of a game object."""

    LEFT = 0
    RIGHT = 1

    @property
    def opposite(self) -> Direction:
        """The direction facing the other way."""
        return Direction.RIGHT if self is Direction.LEFT else Direction.LEFT


class DyingType(IntEnum):
    """How an object is dying; ``NOT`` is false in a boolean context."""

    NOT = 0
    SQUISHED = 1
    FALLING = 2