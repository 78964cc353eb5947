"""Rectangle and tile-map collision tests.

Positions are in pixels; tiles are 32 pixels square. Pixel coordinates are
converted to tile indices by truncating toward zero.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, fields
from typing import Any, TypeVar

TILE_SIZE = 32

# Kinds of object taking part in a collision.
CO_BULLET = 0
CO_BADGUY = 1
CO_PLAYER = 2

# Kinds of collision.
COLLISION_NORMAL = 0
COLLISION_BUMP = 1
COLLISION_SQUISH = 2

T = TypeVar("T")


@dataclass
class Base:
    """An object's bounding box and velocity."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    xm: float = 0.0
    ym: float = 0.0

    def _assign(self, other: Base) -> None:
        for f in fields(other):
            setattr(self, f.name, getattr(other, f.name))


@dataclass(frozen=True)
class TileFlags:
    """Properties of one kind of tile."""

    solid: bool = False
    brick: bool = False
    ice: bool = False
    fullbox: bool = False
    distro: bool = False
    goal: bool = False
    water: bool = False
    data: int = 0


def _tile_index(value: float) -> int:
    whole = int(value)
    if whole >= 0:
        return whole // TILE_SIZE
    return -(-whole // TILE_SIZE)


@dataclass
class TileMap:
    """Rows of tile ids together with the properties of each id.

    Positions outside the rows read as tile id 0.
    """

    rows: Sequence[Sequence[int]]
    tiles: Mapping[int, TileFlags] = field(default_factory=dict)

    def _tile_id(self, x: int, y: int) -> int:
        if 0 <= y < len(self.rows):
            row = self.rows[y]
            if 0 <= x < len(row):
                return row[x]
        return 0

    def tile_at(self, x: int, y: int) -> TileFlags | None:
        """Return the tile at tile coordinates (x, y)."""
        return self.tiles.get(self._tile_id(x, y))

    def tile_at_point(self, x: float, y: float) -> TileFlags | None:
        """Return the tile covering the pixel (x, y)."""
        return self.tile_at(_tile_index(x), _tile_index(y))


def rectcollision(one: Base, two: Base) -> bool:
    """Return True if the two boxes overlap by at least one pixel."""
    return (
        two.x - one.width + 1 <= one.x <= two.x + two.width - 1
        and two.y - one.height + 1 <= one.y <= two.y + two.height - 1
    )


def rectcollision_offset(one: Base, two: Base, off_x: float, off_y: float) -> bool:
    """Like :func:`rectcollision` with ``two`` moved by (off_x, off_y)."""
    return (
        two.x - one.width + off_x + 1 <= one.x <= two.x + two.width + off_x - 1
        and two.y - one.height + off_y + 1 <= one.y <= two.y + two.height + off_y - 1
    )


def _tile_span(start: int, end: float) -> range:
    stop = start
    while stop * TILE_SIZE < end:
        stop += 1
    return range(start, stop)


def collision_object_map(base: Base, tilemap: TileMap | None) -> bool:
    """Return True if the box, shrunk by one pixel, touches a solid tile."""
    if tilemap is None:
        return False
    max_x = int(base.x + base.width)
    max_y = int(base.y + base.height)
    for x in _tile_span(_tile_index(base.x + 1), max_x):
        for y in _tile_span(_tile_index(base.y + 1), max_y):
            tile = tilemap.tile_at(x, y)
            if tile is not None and tile.solid:
                return True
    return False


def collision_func(
    base: Base, tilemap: TileMap, function: Callable[[TileFlags | None], T]
) -> T | None:
    """Call ``function`` on each tile under the box; return its first truthy result."""
    max_x = int(base.x + base.width)
    max_y = int(base.y + base.height)
    for x in _tile_span(_tile_index(base.x), max_x):
        for y in _tile_span(_tile_index(base.y), max_y):
            result = function(tilemap.tile_at(x, y))
            if result:
                return result
    return None


def collision_goal(base: Base, tilemap: TileMap) -> TileFlags | None:
    """Return the first goal tile under the box, if any."""

    def goal(tile: TileFlags | None) -> TileFlags | None:
        return tile if tile is not None and tile.goal else None

    return collision_func(base, tilemap, goal)


def _resolve_diagonal(current: Base, old: Base, xd: float, yd: float,
                      tilemap: TileMap) -> None:
    xt, yt = current.x, current.y
    current.x = old.x - xd
    current.y = old.y - yd
    while collision_object_map(current, tilemap):
        current.x -= xd
        current.y -= yd

    # Try keeping the full horizontal movement, then the full vertical one.
    temp = current.x
    current.x = xt
    if not collision_object_map(current, tilemap):
        return
    current.x = temp
    temp = current.y
    current.y = yt
    if not collision_object_map(current, tilemap):
        return
    current.y = temp
    while not collision_object_map(current, tilemap):
        current.y += yd
    current.y -= yd


def collision_swept_object_map(old: Base, current: Base, tilemap: TileMap) -> None:
    """Move ``current`` back along the path from ``old`` to the first free spot.

    Both boxes are updated in place; afterwards ``old`` equals ``current``.
    """
    if old.x == current.x and old.y == current.y:
        return

    xd: float = 0.0
    yd: float = 0.0
    if old.x == current.x:
        lpath = current.y - old.y
        yd = -1.0 if lpath < 0 else 1.0
        lpath = abs(lpath)
        mode = 1
    elif old.y == current.y:
        lpath = current.x - old.x
        xd = -1.0 if lpath < 0 else 1.0
        lpath = abs(lpath)
        mode = 2
    else:
        lpath = abs(current.x - old.x)
        if current.y - old.y > lpath or old.y - current.y > lpath:
            lpath = current.y - old.y
        lpath = abs(lpath)
        mode = 3
        xd = (current.x - old.x) / lpath
        yd = (current.y - old.y) / lpath

    # Large moves are tested in 16-pixel strides at first.
    steps = int(lpath / 16)
    orig_x, orig_y = old.x, old.y
    old.x += xd
    old.y += yd

    travelled = 0.0
    while travelled <= lpath:
        if steps > 0:
            old.y += yd * 16
            old.x += xd * 16
            steps -= 1

        if collision_object_map(old, tilemap):
            if mode == 1:
                current.y = old.y - yd
                while collision_object_map(current, tilemap):
                    current.y -= yd
            elif mode == 2:
                current.x = old.x - xd
                while collision_object_map(current, tilemap):
                    current.x -= xd
            else:
                _resolve_diagonal(current, old, xd, yd, tilemap)
            break

        old.x += xd
        old.y += yd
        travelled += 1

    if (xd > 0 and current.x < orig_x) or (xd < 0 and current.x > orig_x):
        current.x = orig_x
    if (yd > 0 and current.y < orig_y) or (yd < 0 and current.y > orig_y):
        current.y = orig_y

    old._assign(current)


def gettile(tilemap: TileMap, x: float, y: float) -> TileFlags | None:
    """Return the tile covering the pixel (x, y)."""
    return tilemap.tile_at_point(x, y)


def _has(tilemap: TileMap, x: float, y: float, flag: str) -> bool:
    tile: Any = gettile(tilemap, x, y)
    return tile is not None and bool(getattr(tile, flag))


def issolid(tilemap: TileMap, x: float, y: float) -> bool:
    """Return True if the pixel lies in a solid tile."""
    return _has(tilemap, x, y, "solid")


def isbrick(tilemap: TileMap, x: float, y: float) -> bool:
    """Return True if the pixel lies in a brick tile."""
    return _has(tilemap, x, y, "brick")


def isice(tilemap: TileMap, x: float, y: float) -> bool:
    """Return True if the pixel lies in an ice tile."""
    return _has(tilemap, x, y, "ice")


def isfullbox(tilemap: TileMap, x: float, y: float) -> bool:
    """Return True if the pixel lies in a full bonus box."""
    return _has(tilemap, x, y, "fullbox")


def isdistro(tilemap: TileMap, x: float, y: float) -> bool:
    """Return True if the pixel lies in a coin tile."""
    return _has(tilemap, x, y, "distro")