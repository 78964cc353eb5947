"""Levels: tile layers, enemies, reset points, and sets of levels."""

from __future__ import annotations

import itertools
import logging
import os
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Any

from icetux.badguy import BadGuyData
from icetux.kinds import BadGuyKind, badguykind_from_string, badguykind_to_string
from icetux.sexpr import Reader, SexprError, Symbol, dumps, read

logger = logging.getLogger(__name__)

LEVEL_HEIGHT = 15
TILE_SIZE = 32
MIN_WIDTH = 21
DEFAULT_WIDTH = 21

_LEVEL_HEADER = "supertux-level"
_SUBSET_HEADER = "supertux-level-subset"

# Tile ids for the characters of version 0 maps.
_OLD_TILES: dict[str, int] = {
    ".": 0, "x": 104, "X": 77, "y": 78, "Y": 105, "A": 83, "B": 102,
    "!": 103, "a": 84, "C": 85, "D": 86, "E": 87, "F": 88, "c": 89,
    "d": 90, "e": 91, "f": 92, "G": 93, "H": 94, "I": 95, "J": 96,
    "g": 97, "h": 98, "i": 99, "j": 100, "#": 11, "[": 13, "=": 14,
    "]": 15, "$": 82, "^": 76, "*": 80, "|": 79, "\\": 81, "&": 75,
}
# Characters '0', '1' and '2' in version 0 maps place an enemy.
_OLD_ENEMIES = {ord("0"), ord("1"), ord("2")}


class LevelLoadError(ValueError):
    """Raised when a level or level set cannot be read."""


class TileMapType(IntEnum):
    """The three tile layers of a level."""

    BG = 0
    IA = 1
    FG = 2


@dataclass
class Color:
    """An RGB colour with 0-255 components."""

    red: int = 0
    green: int = 0
    blue: int = 0


@dataclass
class ResetPoint:
    """A place Tux can restart from after losing a life."""

    x: int
    y: int


def _blank_layer(width: int) -> list[list[int]]:
    return [[0] * (width + 1) for _ in range(LEVEL_HEIGHT)]


def _tile_index(value: float) -> int:
    """Convert a pixel coordinate to a tile index, truncating toward zero."""
    whole = int(value)
    quotient = abs(whole) // TILE_SIZE
    return quotient if whole >= 0 else -quotient


def _cell(rows: list[list[int]], y: int, x: int) -> int:
    if 0 <= y < len(rows) and 0 <= x < len(rows[y]):
        return rows[y][x]
    return 0


@dataclass
class Level:
    """One level: its settings, three tile layers, enemies and reset points."""

    name: str = "UnNamed"
    author: str = "UnNamed"
    bkgd_image: str = "arctis.png"
    particle_system: str = ""
    bg_tiles: list[list[int]] = field(default_factory=lambda: _blank_layer(DEFAULT_WIDTH))
    ia_tiles: list[list[int]] = field(default_factory=lambda: _blank_layer(DEFAULT_WIDTH))
    fg_tiles: list[list[int]] = field(default_factory=lambda: _blank_layer(DEFAULT_WIDTH))
    time_left: int = 100
    bkgd_top: Color = field(default_factory=lambda: Color(0, 0, 0))
    bkgd_bottom: Color = field(default_factory=lambda: Color(255, 255, 255))
    width: int = DEFAULT_WIDTH
    bkgd_speed: int = 50
    start_pos_x: int = 100
    start_pos_y: int = 170
    gravity: float = 10.0
    back_scrolling: bool = False
    hor_autoscroll_speed: float = 0.0
    badguy_data: list[BadGuyData] = field(default_factory=list)
    reset_points: list[ResetPoint] = field(default_factory=list)

    def init_defaults(self) -> None:
        """Reset the settings and the tile layers to those of a new level."""
        self.name = "UnNamed"
        self.author = "UnNamed"
        self.bkgd_image = "arctis.png"
        self.width = DEFAULT_WIDTH
        self.start_pos_x = 100
        self.start_pos_y = 170
        self.time_left = 100
        self.gravity = 10.0
        self.back_scrolling = False
        self.hor_autoscroll_speed = 0.0
        self.bkgd_speed = 50
        self.bkgd_top = Color(0, 0, 0)
        self.bkgd_bottom = Color(255, 255, 255)
        self.bg_tiles = _blank_layer(self.width)
        self.ia_tiles = _blank_layer(self.width)
        self.fg_tiles = _blank_layer(self.width)

    def cleanup(self) -> None:
        """Drop all tiles, enemies, reset points and names."""
        for layer in (self.bg_tiles, self.ia_tiles, self.fg_tiles):
            for row in layer:
                row.clear()
        self.reset_points.clear()
        self.name = ""
        self.author = ""
        self.bkgd_image = ""
        self.badguy_data.clear()

    def _layer(self, tm: int) -> list[list[int]] | None:
        return {
            TileMapType.BG: self.bg_tiles,
            TileMapType.IA: self.ia_tiles,
            TileMapType.FG: self.fg_tiles,
        }.get(tm)

    def change_size(self, new_width: int) -> None:
        """Resize every layer to ``new_width`` columns (at least 21)."""
        new_width = max(new_width, MIN_WIDTH)
        for layer in (self.ia_tiles, self.bg_tiles, self.fg_tiles):
            for row in layer:
                if len(row) > new_width:
                    del row[new_width:]
                else:
                    row.extend([0] * (new_width - len(row)))
        self.width = new_width

    def change(self, x: float, y: float, tm: int, c: int) -> None:
        """Set the tile under pixel (x, y) in layer ``tm`` to ``c``."""
        yy = _tile_index(y)
        xx = _tile_index(x)
        layer = self._layer(tm)
        if layer is None:
            return
        if 0 <= yy < LEVEL_HEIGHT and 0 <= xx <= self.width and xx < len(layer[yy]):
            layer[yy][xx] = c

    def gettileid(self, x: float, y: float) -> int:
        """Return the interactive tile id under pixel (x, y), or 0."""
        yy = _tile_index(y)
        xx = _tile_index(x)
        if 0 <= yy < LEVEL_HEIGHT and 0 <= xx <= self.width:
            return _cell(self.ia_tiles, yy, xx)
        return 0

    def get_tile_at(self, x: int, y: int) -> int:
        """Return the interactive tile id at tile coordinates (x, y), or 0."""
        if x < 0 or x > self.width or y < 0 or y > LEVEL_HEIGHT - 1:
            return 0
        return _cell(self.ia_tiles, y, x)

    def _layer_text(self, layer: list[list[int]]) -> str:
        return "".join(
            f" {_cell(layer, y, i)} "
            for y in range(LEVEL_HEIGHT)
            for i in range(self.width)
        )

    def dumps(self) -> str:
        """Return the level in its file format."""
        parts = [
            ";SuperTux-Level\n",
            f"({_LEVEL_HEADER}\n",
            "  (version 1)\n",
            f"  (name {dumps(self.name)})\n",
            f"  (author {dumps(self.author)})\n",
            f"  (background {dumps(self.bkgd_image)})\n",
            f"  (particle_system {dumps(self.particle_system)})\n",
            f"  (bkgd_speed {int(self.bkgd_speed)})\n",
            f"  (bkgd_red_top {int(self.bkgd_top.red)})\n",
            f"  (bkgd_green_top {int(self.bkgd_top.green)})\n",
            f"  (bkgd_blue_top {int(self.bkgd_top.blue)})\n",
            f"  (bkgd_red_bottom {int(self.bkgd_bottom.red)})\n",
            f"  (bkgd_green_bottom {int(self.bkgd_bottom.green)})\n",
            f"  (bkgd_blue_bottom {int(self.bkgd_bottom.blue)})\n",
            f"  (time {int(self.time_left)})\n",
            f"  (width {int(self.width)})\n",
            f"  (back_scrolling {'#t' if self.back_scrolling else '#f'})\n",
            f"  (hor_autoscroll_speed {self.hor_autoscroll_speed:2.1f})\n",
            f"  (gravity {self.gravity:2.1f})\n",
            f"  (background-tm {self._layer_text(self.bg_tiles)})\n",
            f"  (interactive-tm {self._layer_text(self.ia_tiles)})\n",
            f"  (foreground-tm {self._layer_text(self.fg_tiles)})\n",
            "(reset-points\n",
        ]
        parts.extend(f"(point (x {p.x}) (y {p.y}))\n" for p in self.reset_points)
        parts.append(")\n")
        parts.append("(objects\n")
        parts.extend(
            f"({badguykind_to_string(bg.kind)} (x {bg.x}) (y {bg.y}) "
            f"(stay-on-platform {'#t' if bg.stay_on_platform else '#f'}))\n"
            for bg in self.badguy_data
        )
        parts.append(")\n")
        parts.append(")\n")
        return "".join(parts)

    def save(self, path: str | os.PathLike[str]) -> None:
        """Write the level to ``path``, creating its directory if needed."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.dumps(), encoding="utf-8")


def _is_header(root: Any, header: str) -> bool:
    return (
        isinstance(root, list)
        and bool(root)
        and isinstance(root[0], Symbol)
        and root[0] == header
    )


def _fill_layer(values: list[int], width: int, label: str) -> list[list[int]]:
    rows = _blank_layer(width)
    for index, value in enumerate(values):
        row, col = divmod(index, width)
        if row >= LEVEL_HEIGHT:
            logger.warning(
                "Level higher than %d %s tiles. Ignoring by cutting tiles.",
                LEVEL_HEIGHT, label,
            )
            break
        rows[row][col] = value
    return rows


def _convert_old_tiles(
    codes: list[int], width: int
) -> tuple[list[int], list[BadGuyData]]:
    """Translate a version 0 tile map into tile ids and enemy placements."""
    converted: list[int] = []
    badguys: list[BadGuyData] = []
    for index, code in enumerate(codes):
        y, x = divmod(index, width)
        if code in _OLD_ENEMIES:
            badguys.append(
                BadGuyData(BadGuyKind(code - ord("0")), x * TILE_SIZE, y * TILE_SIZE, False)
            )
            converted.append(0)
            continue
        tile = _OLD_TILES.get(chr(code)) if 0 <= code < 0x110000 else None
        if tile is None:
            logger.error("conversion will fail, unsupported char: %r (%d)",
                         chr(code) if 0 <= code < 0x110000 else "?", code)
            converted.append(code)
        else:
            converted.append(tile)
    return converted, badguys


def _read_reset_points(reader: Reader) -> list[ResetPoint]:
    points: list[ResetPoint] = []
    for data in reader.read_lisp("reset-points") or []:
        if not isinstance(data, list) or not data:
            continue
        point_reader = Reader(data[1:])
        x = point_reader.read_int("x")
        y = point_reader.read_int("y")
        if x is not None and y is not None:
            points.append(ResetPoint(x, y))
    return points


def _read_objects(reader: Reader) -> list[BadGuyData]:
    badguys: list[BadGuyData] = []
    for data in reader.read_lisp("objects") or []:
        if not isinstance(data, list) or not data:
            continue
        object_reader = Reader(data[1:])
        x = object_reader.read_int("x")
        y = object_reader.read_int("y")
        stay = object_reader.read_bool("stay-on-platform")
        badguys.append(
            BadGuyData(
                badguykind_from_string(str(data[0])),
                0 if x is None else x,
                0 if y is None else y,
                False if stay is None else stay,
            )
        )
    return badguys


def _read_or(reader_value: Any, default: Any) -> Any:
    return default if reader_value is None else reader_value


def parse_level(text: str) -> Level:
    """Build a level from the text of a level file."""
    try:
        root = read(text)
    except SexprError as exc:
        raise LevelLoadError(f"parse error: {exc}") from exc
    if not _is_header(root, _LEVEL_HEADER):
        raise LevelLoadError("not a level file")

    reader = Reader(root[1:])
    version = _read_or(reader.read_int("version"), 0)
    width = reader.read_int("width")
    if width is None:
        raise LevelLoadError("No width specified for level.")
    if width < 1:
        raise LevelLoadError(f"invalid level width {width}")

    time_left = reader.read_int("time")
    if time_left is None:
        logger.warning("no time specified for level")
        time_left = 500

    bg_tm = _read_or(reader.read_int_vector("background-tm"), [])
    ia_tm = reader.read_int_vector("interactive-tm")
    if ia_tm is None:
        ia_tm = _read_or(reader.read_int_vector("tilemap"), [])
    fg_tm = _read_or(reader.read_int_vector("foreground-tm"), [])

    badguys = _read_objects(reader)
    if version == 0:
        ia_tm, old_badguys = _convert_old_tiles(ia_tm, width)
        badguys.extend(old_badguys)

    return Level(
        name=_read_or(reader.read_string("name"), "Noname"),
        author=_read_or(reader.read_string("author"), "unknown author"),
        bkgd_image=_read_or(reader.read_string("background"), ""),
        particle_system=_read_or(reader.read_string("particle_system"), ""),
        bg_tiles=_fill_layer(bg_tm, width, "background"),
        ia_tiles=_fill_layer(ia_tm, width, "interactive"),
        fg_tiles=_fill_layer(fg_tm, width, "foreground"),
        time_left=time_left,
        bkgd_top=Color(
            _read_or(reader.read_int("bkgd_red_top"), 0),
            _read_or(reader.read_int("bkgd_green_top"), 0),
            _read_or(reader.read_int("bkgd_blue_top"), 0),
        ),
        bkgd_bottom=Color(
            _read_or(reader.read_int("bkgd_red_bottom"), 0),
            _read_or(reader.read_int("bkgd_green_bottom"), 0),
            _read_or(reader.read_int("bkgd_blue_bottom"), 0),
        ),
        width=width,
        bkgd_speed=_read_or(reader.read_int("bkgd_speed"), 50),
        start_pos_x=_read_or(reader.read_int("start_pos_x"), 100),
        start_pos_y=_read_or(reader.read_int("start_pos_y"), 170),
        gravity=_read_or(reader.read_float("gravity"), 10.0),
        back_scrolling=_read_or(reader.read_bool("back_scrolling"), False),
        hor_autoscroll_speed=_read_or(reader.read_float("hor_autoscroll_speed"), 0.0),
        badguy_data=badguys,
        reset_points=_read_reset_points(reader),
    )


def load_level(path: str | os.PathLike[str]) -> Level:
    """Read the level file at ``path``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise LevelLoadError(f"Couldn't load file: {path}") from exc
    return parse_level(text)


def level_path(base: str | os.PathLike[str], subset: str, level: int) -> Path:
    """Return where level number ``level`` of ``subset`` lives under ``base``."""
    return Path(base) / "levels" / subset / f"level{level}.stl"


def _subset_info_path(directory: str | os.PathLike[str], name: str) -> Path:
    return Path(directory) / "levels" / name / "info"


@dataclass
class LevelSubset:
    """A named, described set of levels."""

    name: str = ""
    title: str = ""
    description: str = ""
    levels: int = 0

    def dumps(self) -> str:
        """Return the subset's info file text."""
        return (
            ";SuperTux-Level-Subset\n"
            f"({_SUBSET_HEADER}\n"
            f"  (title {dumps(self.title)})\n"
            f"  (description {dumps(self.description)})\n"
            ")"
        )

    def save(self, path: str | os.PathLike[str]) -> None:
        """Write the info file to ``path``, creating its directory if needed."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.dumps(), encoding="utf-8")


def parse_subset(text: str, name: str) -> LevelSubset:
    """Build a subset named ``name`` from the text of its info file."""
    try:
        root = read(text)
    except SexprError as exc:
        raise LevelLoadError(f"parse error: {exc}") from exc
    if not (isinstance(root, list) and root and isinstance(root[0], Symbol)):
        raise LevelLoadError("read error in level subset info")

    subset = LevelSubset(name=name)
    if root[0] != _SUBSET_HEADER:
        return subset
    for entry in root[1:]:
        if not (isinstance(entry, list) and entry and isinstance(entry[0], Symbol)):
            logger.warning("malformed entry in level subset info: %r", entry)
            continue
        value = entry[1] if len(entry) > 1 else None
        if not isinstance(value, str) or isinstance(value, Symbol):
            continue
        if entry[0] == "title":
            subset.title = value
        elif entry[0] == "description":
            subset.description = value
    return subset


def load_subset(directory: str | os.PathLike[str], name: str) -> LevelSubset:
    """Read subset ``name`` under ``directory`` and count its levels."""
    info = _subset_info_path(directory, name)
    if info.is_file():
        subset = parse_subset(info.read_text(encoding="utf-8"), name)
    else:
        subset = LevelSubset(name=name)
    subset.levels = sum(
        1 for _ in itertools.takewhile(
            lambda number: level_path(directory, name, number).is_file(),
            itertools.count(1),
        )
    )
    return subset


def create_subset(directory: str | os.PathLike[str], name: str) -> LevelSubset:
    """Create a new subset under ``directory`` holding one empty level."""
    subset = LevelSubset(
        name=name,
        title="Unknown Title",
        description="No description so far.",
    )
    subset.save(_subset_info_path(directory, name))
    Level().save(level_path(directory, name, 1))
    subset.levels = 1
    return subset