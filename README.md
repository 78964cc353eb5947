# icetux

The game-logic core of a small side-scrolling penguin platformer, in plain
Python with no runtime dependencies: pixel bitmasks, tile-map collision,
enemy kinds, level files and the small settings and high-score files.

## Modules

- `icetux.bitmask` — `Bitmask(width, height)`, a grid of bits for collision
  tests. `getbit`, `setbit` and `clearbit` work on single pixels (and raise
  `IndexError` outside the mask); `overlap`, `overlap_pos` (a shared pixel as
  `(x, y)` in this mask's coordinates, or `None`), `overlap_area` (number of
  shared pixels) and `draw` (OR another mask onto this one, clipped) take the
  other mask and its offset, which may be negative.
- `icetux.defines` — game constants (speeds, timings, `OFFSCREEN_DISTANCE`,
  `KICKING_TIME`, ...) and the `Direction` and `DyingType` enums.
- `icetux.kinds` — `BadGuyKind` and the conversions `badguykind_from_string`
  and `badguykind_to_string`. Old names (`money`, `laptop`, `bsod`) are
  understood; unknown names log a warning and give `SNOWBALL`.
- `icetux.badguy` — `BadGuyMode` and `BadGuyData`, the enemy placement record
  stored in levels.
- `icetux.sexpr` — reader and writer for the parenthesised data format:
  `read`, `dumps`, `Symbol`, `SexprError` and `Reader`, whose `read_int`,
  `read_float`, `read_bool`, `read_string`, `read_int_vector` and `read_lisp`
  look up `(name value ...)` entries and return `None` when an entry is
  missing or of the wrong type.
- `icetux.configfile` — `Config`, `load_config(path)` (defaults for a missing
  or malformed file) and `save_config(config, path)`.
- `icetux.high_scores` — `HighScore` (default `"Grandma"`, 100),
  `load_highscore(path)` and `save_highscore(highscore, path)`.
- `icetux.collision` — `Base` boxes, `TileFlags`, `TileMap`; `rectcollision`,
  `rectcollision_offset`, `collision_object_map`, `collision_func`,
  `collision_goal`, `collision_swept_object_map` and the tile tests
  `gettile`, `issolid`, `isbrick`, `isice`, `isfullbox`, `isdistro`.
  Tiles are 32 pixels square.
- `icetux.level` — `Level` (parse, edit with `change`, resize with
  `change_size`, query with `gettileid` / `get_tile_at`, write with `dumps` /
  `save`), `parse_level`, `load_level`, `level_path`, `LevelSubset`,
  `parse_subset`, `load_subset`, `create_subset`, plus `Color`, `ResetPoint`,
  `TileMapType` and `LevelLoadError`. Version-0 character maps are converted
  to tile ids when read.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Bitmask collision:

```python
from icetux.bitmask import Bitmask

a = Bitmask(40, 40)
b = Bitmask(10, 10)
a.setbit(35, 5)
b.setbit(2, 2)
print(a.overlap(b, 33, 3))       # True
print(a.overlap_pos(b, 33, 3))   # (35, 5)
print(a.overlap_area(b, 33, 3))  # 1
```

Tile-map tests:

```python
from icetux.collision import TileFlags, TileMap, issolid

tilemap = TileMap(rows=[[0, 1]], tiles={1: TileFlags(solid=True)})
print(issolid(tilemap, 40, 5))   # True
print(issolid(tilemap, 10, 5))   # False
```

Reading, editing and writing a level:

```python
from icetux.level import TileMapType, load_level

level = load_level("levels/world1/level1.stl")
print(level.name, level.width, level.time_left)
level.change(64, 32, TileMapType.IA, 11)
print(level.gettileid(64, 32))   # 11
level.save("level1-edited.stl")
```

Level sets are laid out as `<dir>/levels/<name>/info` and
`<dir>/levels/<name>/levelN.stl`; `create_subset(dir, name)` makes a new one
holding one empty level, and `load_subset(dir, name)` reads it back and
counts its levels.

Settings:

```python
from icetux.configfile import load_config, save_config

config = load_config("config")
config.show_fps = True
save_config(config, "config")
```

## What it does not do

This package holds data, file formats and collision rules only. It has no
game loop, no rendering, sprites, sound or input handling, no menus, and no
per-frame enemy behaviour: `BadGuyKind`, `BadGuyMode` and `BadGuyData`
describe enemies, but nothing here moves them. There is no command to start
a game.