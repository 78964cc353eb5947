from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from icetux.badguy import BadGuyData
from icetux.kinds import BadGuyKind
from icetux.level import (
    Color,
    Level,
    LevelLoadError,
    LevelSubset,
    ResetPoint,
    TileMapType,
    create_subset,
    level_path,
    load_level,
    load_subset,
    parse_level,
    parse_subset,
)


def _level_text(width, body=""):
    return f"(supertux-level (version 1) (width {width}) {body})"


def test_new_level_has_defaults():
    level = Level()
    assert level.name == "UnNamed"
    assert level.author == "UnNamed"
    assert level.bkgd_image == "arctis.png"
    assert level.width == 21
    assert level.time_left == 100
    assert level.bkgd_bottom == Color(255, 255, 255)
    assert len(level.ia_tiles) == 15
    assert all(row == [0] * 22 for row in level.ia_tiles)


def test_init_defaults_resets_settings():
    level = Level()
    level.name = "other"
    level.change_size(40)
    level.change(32, 32, TileMapType.BG, 5)
    level.init_defaults()
    assert level == Level()


def test_round_trip_of_default_level():
    level = Level()
    assert parse_level(level.dumps()) == level


def test_round_trip_with_content():
    level = Level()
    level.name = 'say "hi"'
    level.author = "someone"
    level.back_scrolling = True
    level.hor_autoscroll_speed = 1.5
    level.change(64, 96, TileMapType.IA, 7)
    level.change(0, 0, TileMapType.BG, 3)
    level.change(640, 448, TileMapType.FG, 9)
    level.reset_points.append(ResetPoint(320, 64))
    level.badguy_data.append(BadGuyData(BadGuyKind.SPIKY, 96, 128, True))
    assert parse_level(level.dumps()) == level


def test_dumps_header_and_format():
    text = Level().dumps()
    assert text.startswith(";SuperTux-Level\n(supertux-level\n  (version 1)\n")
    assert "  (gravity 10.0)\n" in text
    assert "  (back_scrolling #f)\n" in text
    assert text.endswith("(objects\n)\n)\n")


def test_dumps_objects_line():
    level = Level()
    level.badguy_data.append(BadGuyData(BadGuyKind.MRBOMB, 10, 20, False))
    assert "(mrbomb (x 10) (y 20) (stay-on-platform #f))\n" in level.dumps()


def test_missing_width_is_an_error():
    with pytest.raises(LevelLoadError):
        parse_level("(supertux-level (name \"a\"))")


def test_wrong_header_is_an_error():
    with pytest.raises(LevelLoadError):
        parse_level("(something-else (width 3))")


def test_unparseable_text_is_an_error():
    with pytest.raises(LevelLoadError):
        parse_level("(supertux-level (width 3)")


def test_parse_defaults_for_missing_fields():
    level = parse_level(_level_text(3))
    assert level.time_left == 500
    assert level.name == "Noname"
    assert level.author == "unknown author"
    assert (level.start_pos_x, level.start_pos_y) == (100, 170)
    assert level.gravity == 10.0
    assert level.bkgd_speed == 50
    assert level.bkgd_bottom == Color(0, 0, 0)
    assert level.bkgd_image == ""


def test_tiles_fill_rows_of_width():
    level = parse_level(_level_text(2, "(interactive-tm 1 2 3 4)"))
    assert level.ia_tiles[0] == [1, 2, 0]
    assert level.ia_tiles[1] == [3, 4, 0]
    assert level.ia_tiles[2] == [0, 0, 0]


def test_tilemap_used_when_interactive_missing():
    level = parse_level(_level_text(2, "(tilemap 5 6)"))
    assert level.ia_tiles[0] == [5, 6, 0]


def test_tiles_beyond_fifteen_rows_are_cut():
    values = " ".join(str(n) for n in range(1, 21))
    level = parse_level(_level_text(1, f"(background-tm {values})"))
    assert [row[0] for row in level.bg_tiles] == list(range(1, 16))


def test_version_zero_conversion():
    codes = " ".join(str(ord(ch)) for ch in ".x0#1?")
    level = parse_level(f"(supertux-level (width 3) (tilemap {codes}))")
    assert level.ia_tiles[0][:3] == [0, 104, 0]
    assert level.ia_tiles[1][:3] == [11, 0, ord("?")]
    assert level.badguy_data == [
        BadGuyData(BadGuyKind.MRICEBLOCK, 64, 0, False),
        BadGuyData(BadGuyKind.JUMPY, 32, 32, False),
    ]


def test_objects_are_read():
    level = parse_level(_level_text(
        3,
        "(objects (bsod (x 1) (y 2) (stay-on-platform #t)) (laptop (x 4)))",
    ))
    assert level.badguy_data == [
        BadGuyData(BadGuyKind.SNOWBALL, 1, 2, True),
        BadGuyData(BadGuyKind.MRICEBLOCK, 4, 0, False),
    ]


def test_reset_points_need_both_coordinates():
    level = parse_level(_level_text(
        3, "(reset-points (point (x 1) (y 2)) (point (x 5)))"
    ))
    assert level.reset_points == [ResetPoint(1, 2)]


def test_change_size_has_a_minimum():
    level = Level()
    level.change_size(5)
    assert level.width == 21
    assert all(len(row) == 21 for row in level.ia_tiles)


def test_change_size_grows_with_zeros():
    level = Level()
    level.change(0, 0, TileMapType.IA, 4)
    level.change_size(30)
    assert level.width == 30
    assert level.ia_tiles[0][0] == 4
    assert level.ia_tiles[0][29] == 0
    assert all(len(row) == 30 for row in level.fg_tiles)


def test_change_and_lookup():
    level = Level()
    level.change(40, 70, TileMapType.IA, 7)
    assert level.ia_tiles[2][1] == 7
    assert level.gettileid(40, 70) == 7
    assert level.get_tile_at(1, 2) == 7
    assert level.bg_tiles[2][1] == 0


def test_change_outside_is_ignored():
    level = Level()
    level.change(-40, 0, TileMapType.IA, 7)
    level.change(0, 15 * 32, TileMapType.IA, 7)
    level.change(0, 0, 99, 7)
    assert level == Level()


def test_small_negative_coordinates_truncate_to_first_tile():
    level = Level()
    level.change(-5, -5, TileMapType.IA, 3)
    assert level.ia_tiles[0][0] == 3


def test_lookups_out_of_range_give_zero():
    level = Level()
    level.change(0, 0, TileMapType.IA, 3)
    assert level.gettileid(0, -33) == 0
    assert level.get_tile_at(-1, 0) == 0
    assert level.get_tile_at(0, 15) == 0
    assert level.get_tile_at(22, 0) == 0


def test_cleanup_empties_level():
    level = Level()
    level.reset_points.append(ResetPoint(1, 1))
    level.badguy_data.append(BadGuyData())
    level.cleanup()
    assert level.name == ""
    assert level.reset_points == []
    assert level.badguy_data == []
    assert all(row == [] for row in level.ia_tiles)
    assert level.get_tile_at(0, 0) == 0


def test_save_and_load(tmp_path):
    level = Level()
    level.change(96, 32, TileMapType.IA, 12)
    path = tmp_path / "deep" / "dir" / "level1.stl"
    level.save(path)
    assert load_level(path) == level


def test_load_missing_file(tmp_path):
    with pytest.raises(LevelLoadError):
        load_level(tmp_path / "missing.stl")


def test_level_path(tmp_path):
    assert level_path(tmp_path, "test", 3) == Path(tmp_path) / "levels" / "test" / "level3.stl"


def test_subset_dumps_and_parse():
    subset = LevelSubset("world", "Unknown Title", "No description so far.")
    text = subset.dumps()
    assert text.startswith(";SuperTux-Level-Subset\n(supertux-level-subset\n")
    parsed = parse_subset(text, "world")
    assert parsed == subset


def test_parse_subset_skips_bad_entries():
    parsed = parse_subset('(supertux-level-subset 5 (title "T") (description 3))', "w")
    assert parsed.title == "T"
    assert parsed.description == ""


def test_parse_subset_rejects_garbage():
    with pytest.raises(LevelLoadError):
        parse_subset("(", "w")


def test_create_and_load_subset(tmp_path):
    created = create_subset(tmp_path, "fresh")
    loaded = load_subset(tmp_path, "fresh")
    assert loaded == created
    assert loaded.levels == 1
    assert load_level(level_path(tmp_path, "fresh", 1)).name == "UnNamed"


def test_load_subset_counts_consecutive_levels(tmp_path):
    for number in (1, 2, 3, 5):
        Level().save(level_path(tmp_path, "set", number))
    subset = load_subset(tmp_path, "set")
    assert subset.levels == 3
    assert subset.title == ""


@settings(max_examples=30, deadline=None)
@given(st.dictionaries(
    st.tuples(st.integers(0, 20), st.integers(0, 14)),
    st.integers(0, 1000),
    max_size=20,
))
def test_tile_round_trip(cells):
    level = Level()
    for (x, y), value in cells.items():
        level.change(x * 32, y * 32, TileMapType.IA, value)
    loaded = parse_level(level.dumps())
    assert loaded.ia_tiles == level.ia_tiles
    for (x, y), value in cells.items():
        assert loaded.get_tile_at(x, y) == value