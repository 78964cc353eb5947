import tempfile
from pathlib import Path

from hypothesis import given
from hypothesis import strategies as st

from icetux.configfile import Config, load_config, save_config


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(tmp_path / "absent")
    assert config == Config(debug_mode=False, show_fps=False)


def test_saved_text(tmp_path):
    path = tmp_path / "config"
    save_config(Config(show_fps=True), path)
    assert path.read_text() == (
        "(supertux-config\n"
        "\t;; the following options can be set to #t or #f:\n"
        "\t(show_fps   #t)\n"
        ")\n"
    )


@given(st.booleans())
def test_round_trip(show_fps):
    with tempfile.TemporaryDirectory() as directory:
        path = Path(directory) / "config"
        save_config(Config(show_fps=show_fps), path)
        assert load_config(path).show_fps is show_fps


def test_debug_mode_is_not_read_from_file(tmp_path):
    path = tmp_path / "config"
    path.write_text("(supertux-config (debug_mode #t) (show_fps #t))")
    config = load_config(path)
    assert config.debug_mode is False
    assert config.show_fps is True


def test_wrong_header_gives_defaults(tmp_path):
    path = tmp_path / "config"
    path.write_text("(other-config (show_fps #t))")
    assert load_config(path) == Config()


def test_parse_error_gives_defaults(tmp_path):
    path = tmp_path / "config"
    path.write_text("(supertux-config (show_fps #t)")
    assert load_config(path) == Config()


def test_non_boolean_value_is_ignored(tmp_path):
    path = tmp_path / "config"
    path.write_text('(supertux-config (show_fps "yes"))')
    assert load_config(path).show_fps is False


def test_save_into_missing_directory_is_skipped(tmp_path):
    path = tmp_path / "no" / "such" / "config"
    save_config(Config(show_fps=True), path)
    assert not path.exists()