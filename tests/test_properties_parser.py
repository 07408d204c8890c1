"""Tests for .properties parsing."""

from pathlib import Path

from jewel_themes.core.properties import load_properties, parse_properties


def test_separators_and_whitespace():
    props = parse_properties(
        "Button.arc=6\n"
        "Button.margin : 2,14,2,14\n"
        "  Panel.background   =   3C3F41  \n"
    )
    assert props == {
        "Button.arc": "6",
        "Button.margin": "2,14,2,14",
        "Panel.background": "3C3F41",
    }


def test_comments_and_blank_lines_are_skipped():
    props = parse_properties(
        "# comment\n"
        "! also a comment\n"
        "\n"
        "   # indented comment\n"
        "Label.foreground=000000\n"
    )
    assert props == {"Label.foreground": "000000"}


def test_first_separator_wins():
    props = parse_properties("Tooltip.text=a=b:c\nTime:12:30\n")
    assert props["Tooltip.text"] == "a=b:c"
    assert props["Time"] == "12:30"


def test_markers_are_kept_in_keys():
    props = parse_properties("@accent=3574F0\n*.background=@accent\n")
    assert props == {"@accent": "3574F0", "*.background": "@accent"}


def test_bare_key_has_empty_value():
    assert parse_properties("Component.hideMnemonics\n") == {
        "Component.hideMnemonics": ""
    }


def test_duplicate_key_keeps_last_value():
    assert parse_properties("a.key=1\na.key=2\n") == {"a.key": "2"}


def test_empty_key_is_skipped():
    assert parse_properties("=orphan\n") == {}


def test_byte_order_mark_is_ignored():
    assert parse_properties("\ufeffa.key=1") == {"a.key": "1"}


def test_load_from_path(tmp_path: Path):
    path = tmp_path / "Custom.properties"
    path.write_text("Button.arc=8\n", encoding="utf-8")
    assert load_properties(path) == {"Button.arc": "8"}


def test_load_from_stream(tmp_path: Path):
    path = tmp_path / "Custom.properties"
    path.write_text("Button.arc=8\n", encoding="utf-8")
    with path.open(encoding="utf-8") as fh:
        assert load_properties(fh) == {"Button.arc": "8"}
