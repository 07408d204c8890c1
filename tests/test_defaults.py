"""End-to-end tests for defaults table assembly."""

from pathlib import Path

import pytest
from jewel_themes.core.defaults import DefaultsTable, ThemeEngine, build_defaults
from jewel_themes.core.errors import CyclicReferenceError
from jewel_themes.core.sources import (
    ChainedResourceLocator,
    DirectoryResourceLocator,
    PropertySourceLoader,
)
from jewel_themes.core.theme_config import ThemeEngineConfig
from jewel_themes.core.value_parsers import Color, Integer, Text


def make_loader(tmp_path: Path, parent: str = "", theme: str = "") -> PropertySourceLoader:
    if parent:
        (tmp_path / "Base.properties").write_text(parent, encoding="utf-8")
    if theme:
        (tmp_path / "Theme.properties").write_text(theme, encoding="utf-8")
    return PropertySourceLoader(DirectoryResourceLocator(tmp_path), "Base")


class TestBuildDefaults:
    def test_parent_fallback_and_theme_precedence(self, tmp_path: Path):
        loader = make_loader(
            tmp_path,
            parent="only.parent=1\nshared.key=2\n",
            theme="shared.key=3\n",
        )
        table = build_defaults("Theme", {}, loader=loader)

        assert table["only.parent"] == Integer(1)
        assert table["shared.key"] == Integer(3)

    def test_global_rewrites_every_matching_key(self, tmp_path: Path):
        loader = make_loader(
            tmp_path,
            parent="*.background=FF0000\nPanel.background=00FF00\n",
            theme="Button.background=0000FF\nButton.foreground=000000\n",
        )
        table = build_defaults("Theme", {}, loader=loader)

        assert table["Panel.background"] == Color(0xFF0000)
        assert table["Button.background"] == Color(0xFF0000)
        assert table["Button.foreground"] == Color(0x000000)
        assert "*.background" not in table
        assert "background" not in table

    def test_global_rewrites_base_keys(self, tmp_path: Path):
        loader = make_loader(tmp_path, parent="*.selectionBackground=2675BF\n")
        base = {"List.selectionBackground": "host", "List.font": "host"}

        table = build_defaults("Theme", base, loader=loader)

        assert table["List.selectionBackground"] == Color(0x2675BF)
        assert table["List.font"] == "host"

    def test_references_to_dotted_variables_see_global(self, tmp_path: Path):
        loader = make_loader(
            tmp_path,
            theme="*.background=FF0000\n@panel.background=00FF00\nPanel.x=@panel.background\n",
        )
        table = build_defaults("Theme", {}, loader=loader)

        assert table["Panel.x"] == Color(0xFF0000)
        assert "@panel.background" not in table

    def test_variable_chain(self, tmp_path: Path):
        loader = make_loader(tmp_path, theme="a.key=@b.key\nb.key=10\n")
        table = build_defaults("Theme", {}, loader=loader)
        assert table["a.key"] == Integer(10)

    def test_missing_reference_becomes_text(self, tmp_path: Path):
        loader = make_loader(tmp_path, theme="c.key=@missing.key\n")
        table = build_defaults("Theme", {}, loader=loader)
        assert table["c.key"] == Text("@missing.key")

    def test_variables_are_not_written(self, tmp_path: Path):
        loader = make_loader(tmp_path, theme="@accent=3574F0\nButton.focusColor=@accent\n")
        table = build_defaults("Theme", {}, loader=loader)

        assert "@accent" not in table
        assert table["Button.focusColor"] == Color(0x3574F0)

    def test_overwrites_base_entries(self, tmp_path: Path):
        loader = make_loader(tmp_path, theme="Button.arc=8\n")
        table = build_defaults("Theme", {"Button.arc": 3, "Label.font": "x"}, loader=loader)

        assert table["Button.arc"] == Integer(8)
        assert table["Label.font"] == "x"

    def test_base_defaults_are_not_mutated(self, tmp_path: Path):
        loader = make_loader(tmp_path, theme="Button.arc=8\n")
        base = {"Button.arc": 3}
        build_defaults("Theme", base, loader=loader)
        assert base == {"Button.arc": 3}

    def test_load_error_returns_base_defaults(self, tmp_path: Path, caplog):
        (tmp_path / "Theme.properties").write_bytes(b"\xff\xfe\xfa")
        loader = PropertySourceLoader(DirectoryResourceLocator(tmp_path), "Base")
        base = {"Button.arc": 3}

        with caplog.at_level("ERROR"):
            table = build_defaults("Theme", base, loader=loader)

        assert table.fallback
        assert dict(table) == base
        assert "Failed to load properties for Theme" in caplog.text

    def test_unlistable_theme_dir_returns_base_defaults(self):
        class Unlistable:
            def exists(self, name):
                raise PermissionError(13, "Permission denied", name)

            def read_text(self, name):
                raise AssertionError("not reached")

            def describe(self, name):
                return name

        loader = PropertySourceLoader(ChainedResourceLocator([Unlistable()]), "Base")
        table = build_defaults("Theme", {"a.key": 1}, loader=loader)

        assert table.fallback
        assert dict(table) == {"a.key": 1}

    def test_cycle_degrades_to_raw_text(self, tmp_path: Path, caplog):
        loader = make_loader(tmp_path, theme="@a=@b\n@b=@a\nButton.arc=@a\nok.key=1\n")
        with caplog.at_level("WARNING"):
            table = build_defaults("Theme", {}, loader=loader)

        assert table["Button.arc"] == Text("@a")
        assert table["ok.key"] == Integer(1)
        assert "Cyclic variable reference" in caplog.text

    def test_cycle_raises_in_strict_mode(self, tmp_path: Path):
        loader = make_loader(tmp_path, theme="@a=@b\n@b=@a\nButton.arc=@a\n")
        config = ThemeEngineConfig(strict_references=True)
        with pytest.raises(CyclicReferenceError):
            build_defaults("Theme", {}, loader=loader, config=config)

    def test_idempotent(self, tmp_path: Path):
        loader = make_loader(
            tmp_path,
            parent="*.background=@bg\n@bg=3C3F41\nPanel.background=000000\n",
            theme="Button.arc=@@Component.arc\nComponent.arc=6\n",
        )
        first = build_defaults("Theme", {"x.background": 1}, loader=loader)
        second = build_defaults("Theme", {"x.background": 1}, loader=loader)
        assert first == second
        assert dict(first) == dict(second)


class TestDefaultsTable:
    def test_read_only(self):
        table = DefaultsTable({"a.key": Integer(1)}, "Theme")
        with pytest.raises(TypeError):
            table["a.key"] = Integer(2)  # type: ignore[index]

    def test_helpers(self):
        table = DefaultsTable(
            {"a.color": Color(0xFF0000), "a.int": Integer(1), "host.key": 5},
            "Theme",
        )
        assert table.get_color("a.color") == Color(0xFF0000)
        assert table.get_color("a.int") is None
        assert set(table.resolved()) == {"a.color", "a.int"}
        assert table.to_python() == {"a.color": "#FF0000", "a.int": 1, "host.key": 5}


class TestBundledThemes:
    def test_dark_theme(self):
        table = ThemeEngine().defaults("Jewel Dark")

        assert table.theme == "JewelDarkLaf"
        assert table["Panel.background"] == Color(0x2B2D30)
        assert table["Button.arc"] == Integer(6)
        assert table["Button.borderColor"] == Color(0x4E5157)
        assert table["Button.default.background"] == Color(0x3574F0)
        assert table["Component.arrowType"] == Text("chevron")
        assert table["Button.margin"] == Text("2,14,2,14")

    def test_light_theme_by_identity(self):
        table = ThemeEngine().defaults("JewelLightLaf")
        assert table["Panel.background"] == Color(0xF2F2F2)
        assert table["Button.arc"] == Integer(6)

    def test_control_defaults_are_seeded_from_base(self):
        table = ThemeEngine().defaults("Jewel Dark", {"control": "host-control"})
        assert table["TextArea.inactiveBackground"] == "host-control"
        assert table["TextField.disabledBackground"] == "host-control"
        # *.disabledForeground in the parent set wins over the seeded value
        assert table["Spinner.disabledForeground"] == Color(0x6F737A)

    def test_control_seeding_can_be_disabled(self):
        engine = ThemeEngine(ThemeEngineConfig(seed_control_defaults=False))
        table = engine.defaults("Jewel Dark", {"control": "host-control"})
        assert "TextArea.inactiveBackground" not in table

    def test_unregistered_identity_from_themes_dir(self, tmp_path: Path):
        (tmp_path / "Midnight.properties").write_text(
            "@background=000000\nButton.arc=10\n", encoding="utf-8"
        )
        engine = ThemeEngine(ThemeEngineConfig(themes_dirs=[tmp_path]))
        table = engine.defaults("Midnight")

        assert table["Button.arc"] == Integer(10)
        assert table["Panel.background"] == Color(0x000000)
