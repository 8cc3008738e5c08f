"""Tests for the theme preference file."""

import yaml

from unievents import settings


def test_missing_file_uses_light_theme(tmp_path):
    assert settings.load_theme_preference(tmp_path / "settings.yaml") is False


def test_preference_round_trip(tmp_path):
    path = tmp_path / "data" / "settings.yaml"
    assert settings.save_theme_preference(path, True)
    assert yaml.safe_load(path.read_text(encoding="utf-8")) == {"dark": True}
    assert settings.load_theme_preference(path) is True
    assert settings.save_theme_preference(path, False)
    assert settings.load_theme_preference(path) is False


def test_string_values_are_accepted(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text('dark: "TRUE"\n', encoding="utf-8")
    assert settings.load_theme_preference(path) is True


def test_unreadable_file_uses_default(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("dark: [unclosed\n", encoding="utf-8")
    assert settings.load_theme_preference(path) is settings.DEFAULT_DARK_THEME
    path.write_text("- just\n- a list\n", encoding="utf-8")
    assert settings.load_theme_preference(path) is settings.DEFAULT_DARK_THEME


def test_failed_save_returns_false(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    assert settings.save_theme_preference(blocker / "settings.yaml", True) is False
