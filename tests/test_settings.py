"""Tests for settings.py: TOML load/save and fallbacks."""
from __future__ import annotations

import pytest

from settings import AppSettings, SettingsManager


@pytest.fixture()
def manager(tmp_path) -> SettingsManager:
    return SettingsManager(settings_dir=tmp_path)


class TestSettingsManager:

    def test_defaults_without_file(self, manager):
        assert manager.settings == AppSettings()
        assert manager.settings.general.encoding == "utf-8"
        assert manager.settings.preview.scale == 1.0

    def test_settings_path(self, manager, tmp_path):
        assert manager.get_settings_path() == tmp_path / "settings.toml"

    def test_ensure_file_complete_creates_file(self, manager):
        assert not manager.get_settings_path().exists()
        manager.ensure_file_complete()
        assert manager.get_settings_path().exists()

    def test_save_and_reload(self, manager, tmp_path):
        manager.settings.general.log_level = "DEBUG"
        manager.settings.preview.scale = 2.5
        manager.settings.preview.max_side = 1024
        manager.settings.preview.background = "#000000"
        manager.save()

        reloaded = SettingsManager(settings_dir=tmp_path)
        assert reloaded.settings.general.log_level == "DEBUG"
        assert reloaded.settings.preview.scale == 2.5
        assert reloaded.settings.preview.max_side == 1024
        assert reloaded.settings.preview.background == "#000000"

    def test_partial_file_keeps_other_defaults(self, tmp_path):
        (tmp_path / "settings.toml").write_text('[preview]\ncurve_width = 5\n', encoding="utf-8")
        s = SettingsManager(settings_dir=tmp_path).settings
        assert s.preview.curve_width == 5
        assert s.preview.point_radius == 3
        assert s.general.log_level == "WARNING"

    def test_corrupted_file_falls_back_to_defaults(self, tmp_path):
        (tmp_path / "settings.toml").write_text("this is = [not toml", encoding="utf-8")
        assert SettingsManager(settings_dir=tmp_path).settings == AppSettings()

    def test_to_toml_sections(self, manager):
        text = manager.to_toml()
        assert "[general]" in text
        assert "[preview]" in text
        assert 'encoding = "utf-8"' in text
