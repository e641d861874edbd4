"""Tests for the command-line driver in main.py."""
from __future__ import annotations

import io
import os

import pytest

from main import format_report, run
from models import Scene
from settings import SettingsManager

_SCENE_DIR = os.path.join(os.path.dirname(__file__), "..", "test_data", "scenes")
UNIFIED = os.path.join(_SCENE_DIR, "unified_small.xml")
LEGACY = os.path.join(_SCENE_DIR, "legacy_curve.xml")


@pytest.fixture()
def cli(tmp_path):
    """Run the CLI with isolated settings; returns (status, stdout, stderr)."""
    manager = SettingsManager(settings_dir=tmp_path / "config")

    def _run(*argv):
        out, err = io.StringIO(), io.StringIO()
        status = run(list(argv), settings_manager=manager, out=out, err=err)
        return status, out.getvalue(), err.getvalue()
    return _run


class TestReport:

    def test_format_report(self):
        text = format_report("a.xml", Scene(width=3, height=4))
        assert "Successfully read XML file: a.xml" in text
        assert "Image dimensions: 3 x 4" in text
        assert "Number of gradient meshes: 0" in text


class TestRun:

    def test_reads_several_files(self, cli):
        status, out, _ = cli(UNIFIED, LEGACY)
        assert status == 0
        assert out.count("Successfully read XML file") == 2
        assert "Image dimensions: 640 x 480" in out
        assert "Image dimensions: 512 x 256" in out
        assert "Number of diffusion curves: 2" in out
        assert "Number of Poisson curves: 1" in out

    def test_stops_at_first_error(self, cli, tmp_path):
        missing = str(tmp_path / "missing.xml")
        status, out, err = cli(missing, UNIFIED)
        assert status == 1
        assert "Error reading" in err
        assert "Successfully read" not in out

    def test_no_files_is_usage_error(self, cli):
        status, _, err = cli()
        assert status == 2
        assert "no input files" in err

    def test_preview(self, cli, tmp_path):
        png = tmp_path / "out.png"
        status, out, _ = cli(UNIFIED, "--preview", str(png))
        assert status == 0
        assert png.exists()
        assert "Wireframe preview written" in out

    def test_preview_needs_single_file(self, cli, tmp_path):
        status, _, err = cli(UNIFIED, LEGACY, "--preview", str(tmp_path / "out.png"))
        assert status == 2
        assert "exactly one" in err

    def test_print_settings(self, cli):
        status, out, _ = cli("--print-settings")
        assert status == 0
        assert "[general]" in out


class TestSettingsFile:

    def test_run_writes_missing_settings_file(self, tmp_path):
        manager = SettingsManager(settings_dir=tmp_path / "config")
        assert not manager.get_settings_path().exists()
        status = run([str(tmp_path / "missing.xml")], settings_manager=manager,
                     out=io.StringIO(), err=io.StringIO())
        assert status == 1
        assert manager.get_settings_path().exists()
        assert "[preview]" in manager.get_settings_path().read_text(encoding="utf-8")

    def test_run_keeps_existing_settings(self, tmp_path):
        settings_file = tmp_path / "settings.toml"
        settings_file.write_text('[general]\nencoding = "latin-1"\n', encoding="utf-8")
        manager = SettingsManager(settings_dir=tmp_path)
        run([UNIFIED], settings_manager=manager, out=io.StringIO(), err=io.StringIO())
        assert settings_file.read_text(encoding="utf-8") == '[general]\nencoding = "latin-1"\n'
