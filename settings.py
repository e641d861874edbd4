"""
settings.py

Persistent settings management for usvg-scenes.

Handles cross-platform settings storage using TOML format with platformdirs
for proper user config directory detection.

Settings file location:
    - Windows: %APPDATA%/usvg-scenes/settings.toml
    - macOS: ~/Library/Application Support/usvg-scenes/settings.toml
    - Linux: ~/.config/usvg-scenes/settings.toml

Only the command-line driver reads these settings.  The parser itself takes
its options as arguments and never touches the global manager.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

# TOML reading - use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

APP_NAME = "usvg-scenes"

log = logging.getLogger(__name__)

# Global settings manager instance (singleton)
_settings_manager: Optional["SettingsManager"] = None


def get_settings() -> "SettingsManager":
    """Get the global settings manager instance.

    Returns:
        The singleton SettingsManager instance.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
    return _settings_manager


# =============================================================================
# General Settings
# =============================================================================

@dataclass
class GeneralSettings:
    """Reader and logging settings.

    Defaults:
        encoding: "utf-8"
        log_level: "WARNING"
    """
    encoding: str = "utf-8"      # Default: "utf-8"
    log_level: str = "WARNING"   # Default: "WARNING"


# =============================================================================
# Preview Settings
# =============================================================================

@dataclass
class PreviewSettings:
    """Wireframe preview settings.

    Defaults:
        background: "#FFFFFF"
        curve_width: 2
        point_radius: 3
        mesh_line_color: "#9E9E9E"
        poisson_color: "#8E44AD"
        scale: 1.0
        max_side: 4096
    """
    background: str = "#FFFFFF"       # Default: white
    curve_width: int = 2              # Default: 2 pixels
    point_radius: int = 3             # Default: 3 pixels
    mesh_line_color: str = "#9E9E9E"  # Default: gray
    poisson_color: str = "#8E44AD"    # Default: purple
    scale: float = 1.0                # Default: 1.0 (image size)
    max_side: int = 4096              # Default: longest canvas side in pixels


# =============================================================================
# Main App Settings
# =============================================================================

@dataclass
class AppSettings:
    """Application settings with default values.

    Attributes:
        general: Reader and logging settings.
        preview: Wireframe preview settings.
    """
    general: GeneralSettings = field(default_factory=GeneralSettings)
    preview: PreviewSettings = field(default_factory=PreviewSettings)


# =============================================================================
# Settings Manager
# =============================================================================

class SettingsManager:
    """Manages loading, saving, and accessing application settings.

    Settings are stored in a TOML file at the platform-appropriate location.
    If the settings file doesn't exist, defaults are used and the file is
    created on first save.

    Args:
        app_name: Application name used for the config directory.
        settings_dir: Override for the config directory (used by tests).
    """

    def __init__(self, app_name: str = APP_NAME, settings_dir: Optional[Path] = None):
        self.settings_dir = Path(settings_dir) if settings_dir else Path(platformdirs.user_config_dir(app_name))
        self.settings_file = self.settings_dir / "settings.toml"
        self.settings = self.load()
        self._needs_save = not self.settings_file.exists()  # Save if file didn't exist

    def ensure_file_complete(self) -> None:
        """Ensure settings file exists with all sections."""
        if self._needs_save or not self.settings_file.exists():
            self.save()
            self._needs_save = False

    def load(self) -> AppSettings:
        """Load settings from the TOML file.

        Returns:
            AppSettings instance with values from file or defaults if file
            doesn't exist or is invalid.
        """
        if not self.settings_file.exists():
            return AppSettings()

        try:
            with open(self.settings_file, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            # If file is corrupted or unreadable, return defaults
            log.warning("Ignoring settings file %s: %s", self.settings_file, e)
            return AppSettings()

        return self._parse_toml(data)

    def _parse_toml(self, data: Dict[str, Any]) -> AppSettings:
        """Parse TOML data into AppSettings.

        Args:
            data: Parsed TOML dictionary.

        Returns:
            AppSettings instance populated from TOML data.
        """
        settings = AppSettings()

        # General section
        general = data.get("general", {})
        settings.general.encoding = general.get("encoding", settings.general.encoding)
        settings.general.log_level = general.get("log_level", settings.general.log_level)

        # Preview section
        p = data.get("preview", {})
        settings.preview.background = p.get("background", settings.preview.background)
        settings.preview.curve_width = p.get("curve_width", settings.preview.curve_width)
        settings.preview.point_radius = p.get("point_radius", settings.preview.point_radius)
        settings.preview.mesh_line_color = p.get("mesh_line_color", settings.preview.mesh_line_color)
        settings.preview.poisson_color = p.get("poisson_color", settings.preview.poisson_color)
        settings.preview.scale = p.get("scale", settings.preview.scale)
        settings.preview.max_side = p.get("max_side", settings.preview.max_side)

        return settings

    def save(self) -> None:
        """Save current settings to the TOML file.

        Creates the settings directory if it doesn't exist.
        """
        self.settings_dir.mkdir(parents=True, exist_ok=True)

        data = self._to_toml_dict()

        with open(self.settings_file, "wb") as f:
            tomli_w.dump(data, f)

    def _to_toml_dict(self) -> Dict[str, Any]:
        """Convert settings to a TOML-compatible dictionary structure.

        Returns:
            Dictionary organized by TOML sections.
        """
        s = self.settings
        return {
            "general": {
                "encoding": s.general.encoding,
                "log_level": s.general.log_level,
            },
            "preview": {
                "background": s.preview.background,
                "curve_width": s.preview.curve_width,
                "point_radius": s.preview.point_radius,
                "mesh_line_color": s.preview.mesh_line_color,
                "poisson_color": s.preview.poisson_color,
                "scale": s.preview.scale,
                "max_side": s.preview.max_side,
            },
        }

    def to_toml(self) -> str:
        """Convert current settings to a TOML-formatted string.

        Returns:
            TOML representation of the current settings.
        """
        return tomli_w.dumps(self._to_toml_dict())

    def get_settings_path(self) -> Path:
        """Get the path to the settings file.

        Returns:
            Path object pointing to the settings file location.
        """
        return self.settings_file
