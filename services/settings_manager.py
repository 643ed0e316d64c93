"""
Settings Manager.

Handles target editor settings with JSON file storage.
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from typing import Optional, List
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class EditorDefaults:
    """Defaults applied to newly placed regions and keyboard manipulation."""
    default_fill: str = "black"
    default_opacity: float = 0.7
    movement_delta: int = 1
    scale_delta: int = 1
    default_dim: int = 40
    silhouette_scale: float = 2.5
    vertex_radius: float = 3.0
    preview_dash: float = 5.0


@dataclass
class UISettings:
    """User interface settings."""
    canvas_width: int = 600
    canvas_height: int = 480
    show_grid: bool = False
    recent_files_max: int = 10


@dataclass
class PathSettings:
    """File dialog locations."""
    last_image_dir: str = ""


@dataclass
class AppSettings:
    """Complete application settings."""
    editor: EditorDefaults = field(default_factory=EditorDefaults)
    ui: UISettings = field(default_factory=UISettings)
    paths: PathSettings = field(default_factory=PathSettings)
    recent_images: list = field(default_factory=list)
    window_geometry: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "editor": asdict(self.editor),
            "ui": asdict(self.ui),
            "paths": asdict(self.paths),
            "recent_images": self.recent_images,
            "window_geometry": self.window_geometry,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AppSettings":
        """Create from dictionary, ignoring unknown keys."""
        settings = cls()

        if "editor" in data:
            settings.editor = _build(EditorDefaults, data["editor"])
        if "ui" in data:
            settings.ui = _build(UISettings, data["ui"])
        if "paths" in data:
            settings.paths = _build(PathSettings, data["paths"])
        if "recent_images" in data:
            settings.recent_images = list(data["recent_images"])
        if "window_geometry" in data:
            settings.window_geometry = dict(data["window_geometry"])

        return settings


def _build(cls, data: dict):
    """Instantiate a settings dataclass from the keys it knows about."""
    known = cls.__dataclass_fields__
    return cls(**{k: v for k, v in data.items() if k in known})


class SettingsManager:
    """
    Manages application settings with JSON file storage.

    Settings file location:
    - Windows: %APPDATA%/TargetEditor/settings.json
    - Linux: ~/.config/TargetEditor/settings.json
    - macOS: ~/Library/Application Support/TargetEditor/settings.json
    """

    APP_NAME = "TargetEditor"
    SETTINGS_FILE = "settings.json"

    def __init__(self, config_override: Optional[str] = None):
        """
        Initialize settings manager.

        Args:
            config_override: Optional path to override config file location.
                            Useful for testing.
        """
        self._settings = AppSettings()
        self._config_override = config_override
        self._settings_path = self._get_settings_path()
        self._ensure_settings_dir()
        self.load()

    @property
    def settings(self) -> AppSettings:
        """Get current settings."""
        return self._settings

    @property
    def settings_path(self) -> str:
        """Get the settings file path."""
        return str(self._settings_path)

    @property
    def editor(self) -> EditorDefaults:
        """Get editor defaults."""
        return self._settings.editor

    def get_image_directory(self) -> str:
        """Get the directory to use for Open Image dialogs."""
        last = self._settings.paths.last_image_dir
        if last and os.path.isdir(last):
            return last
        return ""

    def set_image_directory(self, path: str):
        """Remember the directory of the last opened image."""
        if os.path.isfile(path):
            path = os.path.dirname(path)
        self._settings.paths.last_image_dir = path
        self.save()

    def _get_settings_path(self) -> Path:
        """Get platform-specific settings directory."""
        if self._config_override:
            return Path(self._config_override)

        import platform
        system = platform.system()

        if system == "Windows":
            base = os.environ.get("APPDATA", os.path.expanduser("~"))
            config_dir = Path(base) / self.APP_NAME
        elif system == "Darwin":  # macOS
            config_dir = Path.home() / "Library" / "Application Support" / self.APP_NAME
        else:  # Linux and others
            xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
            config_dir = Path(xdg_config) / self.APP_NAME

        return config_dir / self.SETTINGS_FILE

    def _ensure_settings_dir(self):
        """Create settings directory if it doesn't exist."""
        self._settings_path.parent.mkdir(parents=True, exist_ok=True)

    def load(self) -> bool:
        """Load settings from file."""
        if not self._settings_path.exists():
            return False

        try:
            with open(self._settings_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._settings = AppSettings.from_dict(data)
            return True
        except Exception as e:
            logger.warning(f"Error loading settings: {e}")
            return False

    def save(self) -> bool:
        """Save settings to file."""
        try:
            self._ensure_settings_dir()
            with open(self._settings_path, "w", encoding="utf-8") as f:
                json.dump(self._settings.to_dict(), f, indent=2)
            return True
        except Exception as e:
            logger.warning(f"Error saving settings: {e}")
            return False

    def reset(self):
        """Reset settings to defaults."""
        self._settings = AppSettings()
        self.save()

    def add_recent_image(self, file_path: str):
        """Add an image to the recent images list."""
        if file_path in self._settings.recent_images:
            self._settings.recent_images.remove(file_path)

        self._settings.recent_images.insert(0, file_path)

        max_files = self._settings.ui.recent_files_max
        self._settings.recent_images = self._settings.recent_images[:max_files]

        self.save()

    def get_recent_images(self) -> List[str]:
        """Get recent images, filtered to existing files."""
        existing = [f for f in self._settings.recent_images if os.path.exists(f)]
        if len(existing) != len(self._settings.recent_images):
            self._settings.recent_images = existing
            self.save()
        return existing

    def save_window_geometry(self, geometry: bytes, state: bytes):
        """Save window geometry and state."""
        import base64
        self._settings.window_geometry = {
            "geometry": base64.b64encode(geometry).decode("ascii"),
            "state": base64.b64encode(state).decode("ascii"),
        }
        self.save()

    def get_window_geometry(self) -> tuple:
        """Get saved window geometry and state."""
        import base64
        geo = self._settings.window_geometry
        if not geo:
            return None, None

        try:
            geometry = base64.b64decode(geo.get("geometry", ""))
            state = base64.b64decode(geo.get("state", ""))
            return geometry, state
        except Exception:
            return None, None


# Global settings instance
_settings_manager: Optional[SettingsManager] = None


def get_settings(config_override: Optional[str] = None) -> SettingsManager:
    """
    Get the global settings manager instance.

    Args:
        config_override: Optional path to override config location.
                        Only used on first call to initialize.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager(config_override)
    return _settings_manager


def reset_settings_manager():
    """Reset the global settings manager (useful for testing)."""
    global _settings_manager
    _settings_manager = None
