"""Configuration loading and management."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from den.constants import (
    CACHE_FILENAME,
    CONFIG_FILENAME,
    DEFAULT_CACHE_DIR,
    DEFAULT_CONFIG_DIR,
    DEFAULT_EDITOR_LIST,
    DEFAULT_LIST_TITLE,
    DEFAULT_THEME,
    platform_defaults,
)
from den.errors import ConfigError
from den.theme import list_themes


def _read_bool(data: dict, key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be true or false, got {value!r}")
    return value


def _read_list(data: dict, key: str) -> list[str]:
    value = data.get(key) or []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key} must be a list of strings, got {value!r}")
    return list(value)


@dataclass
class Preferences:
    """User preferences stored under "preferences" in config.json."""

    default_editor: str = ""
    editor_list: list[str] = field(default_factory=lambda: list(DEFAULT_EDITOR_LIST))
    default_file_manager: str = ""
    show_hidden_files: bool = False
    show_git_status: bool = True
    theme: str = DEFAULT_THEME
    project_list_title: str = DEFAULT_LIST_TITLE

    @classmethod
    def detect(cls) -> "Preferences":
        """Preferences with the editor and file manager of this platform."""
        editor, file_manager = platform_defaults()
        return cls(default_editor=editor, default_file_manager=file_manager)

    @classmethod
    def from_dict(cls, data: dict) -> "Preferences":
        """Build preferences, back-filling blank fields.

        Raises:
            ConfigError: If a field has the wrong type
        """
        defaults = cls.detect()
        return cls(
            default_editor=data.get("defaultEditor") or defaults.default_editor,
            editor_list=_read_list(data, "editorList") or defaults.editor_list,
            default_file_manager=data.get("defaultFileManager") or defaults.default_file_manager,
            show_hidden_files=_read_bool(data, "showHiddenFiles", defaults.show_hidden_files),
            show_git_status=_read_bool(data, "showGitStatus", defaults.show_git_status),
            theme=data.get("theme") or defaults.theme,
            project_list_title=data.get("projectListTitle") or defaults.project_list_title,
        )

    def to_dict(self) -> dict:
        return {
            "defaultEditor": self.default_editor,
            "editorList": self.editor_list,
            "defaultFileManager": self.default_file_manager,
            "showHiddenFiles": self.show_hidden_files,
            "showGitStatus": self.show_git_status,
            "theme": self.theme,
            "projectListTitle": self.project_list_title,
        }


@dataclass
class Config:
    """Den configuration.

    Loads from .env (for locations) and config.json (for everything else).
    """

    project_dirs: list[str] = field(default_factory=list)
    favorites: list[str] = field(default_factory=list)
    preferences: Preferences = field(default_factory=Preferences.detect)

    # Locations
    config_dir: Path = DEFAULT_CONFIG_DIR
    cache_dir: Path = DEFAULT_CACHE_DIR

    @property
    def config_path(self) -> Path:
        return self.config_dir / CONFIG_FILENAME

    @property
    def cache_path(self) -> Path:
        return self.cache_dir / CACHE_FILENAME

    @classmethod
    def locations(cls) -> tuple[Path, Path]:
        """Resolve the config and cache directories from the environment.

        Returns:
            Tuple of (config_dir, cache_dir)
        """
        load_dotenv()

        config_dir = Path(os.path.expanduser(os.getenv("DEN_CONFIG_DIR", str(DEFAULT_CONFIG_DIR))))
        cache_dir = Path(os.path.expanduser(os.getenv("DEN_CACHE_DIR", str(DEFAULT_CACHE_DIR))))
        return config_dir, cache_dir

    @classmethod
    def load(cls, config_dir: Optional[Path] = None, cache_dir: Optional[Path] = None) -> "Config":
        """Load configuration from config.json.

        Args:
            config_dir: Directory holding config.json (default from environment)
            cache_dir: Directory holding the discovery cache (default from environment)

        Returns:
            Config instance (defaults if the file does not exist)

        Raises:
            ConfigError: If the file exists but cannot be read or parsed
        """
        env_config_dir, env_cache_dir = cls.locations()
        config = cls(
            config_dir=config_dir or env_config_dir,
            cache_dir=cache_dir or env_cache_dir,
        )

        if not config.config_path.exists():
            return config

        try:
            with open(config.config_path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"could not parse config file {config.config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"could not read config file {config.config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"could not parse config file {config.config_path}: expected an object")

        preferences = data.get("preferences") or {}
        if not isinstance(preferences, dict):
            raise ConfigError(f"preferences must be an object, got {preferences!r}")

        config.project_dirs = _read_list(data, "projectDirs")
        config.favorites = _read_list(data, "favorites")
        config.preferences = Preferences.from_dict(preferences)

        return config

    def save(self) -> None:
        """Write the whole configuration back to config.json.

        Raises:
            ConfigError: If the file cannot be written
        """
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w") as f:
                json.dump(self.to_dict(), f, indent=4)
                f.write("\n")
        except OSError as e:
            raise ConfigError(f"could not write config file: {e}") from e

    def reset(self) -> bool:
        """Delete config.json.

        Returns:
            True if a file was removed, False if there was none
        """
        try:
            self.config_path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise ConfigError(f"could not remove config: {e}") from e
        return True

    def is_favorite(self, path: str) -> bool:
        return path in self.favorites

    def set_favorite(self, path: str, favorite: bool) -> None:
        """Add or remove a path from favorites, leaving other entries untouched."""
        if favorite:
            if path not in self.favorites:
                self.favorites.append(path)
        else:
            self.favorites = [fav for fav in self.favorites if fav != path]

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        if not self.preferences.default_editor and not self.preferences.editor_list:
            errors.append("No editor configured. Set preferences.defaultEditor or $EDITOR")

        for directory in self.project_dirs:
            if not os.path.isabs(directory):
                errors.append(f"project directory is not absolute: {directory}")

        if self.preferences.theme not in list_themes():
            errors.append(f"unknown theme '{self.preferences.theme}', using default")

        return errors

    def to_dict(self) -> dict:
        """Convert config to the on-disk dictionary."""
        return {
            "projectDirs": self.project_dirs,
            "favorites": self.favorites,
            "preferences": self.preferences.to_dict(),
        }
