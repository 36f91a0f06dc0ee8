"""Constants and default values for Den."""

import sys
from datetime import timedelta
from pathlib import Path

APP_NAME = "den"

# Default locations (overridable through DEN_CONFIG_DIR / DEN_CACHE_DIR)
DEFAULT_CONFIG_DIR = Path.home() / ".config" / APP_NAME
DEFAULT_CACHE_DIR = Path.home() / ".cache" / APP_NAME
CONFIG_FILENAME = "config.json"
CACHE_FILENAME = "projects.json"

# A cached scan older than this is rescanned
CACHE_TTL = timedelta(hours=1)

# Path suggestions shown per page while adding a directory
DEFAULT_PAGE_SIZE = 10

INPUT_PLACEHOLDER = "~/projects"

DEFAULT_THEME = "default"
DEFAULT_LIST_TITLE = "Your Projects"

# Editors and file managers per platform: (default editor, file manager)
PLATFORM_DEFAULTS = {
    "darwin": ("code", "open"),
    "linux": ("vim", "xdg-open"),
    "win32": ("notepad", "explorer"),
}
FALLBACK_PLATFORM_DEFAULTS = ("vim", "open")

DEFAULT_EDITOR_LIST = ["code", "vim", "nano"]

# Clipboard helpers tried in order, per platform
CLIPBOARD_COMMANDS = {
    "darwin": [["pbcopy"]],
    "win32": [["clip"]],
}
FALLBACK_CLIPBOARD_COMMANDS = [
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
]


def platform_defaults() -> tuple[str, str]:
    """Return the (editor, file manager) pair for the running platform."""
    return PLATFORM_DEFAULTS.get(sys.platform, FALLBACK_PLATFORM_DEFAULTS)


def clipboard_commands() -> list[list[str]]:
    """Return the clipboard helper commands for the running platform."""
    return CLIPBOARD_COMMANDS.get(sys.platform, FALLBACK_CLIPBOARD_COMMANDS)


# Session key bindings (textual key names)
KEY_ADD_DIRECTORY = {"a"}
KEY_ACTIVATE = {"enter"}
KEY_OPEN_CONFIG = {"c"}
KEY_TOGGLE_FAVORITES = {"F"}
KEY_FILTER = {"/", "slash"}
KEY_QUIT = {"q", "ctrl+c"}

KEY_UP = {"up", "ctrl+k"}
KEY_DOWN = {"down", "ctrl+j"}
KEY_PAGE_PREV = {"left", "ctrl+h"}
KEY_PAGE_NEXT = {"right", "ctrl+l"}
KEY_BACKSPACE = {"backspace"}
KEY_TAB = {"tab"}
KEY_ENTER = {"enter"}
KEY_ESCAPE = {"escape"}
