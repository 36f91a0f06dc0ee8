"""Color themes. A Theme is passed to the renderer; there is no global theme."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    name: str
    primary: str
    secondary: str
    background: str
    text: str
    selected_text: str
    border: str
    error: str
    success: str


THEMES = {
    "default": Theme(
        name="default",
        primary="color(205)",
        secondary="color(245)",
        background="color(0)",
        text="color(252)",
        selected_text="color(255)",
        border="color(205)",
        error="color(196)",
        success="color(46)",
    ),
    "dracula": Theme(
        name="dracula",
        primary="color(141)",
        secondary="color(61)",
        background="color(236)",
        text="color(253)",
        selected_text="color(255)",
        border="color(141)",
        error="color(203)",
        success="color(84)",
    ),
    "nord": Theme(
        name="nord",
        primary="color(110)",
        secondary="color(109)",
        background="color(237)",
        text="color(254)",
        selected_text="color(255)",
        border="color(110)",
        error="color(167)",
        success="color(108)",
    ),
    "gruvbox": Theme(
        name="gruvbox",
        primary="color(214)",
        secondary="color(142)",
        background="color(235)",
        text="color(223)",
        selected_text="color(229)",
        border="color(214)",
        error="color(167)",
        success="color(142)",
    ),
    "solarized": Theme(
        name="solarized",
        primary="color(136)",
        secondary="color(37)",
        background="color(234)",
        text="color(247)",
        selected_text="color(254)",
        border="color(136)",
        error="color(160)",
        success="color(64)",
    ),
}


def get_theme(name: str) -> Theme:
    """Return the named theme, or the default theme for unknown names."""
    return THEMES.get(name, THEMES["default"])


def list_themes() -> list[str]:
    return sorted(THEMES)
