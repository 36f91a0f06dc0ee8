"""Filterable, cursor-driven list of projects."""

from enum import Enum
from typing import Optional

from den.models import Project


class FilterState(Enum):
    UNFILTERED = "unfiltered"
    FILTERING = "filtering"
    FILTER_APPLIED = "filter applied"


class ProjectListView:
    """The project list widget state.

    Owns its own text-filter sub-mode: once filtering starts every key goes
    to handle_key() until the filter is applied or cancelled.
    """

    def __init__(self, items: Optional[list[Project]] = None, title: str = ""):
        self.title = title
        self.items: list[Project] = []
        self.cursor = 0
        self.filter_text = ""
        self.filter_state = FilterState.UNFILTERED
        self.set_items(items or [])

    @property
    def is_filtering(self) -> bool:
        return self.filter_state is FilterState.FILTERING

    def set_items(self, items: list[Project]) -> None:
        self.items = list(items)
        self._clamp()

    def visible_items(self) -> list[Project]:
        if self.filter_state is FilterState.UNFILTERED or not self.filter_text:
            return self.items
        needle = self.filter_text.lower()
        return [item for item in self.items if needle in item.filter_value.lower()]

    def selected_item(self) -> Optional[Project]:
        visible = self.visible_items()
        if not visible:
            return None
        return visible[self.cursor]

    def handle_key(self, key: str, character: Optional[str] = None) -> None:
        if self.filter_state is FilterState.FILTERING:
            self._handle_filter_key(key, character)
            return

        if character == "/" or key == "slash":
            self.filter_state = FilterState.FILTERING
            self.filter_text = ""
            self.cursor = 0
        elif key == "escape" and self.filter_state is FilterState.FILTER_APPLIED:
            self.reset_filter()
        elif key in ("up", "k"):
            self._move(-1)
        elif key in ("down", "j"):
            self._move(1)
        elif key in ("home", "g"):
            self.cursor = 0
        elif key in ("end", "G"):
            self.cursor = max(len(self.visible_items()) - 1, 0)

    def reset_filter(self) -> None:
        self.filter_state = FilterState.UNFILTERED
        self.filter_text = ""
        self._clamp()

    def _handle_filter_key(self, key: str, character: Optional[str]) -> None:
        if key == "escape":
            self.reset_filter()
        elif key == "enter":
            self.filter_state = FilterState.FILTER_APPLIED if self.filter_text else FilterState.UNFILTERED
        elif key == "backspace":
            self.filter_text = self.filter_text[:-1]
        elif character and character.isprintable():
            self.filter_text += character
        self._clamp()

    def _move(self, delta: int) -> None:
        count = len(self.visible_items())
        if count:
            self.cursor = (self.cursor + delta) % count

    def _clamp(self) -> None:
        count = len(self.visible_items())
        self.cursor = min(max(self.cursor, 0), max(count - 1, 0))
