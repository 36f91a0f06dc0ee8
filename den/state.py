"""Session state: the active mode and its mode-scoped data."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from den.constants import DEFAULT_PAGE_SIZE
from den.list_view import ProjectListView
from den.models import Project


@dataclass
class SuggestionState:
    """Paged autocompletion candidates.

    Invariant: while there are suggestions, index lies on the current page,
    i.e. page*page_size <= index < min((page+1)*page_size, len(suggestions)).
    """

    suggestions: list[str] = field(default_factory=list)
    index: int = 0
    page: int = 0
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def page_count(self) -> int:
        return -(-len(self.suggestions) // self.page_size)

    @property
    def page_start(self) -> int:
        return self.page * self.page_size

    @property
    def page_end(self) -> int:
        return min(self.page_start + self.page_size, len(self.suggestions))

    def page_items(self) -> list[str]:
        return self.suggestions[self.page_start:self.page_end]

    def current(self) -> Optional[str]:
        if not self.suggestions:
            return None
        return self.suggestions[self.index]

    def move(self, delta: int) -> None:
        """Move the selection, wrapping within the current page."""
        if not self.suggestions:
            return
        size = self.page_end - self.page_start
        self.index = self.page_start + (self.index - self.page_start + delta) % size

    def turn_page(self, delta: int) -> None:
        """Change page, wrapping across pages, and select the page's first slot."""
        if not self.suggestions:
            return
        self.page = (self.page + delta) % self.page_count
        self.index = self.page_start


class ContextOption(Enum):
    OPEN_EDITOR = "Open in Editor"
    OPEN_FILE_EXPLORER = "Open in File Explorer"
    COPY_PATH = "Copy Path"
    TOGGLE_FAVORITE = "Toggle Favorite"
    CANCEL = "Cancel"


CONTEXT_OPTIONS = list(ContextOption)


@dataclass
class Browsing:
    pass


@dataclass
class AddingDirectory:
    input: str = ""
    suggestions: SuggestionState = field(default_factory=SuggestionState)
    error: Optional[str] = None
    first_run: bool = False


@dataclass
class ContextMenu:
    project: Project
    cursor: int = 0

    @property
    def option(self) -> ContextOption:
        return CONTEXT_OPTIONS[self.cursor]


@dataclass
class FilteringDelegated:
    pass


Mode = Union[Browsing, AddingDirectory, ContextMenu, FilteringDelegated]


@dataclass
class SessionState:
    """Everything the session controller mutates.

    Exactly one mode is active at a time; data that only makes sense in a
    mode (typed input, menu cursor) lives on the mode object.
    """

    mode: Mode
    projects: list[Project] = field(default_factory=list)
    list_view: ProjectListView = field(default_factory=ProjectListView)
    status: Optional[str] = None
    favorites_only: bool = False
    width: int = 0
    height: int = 0
