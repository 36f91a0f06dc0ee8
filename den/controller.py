"""The session state machine.

SessionController.handle() takes one event, mutates the session state and
returns the side effects to perform as command values. Reads of the
filesystem are limited to path suggestions and validating an added
directory; nothing here writes files or spawns processes.
"""

import os
import stat
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Optional

from den.config import Config
from den.constants import (
    DEFAULT_PAGE_SIZE,
    KEY_ACTIVATE,
    KEY_ADD_DIRECTORY,
    KEY_BACKSPACE,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_FILTER,
    KEY_OPEN_CONFIG,
    KEY_PAGE_NEXT,
    KEY_PAGE_PREV,
    KEY_QUIT,
    KEY_TAB,
    KEY_TOGGLE_FAVORITES,
    KEY_UP,
)
from den.errors import (
    DirectoryNotFoundError,
    DirectoryValidationError,
    DuplicateDirectoryError,
    PathNotDirectoryError,
)
from den.events import (
    Command,
    CopyToClipboard,
    Event,
    KeyPress,
    OpenEditor,
    OpenFileExplorer,
    ProjectsLoaded,
    Quit,
    Rescan,
    Resize,
    SaveCache,
    SaveConfig,
    StatusReport,
)
from den.list_view import ProjectListView
from den.models import Project
from den.state import (
    CONTEXT_OPTIONS,
    AddingDirectory,
    Browsing,
    ContextMenu,
    ContextOption,
    FilteringDelegated,
    SessionState,
    SuggestionState,
)
from den.tools.scanner import build_cache
from den.tools.suggest import suggest

SuggestFn = Callable[[str, bool], list[str]]


def _matches(event: KeyPress, keys: set[str]) -> bool:
    return event.key in keys or (event.character is not None and event.character in keys)


def validate_directory(text: str, existing: list[str]) -> str:
    """Resolve typed text to an absolute directory that is not yet configured.

    Returns:
        The absolute path

    Raises:
        DirectoryValidationError: If the path is empty, missing, not a
            directory, or already configured
    """
    if not text.strip():
        raise DirectoryValidationError(text, "enter a directory path")

    path = os.path.abspath(os.path.expanduser(text.strip()))

    try:
        info = os.stat(path)
    except OSError as e:
        raise DirectoryNotFoundError(path, e.strerror or str(e)) from e

    if not stat.S_ISDIR(info.st_mode):
        raise PathNotDirectoryError(path)

    if path in existing:
        raise DuplicateDirectoryError(path)

    return path


class SessionController:
    """Modal state machine driving the interactive session."""

    def __init__(
        self,
        config: Config,
        projects: Optional[list[Project]] = None,
        scanned_at: Optional[datetime] = None,
        suggest_fn: SuggestFn = suggest,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        """Initialize controller.

        Args:
            config: Configuration; project_dirs and favorites are appended to in place
            projects: Projects loaded at startup (from cache or scan)
            scanned_at: When those projects were scanned
            suggest_fn: Path suggestion function (partial, show_hidden) -> paths
            page_size: Suggestions per page
        """
        self.config = config
        self.suggest_fn = suggest_fn
        self.page_size = page_size
        self.scanned_at = scanned_at or datetime.now(timezone.utc)
        # Rescans are numbered; a result older than the newest applied one is dropped
        self.rescan_generation = 0
        self.applied_generation = 0

        list_view = ProjectListView(title=config.preferences.project_list_title)
        self.state = SessionState(mode=Browsing(), projects=list(projects or []), list_view=list_view)
        self._refresh_view()

        if not config.project_dirs:
            self.state.mode = self._start_adding(first_run=True)

    @property
    def mode(self):
        return self.state.mode

    def handle(self, event: Event) -> list[Command]:
        """Process one event to completion.

        Args:
            event: Key press or system event

        Returns:
            Side effects for the runtime to carry out, in order
        """
        if isinstance(event, ProjectsLoaded):
            return self._on_projects_loaded(event)
        if isinstance(event, StatusReport):
            self.state.status = event.message
            return []
        if isinstance(event, Resize):
            self.state.width = event.width
            self.state.height = event.height
            return []
        if not isinstance(event, KeyPress):
            return []

        mode = self.state.mode
        if isinstance(mode, FilteringDelegated):
            return self._on_filtering_key(event)
        if isinstance(mode, AddingDirectory):
            return self._on_adding_key(mode, event)
        if isinstance(mode, ContextMenu):
            return self._on_context_key(mode, event)
        return self._on_browsing_key(event)

    # Browsing

    def _on_browsing_key(self, event: KeyPress) -> list[Command]:
        list_view = self.state.list_view

        if _matches(event, KEY_QUIT):
            return [Quit()]

        if _matches(event, KEY_FILTER):
            list_view.handle_key(event.key, event.character)
            if list_view.is_filtering:
                self.state.mode = FilteringDelegated()
            return []

        if _matches(event, KEY_ADD_DIRECTORY):
            self.state.mode = self._start_adding()
            return []

        if event.key in KEY_ACTIVATE:
            project = list_view.selected_item()
            if project is not None:
                self.state.mode = ContextMenu(project=project, cursor=0)
            return []

        if _matches(event, KEY_OPEN_CONFIG):
            return [OpenEditor(str(self.config.config_path)), Quit()]

        if _matches(event, KEY_TOGGLE_FAVORITES):
            self.state.favorites_only = not self.state.favorites_only
            self._refresh_view()
            return []

        list_view.handle_key(event.key, event.character)
        return []

    def _on_filtering_key(self, event: KeyPress) -> list[Command]:
        list_view = self.state.list_view
        list_view.handle_key(event.key, event.character)
        if not list_view.is_filtering:
            self.state.mode = Browsing()
        return []

    # Adding a directory

    def _start_adding(self, first_run: bool = False) -> AddingDirectory:
        return AddingDirectory(input="", suggestions=self._suggestions_for(""), first_run=first_run)

    def _suggestions_for(self, text: str) -> SuggestionState:
        suggestions = self.suggest_fn(text, self.config.preferences.show_hidden_files)
        return SuggestionState(suggestions=list(suggestions), page_size=self.page_size)

    def _on_adding_key(self, mode: AddingDirectory, event: KeyPress) -> list[Command]:
        if event.key in KEY_ENTER:
            return self._commit_directory(mode)

        if event.key in KEY_ESCAPE:
            if not self.config.project_dirs:
                return [Quit()]
            self.state.mode = Browsing()
            return []

        if event.key in KEY_TAB:
            current = mode.suggestions.current()
            if current is not None:
                mode.input = current
                mode.suggestions = self._suggestions_for(mode.input)
            return []

        if event.key in KEY_UP:
            mode.suggestions.move(-1)
        elif event.key in KEY_DOWN:
            mode.suggestions.move(1)
        elif event.key in KEY_PAGE_PREV:
            mode.suggestions.turn_page(-1)
        elif event.key in KEY_PAGE_NEXT:
            mode.suggestions.turn_page(1)
        elif event.key in KEY_BACKSPACE:
            if mode.input:
                mode.input = mode.input[:-1]
                mode.suggestions = self._suggestions_for(mode.input)
            mode.error = None
        elif event.is_printable:
            mode.input += event.character
            mode.suggestions = self._suggestions_for(mode.input)
            mode.error = None

        return []

    def _commit_directory(self, mode: AddingDirectory) -> list[Command]:
        try:
            path = validate_directory(mode.input, self.config.project_dirs)
        except DirectoryValidationError as e:
            mode.error = str(e)
            return []

        self.config.project_dirs.append(path)
        self.state.mode = Browsing()
        self.state.list_view.reset_filter()
        self.state.status = f"Scanning {path}..."
        self.rescan_generation += 1
        return [SaveConfig(), Rescan(list(self.config.project_dirs), generation=self.rescan_generation)]

    # Context menu

    def _on_context_key(self, mode: ContextMenu, event: KeyPress) -> list[Command]:
        if event.key in KEY_UP or event.key == "k":
            mode.cursor = (mode.cursor - 1) % len(CONTEXT_OPTIONS)
        elif event.key in KEY_DOWN or event.key == "j":
            mode.cursor = (mode.cursor + 1) % len(CONTEXT_OPTIONS)
        elif event.key in KEY_ENTER:
            return self._dispatch(mode)
        elif event.key in KEY_ESCAPE:
            self.state.mode = Browsing()
        return []

    def _dispatch(self, mode: ContextMenu) -> list[Command]:
        option = mode.option
        path = mode.project.path

        if option is ContextOption.OPEN_EDITOR:
            return [OpenEditor(path), Quit()]
        if option is ContextOption.OPEN_FILE_EXPLORER:
            return [OpenFileExplorer(path), Quit()]

        self.state.mode = Browsing()

        if option is ContextOption.COPY_PATH:
            self.state.status = "Path copied to clipboard"
            return [CopyToClipboard(path)]
        if option is ContextOption.TOGGLE_FAVORITE:
            return self.toggle_favorite(path)
        return []

    def toggle_favorite(self, path: str) -> list[Command]:
        """Flip a project's favorite flag everywhere it is recorded.

        The project list, the visible list, Config.favorites and the cache
        snapshot all change within this call.
        """
        project = next((p for p in self.state.projects if p.path == path), None)
        if project is None:
            self.state.status = f"Unknown project: {path}"
            return []

        project.favorite = not project.favorite
        self.config.set_favorite(path, project.favorite)
        self._refresh_view()

        self.state.status = "Favorite status updated"
        return [SaveConfig(), SaveCache(build_cache(self.state.projects, self.scanned_at))]

    # System events

    def _on_projects_loaded(self, event: ProjectsLoaded) -> list[Command]:
        if event.generation is not None:
            if event.generation < self.applied_generation:
                return []
            self.applied_generation = event.generation

        # Favorites may have changed while the scan was running
        for project in event.projects:
            project.favorite = self.config.is_favorite(project.path)

        self.state.projects = list(event.projects)
        self.scanned_at = event.scanned_at or datetime.now(timezone.utc)
        self._refresh_view()
        self.state.status = f"Loaded {len(event.projects)} projects"
        return [SaveCache(build_cache(self.state.projects, self.scanned_at))]

    def _refresh_view(self) -> None:
        projects = self.state.projects
        if self.state.favorites_only:
            projects = [p for p in projects if p.favorite]
        self.state.list_view.set_items(projects)
