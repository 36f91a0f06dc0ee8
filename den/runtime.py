"""Carrying out the commands the session controller emits."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Optional, Union

from den.config import Config
from den.controller import SessionController
from den.errors import CacheError, ConfigError, DispatchError
from den.events import (
    Command,
    CopyToClipboard,
    Event,
    OpenEditor,
    OpenFileExplorer,
    ProjectsLoaded,
    Quit,
    Rescan,
    SaveCache,
    SaveConfig,
    StatusReport,
)
from den.tools.cache import CacheStore
from den.tools.executor import Dispatcher
from den.tools.scanner import ProjectScanner, ScanOptions
from den.utils.logging import NullSessionLogger, SessionLogger

logger = logging.getLogger(__name__)

Handoff = Union[OpenEditor, OpenFileExplorer]


def rescan(
    directories: list[str],
    options: ScanOptions,
    scanner: ProjectScanner,
    generation: Optional[int] = None,
) -> ProjectsLoaded:
    """Scan the given roots; run off the event loop."""
    projects = scanner.scan(directories, options)
    return ProjectsLoaded(projects=projects, scanned_at=datetime.now(timezone.utc), generation=generation)


class CommandRunner:
    """Performs commands against the real config, cache and external programs.

    Commands that fail in a recoverable way come back as StatusReport events.
    Editor and file manager launches are held until the terminal UI has been
    torn down; see run_handoffs().
    """

    def __init__(
        self,
        config: Config,
        store: CacheStore,
        dispatcher: Dispatcher,
        schedule_rescan: Callable[[Rescan], None],
        session_logger: Optional[Union[SessionLogger, NullSessionLogger]] = None,
    ):
        self.config = config
        self.store = store
        self.dispatcher = dispatcher
        self.schedule_rescan = schedule_rescan
        self.session_logger = session_logger or NullSessionLogger()
        self.handoffs: list[Handoff] = []
        self.quit_requested = False

    def execute(self, commands: list[Command]) -> list[Event]:
        """Run commands in order.

        Returns:
            Events to feed back into the controller
        """
        feedback: list[Event] = []

        for command in commands:
            self.session_logger.log_event("command", command=type(command).__name__)

            if isinstance(command, SaveConfig):
                try:
                    self.config.save()
                except ConfigError as e:
                    feedback.append(StatusReport(f"Error saving config: {e}"))
            elif isinstance(command, SaveCache):
                try:
                    self.store.save(command.cache)
                except CacheError as e:
                    feedback.append(StatusReport(f"Error saving cache: {e}"))
            elif isinstance(command, Rescan):
                self.schedule_rescan(command)
            elif isinstance(command, CopyToClipboard):
                try:
                    self.dispatcher.copy_to_clipboard(command.text)
                except DispatchError as e:
                    feedback.append(StatusReport(f"Error copying to clipboard: {e}"))
            elif isinstance(command, (OpenEditor, OpenFileExplorer)):
                self.handoffs.append(command)
            elif isinstance(command, Quit):
                self.quit_requested = True

        for event in feedback:
            logger.warning("%s", event.message)
            self.session_logger.log_event("status", message=event.message)

        return feedback

    def run_handoffs(self) -> list[str]:
        """Launch the editor / file manager requested before the session ended.

        Returns:
            Error messages, one per failed launch
        """
        errors = []
        for handoff in self.handoffs:
            try:
                if isinstance(handoff, OpenEditor):
                    self.dispatcher.open_editor(handoff.path)
                else:
                    self.dispatcher.open_file_explorer(handoff.path)
            except DispatchError as e:
                label = "editor" if isinstance(handoff, OpenEditor) else "file explorer"
                errors.append(f"Error opening {label}: {e}")
            self.session_logger.log_event("handoff", command=type(handoff).__name__, path=handoff.path)
        self.handoffs = []
        return errors


class Session:
    """One event at a time: controller transition, then its side effects."""

    def __init__(self, controller: SessionController, runner: CommandRunner):
        self.controller = controller
        self.runner = runner

    @property
    def finished(self) -> bool:
        return self.runner.quit_requested

    def dispatch(self, event: Event) -> None:
        """Handle an event and everything it causes before returning."""
        pending = [event]
        while pending:
            current = pending.pop(0)
            self.runner.session_logger.log_event("event", event=type(current).__name__)
            commands = self.controller.handle(current)
            pending.extend(self.runner.execute(commands))
