"""Terminal UI: feeds textual key events into the session and renders it."""

from textual import events, work
from textual.app import App, ComposeResult
from textual.widgets import Static

from den.config import Config
from den.controller import SessionController
from den.events import KeyPress, ProjectsLoaded, Rescan, Resize
from den.render import render_session
from den.runtime import CommandRunner, Session, rescan
from den.theme import Theme
from den.tools.cache import CacheStore
from den.tools.executor import Dispatcher
from den.tools.scanner import ProjectScanner, ScanOptions
from den.utils.logging import NullSessionLogger


class SessionView(Static, can_focus=True):
    """Full-screen view that receives every key press."""

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.app.handle_key(event)


class DenApp(App):
    """Den interactive session."""

    CSS = """
    SessionView {
        padding: 1 2;
        height: auto;
    }
    """

    def __init__(
        self,
        controller: SessionController,
        config: Config,
        store: CacheStore,
        dispatcher: Dispatcher,
        scanner: ProjectScanner,
        palette: Theme,
        session_logger=None,
    ):
        super().__init__()
        self.den_config = config
        self.scanner = scanner
        self.palette = palette
        self.runner = CommandRunner(
            config,
            store,
            dispatcher,
            schedule_rescan=self.start_rescan,
            session_logger=session_logger or NullSessionLogger(),
        )
        self.session = Session(controller, self.runner)

    def compose(self) -> ComposeResult:
        yield SessionView(id="session")

    def on_mount(self) -> None:
        self.query_one(SessionView).focus()
        self.refresh_session()

    def on_resize(self, event: events.Resize) -> None:
        self.session.dispatch(Resize(event.size.width, event.size.height))
        self.refresh_session()

    def handle_key(self, event: events.Key) -> None:
        self.session.dispatch(KeyPress(event.key, event.character))
        self.after_step()

    def after_step(self) -> None:
        if self.session.finished:
            self.exit()
            return
        self.refresh_session()

    def refresh_session(self) -> None:
        self.query_one(SessionView).update(render_session(self.session.controller.state, self.palette))

    def start_rescan(self, request: Rescan) -> None:
        self.scan_in_background(request, ScanOptions.from_config(self.den_config))

    @work(thread=True)
    def scan_in_background(self, request: Rescan, options: ScanOptions) -> None:
        loaded = rescan(request.directories, options, self.scanner, generation=request.generation)
        self.call_from_thread(self.deliver_projects, loaded)

    def deliver_projects(self, loaded: ProjectsLoaded) -> None:
        self.session.dispatch(loaded)
        self.after_step()
