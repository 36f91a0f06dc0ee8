"""Command-line entry point for Den."""

import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from den.config import Config
from den.controller import SessionController
from den.errors import ConfigError
from den.theme import get_theme
from den.tools.cache import CacheStore, load_projects
from den.tools.executor import Dispatcher
from den.tools.scanner import ProjectScanner
from den.utils.logging import SessionLogger

app = typer.Typer(help="Den - A Cozy Home for Your Repos")
console = Console()


def get_version() -> str:
    try:
        return version("den")
    except PackageNotFoundError:
        return "dev"


def print_projects(config: Config) -> None:
    """Print discovered projects as a table."""
    store = CacheStore(config.cache_path)
    loaded = load_projects(config, store, ProjectScanner())

    table = Table(title=config.preferences.project_list_title)
    table.add_column("", width=1)
    table.add_column("Name", style="bold")
    table.add_column("Path")
    table.add_column("Git")
    table.add_column("Modified")

    for project in loaded.projects:
        table.add_row(
            "★" if project.favorite else "",
            project.name,
            project.path,
            project.git_state.value,
            project.last_modified.astimezone().strftime("%Y-%m-%d %H:%M:%S"),
        )

    console.print(table)
    source = "cache" if loaded.from_cache else "scan"
    console.print(f"[dim]{len(loaded.projects)} projects ({source})[/dim]")
    if loaded.status:
        console.print(f"[yellow]{loaded.status}[/yellow]")


def run_session(config: Config, debug: bool) -> None:
    """Start the interactive session and launch any handed-off program after it ends."""
    # Imported here so --help/--version/--reset do not pay for textual
    from den.app import DenApp

    session_logger = None
    if debug:
        session_logger = SessionLogger(config.cache_dir)
        session_logger.attach()
        console.print(f"[dim]Session logs: {session_logger.get_log_path()}[/dim]")

    store = CacheStore(config.cache_path)
    scanner = ProjectScanner()
    loaded = load_projects(config, store, scanner)

    controller = SessionController(config, loaded.projects, scanned_at=loaded.scanned_at)
    controller.state.status = loaded.status

    den_app = DenApp(
        controller,
        config,
        store,
        Dispatcher(config),
        scanner,
        palette=get_theme(config.preferences.theme),
        session_logger=session_logger,
    )
    den_app.run()

    for error in den_app.runner.run_handoffs():
        console.print(f"[red]{error}[/red]")


@app.command()
def main(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    reset: bool = typer.Option(False, "--reset", help="Reset all configuration and start fresh"),
    list_only: bool = typer.Option(False, "--list", "-l", help="Print discovered projects and exit"),
    show_version: bool = typer.Option(False, "--version", "-v", help="Display version information"),
    config_dir: Optional[str] = typer.Option(None, "--config-dir", help="Directory holding config.json"),
) -> None:
    """Browse, open and organize your project directories."""
    if show_version:
        console.print(f"den version {get_version()}")
        return

    if not debug:
        logging.getLogger("den").addHandler(logging.NullHandler())

    directory = Path(config_dir).expanduser() if config_dir else None

    if reset:
        # A broken config file must still be removable
        try:
            removed = Config(config_dir=directory or Config.locations()[0]).reset()
        except ConfigError as e:
            console.print(f"[red]Error: {e}[/red]")
            sys.exit(1)
        if removed:
            console.print("Configuration has been reset.")
        else:
            console.print("[dim]No configuration to reset.[/dim]")
        return

    # Load configuration
    try:
        config = Config.load(config_dir=directory)
    except ConfigError as e:
        console.print(f"[red]Error loading configuration: {e}[/red]")
        sys.exit(1)

    errors = config.validate()
    if errors:
        console.print("[yellow]Configuration warnings:[/yellow]")
        for error in errors:
            console.print(f"  - {error}")

    if list_only:
        print_projects(config)
        return

    try:
        run_session(config, debug)
    except Exception as e:
        console.print(f"[red]Fatal error: {e}[/red]")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    app()
