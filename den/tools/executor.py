"""Launching external programs: git probe, editor, file manager, clipboard."""

import os
import shutil
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from den.config import Config
from den.constants import clipboard_commands, platform_defaults
from den.errors import DispatchError
from den.models import GitState


@dataclass
class ExecResult:
    """Result of running an external program."""

    success: bool
    stdout: str
    stderr: str
    exit_code: int
    duration_ms: int
    command: list[str]


def run(
    command: list[str],
    cwd: Optional[Path] = None,
    input_text: Optional[str] = None,
    capture: bool = True,
) -> ExecResult:
    """Run a program to completion.

    No timeout is applied: a program that never exits blocks the caller.

    Args:
        command: Program and arguments
        cwd: Working directory
        input_text: Text written to the program's stdin
        capture: Capture stdout/stderr (False inherits the session's streams)

    Returns:
        ExecResult with execution details
    """
    start_time = time.time()

    try:
        completed = subprocess.run(
            command,
            cwd=str(cwd) if cwd else None,
            input=input_text,
            stdout=subprocess.PIPE if capture else None,
            stderr=subprocess.PIPE if capture else None,
            text=True,
            check=False,
        )
    except OSError as e:
        duration_ms = int((time.time() - start_time) * 1000)
        return ExecResult(
            success=False,
            stdout="",
            stderr=f"Execution error: {e}",
            exit_code=-1,
            duration_ms=duration_ms,
            command=command,
        )

    duration_ms = int((time.time() - start_time) * 1000)

    return ExecResult(
        success=completed.returncode == 0,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
        exit_code=completed.returncode,
        duration_ms=duration_ms,
        command=command,
    )


def git_status(path: Path) -> GitState:
    """Probe the working tree of a checkout.

    Only the emptiness of `git status --porcelain` is looked at. Any failure
    (git missing, not a repository, corrupt checkout) degrades to NO_GIT.
    """
    result = run(["git", "-C", str(path), "status", "--porcelain"], cwd=path)
    if not result.success:
        return GitState.NO_GIT
    if result.stdout.strip():
        return GitState.MODIFIED
    return GitState.CLEAN


class Dispatcher:
    """Hands a project path off to the user's editor, file manager or clipboard."""

    def __init__(self, config: Config):
        """Initialize dispatcher.

        Args:
            config: Configuration (for editor and file manager preferences)
        """
        self.config = config

    def resolve_editor(self) -> str:
        """Pick the editor: $EDITOR, the configured default, then the first installed from editorList."""
        editor = os.getenv("EDITOR")
        if editor:
            return editor

        prefs = self.config.preferences
        if prefs.default_editor:
            return prefs.default_editor

        for candidate in prefs.editor_list:
            if shutil.which(candidate):
                return candidate

        raise DispatchError("no editor found")

    def resolve_file_manager(self) -> str:
        return self.config.preferences.default_file_manager or platform_defaults()[1]

    def open_editor(self, path: str) -> ExecResult:
        """Open a path in the editor, inheriting the terminal.

        Raises:
            DispatchError: If the editor cannot be started or exits non-zero
        """
        editor = self.resolve_editor()
        # EDITOR may carry its own arguments, e.g. "code --wait"
        command = editor.split() + [path]
        result = run(command, capture=False)
        if not result.success:
            raise DispatchError(f"{editor} failed: {result.stderr or f'exit code {result.exit_code}'}")
        return result

    def open_file_explorer(self, path: str) -> ExecResult:
        """Open a path in the file manager.

        Raises:
            DispatchError: If the file manager cannot be started or exits non-zero
        """
        file_manager = self.resolve_file_manager()
        result = run([file_manager, path])
        if not result.success:
            raise DispatchError(f"{file_manager} failed: {result.stderr.strip() or f'exit code {result.exit_code}'}")
        return result

    def copy_to_clipboard(self, text: str) -> None:
        """Write text to the system clipboard with the first helper that works.

        Raises:
            DispatchError: If no clipboard helper is installed or all of them fail
        """
        tried = []
        for command in clipboard_commands():
            if shutil.which(command[0]) is None:
                continue
            tried.append(command[0])
            result = run(command, input_text=text)
            if result.success:
                return

        if not tried:
            raise DispatchError("no clipboard utility found")
        raise DispatchError(f"clipboard write failed ({', '.join(tried)})")
