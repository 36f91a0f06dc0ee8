"""Tests for running external programs."""

import shutil

import pytest

from den.errors import DispatchError
from den.tools.executor import Dispatcher, run


def test_execute_simple_command(temp_dir):
    """Test executing a simple command."""
    result = run(["echo", "hello world"], cwd=temp_dir)

    assert result.success
    assert result.exit_code == 0
    assert "hello world" in result.stdout
    assert result.command == ["echo", "hello world"]


def test_execute_with_error():
    """Test executing a command that fails."""
    result = run(["sh", "-c", "exit 1"])

    assert not result.success
    assert result.exit_code == 1


def test_missing_program():
    """Test that a program that does not exist is a failed result, not an exception."""
    result = run(["den-no-such-program"])

    assert not result.success
    assert result.exit_code == -1
    assert "Execution error" in result.stderr


def test_input_text_goes_to_stdin():
    """Test feeding text to a program."""
    result = run(["cat"], input_text="/src/one")

    assert result.stdout == "/src/one"


def test_resolve_editor_prefers_environment(config, monkeypatch):
    """Test that $EDITOR wins over the configured editor."""
    monkeypatch.setenv("EDITOR", "nano")

    assert Dispatcher(config).resolve_editor() == "nano"


def test_resolve_editor_falls_back_to_list(config, monkeypatch):
    """Test picking the first installed editor from editorList."""
    monkeypatch.delenv("EDITOR", raising=False)
    config.preferences.default_editor = ""
    config.preferences.editor_list = ["den-no-such-editor", "sh"]

    assert Dispatcher(config).resolve_editor() == "sh"


def test_resolve_editor_none_found(config, monkeypatch):
    monkeypatch.delenv("EDITOR", raising=False)
    config.preferences.default_editor = ""
    config.preferences.editor_list = ["den-no-such-editor"]

    with pytest.raises(DispatchError):
        Dispatcher(config).resolve_editor()


def test_open_editor_failure(config, monkeypatch):
    """Test that an editor exiting non-zero raises."""
    monkeypatch.setenv("EDITOR", "false")

    with pytest.raises(DispatchError):
        Dispatcher(config).open_editor("/src/one")


def test_open_editor_passes_path(config, monkeypatch, temp_dir):
    """Test that EDITOR arguments are kept and the path is appended."""
    marker = temp_dir / "opened"
    monkeypatch.setenv("EDITOR", "touch")

    Dispatcher(config).open_editor(str(marker))

    assert marker.exists()


def test_clipboard_without_helper(config, monkeypatch):
    """Test the error when no clipboard helper is installed."""
    monkeypatch.setattr(shutil, "which", lambda name: None)

    with pytest.raises(DispatchError, match="no clipboard utility found"):
        Dispatcher(config).copy_to_clipboard("/src/one")


def test_clipboard_helper_fails(config, monkeypatch):
    """Test the error when every installed helper fails."""
    monkeypatch.setattr(shutil, "which", lambda name: "/usr/bin/" + name)
    monkeypatch.setattr("den.tools.executor.clipboard_commands", lambda: [["false"]])

    with pytest.raises(DispatchError, match="clipboard write failed"):
        Dispatcher(config).copy_to_clipboard("/src/one")


def test_clipboard_uses_first_working_helper(config, monkeypatch, temp_dir):
    target = temp_dir / "clipboard"
    monkeypatch.setattr(
        "den.tools.executor.clipboard_commands",
        lambda: [["den-no-such-helper"], ["sh", "-c", f"cat > {target}"]],
    )

    Dispatcher(config).copy_to_clipboard("/src/one")

    assert target.read_text() == "/src/one"
