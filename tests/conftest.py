"""Pytest configuration and fixtures."""

import shutil
import subprocess
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

from den.config import Config, Preferences
from den.models import GitState, Project

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def projects_root(temp_dir):
    """A root directory holding two projects, x (has .git) and y (plain)."""
    root = temp_dir / "projects"
    (root / "x" / ".git").mkdir(parents=True)
    (root / "y").mkdir()
    (root / "notes.txt").write_text("not a project\n")
    yield root


@pytest.fixture
def git_projects_root(temp_dir):
    """Like projects_root, but x is a real, clean git checkout."""
    root = temp_dir / "projects"
    (root / "x").mkdir(parents=True)
    (root / "y").mkdir()
    subprocess.run(["git", "init", "-q", str(root / "x")], check=True)
    yield root


@pytest.fixture
def config(temp_dir):
    """A configuration rooted in the temp directory, with no project dirs."""
    return Config(
        preferences=Preferences(default_editor="vim", default_file_manager="xdg-open"),
        config_dir=temp_dir / "config",
        cache_dir=temp_dir / "cache",
    )


@pytest.fixture
def fake_probe():
    """Git probe that records calls and reports every checkout as clean."""
    calls = []

    def probe(path):
        calls.append(path)
        return GitState.CLEAN

    probe.calls = calls
    return probe


def make_project(path: str, favorite: bool = False) -> Project:
    return Project(
        name=Path(path).name,
        path=path,
        last_modified=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        git_state=GitState.NO_GIT,
        favorite=favorite,
    )
