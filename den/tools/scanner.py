"""Project discovery: one directory level below each configured root."""

import logging
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from den.config import Config
from den.models import DiscoveryCache, GitState, Project
from den.tools.executor import git_status

logger = logging.getLogger(__name__)


@dataclass
class ScanOptions:
    """What a scan needs to know besides the roots."""

    show_git_status: bool = True
    favorites: set[str] = field(default_factory=set)

    @classmethod
    def from_config(cls, config: Config) -> "ScanOptions":
        return cls(
            show_git_status=config.preferences.show_git_status,
            favorites=set(config.favorites),
        )


class ProjectScanner:
    """Turns a set of root directories into Project records.

    Scanning is a pure read of the filesystem; callers persist the result.
    """

    def __init__(self, probe: Callable[[Path], GitState] = git_status):
        """Initialize scanner.

        Args:
            probe: Git working-tree probe, called only for checkouts
        """
        self.probe = probe

    def scan(self, directories: Iterable[str], options: Optional[ScanOptions] = None) -> list[Project]:
        """Scan each root for immediate child directories.

        Args:
            directories: Root directories, in configured order
            options: Scan options (git probing, favorites)

        Returns:
            Projects in root order, then enumeration order within each root
        """
        options = options or ScanOptions()
        directories = list(directories)
        projects = []

        for directory in directories:
            root = Path(directory)
            try:
                root.stat()
                with os.scandir(root) as it:
                    entries = list(it)
            except OSError as e:
                logger.debug("Skipping root %s: %s", root, e)
                continue

            for entry in entries:
                try:
                    if not entry.is_dir():
                        continue
                    project = self.detect(Path(entry.path), options)
                except OSError as e:
                    logger.debug("Skipping %s: %s", entry.path, e)
                    continue
                projects.append(project)

        logger.debug("Found %d projects in %d roots", len(projects), len(directories))
        return projects

    def detect(self, path: Path, options: ScanOptions) -> Project:
        """Build a Project for a single candidate directory.

        Raises:
            OSError: If the directory cannot be stat'ed
        """
        info = path.stat()
        absolute = str(path.absolute())

        git_state = GitState.NO_GIT
        if options.show_git_status and os.path.lexists(path / ".git"):
            try:
                git_state = self.probe(path)
            except OSError:
                git_state = GitState.NO_GIT

        return Project(
            name=path.name,
            path=absolute,
            last_modified=datetime.fromtimestamp(info.st_mtime, tz=timezone.utc),
            git_state=git_state,
            favorite=absolute in options.favorites,
        )


def count_by_directory(projects: Iterable[Project]) -> dict[str, int]:
    """Number of projects found under each root directory."""
    counts: dict[str, int] = {}
    for project in projects:
        parent = os.path.dirname(project.path)
        counts[parent] = counts.get(parent, 0) + 1
    return counts


def build_cache(projects: list[Project], now: Optional[datetime] = None) -> DiscoveryCache:
    """Create a fresh cache snapshot of a scan result."""
    return DiscoveryCache(
        projects=[project.to_snapshot() for project in projects],
        last_updated=now or datetime.now(timezone.utc),
        directory_counts=count_by_directory(projects),
    )
