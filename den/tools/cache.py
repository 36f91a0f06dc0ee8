"""Discovery cache: the last scan persisted between sessions."""

import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from den.config import Config
from den.constants import CACHE_TTL
from den.errors import CacheError
from den.models import DiscoveryCache, Project
from den.tools.scanner import ProjectScanner, ScanOptions, build_cache

logger = logging.getLogger(__name__)


class CacheStore:
    """Reads and writes the discovery cache file."""

    def __init__(self, path: Path):
        """Initialize cache store.

        Args:
            path: Location of projects.json
        """
        self.path = path

    def load(self) -> DiscoveryCache:
        """Load the cache from disk.

        Returns:
            The stored cache, or an empty cache if there is no file yet

        Raises:
            CacheError: If the file exists but is unreadable or malformed
        """
        try:
            with open(self.path) as f:
                data = json.load(f)
        except FileNotFoundError:
            return DiscoveryCache()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CacheError(f"malformed cache file {self.path}: {e}") from e
        except OSError as e:
            raise CacheError(f"could not read cache file {self.path}: {e}") from e

        try:
            return DiscoveryCache.model_validate(data)
        except ValidationError as e:
            raise CacheError(f"malformed cache file {self.path}: {e}") from e

    def save(self, cache: DiscoveryCache) -> None:
        """Overwrite the cache file with a snapshot.

        Keys are written sorted so that two saves of the same data are
        byte-identical.

        Raises:
            CacheError: If the file cannot be written
        """
        data = cache.model_dump(mode="json", by_alias=True)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(data, f, indent=4, sort_keys=True)
                f.write("\n")
        except OSError as e:
            raise CacheError(f"could not write cache file {self.path}: {e}") from e

    def is_valid(self, cache: DiscoveryCache, config: Config, now: Optional[datetime] = None) -> bool:
        """Decide whether a cached scan can be used instead of rescanning.

        A cache is stale when it is empty, when any configured directory has
        disappeared, or when it is older than CACHE_TTL.
        """
        if cache.is_empty():
            return False

        for directory in config.project_dirs:
            if not os.path.exists(directory):
                return False

        now = now or datetime.now(timezone.utc)
        last_updated = cache.last_updated
        if last_updated.tzinfo is None:
            last_updated = last_updated.replace(tzinfo=timezone.utc)

        if now - last_updated > CACHE_TTL:
            return False

        return True


@dataclass
class LoadedProjects:
    """Projects available at startup and where they came from."""

    projects: list[Project]
    scanned_at: datetime
    from_cache: bool
    status: Optional[str] = None


def load_projects(config: Config, store: CacheStore, scanner: ProjectScanner) -> LoadedProjects:
    """Startup policy: reuse a valid cache, otherwise scan and refresh it.

    Args:
        config: Configuration (roots, favorites, git preference)
        store: Cache store
        scanner: Project scanner

    Returns:
        LoadedProjects; status carries a non-fatal cache write error
    """
    try:
        cache = store.load()
    except CacheError as e:
        logger.warning("Ignoring discovery cache: %s", e)
        cache = DiscoveryCache()

    if store.is_valid(cache, config):
        logger.debug("Using cached projects (%d items)", len(cache.projects))
        return LoadedProjects(cache.to_projects(), cache.last_updated, from_cache=True)

    projects = scanner.scan(config.project_dirs, ScanOptions.from_config(config))
    fresh = build_cache(projects)

    status = None
    try:
        store.save(fresh)
    except CacheError as e:
        logger.warning("Error updating cache: %s", e)
        status = f"Error saving cache: {e}"

    return LoadedProjects(projects, fresh.last_updated, from_cache=False, status=status)
