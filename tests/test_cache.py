"""Tests for the discovery cache."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from conftest import make_project
from den.errors import CacheError
from den.models import DiscoveryCache, GitState
from den.tools.cache import CacheStore, load_projects
from den.tools.scanner import build_cache


class CountingScanner:
    """Scanner stand-in returning fixed projects."""

    def __init__(self, projects):
        self.projects = projects
        self.calls = 0

    def scan(self, directories, options=None):
        self.calls += 1
        return list(self.projects)


@pytest.fixture
def store(config):
    return CacheStore(config.cache_path)


def test_load_missing_file_is_empty(store):
    """Test that a missing cache file yields an empty cache."""
    cache = store.load()

    assert cache.is_empty()
    assert cache.directory_counts == {}


def test_load_malformed_json(store):
    """Test that unparsable JSON is an error."""
    store.path.parent.mkdir(parents=True)
    store.path.write_text("{not json")

    with pytest.raises(CacheError):
        store.load()


def test_load_wrong_shape(store):
    """Test that JSON of the wrong shape is an error."""
    store.path.parent.mkdir(parents=True)
    store.path.write_text(json.dumps({"projects": [{"name": "x"}]}))

    with pytest.raises(CacheError):
        store.load()


def test_save_and_load(store):
    """Test saving and loading a cache."""
    cache = build_cache([make_project("/src/a/one", favorite=True)])

    store.save(cache)
    loaded = store.load()

    assert [p.path for p in loaded.projects] == ["/src/a/one"]
    assert loaded.projects[0].favorite is True
    assert loaded.projects[0].git_state == GitState.NO_GIT
    assert loaded.last_updated == cache.last_updated
    assert loaded.directory_counts == {"/src/a": 1}


def test_save_creates_directory(store):
    """Test that save creates the cache directory."""
    assert not store.path.parent.exists()

    store.save(DiscoveryCache())

    assert store.path.exists()


def test_save_is_deterministic(store):
    """Test that the file uses stable key order and camelCase names."""
    cache = build_cache(
        [make_project("/src/b/two"), make_project("/src/a/one")],
        now=datetime(2024, 5, 1, tzinfo=timezone.utc),
    )

    store.save(cache)
    first = store.path.read_bytes()
    store.save(store.load())
    second = store.path.read_bytes()

    assert first == second
    data = json.loads(first)
    assert list(data) == ["directoryCounts", "lastUpdated", "projects"]
    assert list(data["projects"][0]) == ["favorite", "gitState", "lastModified", "name", "path"]
    # Project order is preserved, only keys are sorted
    assert [p["path"] for p in data["projects"]] == ["/src/b/two", "/src/a/one"]


def fresh_cache(now):
    return build_cache([make_project("/src/a/one")], now=now)


def test_is_valid_empty_cache(store, config):
    """Test that an empty cache is never valid."""
    assert not store.is_valid(DiscoveryCache(last_updated=datetime.now(timezone.utc)), config)


def test_is_valid_missing_directory(store, config, temp_dir):
    """Test that a removed project directory invalidates the cache."""
    config.project_dirs = [str(temp_dir), str(temp_dir / "removed")]

    assert not store.is_valid(fresh_cache(datetime.now(timezone.utc)), config)


def test_is_valid_expired(store, config, temp_dir):
    """Test that a cache older than an hour is stale."""
    config.project_dirs = [str(temp_dir)]
    now = datetime.now(timezone.utc)

    assert not store.is_valid(fresh_cache(now - timedelta(hours=1, seconds=1)), config, now=now)


def test_is_valid_fresh(store, config, temp_dir):
    """Test that a recent, non-empty cache with existing dirs is valid."""
    config.project_dirs = [str(temp_dir)]
    now = datetime.now(timezone.utc)

    assert store.is_valid(fresh_cache(now - timedelta(minutes=59)), config, now=now)


def test_load_projects_uses_valid_cache(store, config, temp_dir):
    """Test that a valid cache avoids scanning."""
    config.project_dirs = [str(temp_dir)]
    store.save(fresh_cache(datetime.now(timezone.utc)))
    scanner = CountingScanner([])

    loaded = load_projects(config, store, scanner)

    assert loaded.from_cache
    assert scanner.calls == 0
    assert [p.path for p in loaded.projects] == ["/src/a/one"]


def test_load_projects_rescans_stale_cache(store, config, temp_dir):
    """Test that a stale cache is replaced by a fresh scan."""
    config.project_dirs = [str(temp_dir)]
    store.save(fresh_cache(datetime.now(timezone.utc) - timedelta(hours=2)))
    scanner = CountingScanner([make_project("/src/b/new")])

    loaded = load_projects(config, store, scanner)

    assert not loaded.from_cache
    assert scanner.calls == 1
    assert [p.path for p in store.load().projects] == ["/src/b/new"]
    assert loaded.status is None


def test_load_projects_ignores_malformed_cache(store, config, temp_dir):
    """Test that a corrupt cache file falls back to scanning."""
    config.project_dirs = [str(temp_dir)]
    store.path.parent.mkdir(parents=True)
    store.path.write_text("garbage")
    scanner = CountingScanner([make_project("/src/b/new")])

    loaded = load_projects(config, store, scanner)

    assert scanner.calls == 1
    assert [p.name for p in loaded.projects] == ["new"]


def test_load_projects_reports_save_failure(config, temp_dir):
    """Test that a cache write failure is reported, not raised."""
    config.project_dirs = [str(temp_dir)]
    blocker = temp_dir / "blocker"
    blocker.write_text("a file where a directory should be")
    store = CacheStore(blocker / "projects.json")

    loaded = load_projects(config, store, CountingScanner([make_project("/src/b/new")]))

    assert loaded.status is not None
    assert "Error saving cache" in loaded.status
