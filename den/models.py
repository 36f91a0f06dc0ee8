"""Project records and the persisted discovery cache."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class GitState(str, Enum):
    """Working-tree state of a project, as shown next to its path."""

    NO_GIT = "no git"
    CLEAN = "git (clean)"
    MODIFIED = "git (modified)"


@dataclass
class Project:
    """A directory recognized as a project root.

    Created fresh on every scan; the cache only ever holds snapshots.
    """

    name: str
    path: str
    last_modified: datetime
    git_state: GitState = GitState.NO_GIT
    favorite: bool = False

    @property
    def description(self) -> str:
        return f"{self.path} ({self.git_state.value})"

    @property
    def filter_value(self) -> str:
        return f"{self.name} {self.path}"

    def to_snapshot(self) -> "ProjectSnapshot":
        return ProjectSnapshot(
            name=self.name,
            path=self.path,
            last_modified=self.last_modified,
            git_state=self.git_state,
            favorite=self.favorite,
        )

    @classmethod
    def from_snapshot(cls, snapshot: "ProjectSnapshot") -> "Project":
        return cls(
            name=snapshot.name,
            path=snapshot.path,
            last_modified=snapshot.last_modified,
            git_state=snapshot.git_state,
            favorite=snapshot.favorite,
        )


class ProjectSnapshot(BaseModel):
    """Serialized form of a Project inside the cache file."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    path: str
    last_modified: datetime = Field(alias="lastModified")
    git_state: GitState = Field(GitState.NO_GIT, alias="gitState")
    favorite: bool = False


def _epoch() -> datetime:
    return datetime.fromtimestamp(0, tz=timezone.utc)


class DiscoveryCache(BaseModel):
    """Snapshot of the last scan, replaced wholesale on every scan."""

    model_config = ConfigDict(populate_by_name=True)

    projects: list[ProjectSnapshot] = Field(default_factory=list)
    last_updated: datetime = Field(default_factory=_epoch, alias="lastUpdated")
    directory_counts: dict[str, int] = Field(default_factory=dict, alias="directoryCounts")

    def is_empty(self) -> bool:
        return not self.projects

    def to_projects(self) -> list[Project]:
        return [Project.from_snapshot(snapshot) for snapshot in self.projects]
