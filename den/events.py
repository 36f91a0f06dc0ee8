"""Events consumed by the session controller and commands it emits."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union

from den.models import DiscoveryCache, Project


# Events

@dataclass
class KeyPress:
    """A key from the terminal; key is the textual key name ("enter", "a", "ctrl+j")."""

    key: str
    character: Optional[str] = None

    @property
    def is_printable(self) -> bool:
        return self.character is not None and len(self.character) == 1 and self.character.isprintable()


@dataclass
class ProjectsLoaded:
    """Result of a background rescan.

    generation matches the Rescan that produced it; None means unnumbered.
    """

    projects: list[Project]
    scanned_at: Optional[datetime] = None
    generation: Optional[int] = None


@dataclass
class StatusReport:
    """A message from the runtime, usually a failed command."""

    message: str


@dataclass
class Resize:
    width: int
    height: int


Event = Union[KeyPress, ProjectsLoaded, StatusReport, Resize]


# Commands

@dataclass
class SaveConfig:
    pass


@dataclass
class SaveCache:
    cache: DiscoveryCache


@dataclass
class Rescan:
    directories: list[str] = field(default_factory=list)
    generation: int = 0


@dataclass
class OpenEditor:
    path: str


@dataclass
class OpenFileExplorer:
    path: str


@dataclass
class CopyToClipboard:
    text: str


@dataclass
class Quit:
    pass


Command = Union[SaveConfig, SaveCache, Rescan, OpenEditor, OpenFileExplorer, CopyToClipboard, Quit]
