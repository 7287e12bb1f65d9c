"""Data types for scan sessions: entries, session state and apply results."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from sanitizer.media.classifier import MediaKind, MediaRecord
from sanitizer.paths.resolver import ResolvedPath
from sanitizer.utils import STATUS_FAIL


@dataclass
class RawEntry:
    """A directory entry as enumerated, before any sanitization."""

    name: str
    full_path: str
    parent_path: str
    last_modified: datetime


@dataclass
class SanitizedEntry(RawEntry):
    """An entry plus its proposed name. `new_name` is None until previewed."""

    new_name: str | None = None
    selected: bool = True

    @property
    def has_changes(self) -> bool:
        return bool(self.new_name) and self.new_name != self.name


@dataclass
class MediaEntry(SanitizedEntry):
    """A media file entry with its classification."""

    extension: str = ""
    size: int = 0
    kind: MediaKind = MediaKind.UNKNOWN
    record: MediaRecord | None = None


class ScanTarget(Enum):
    FOLDERS = "folders"
    FILES = "files"


class ScanMode(Enum):
    LIVE = "live"
    OFFLINE = "offline"


class ScanState(Enum):
    SCANNING = "scanning"
    EMPTY = "empty"
    LISTED = "listed"
    PREVIEWED = "previewed"
    APPLIED = "applied"


@dataclass
class ScanSession:
    """
    One scan of one root.

    `mode` tells callers whether `entries` came from the filesystem or from
    the offline fixture.
    """

    root: str
    resolved: ResolvedPath
    target: ScanTarget
    mode: ScanMode = ScanMode.LIVE
    state: ScanState = ScanState.SCANNING
    entries: list = field(default_factory=list)

    @property
    def changed(self) -> list:
        return [e for e in self.entries if e.selected and e.has_changes]


@dataclass
class EntryOutcome:
    name: str
    source: str
    target: str | None
    status: str

    @property
    def ok(self) -> bool:
        return not self.status.startswith(STATUS_FAIL)


@dataclass
class ApplyResult:
    """Aggregate flag plus one outcome per attempted entry."""

    success: bool
    demo_mode: bool = False
    outcomes: list[EntryOutcome] = field(default_factory=list)

    @property
    def failed(self) -> list[EntryOutcome]:
        return [o for o in self.outcomes if not o.ok]
