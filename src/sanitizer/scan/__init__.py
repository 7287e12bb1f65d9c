"""
Scan sessions over one root folder.

Public API:
- `FolderScanEngine`: `scan` -> `preview` -> `apply` (or `organize`).
- `ScanSession`, `ApplyResult`, `EntryOutcome`: results.
- `OfflineFixture`: substitute listing for unreachable roots.
"""
from .engine import FolderScanEngine
from .fixtures import OfflineFixture
from .models import (
    ApplyResult,
    EntryOutcome,
    MediaEntry,
    RawEntry,
    SanitizedEntry,
    ScanMode,
    ScanSession,
    ScanState,
    ScanTarget,
)

__all__ = [
    "FolderScanEngine",
    "OfflineFixture",
    "ApplyResult",
    "EntryOutcome",
    "MediaEntry",
    "RawEntry",
    "SanitizedEntry",
    "ScanMode",
    "ScanSession",
    "ScanState",
    "ScanTarget",
]
