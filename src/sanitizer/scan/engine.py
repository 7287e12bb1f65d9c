"""
Scan orchestration: list a root, preview new names, apply or organize them.

A session moves through SCANNING -> EMPTY | LISTED -> PREVIEWED -> APPLIED.
Folder sessions are previewed with the rule pipeline; file sessions with the
media classifier and name generator.

Failure policy:
- A raw mapped drive letter is rejected before anything else
  (MappedDriveNotSupportedError); callers must pass the network address.
- An unreachable root is not an error: the session is filled from the
  offline fixture and marked OFFLINE.
- Per-entry rename failures (target exists, access denied, other OS errors)
  are recorded on that entry's outcome and the batch continues.
- Demo mode is decided once per batch from the first entry: when its path
  is not reachable, every change is applied in memory only.
"""
import os
from datetime import datetime, timezone

from tqdm import tqdm

from sanitizer.errors import MappedDriveNotSupportedError, ScanStateError
from sanitizer.media import classifier, formatter
from sanitizer.media.enrich import enrich_episode_titles
from sanitizer.paths.resolver import PathResolver, join_path
from sanitizer.rules import pipeline
from sanitizer.rules.catalog import configured_rule_set
from sanitizer.rules.rule import RuleSet
from sanitizer.scan.fixtures import OfflineFixture
from sanitizer.scan.models import (
    ApplyResult,
    EntryOutcome,
    MediaEntry,
    SanitizedEntry,
    ScanMode,
    ScanSession,
    ScanState,
    ScanTarget,
)
from sanitizer.utils import (
    STATUS_ACCESS_DENIED,
    STATUS_COLLISION,
    STATUS_DEMO,
    STATUS_FAIL,
    STATUS_OK,
    LogLevel,
    logger,
)
from sanitizer.utils.file_util import LocalFileSystem


class FolderScanEngine:
    """
    Preview/apply workflow over the immediate entries of one root.

    Args:
        resolver: PathResolver used for mapped drive checks and reachability.
        rule_set: rule set for folder previews; defaults to the configured catalog.
        filesystem: filesystem collaborator (see LocalFileSystem).
        offline_fixture: substitute entries for unreachable roots.
        include_edition: add "{edition-...}" to generated movie names.
        progress: show tqdm progress bars.
    """

    def __init__(
        self,
        resolver: PathResolver | None = None,
        rule_set: RuleSet | None = None,
        filesystem=None,
        offline_fixture: OfflineFixture | None = None,
        include_edition: bool = False,
        progress: bool = False,
    ):
        self.resolver = resolver or PathResolver()
        self.rule_set = rule_set if rule_set is not None else configured_rule_set()
        self.filesystem = filesystem or LocalFileSystem()
        self.offline_fixture = offline_fixture or OfflineFixture()
        self.include_edition = include_edition
        self.progress = progress

    @property
    def rules(self) -> RuleSet:
        return self.rule_set

    def toggle_rule(self, index: int, active: bool) -> RuleSet:
        """Switch one rule on or off for subsequent previews."""
        self.rule_set = self.rule_set.toggle(index, active)
        logger.log("rules.toggle", LogLevel.DEBUG, rule=self.rule_set.rules[index].name, active=active)
        return self.rule_set

    # Scanning

    def scan(self, root: str, target: ScanTarget = ScanTarget.FOLDERS) -> ScanSession:
        """List the folders (or media files) directly under `root`."""
        if self.resolver.is_mapped_drive(root):
            logger.log("scan.rejected", LogLevel.WARN, root=root, reason="mapped drive")
            raise MappedDriveNotSupportedError(root)

        resolved = self.resolver.resolve(root)
        session = ScanSession(root=root, resolved=resolved, target=target)
        logger.log("scan.start", LogLevel.INFO, root=root, path=resolved.normalized, kind=resolved.kind.value,
                   target=target.value)

        if not resolved.accessible:
            return self._offline(session, "root not accessible")

        try:
            if target == ScanTarget.FILES:
                session.entries = self._list_files(resolved.normalized)
            else:
                session.entries = self._list_folders(resolved.normalized)
        except OSError as e:
            return self._offline(session, str(e))

        session.state = ScanState.LISTED if session.entries else ScanState.EMPTY
        logger.log("scan.listed", LogLevel.INFO, path=resolved.normalized, entries=len(session.entries))
        return session

    def _offline(self, session: ScanSession, reason: str) -> ScanSession:
        parent = session.resolved.normalized
        if session.target == ScanTarget.FILES:
            session.entries = self.offline_fixture.files(parent)
        else:
            session.entries = self.offline_fixture.folders(parent)
        session.mode = ScanMode.OFFLINE
        session.state = ScanState.LISTED
        logger.log("scan.offline", LogLevel.WARN, path=parent, reason=reason, entries=len(session.entries))
        return session

    def _list_folders(self, path: str) -> list[SanitizedEntry]:
        entries = []
        for item in self.filesystem.list_directories(path):
            try:
                modified = datetime.fromtimestamp(item.stat().st_mtime, tz=timezone.utc)
            except OSError as e:
                logger.log("scan.entry_error", LogLevel.WARN, entry=item.name, error=str(e))
                continue
            entries.append(SanitizedEntry(item.name, item.path, path, modified))
        return entries

    def _list_files(self, path: str) -> list[MediaEntry]:
        entries = []
        for item in self.filesystem.list_files(path):
            try:
                stat = item.stat()
            except OSError as e:
                logger.log("scan.entry_error", LogLevel.WARN, entry=item.name, error=str(e))
                continue
            entries.append(
                MediaEntry(
                    name=item.name,
                    full_path=item.path,
                    parent_path=path,
                    last_modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
                    extension=os.path.splitext(item.name)[1],
                    size=stat.st_size,
                )
            )
        return entries

    # Preview

    def preview(self, session: ScanSession) -> ScanSession:
        """Compute `new_name` for every entry without touching the filesystem."""
        if session.state == ScanState.EMPTY:
            return session
        self._require(session, ScanState.LISTED, ScanState.PREVIEWED)

        entries = tqdm(session.entries, desc="Previewing", disable=not self.progress)
        if session.target == ScanTarget.FILES:
            for entry in entries:
                self._preview_file(entry)
        else:
            pipeline.preview(self.rule_set, entries)

        session.state = ScanState.PREVIEWED
        logger.log("scan.previewed", LogLevel.INFO, entries=len(session.entries), changes=len(session.changed))
        return session

    def _preview_file(self, entry: MediaEntry) -> None:
        kind, record = classifier.parse(entry.name)
        entry.kind = kind
        entry.record = record
        entry.new_name = formatter.generate_filename(record, kind, entry.extension, self.include_edition)

    def enrich(self, session: ScanSession, provider) -> int:
        """Refine episode titles of a previewed file session from a metadata provider."""
        self._require(session, ScanState.PREVIEWED)
        if session.target != ScanTarget.FILES:
            raise ScanStateError("Episode titles can only be enriched for file scans")
        return enrich_episode_titles(session.entries, provider, self.include_edition)

    # Apply

    def apply(self, session: ScanSession) -> ApplyResult:
        """Rename every selected entry whose name changed, in place."""
        self._require(session, ScanState.PREVIEWED)
        plan = [(entry, join_path(entry.parent_path, entry.new_name)) for entry in session.changed]
        result = self._execute(session, plan, self.filesystem.rename, "Renaming")
        session.state = ScanState.APPLIED
        return result

    def organize(self, session: ScanSession, target_base: str) -> ApplyResult:
        """Move selected media files into a Movies / TV Shows / Other library tree under `target_base`."""
        self._require(session, ScanState.PREVIEWED, ScanState.APPLIED)
        if session.target != ScanTarget.FILES:
            raise ScanStateError("Only file scans can be organized")

        plan = []
        for entry in session.entries:
            if not entry.selected or entry.record is None:
                continue
            relative = formatter.build_library_path(entry.record, entry.kind, entry.new_name or entry.name)
            plan.append((entry, join_path(target_base, str(relative))))
        result = self._execute(session, plan, self.filesystem.move, "Organizing")
        session.state = ScanState.APPLIED
        return result

    def _execute(self, session: ScanSession, plan, operation, desc: str) -> ApplyResult:
        demo_mode = self._is_demo(session)
        if demo_mode:
            logger.log("apply.demo_mode", LogLevel.WARN, root=session.resolved.normalized)

        result = ApplyResult(success=True, demo_mode=demo_mode)
        for entry, target in tqdm(plan, desc=desc, disable=not self.progress):
            outcome = self._execute_one(entry, target, operation, demo_mode)
            result.outcomes.append(outcome)
            if not outcome.ok:
                result.success = False

        logger.log(
            "apply.end",
            LogLevel.INFO,
            attempted=len(result.outcomes),
            failed=len(result.failed),
            demo_mode=demo_mode,
            success=result.success,
        )
        return result

    def _execute_one(self, entry, target: str, operation, demo_mode: bool) -> EntryOutcome:
        source = entry.full_path
        new_name = os.path.basename(target.replace("\\", "/"))

        if demo_mode:
            entry.name = new_name
            entry.full_path = target
            logger.log("apply.demo", LogLevel.DEBUG, source=source, target=target)
            return EntryOutcome(entry.name, source, target, STATUS_DEMO)

        if self.filesystem.exists(target) and not self.filesystem.is_same(source, target):
            logger.log("apply.collision", LogLevel.WARN, source=source, target=target)
            return EntryOutcome(entry.name, source, target, STATUS_COLLISION)

        try:
            operation(source, target)
        except PermissionError as e:
            logger.log("apply.access_denied", LogLevel.ERROR, source=source, target=target, error=str(e))
            return EntryOutcome(entry.name, source, target, STATUS_ACCESS_DENIED)
        except OSError as e:
            logger.log("apply.error", LogLevel.ERROR, source=source, target=target, error=str(e))
            return EntryOutcome(entry.name, source, target, f"{STATUS_FAIL} (rename error: {e})")

        entry.name = new_name
        entry.full_path = target
        logger.log("apply.renamed", LogLevel.DEBUG, source=source, target=target)
        return EntryOutcome(entry.name, source, target, STATUS_OK)

    def _is_demo(self, session: ScanSession) -> bool:
        if not session.entries:
            return False
        first = session.entries[0]
        probe = first.parent_path if session.target == ScanTarget.FILES else first.full_path
        return not self.resolver.is_accessible(probe)

    @staticmethod
    def _require(session: ScanSession, *states: ScanState) -> None:
        if session.state not in states:
            expected = " or ".join(s.value for s in states)
            raise ScanStateError(f"Session is {session.state.value}; expected {expected}")
