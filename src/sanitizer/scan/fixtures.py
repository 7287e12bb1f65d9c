"""
Offline fixture: the substitute listing used when a scan root is unreachable.

The scan still succeeds in that case, with `ScanSession.mode` set to OFFLINE
so callers can tell the entries are not real. Names and timestamps are fixed,
so two offline scans of the same root give identical entries.
"""
import os
from datetime import datetime, timezone

from sanitizer.paths.resolver import join_path
from sanitizer.scan.models import MediaEntry, SanitizedEntry

FIXTURE_TIMESTAMP = datetime(2024, 1, 1, tzinfo=timezone.utc)

DEFAULT_FOLDER_NAMES = (
    "The.Show.S02E05.Some.Title.1080p.WEBRip-GROUP",
    "Movie.Name.2014.1080p.BluRay.x264-GROUP",
    "[HD] Another Movie (2019) [tt1234567] [720p]",
    "Documentary_Series_S01_720p_WEB-DL",
    "Some.Anime.Title.[Dual Audio].[BDRip].[1080p]",
    "Classic Film (1954)",
    "Already Clean Folder",
)

DEFAULT_FILE_NAMES = (
    "Movie.Name.2014.1080p.mkv",
    "The.Show.S02E05.Some.Title.1080p.WEBRip-GROUP.mkv",
    "Another.Movie.2019.Directors.Cut.720p.mp4",
    "home_video_clip.avi",
)


class OfflineFixture:
    """Deterministic, non-empty substitute entries for an unreachable root."""

    def __init__(self, folder_names=DEFAULT_FOLDER_NAMES, file_names=DEFAULT_FILE_NAMES):
        if not folder_names or not file_names:
            raise ValueError("Offline fixture needs at least one folder and one file name")
        self.folder_names = tuple(folder_names)
        self.file_names = tuple(file_names)

    def folders(self, parent: str) -> list[SanitizedEntry]:
        return [
            SanitizedEntry(
                name=name,
                full_path=join_path(parent, name),
                parent_path=parent,
                last_modified=FIXTURE_TIMESTAMP,
            )
            for name in self.folder_names
        ]

    def files(self, parent: str) -> list[MediaEntry]:
        return [
            MediaEntry(
                name=name,
                full_path=join_path(parent, name),
                parent_path=parent,
                last_modified=FIXTURE_TIMESTAMP,
                extension=os.path.splitext(name)[1],
            )
            for name in self.file_names
        ]
