"""
Utilities to build Plex-formatted names for movies and TV episodes.

Canonical base names (no extension):

- Movie:   "Title (Year) [1080p]"
- TV:      "Title - S01E02 - Episode Title [1080p]"
- Unknown: "Title [1080p]"

Each optional part is left out when its field is missing. The season/episode
token appears only when both numbers are known, and the episode title only
with it. Zero-padding happens here, not in the classifier.

`build_library_path` places a file inside a library tree:

- "Movies/Title (Year)/<file>"
- "TV Shows/Title/Season 01/<file>"
- "Other/<file>"
"""
from pathlib import Path

from sanitizer.media.classifier import MediaKind, MediaRecord
from sanitizer.utils import CONTENT_TYPE_MOVIES, CONTENT_TYPE_OTHER, CONTENT_TYPE_TV, LogLevel, file_util, logger


def generate(record: MediaRecord, kind: MediaKind, include_edition: bool = False) -> str:
    """
    Build the canonical base name for `record`.

    Never raises: if a field has an unexpected type the bare title is returned.
    """
    try:
        name = record.title
        if kind == MediaKind.MOVIE:
            if record.year:
                name += f" ({int(record.year)})"
            if include_edition and record.edition:
                name += f" {{edition-{record.edition}}}"
        elif kind == MediaKind.TV_SHOW:
            if record.season is not None and record.episode is not None:
                name += f" - S{int(record.season):02d}E{int(record.episode):02d}"
                if record.episode_title and record.episode_title.strip():
                    name += f" - {record.episode_title.strip()}"

        if record.resolution:
            name += f" [{record.resolution}]"
        return file_util.sanitize_filename(name)
    except (TypeError, ValueError, AttributeError) as e:
        logger.log("format.error", LogLevel.WARN, title=getattr(record, "title", None), error=str(e))
        return getattr(record, "title", "") or ""


def generate_filename(record: MediaRecord, kind: MediaKind, extension: str, include_edition: bool = False) -> str:
    """Canonical base name plus the original extension."""
    return generate(record, kind, include_edition) + (extension or "")


def build_folder_name(title: str, year: int | None) -> str:
    """
    Build a Plex-style folder name for a media title.

    - "Title (Year)" when a year is known
    - "Title" otherwise
    """
    if year:
        return f"{title} ({year})"
    return title


def build_library_path(record: MediaRecord, kind: MediaKind, file_name: str) -> Path:
    """Relative library path for a file: content type folder, title folder, season folder, file."""
    if kind == MediaKind.MOVIE:
        folder = Path(CONTENT_TYPE_MOVIES) / file_util.sanitize_filename(build_folder_name(record.title, record.year))
    elif kind == MediaKind.TV_SHOW:
        season = record.season if record.season is not None else 1
        folder = Path(CONTENT_TYPE_TV) / file_util.sanitize_filename(record.title) / f"Season {season:02d}"
    else:
        folder = Path(CONTENT_TYPE_OTHER)
    return folder / file_name
