"""
Module for classifying media names and extracting their structural fields.

A name is a TV episode when it carries an SxxEyy marker, a movie when it
carries a 19xx/20xx year, and unknown otherwise. The TV test runs first so an
episode whose name also contains a year is not mistaken for a movie. Parsing
never fails: a name that matches nothing is `UNKNOWN` with its cleaned name as
the title.
"""

import re
from dataclasses import dataclass
from enum import Enum

from sanitizer.utils import RESOLUTION_REGEX, TAG_REGEX, LogLevel, file_util, logger

_TV_PATTERN = re.compile(
    r"^(?P<title>.+?)[\W_]*(?<![A-Za-z0-9])[Ss](?P<season>\d{1,2})[Ee](?P<episode>\d{1,2})(?!\d)(?P<rest>.*)$"
)
_MOVIE_PATTERN = re.compile(r"^(?P<title>.+?)[\W_]*(?<!\d)(?P<year>19\d{2}|20\d{2})(?![\dxX])(?P<rest>.*)$")

# Release noise that never belongs in a title
_NOISE_REGEX = re.compile(
    r"\b(?:DVDR|DVDRip|BluRay|BRRip|BDRip|HDRip|WEBRip|WEB-?DL|HDTV|PDTV|Xvid|DivX|x264|x265|H\.?26[45]|"
    r"HEVC|REMUX|AAC|AC3|DTS|10bit|Hi10P?|(?:480|576|720|1080|2160)[pi])\b",
    re.IGNORECASE,
)
_LANGUAGE_REGEX = re.compile(r"\b(?:eng|english|nl|dutch|sub|subs|subtitles)\b", re.IGNORECASE)
_EDITION_REGEX = re.compile(
    r"\b(Director'?s[ ._]Cut|Extended(?:[ ._](?:Cut|Edition))?|Unrated|Theatrical(?:[ ._]Cut)?|"
    r"Remastered|IMAX|Criterion)\b",
    re.IGNORECASE,
)
_BRACKETED = re.compile(r"\[[^\]]*\]|\([^)]*\)|\{[^}]*\}")
_BRACKETED_KEEP_YEAR = re.compile(r"\[[^\]]*\]|\((?!(?:19|20)\d{2}\))[^)]*\)|\{[^}]*\}")
_STRAY_BRACKETS = re.compile(r"[\[\](){}]")


class MediaKind(Enum):
    MOVIE = "movie"
    TV_SHOW = "tv"
    UNKNOWN = "unknown"


@dataclass
class MediaRecord:
    """Fields extracted from one name; recomputed per file per run."""

    title: str
    year: int | None = None
    resolution: str | None = None
    season: int | None = None
    episode: int | None = None
    episode_title: str | None = None
    edition: str | None = None


def clean_title(text: str) -> str:
    """
    Turn a raw title fragment into a display title.

    Bracketed content and release noise are dropped, dots and underscores
    become spaces, whitespace is collapsed, dangling hyphens trimmed and the
    result title-cased. Applying it to its own output changes nothing.
    """
    if not text or not text.strip():
        return ""
    text = _BRACKETED.sub(" ", text)
    text = _STRAY_BRACKETS.sub(" ", text)
    text = _NOISE_REGEX.sub(" ", text)
    text = file_util.normalize_text(text).strip(" -")
    return file_util.title_case(file_util.normalize_text(text))


def clean_name(name: str) -> str:
    """Cleaned form of a whole name, used as the title of names that match no pattern."""
    stem, _ = file_util.split_video_extension(name)
    text = _BRACKETED_KEEP_YEAR.sub(" ", stem)
    text = _LANGUAGE_REGEX.sub(" ", text)
    return clean_title(text) or file_util.normalize_text(stem)


def classify(name: str) -> MediaKind:
    """Detect whether `name` looks like a TV episode, a movie, or neither."""
    stem, _ = file_util.split_video_extension(name)
    if _TV_PATTERN.match(stem):
        return MediaKind.TV_SHOW
    if _MOVIE_PATTERN.match(stem):
        return MediaKind.MOVIE
    return MediaKind.UNKNOWN


def extract_tags(name: str) -> dict[str, str]:
    """
    Scan [..] and (..) payloads independently of the structural match.

    Returns the recognised tags; currently `resolution` (e.g. "1080p").
    """
    tags = {}
    for m in TAG_REGEX.finditer(name):
        payload = m.group(1) or m.group(2) or ""
        res = RESOLUTION_REGEX.search(payload)
        if res and "resolution" not in tags:
            tags["resolution"] = res.group(1).lower()
    return tags


def extract(name: str, kind: MediaKind | None = None) -> MediaRecord:
    """Extract a MediaRecord from `name`; `kind` defaults to classify(name)."""
    if kind is None:
        kind = classify(name)
    stem, _ = file_util.split_video_extension(name)
    tags = extract_tags(stem)

    record = None
    if kind == MediaKind.TV_SHOW:
        record = _extract_tv(stem)
    elif kind == MediaKind.MOVIE:
        record = _extract_movie(stem)

    if record is None:
        record = MediaRecord(title=clean_name(name))
    if tags.get("resolution"):
        record.resolution = tags["resolution"]

    logger.log(
        "classify.extract",
        LogLevel.TRACE,
        name=name,
        kind=kind.value,
        title=record.title,
        year=record.year,
        season=record.season,
        episode=record.episode,
        resolution=record.resolution,
    )
    return record


def parse(name: str) -> tuple[MediaKind, MediaRecord]:
    """Classify and extract in one call."""
    kind = classify(name)
    return kind, extract(name, kind)


def _extract_tv(stem: str) -> MediaRecord | None:
    m = _TV_PATTERN.match(stem)
    if not m:
        return None

    rest = m.group("rest")
    title = clean_title(m.group("title")) or clean_name(stem)
    return MediaRecord(
        title=title,
        season=int(m.group("season")),
        episode=int(m.group("episode")),
        episode_title=clean_title(_cut_at_noise(rest)) or None,
        resolution=_find_resolution(rest),
    )


def _extract_movie(stem: str) -> MediaRecord | None:
    m = _MOVIE_PATTERN.match(stem)
    if not m:
        return None

    edition_match = _EDITION_REGEX.search(stem)
    edition = file_util.title_case(file_util.normalize_text(edition_match.group(1))) if edition_match else None

    title = m.group("title")
    if edition_match:
        title = _EDITION_REGEX.sub(" ", title)
    return MediaRecord(
        title=clean_title(title) or clean_name(stem),
        year=int(m.group("year")),
        resolution=_find_resolution(m.group("rest")),
        edition=edition,
    )


def _find_resolution(text: str) -> str | None:
    m = RESOLUTION_REGEX.search(text)
    return m.group(1).lower() if m else None


def _cut_at_noise(text: str) -> str:
    """Everything in front of the first resolution, release tag or bracket."""
    cut = len(text)
    for rx in (RESOLUTION_REGEX, _NOISE_REGEX, _STRAY_BRACKETS):
        m = rx.search(text)
        if m:
            cut = min(cut, m.start())
    return text[:cut]
