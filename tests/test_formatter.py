from pathlib import Path

import pytest

from sanitizer.media import MediaKind, MediaRecord, formatter


@pytest.mark.parametrize(
    "record, kind, expected",
    [
        (MediaRecord("Movie Name", year=2014, resolution="1080p"), MediaKind.MOVIE, "Movie Name (2014) [1080p]"),
        (MediaRecord("Movie Name"), MediaKind.MOVIE, "Movie Name"),
        (
            MediaRecord("The Show", season=2, episode=5, episode_title="Some Title", resolution="1080p"),
            MediaKind.TV_SHOW,
            "The Show - S02E05 - Some Title [1080p]",
        ),
        (MediaRecord("The Show", season=1, episode=12), MediaKind.TV_SHOW, "The Show - S01E12"),
        (MediaRecord("The Show", season=1, episode_title="Pilot"), MediaKind.TV_SHOW, "The Show"),
        (MediaRecord("The Show", season=1, episode=1, episode_title="   "), MediaKind.TV_SHOW, "The Show - S01E01"),
        (MediaRecord("Home Video", resolution="720p"), MediaKind.UNKNOWN, "Home Video [720p]"),
        (MediaRecord("Home Video", year=2001), MediaKind.UNKNOWN, "Home Video"),
    ],
)
def test_generate(record, kind, expected):
    assert formatter.generate(record, kind) == expected


def test_edition_only_when_requested():
    record = MediaRecord("Another Movie", year=2019, resolution="720p", edition="Directors Cut")

    assert formatter.generate(record, MediaKind.MOVIE) == "Another Movie (2019) [720p]"
    assert (
        formatter.generate(record, MediaKind.MOVIE, include_edition=True)
        == "Another Movie (2019) {edition-Directors Cut} [720p]"
    )


def test_invalid_filename_characters_are_removed():
    record = MediaRecord("What: If?", season=1, episode=1, episode_title='A "Quote"')
    assert formatter.generate(record, MediaKind.TV_SHOW) == "What If - S01E01 - A Quote"


def test_bad_field_falls_back_to_title():
    record = MediaRecord("Movie Name", year="not a year")
    assert formatter.generate(record, MediaKind.MOVIE) == "Movie Name"


def test_generate_filename_keeps_extension():
    record = MediaRecord("Movie Name", year=2014, resolution="1080p")
    assert formatter.generate_filename(record, MediaKind.MOVIE, ".mkv") == "Movie Name (2014) [1080p].mkv"


def test_build_folder_name():
    assert formatter.build_folder_name("Movie Name", 2014) == "Movie Name (2014)"
    assert formatter.build_folder_name("Movie Name", None) == "Movie Name"


@pytest.mark.parametrize(
    "record, kind, expected",
    [
        (MediaRecord("Movie Name", year=2014), MediaKind.MOVIE, Path("Movies/Movie Name (2014)/f.mkv")),
        (MediaRecord("The Show", season=2, episode=5), MediaKind.TV_SHOW, Path("TV Shows/The Show/Season 02/f.mkv")),
        (MediaRecord("Clip"), MediaKind.UNKNOWN, Path("Other/f.mkv")),
    ],
)
def test_build_library_path(record, kind, expected):
    assert formatter.build_library_path(record, kind, "f.mkv") == expected
