"""
Text and filesystem helpers shared by the sanitizer components.

The text helpers normalize separators, title-case names and strip characters
that are not allowed in file names. `LocalFileSystem` is the filesystem
collaborator used by the scan engine; tests and callers may substitute any
object with the same methods.
"""
import os
import re
import shutil

from sanitizer.utils import VIDEO_EXTENSIONS

_SEPARATORS = re.compile(r"[._]+")
_WHITESPACE = re.compile(r"\s+")
_WORD = re.compile(r"[^\s-]+")
_ACRONYM_MAX_LEN = 4


def normalize_text(text: str) -> str:
    """Normalize text by replacing separators with spaces and collapsing whitespace."""
    text = _SEPARATORS.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def title_case(text: str) -> str:
    """
    Capitalize the first letter of every word and lowercase the rest.

    Words are split on whitespace and hyphens ("spider-man" -> "Spider-Man").
    Unlike str.title() letters after apostrophes are left alone
    ("don't" -> "Don't"), and applying it twice gives the same result.
    Words containing digits ("S01E02", "x264") and short all-caps words
    ("NCIS", "FBI") are kept as they are.
    """
    return _WORD.sub(lambda m: _case_word(m.group(0)), text)


def _case_word(word: str) -> str:
    if any(ch.isdigit() for ch in word):
        return word
    if word.isupper() and len(word) <= _ACRONYM_MAX_LEN:
        return word
    return word[:1].upper() + word[1:].lower()


def sanitize_filename(name: str) -> str:
    """
    Remove invalid filesystem characters from a name.
    Uses str.translate() for optimal performance.
    """
    invalid_chars = '<>:"/\\|?*'
    translation_table = str.maketrans('', '', invalid_chars)
    return name.translate(translation_table).strip()


def split_video_extension(name: str) -> tuple[str, str]:
    """
    Split a known video extension off a name.

    Only extensions in VIDEO_EXTENSIONS count, so dotted release names such as
    "Movie.Name.2014.1080p" keep their last token.
    """
    stem, ext = os.path.splitext(name)
    if ext.lower() in VIDEO_EXTENSIONS:
        return stem, ext
    return name, ""


class LocalFileSystem:
    """Filesystem collaborator backed by the local OS calls."""

    def list_directories(self, path: str) -> list[os.DirEntry]:
        """Immediate subdirectories of `path`, sorted by name."""
        with os.scandir(path) as it:
            entries = [e for e in it if e.is_dir()]
        return sorted(entries, key=lambda e: e.name.lower())

    def list_files(self, path: str, extensions=VIDEO_EXTENSIONS) -> list[os.DirEntry]:
        """Immediate files of `path` whose extension is in `extensions`, sorted by name."""
        with os.scandir(path) as it:
            entries = [
                e for e in it
                if e.is_file() and os.path.splitext(e.name)[1].lower() in extensions
            ]
        return sorted(entries, key=lambda e: e.name.lower())

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_same(self, first: str, second: str) -> bool:
        """True when both paths point at the same entry (case-only renames on case-insensitive volumes)."""
        try:
            return os.path.samefile(first, second)
        except OSError:
            return False

    def rename(self, source: str, target: str) -> None:
        """Rename within a volume; raises OSError (PermissionError on access denied)."""
        os.rename(source, target)

    def move(self, source: str, target: str) -> None:
        """Move across volumes if needed, creating the target's parent folders."""
        os.makedirs(os.path.dirname(target) or ".", exist_ok=True)
        shutil.move(source, target)
