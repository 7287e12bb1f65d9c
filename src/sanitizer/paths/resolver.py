"""
Path classification, normalization and reachability checks.

Mapped drive letters are session-scoped aliases for network shares and can
silently point nowhere after a reboot or under another user. The resolver
therefore never trusts a drive letter for a network location: it resolves the
letter to a UNC address first (platform lookup, then a configured fallback
table) and only reasons about existence against that address.

Nothing here raises on a resolution failure; unresolved paths degrade to
"local" or "mapped drive, unresolved" with `accessible=False`.
"""
import ntpath
import os
from dataclasses import dataclass
from enum import Enum

from sanitizer.paths.network import NetworkShares, default_network_shares
from sanitizer.utils import (
    DRIVE_FALLBACKS,
    NETWORK_DRIVE_LETTERS,
    SYSTEM_DRIVE_LETTERS,
    LogLevel,
    logger,
)


class PathKind(Enum):
    LOCAL = "local"
    UNC = "unc"
    MAPPED_DRIVE_UNRESOLVED = "mapped_drive_unresolved"


@dataclass(frozen=True)
class ResolvedPath:
    original: str
    normalized: str
    kind: PathKind
    accessible: bool


def is_drive_path(path: str) -> bool:
    """True for paths such as "Z:", "Z:\\New" or "z:/new"."""
    return len(path) >= 2 and path[1] == ":" and path[0].isalpha()


def is_unc_path(path: str) -> bool:
    return path.startswith("\\\\")


def normalize_path(path: str) -> str:
    """
    Normalize a user supplied path string.

    - Surrounding whitespace is trimmed.
    - UNC paths are returned as-is.
    - Drive letter paths use backslashes and always have one after the colon
      ("Z:" -> "Z:\\", "Z:New" -> "Z:\\New", "Z:/New" -> "Z:\\New").
    - Anything else has forward slashes converted to the local separator.
    """
    if not path:
        return path

    path = path.strip()
    if is_unc_path(path):
        return path

    if is_drive_path(path):
        path = path.replace("/", "\\")
        if len(path) == 2:
            return path + "\\"
        if path[2] != "\\":
            return path[:2] + "\\" + path[2:]
        return path

    return path.replace("/", os.sep)


def join_path(parent: str, name: str) -> str:
    """Join using Windows rules for drive/UNC parents and the local rules otherwise."""
    if is_unc_path(parent) or is_drive_path(parent):
        return ntpath.join(parent, name)
    return os.path.join(parent, name)


def parse_drive_fallbacks(raw: str) -> dict[str, str]:
    """
    Parse a drive fallback table such as "Z=\\\\server\\share;Y=\\\\nas\\media".

    Malformed items are logged and skipped.
    """
    table = {}
    for item in (raw or "").split(";"):
        item = item.strip()
        if not item:
            continue
        letter, sep, address = item.partition("=")
        letter = letter.strip().rstrip(":").upper()
        address = address.strip()
        if not sep or len(letter) != 1 or not letter.isalpha() or not is_unc_path(address):
            logger.log("config.drive_fallback_invalid", LogLevel.WARN, item=item)
            continue
        table[letter] = address
    return table


class PathResolver:
    """
    Classify and resolve path strings against the network collaborator.

    Args:
        network: collaborator for drive lookups, share connects and probes.
        drive_fallbacks: last-resort UNC address per drive letter, used when
            the platform lookup fails.
        network_letters: drive letters treated as candidate network drives.
        system_letters: drive letters that are always local.
    """

    def __init__(
        self,
        network: NetworkShares | None = None,
        drive_fallbacks: dict[str, str] | None = None,
        network_letters: str = NETWORK_DRIVE_LETTERS,
        system_letters: str = SYSTEM_DRIVE_LETTERS,
    ):
        self.network = network if network is not None else default_network_shares()
        if drive_fallbacks is None:
            drive_fallbacks = parse_drive_fallbacks(DRIVE_FALLBACKS)
        self.drive_fallbacks = {k.upper(): v for k, v in drive_fallbacks.items()}
        self.network_letters = network_letters.upper()
        self.system_letters = system_letters.upper()

    def is_mapped_drive(self, path: str) -> bool:
        """
        True when `path` starts with a candidate network drive letter.

        A candidate letter counts as mapped whether or not it resolves: an
        unresolvable one is assumed to be a broken mapping rather than a local
        disk, unless it is a system letter.
        """
        if not path or not is_drive_path(path.strip()):
            return False
        path = path.strip()
        if not self._is_candidate_letter(path[0]):
            return False
        if not self._lookup(path[:2]):
            logger.log("resolve.broken_mapping", LogLevel.DEBUG, drive=path[:2])
        return True

    def resolve(self, path: str) -> ResolvedPath:
        """Normalize, classify and probe `path`. Never cached; reachability is re-checked each call."""
        normalized = normalize_path(path)
        if not normalized:
            return ResolvedPath(path, normalized, PathKind.LOCAL, False)

        kind = PathKind.LOCAL
        if is_unc_path(normalized):
            kind = PathKind.UNC
        elif is_drive_path(normalized):
            unc_path = self._lookup(normalized)
            if unc_path:
                logger.log("resolve.lookup", LogLevel.DEBUG, path=normalized, unc=unc_path)
                normalized, kind = unc_path, PathKind.UNC
            else:
                fallback = self._fallback(normalized)
                if fallback:
                    logger.log("resolve.fallback", LogLevel.DEBUG, path=normalized, unc=fallback)
                    normalized, kind = fallback, PathKind.UNC
                elif self._is_candidate_letter(normalized[0]):
                    logger.log("resolve.unresolved", LogLevel.WARN, path=normalized)
                    return ResolvedPath(path, normalized, PathKind.MAPPED_DRIVE_UNRESOLVED, False)

        accessible = self._probe(normalized, kind)
        logger.log("resolve.done", LogLevel.TRACE, path=normalized, kind=kind.value, accessible=accessible)
        return ResolvedPath(path, normalized, kind, accessible)

    def is_accessible(self, path: str) -> bool:
        return self.resolve(path).accessible

    def _is_candidate_letter(self, letter: str) -> bool:
        letter = letter.upper()
        return letter in self.network_letters and letter not in self.system_letters

    def _lookup(self, drive_path: str) -> str | None:
        try:
            return self.network.get_unc_path(drive_path)
        except (OSError, ValueError) as e:
            logger.log("resolve.lookup_error", LogLevel.DEBUG, path=drive_path, error=str(e))
            return None

    def _fallback(self, drive_path: str) -> str | None:
        address = self.drive_fallbacks.get(drive_path[0].upper())
        if not address:
            return None
        rest = drive_path[2:].strip("\\")
        address = address.rstrip("\\")
        return f"{address}\\{rest}" if rest else address

    def _probe(self, path: str, kind: PathKind) -> bool:
        if kind != PathKind.UNC:
            try:
                return os.path.isdir(path)
            except (OSError, ValueError):
                return False

        if self.network.probe(path):
            return True
        # One transient connect attempt, then exactly one re-probe
        if self.network.connect(path):
            logger.log("resolve.connected", LogLevel.DEBUG, path=path)
            return self.network.probe(path)
        return False
