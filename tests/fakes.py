"""Fake collaborators shared by the test modules."""

from sanitizer.paths import NetworkShares
from sanitizer.utils.file_util import LocalFileSystem


class FakeShares(NetworkShares):
    """Network collaborator with a fixed drive table and a set of reachable paths."""

    def __init__(self, mappings=None, reachable=(), connectable=()):
        self.mappings = {k.upper(): v for k, v in (mappings or {}).items()}
        self.reachable = set(reachable)
        self.connectable = set(connectable)
        self.lookups = []
        self.probes = []
        self.connects = []

    def get_unc_path(self, drive_path):
        self.lookups.append(drive_path)
        unc = self.mappings.get(drive_path[:2].upper())
        if unc is None:
            return None
        rest = drive_path[2:]
        if rest and not rest.startswith("\\"):
            rest = "\\" + rest
        return unc + rest

    def connect(self, unc_path):
        self.connects.append(unc_path)
        if unc_path in self.connectable:
            self.reachable.add(unc_path)
            return True
        return False

    def probe(self, path):
        self.probes.append(path)
        return path in self.reachable


class FakeProvider:
    """Metadata provider answering from a {(title, season, episode): name} table."""

    def __init__(self, episodes=None):
        self.episodes = episodes or {}
        self.calls = []

    def episode_title(self, title, year, season, episode):
        self.calls.append((title, year, season, episode))
        return self.episodes.get((title, season, episode))


class FailingFileSystem(LocalFileSystem):
    """Local filesystem whose renames fail with a fixed error."""

    def __init__(self, error):
        self.error = error

    def rename(self, source, target):
        raise self.error
