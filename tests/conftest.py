import pytest

from sanitizer.paths import PathResolver
from sanitizer.rules import default_rule_set
from sanitizer.scan import FolderScanEngine
from sanitizer.utils import LogLevel, logger
from tests.fakes import FakeShares


# ────────────────────────────────────────────────
# LOGGING
# ────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def quiet_logger():
    """Keep test output free of INFO chatter; restore the level afterwards."""
    previous = logger.get_log_level()
    logger.set_log_level(LogLevel.ERROR)
    yield
    logger.set_log_level(previous)


# ────────────────────────────────────────────────
# RESOLVER / ENGINE FIXTURES
# ────────────────────────────────────────────────

@pytest.fixture
def shares():
    """Network collaborator where nothing is mapped or reachable."""
    return FakeShares()


@pytest.fixture
def resolver(shares):
    return PathResolver(network=shares, drive_fallbacks={})


@pytest.fixture
def engine(resolver):
    return FolderScanEngine(resolver=resolver, rule_set=default_rule_set())
