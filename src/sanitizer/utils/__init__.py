"""
Constants, logging and file helpers shared by the sanitizer components.

This module re-exports the configuration constants, the status strings used
in per-entry apply results, and the log level enumeration of the structured
logger.
"""

from .constants import (
    CONTENT_TYPE_MOVIES,
    CONTENT_TYPE_OTHER,
    CONTENT_TYPE_TV,
    DRIVE_FALLBACKS,
    LOG_LEVEL,
    NETWORK_DRIVE_LETTERS,
    RESOLUTION_REGEX,
    RULES_FILE,
    STATUS_ACCESS_DENIED,
    STATUS_COLLISION,
    STATUS_DEMO,
    STATUS_FAIL,
    STATUS_OK,
    SYSTEM_DRIVE_LETTERS,
    TAG_REGEX,
    TMDB_API_KEY,
    TMDB_BASE_URL,
    VIDEO_EXTENSIONS,
)
from .logger import LogLevel

__all__ = [
    "LOG_LEVEL",
    "RULES_FILE",
    "NETWORK_DRIVE_LETTERS",
    "SYSTEM_DRIVE_LETTERS",
    "DRIVE_FALLBACKS",
    "VIDEO_EXTENSIONS",
    "RESOLUTION_REGEX",
    "TAG_REGEX",
    "TMDB_API_KEY",
    "TMDB_BASE_URL",
    "STATUS_OK",
    "STATUS_DEMO",
    "STATUS_FAIL",
    "STATUS_COLLISION",
    "STATUS_ACCESS_DENIED",
    "CONTENT_TYPE_MOVIES",
    "CONTENT_TYPE_TV",
    "CONTENT_TYPE_OTHER",
    "LogLevel",
]
