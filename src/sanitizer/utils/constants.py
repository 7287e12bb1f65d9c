"""
Constants and configuration settings for name sanitization.

This module contains the settings shared by the sanitizer components. Values
that depend on the machine (rule catalog location, drive letter fallbacks,
metadata provider credentials) are read from the environment, optionally
seeded from a local `.env` file. It also holds the regex building blocks
used by the media classifier and the status strings reported per entry.
"""

import os
import re

from dotenv import load_dotenv

load_dotenv()

# Content type constants
CONTENT_TYPE_MOVIES = "Movies"
CONTENT_TYPE_TV = "TV Shows"
CONTENT_TYPE_OTHER = "Other"

# Run settings
LOG_LEVEL = os.getenv("SANITIZER_LOG_LEVEL", "INFO")

# Rule catalog (JSON); empty means the built-in catalog
RULES_FILE = os.getenv("SANITIZER_RULES_FILE", "")

# Path resolution
# Drive letters toward the end of the alphabet are usually network mappings
NETWORK_DRIVE_LETTERS = os.getenv("SANITIZER_NETWORK_LETTERS", "TUVWXYZ").upper()
SYSTEM_DRIVE_LETTERS = "ABC"
# Format: "Z=\\server\share;Y=\\nas\media"
DRIVE_FALLBACKS = os.getenv("SANITIZER_DRIVE_FALLBACKS", "")

# Accepted video file extensions
VIDEO_EXTENSIONS = {".mp4", ".mkv", ".avi", ".mov", ".wmv", ".flv", ".mpg", ".mpeg", ".m4v"}

# Regex patterns for filename parsing
RESOLUTION_REGEX = re.compile(r"(?<![A-Za-z0-9])((?:480|576|720|1080|2160)[pi])(?![A-Za-z0-9])", re.IGNORECASE)
TAG_REGEX = re.compile(r"\[([^\]]+)\]|\(([^)]+)\)")

# TMDb API configuration
TMDB_API_KEY = os.getenv("TMDB_API_KEY")
TMDB_BASE_URL = os.getenv("TMDB_BASE_URL", "https://api.themoviedb.org/3")

# Processing status codes
STATUS_OK = "OK"
STATUS_DEMO = "DEMO"
STATUS_FAIL = "FAIL"
STATUS_COLLISION = f"{STATUS_FAIL} (target exists)"
STATUS_ACCESS_DENIED = f"{STATUS_FAIL} (access denied)"
