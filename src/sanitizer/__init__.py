"""
A media name sanitization module for Plex-style libraries.

This module provides the building blocks used to clean up folder and file
names before they are handed to a Plex media server. Names coming from
release groups are usually noisy; the package strips that noise with an
ordered, configurable rule pipeline, recognises movies and TV episodes, and
re-assembles the extracted fields into canonical names.

The module is organized into several categories:
- Path resolution for local, UNC and mapped network drive paths.
- Ordered regex rule sets and the pipeline that applies them.
- Media classification and canonical name generation.
- Scan orchestration with preview/apply/organize steps.
"""

__version__ = "1.0.0"

# Debug flag for controlling verbose output
DEBUG: bool = False

__all__ = ["__version__", "DEBUG"]
