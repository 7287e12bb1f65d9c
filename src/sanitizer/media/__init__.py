"""
Media classification and canonical name generation.

Package organization:
- classifier: detect movie / TV / unknown names and extract a `MediaRecord`.
- formatter: re-assemble a `MediaRecord` into the canonical Plex name and
  library path.
- enrich: optional TMDb lookups that refine episode titles.

Example:
    from sanitizer.media import classifier, formatter
    kind, record = classifier.parse("Movie.Name.2014.1080p.mkv")
    formatter.generate(record, kind)  # "Movie Name (2014) [1080p]"
"""
from . import classifier, formatter
from .classifier import MediaKind, MediaRecord

__all__ = [
    "classifier",
    "formatter",
    "MediaKind",
    "MediaRecord",
]
