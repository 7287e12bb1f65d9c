"""Exceptions raised by the sanitizer package."""


class SanitizerError(Exception):
    """Base class for sanitizer errors."""


class RuleCatalogError(SanitizerError, ValueError):
    """A rule or rule catalog is malformed (bad regex, bad backreference, missing field)."""


class MappedDriveNotSupportedError(SanitizerError):
    """A raw mapped drive letter was given where a resolved network address is required."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Mapped drives are not supported. Use the full network path "
            f"(e.g. \\\\server\\share) instead of '{path}'."
        )


class ScanStateError(SanitizerError):
    """A scan session operation was invoked out of order."""
