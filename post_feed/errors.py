from __future__ import annotations


class ConfigError(RuntimeError):
    """Raised when configuration is missing or invalid."""


class LoadError(RuntimeError):
    """Base class for failures that abort a corpus load."""


class FetchError(LoadError):
    """Raised when the source document cannot be fetched."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnsupportedFormatError(LoadError):
    """Raised when the data file extension is neither .json nor .xml."""


class MalformedInputError(LoadError):
    """Raised when the source text is not valid JSON/XML or has the wrong shape."""


class LoadInProgressError(RuntimeError):
    """Raised when a load is requested while another one is still running."""
