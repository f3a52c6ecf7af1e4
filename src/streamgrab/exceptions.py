"""Custom exception hierarchy for streamgrab.

All exceptions that cross layer boundaries must inherit from
:class:`StreamgrabError`.  Raw OS and subprocess exceptions must NEVER
propagate beyond the infrastructure layer — they are caught there and
re-raised as a typed subclass defined here.

Hierarchy
---------
StreamgrabError
├── InvalidURLError
├── InvalidRequestError
├── ExtractorError
│   ├── ExtractorNotFoundError
│   └── ExtractorProcessError
│       └── ExtractorTimeoutError
├── StreamResolutionError
│   └── StreamURLNotFoundError
├── MetadataExtractionError
│   └── MalformedMetadataError
├── DownloadFailedError
├── CacheDirectoryError
└── EnvironmentError
"""

from __future__ import annotations


class StreamgrabError(Exception):
    """Base exception for all streamgrab errors.

    Every error condition surfaced to a caller maps to a subclass of this
    exception so that the CLI error boundary (or any embedding bot layer)
    can render a clean message without leaking stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Request validation ----------------------------------------------------

class InvalidURLError(StreamgrabError):
    """Raised when the provided URL fails validation."""


class InvalidRequestError(StreamgrabError):
    """Raised when an extraction request cannot be turned into a command."""


# --- Extractor process -----------------------------------------------------

class ExtractorError(StreamgrabError):
    """Base class for failures of the external extractor process."""


class ExtractorNotFoundError(ExtractorError):
    """Raised when the yt-dlp executable cannot be located or started."""


class ExtractorProcessError(ExtractorError):
    """Raised when the extractor exits with a non-zero status."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        stderr: str = "",
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.returncode: int | None = returncode
        self.stderr: str = stderr


class ExtractorTimeoutError(ExtractorProcessError):
    """Raised when the extractor does not finish before its deadline."""

    def __init__(self, message: str, *, timeout: float, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.timeout: float = timeout


# --- Operation failures ----------------------------------------------------

class _OperationError(StreamgrabError):
    """Failure of one public operation against a single source URL."""

    def __init__(self, message: str, *, url: str = "", hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.url: str = url


class StreamResolutionError(_OperationError):
    """Raised when a direct stream URL cannot be resolved."""


class StreamURLNotFoundError(StreamResolutionError):
    """Raised when extractor output contains no line starting with ``http``."""


class MetadataExtractionError(_OperationError):
    """Raised when metadata cannot be fetched for a URL."""


class MalformedMetadataError(MetadataExtractionError):
    """Raised when extractor output is not a single JSON object."""


class DownloadFailedError(_OperationError):
    """Raised when a download into the cache directory fails."""


# --- Filesystem / environment ----------------------------------------------

class CacheDirectoryError(StreamgrabError):
    """Raised when the cache directory cannot be created."""


class EnvironmentError(StreamgrabError):
    """Raised when a required runtime dependency is not available."""


def append_ytdlp_upgrade_suggestion(hint: str) -> str:
    """Append yt-dlp upgrade guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Also try updating yt-dlp:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    pip install --upgrade yt-dlp",
        )
    )
