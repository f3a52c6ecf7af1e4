"""Domain models for streamgrab.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O and zero dependencies
on external packages.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass


class ExtractionMode(enum.Enum):
    """What a single extractor invocation is asked to produce."""

    RESOLVE_STREAM_URL = "resolve-stream-url"
    DUMP_METADATA = "dump-metadata"
    DOWNLOAD = "download"


# ---------------------------------------------------------------------------
# Request / command / result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ExtractionRequest:
    """A target URL plus the mode and optional knobs for one invocation."""

    url: str
    """Source page URL handed to the extractor."""

    mode: ExtractionMode

    format_selector: str | None = None
    """yt-dlp format selector (``-f``), or ``None`` for the mode default."""

    output_template: str | None = None
    """Output path or template (``-o``), or ``None`` for the mode default."""


@dataclass(frozen=True, slots=True)
class Command:
    """Arguments for one extractor invocation, executable excluded."""

    args: tuple[str, ...]

    def __iter__(self) -> Iterator[str]:
        return iter(self.args)

    def __len__(self) -> int:
        return len(self.args)


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Captured standard output of a finished extractor run."""

    stdout: str
    returncode: int = 0

    @property
    def ok(self) -> bool:
        return self.returncode == 0


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Meta:
    """Structured metadata for a single media item."""

    title: str
    """Human-readable title."""

    duration: float | None = None
    """Duration in seconds, or ``None`` if unavailable."""

    uploader: str | None = None
    """Channel or uploader name, if reported."""

    webpage_url: str | None = None
    """Canonical URL of the source page."""

    thumbnail: str | None = None
    """Thumbnail image URL, if reported."""

    parser: str = ""
    """Identifier of the extractor that produced this record."""
