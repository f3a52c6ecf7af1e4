"""Core / service layer — command assembly, parsing and orchestration.

Rules
-----
* No ``print()`` calls.
* No subprocess or filesystem access; both arrive through the protocols
  in :mod:`streamgrab.core.protocols`.
* No imports from ``cli`` or ``infra``.
"""

from streamgrab.core.command_builder import CommandBuilder
from streamgrab.core.download_service import DOWNLOAD_TIMEOUT, DownloadService
from streamgrab.core.metadata_service import MetadataService
from streamgrab.core.models import (
    Command,
    ExtractionMode,
    ExtractionRequest,
    ExtractionResult,
    Meta,
)
from streamgrab.core.protocols import CacheStore, ProcessRunner
from streamgrab.core.stream_service import StreamService

__all__: list[str] = [
    "DOWNLOAD_TIMEOUT",
    "CacheStore",
    "Command",
    "CommandBuilder",
    "DownloadService",
    "ExtractionMode",
    "ExtractionRequest",
    "ExtractionResult",
    "Meta",
    "MetadataService",
    "ProcessRunner",
    "StreamService",
]
