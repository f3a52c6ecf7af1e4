"""Infrastructure layer — external system integration.

This layer wraps all interaction with the yt-dlp process and the local
filesystem.  Every raw OS or subprocess exception is caught here and
re-raised as a :class:`~streamgrab.exceptions.StreamgrabError` subclass,
except on cleanup paths, which log and continue.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from streamgrab.infra.cache_area import CacheArea
from streamgrab.infra.credentials import CredentialProvisioner
from streamgrab.infra.extractor_detector import (
    ExtractorStatus,
    detect_extractor,
    require_extractor,
)
from streamgrab.infra.process_invoker import SubprocessInvoker

__all__: list[str] = [
    "CacheArea",
    "CredentialProvisioner",
    "ExtractorStatus",
    "SubprocessInvoker",
    "detect_extractor",
    "require_extractor",
]
