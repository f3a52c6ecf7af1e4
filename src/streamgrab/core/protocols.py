"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so the orchestration and parsing logic can be
exercised without spawning processes or touching the filesystem.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from streamgrab.core.models import ExtractionResult


class ProcessRunner(Protocol):
    """Contract for executing the external extractor.

    Any object that implements :meth:`run` with the correct signature
    satisfies this protocol structurally (no explicit inheritance
    required).
    """

    def run(
        self,
        args: Sequence[str],
        *,
        timeout: float | None = None,
    ) -> ExtractionResult:
        """Run the extractor with *args* and return its captured stdout.

        A non-zero exit may be reported either by raising
        :class:`ExtractorProcessError` or by returning a result whose
        ``ok`` is false; callers handle both.

        Parameters
        ----------
        args:
            Extractor arguments, executable excluded.
        timeout:
            Deadline in seconds, or ``None`` for no deadline.  On expiry
            the child process must be terminated.

        Raises
        ------
        ExtractorNotFoundError
            When the executable cannot be started.
        ExtractorTimeoutError
            When the deadline expires.
        ExtractorProcessError
            When the process exits with a non-zero status.
        """
        ...  # pragma: no cover


class CacheStore(Protocol):
    """Contract for the process-owned download cache area."""

    def ensure(self) -> Path:
        """Create the cache directory if needed and return it.

        Raises
        ------
        CacheDirectoryError
            When the directory cannot be created.
        """
        ...  # pragma: no cover

    def new_output_path(self) -> Path:
        """Derive a fresh extension-less output path inside the cache."""
        ...  # pragma: no cover

    def discard(self, path: Path) -> None:
        """Best-effort removal of partial artifacts at *path*.  Never raises."""
        ...  # pragma: no cover

    def resolve(self, path: Path) -> Path:
        """Return *path* as an absolute path.

        Raises
        ------
        OSError
            When the absolute path cannot be determined.
        """
        ...  # pragma: no cover

    def teardown(self) -> None:
        """Recursively remove the cache directory.  Never raises."""
        ...  # pragma: no cover
