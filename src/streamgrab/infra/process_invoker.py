"""Subprocess-backed implementation of :class:`~streamgrab.core.protocols.ProcessRunner`.

This module is the **only** place in the codebase that starts the
extractor process.  All :mod:`subprocess` and OS exceptions are caught
here and re-raised as :class:`~streamgrab.exceptions.ExtractorError`
subclasses.  Standard error is captured for diagnostics only.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from streamgrab.core.models import ExtractionResult
from streamgrab.exceptions import (
    ExtractorNotFoundError,
    ExtractorProcessError,
    ExtractorTimeoutError,
)
from streamgrab.infra.extractor_detector import require_extractor

logger = logging.getLogger(__name__)

_STDERR_TAIL_LINES: int = 5


class SubprocessInvoker:
    """Run yt-dlp as a child process and capture its stdout.

    Parameters
    ----------
    executable:
        Command prefix that starts the extractor.  When ``None`` it is
        located on first use via :func:`require_extractor`.
    preferred:
        Executable hint forwarded to detection (e.g. from settings).
    """

    def __init__(
        self,
        executable: Sequence[str] | None = None,
        *,
        preferred: str | None = None,
    ) -> None:
        self._executable: tuple[str, ...] | None = (
            tuple(executable) if executable else None
        )
        self._preferred: str | None = preferred

    @property
    def executable(self) -> tuple[str, ...]:
        if self._executable is None:
            self._executable = require_extractor(self._preferred)
        return self._executable

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def run(
        self,
        args: Sequence[str],
        *,
        timeout: float | None = None,
    ) -> ExtractionResult:
        """Run the extractor with *args*; see :class:`ProcessRunner`."""
        argv = [*self.executable, *args]
        logger.debug("Running %s", argv)

        try:
            completed = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                timeout=timeout,
                check=False,
            )
        except (FileNotFoundError, PermissionError) as exc:
            raise ExtractorNotFoundError(
                f"failed to execute yt-dlp: {exc}",
                hint="Check that yt-dlp is installed and executable.",
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise ExtractorTimeoutError(
                f"yt-dlp did not finish within {timeout:g} seconds",
                timeout=float(exc.timeout),
            ) from exc

        if completed.stderr:
            logger.debug("yt-dlp stderr:\n%s", completed.stderr.rstrip())

        if completed.returncode != 0:
            tail = _tail(completed.stderr)
            raise ExtractorProcessError(
                f"yt-dlp exited with status {completed.returncode}"
                + (f": {tail}" if tail else ""),
                returncode=completed.returncode,
                stderr=completed.stderr or "",
            )

        return ExtractionResult(stdout=completed.stdout or "", returncode=0)


def _tail(text: str | None) -> str:
    """Last few non-empty lines of *text*, joined by ``" | "``."""
    if not text:
        return ""
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    return " | ".join(lines[-_STDERR_TAIL_LINES:])
