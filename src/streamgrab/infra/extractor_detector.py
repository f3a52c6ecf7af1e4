"""Infrastructure: yt-dlp executable detection and install guidance.

Locates the extractor either as a standalone ``yt-dlp`` binary on the
system PATH or, failing that, as the ``yt_dlp`` package runnable through
the current interpreter (``python -m yt_dlp``).

Rules
-----
* Detection via :func:`shutil.which` and :func:`importlib.util.find_spec`
  only — nothing is executed here.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import importlib.util
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path

from streamgrab.exceptions import ExtractorNotFoundError

EXECUTABLE_NAME: str = "yt-dlp"
MODULE_NAME: str = "yt_dlp"


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ExtractorStatus:
    """Result of an extractor detection probe.

    Attributes
    ----------
    found : bool
        Whether a runnable extractor was located.
    argv : tuple[str, ...]
        Command prefix that starts the extractor.  Empty when not found.
    version_hint : str
        Human-readable status string (e.g. ``"found at …"``).
    install_commands : tuple[str, ...]
        Suggested install commands.  Empty when the extractor is present.
    """

    found: bool
    argv: tuple[str, ...]
    version_hint: str
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_extractor(preferred: str | None = None) -> ExtractorStatus:
    """Probe for a runnable yt-dlp.

    *preferred* (an explicit executable path or name) wins when it
    resolves.  Returns an :class:`ExtractorStatus` regardless of the
    outcome — the caller decides whether to abort or merely warn.
    """
    for candidate in (preferred, EXECUTABLE_NAME):
        if not candidate:
            continue
        located = shutil.which(candidate)
        if located is not None:
            resolved = Path(located).resolve()
            return ExtractorStatus(
                found=True,
                argv=(str(resolved),),
                version_hint=f"found at {resolved}",
                install_commands=(),
            )

    if importlib.util.find_spec(MODULE_NAME) is not None:
        return ExtractorStatus(
            found=True,
            argv=(sys.executable, "-m", MODULE_NAME),
            version_hint=f"python module via {sys.executable}",
            install_commands=(),
        )

    return ExtractorStatus(
        found=False,
        argv=(),
        version_hint="not found",
        install_commands=_install_commands(),
    )


def require_extractor(preferred: str | None = None) -> tuple[str, ...]:
    """Return the extractor command prefix or raise :class:`ExtractorNotFoundError`."""
    status = detect_extractor(preferred)
    if not status.found:
        hint_lines = ["Install yt-dlp using one of:"]
        hint_lines.extend(f"  {cmd}" for cmd in status.install_commands)
        raise ExtractorNotFoundError(
            "yt-dlp is not installed or not on PATH.",
            hint="\n".join(hint_lines),
        )
    return status.argv


def _install_commands() -> tuple[str, ...]:
    return (
        "pip install yt-dlp",
        "pipx install yt-dlp",
        "https://github.com/yt-dlp/yt-dlp#installation",
    )
