"""Runtime settings read from the environment.

When :func:`load_settings` reads the real process environment it first
loads a ``.env`` file with python-dotenv; variables already set in the
environment take precedence over the file.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

COOKIES_ENV: str = "YOUTUBE_COOKIES"
COOKIE_PATH_ENV: str = "STREAMGRAB_COOKIE_PATH"
CACHE_DIR_ENV: str = "STREAMGRAB_CACHE_DIR"
EXTRACTOR_ENV: str = "STREAMGRAB_YTDLP"

DEFAULT_COOKIE_PATH: Path = Path("cookies.txt")
DEFAULT_CACHE_DIR: Path = Path("cache")


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable pipeline configuration."""

    cookies_blob: str = ""
    """Raw cookie payload, optionally base64-encoded."""

    cookie_path: Path = DEFAULT_COOKIE_PATH
    """Where the decoded cookies are written."""

    cache_dir: Path = DEFAULT_CACHE_DIR
    """Scratch directory for downloads, removed at shutdown."""

    extractor_path: str | None = None
    """Explicit yt-dlp executable; auto-detected when ``None``."""


def load_settings(
    env: Mapping[str, str] | None = None,
    *,
    dotenv_path: Path | str | None = ".env",
) -> Settings:
    """Build :class:`Settings` from *env* (default: ``os.environ``).

    The ``.env`` file at *dotenv_path* is only consulted when *env* is
    ``None``; a missing file is not an error.
    """
    if env is None:
        if dotenv_path is not None:
            load_dotenv(dotenv_path, override=False)
        env = os.environ

    return Settings(
        cookies_blob=env.get(COOKIES_ENV, ""),
        cookie_path=Path(env.get(COOKIE_PATH_ENV) or DEFAULT_COOKIE_PATH),
        cache_dir=Path(env.get(CACHE_DIR_ENV) or DEFAULT_CACHE_DIR),
        extractor_path=env.get(EXTRACTOR_ENV) or None,
    )
