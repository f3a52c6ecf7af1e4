"""Core download service — orchestrates a download into the cache area.

This service delegates process execution to a
:class:`~streamgrab.core.protocols.ProcessRunner` and every filesystem
touch to a :class:`~streamgrab.core.protocols.CacheStore`, both injected
at construction time.  It is responsible for:

* Deriving a per-call output path so concurrent downloads do not share
  a target.
* Applying the fixed download deadline.
* Discarding partial artifacts when the extractor fails.
* Ensuring only :class:`~streamgrab.exceptions.StreamgrabError`
  subclasses escape.
"""

from __future__ import annotations

import logging
from pathlib import Path

from streamgrab.core.command_builder import CommandBuilder, validate_url
from streamgrab.core.models import ExtractionMode
from streamgrab.core.protocols import CacheStore, ProcessRunner
from streamgrab.exceptions import DownloadFailedError, StreamgrabError

logger = logging.getLogger(__name__)

DOWNLOAD_TIMEOUT: float = 5 * 60
"""Hard deadline, in seconds, for every download invocation."""


class DownloadService:
    """Service that downloads best-available audio into the cache.

    Parameters
    ----------
    runner:
        Any object satisfying the :class:`ProcessRunner` protocol.
    builder:
        Command builder carrying the cookie configuration.
    cache:
        Any object satisfying the :class:`CacheStore` protocol.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        builder: CommandBuilder,
        cache: CacheStore,
    ) -> None:
        self._runner: ProcessRunner = runner
        self._builder: CommandBuilder = builder
        self._cache: CacheStore = cache

    def download(self, url: str, *, format_selector: str | None = None) -> Path:
        """Download *url* and return the absolute path of the cached file.

        The returned path has no extension appended; yt-dlp writes to the
        literal output path it is given.

        Raises
        ------
        InvalidURLError
            If *url* is empty or malformed.
        CacheDirectoryError
            If the cache directory cannot be created.  No process is
            started in that case.
        DownloadFailedError
            If the extractor fails or times out, or the absolute path of
            the result cannot be determined.
        """
        url = validate_url(url)
        self._cache.ensure()

        output_path = self._cache.new_output_path()
        command = self._builder.build_for(
            ExtractionMode.DOWNLOAD,
            url,
            format_selector=format_selector,
            output_template=str(output_path),
        )

        logger.info("Downloading %s -> %s", url, output_path)
        try:
            result = self._runner.run(command.args, timeout=DOWNLOAD_TIMEOUT)
        except StreamgrabError as exc:
            self._cache.discard(output_path)
            raise DownloadFailedError(
                f"failed to download stream from URL {url!r}: {exc}",
                url=url,
                hint=exc.hint,
            ) from exc
        except Exception as exc:
            self._cache.discard(output_path)
            raise DownloadFailedError(
                f"Unexpected error downloading stream from URL {url!r}: {exc}",
                url=url,
            ) from exc

        if not result.ok:
            self._cache.discard(output_path)
            raise DownloadFailedError(
                f"failed to download stream from URL {url!r}: "
                f"yt-dlp exited with status {result.returncode}",
                url=url,
            )

        try:
            absolute = self._cache.resolve(output_path)
        except OSError as exc:
            raise DownloadFailedError(
                f"failed to resolve absolute path for {str(output_path)!r}: {exc}",
                url=url,
            ) from exc

        logger.debug("Cached %s at %s", url, absolute)
        return absolute
