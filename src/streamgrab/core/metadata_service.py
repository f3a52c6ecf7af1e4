"""Core metadata service — fetches structured metadata for a URL.

Depends on a :class:`~streamgrab.core.protocols.ProcessRunner` injected
at construction time, keeping the core free of subprocess imports.

Guarantees
----------
* Pure orchestration — no filesystem access; ``--skip-download`` is
  always requested.
* Only :class:`~streamgrab.exceptions.StreamgrabError` subclasses escape.
"""

from __future__ import annotations

from streamgrab.core.command_builder import CommandBuilder, validate_url
from streamgrab.core.models import ExtractionMode, Meta
from streamgrab.core.parsers import parse_metadata
from streamgrab.core.protocols import ProcessRunner
from streamgrab.exceptions import (
    MalformedMetadataError,
    MetadataExtractionError,
    StreamgrabError,
    append_ytdlp_upgrade_suggestion,
)


class MetadataService:
    """Stateless service driving ``yt-dlp --dump-json``.

    Parameters
    ----------
    runner:
        Any object satisfying the :class:`ProcessRunner` protocol.
    builder:
        Command builder carrying the cookie configuration.
    """

    def __init__(self, runner: ProcessRunner, builder: CommandBuilder) -> None:
        self._runner: ProcessRunner = runner
        self._builder: CommandBuilder = builder

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def fetch(self, url: str, *, timeout: float | None = None) -> Meta:
        """Fetch metadata for *url* without downloading anything.

        Raises
        ------
        InvalidURLError
            If *url* is empty or malformed.
        MalformedMetadataError
            If the extractor output is not a single JSON object.
        MetadataExtractionError
            If the extractor process failed.
        """
        url = validate_url(url)
        stdout = self._dump(url, timeout=timeout)

        try:
            return parse_metadata(stdout)
        except MalformedMetadataError as exc:
            raise MalformedMetadataError(
                f"malformed metadata for {url!r}: {exc}",
                url=url,
            ) from exc

    # ------------------------------------------------------------------
    # Runner delegation (safe boundary)
    # ------------------------------------------------------------------

    def _dump(self, url: str, *, timeout: float | None) -> str:
        command = self._builder.build_for(ExtractionMode.DUMP_METADATA, url)
        try:
            result = self._runner.run(command.args, timeout=timeout)
        except StreamgrabError as exc:
            raise MetadataExtractionError(
                f"failed to fetch metadata for {url!r}: {exc}",
                url=url,
                hint=append_ytdlp_upgrade_suggestion(
                    exc.hint or "The media may be private, removed, or geo-restricted.",
                ),
            ) from exc
        except Exception as exc:
            raise MetadataExtractionError(
                f"Unexpected error fetching metadata for {url!r}: {exc}",
                url=url,
            ) from exc

        if not result.ok:
            raise MetadataExtractionError(
                f"failed to fetch metadata for {url!r}: "
                f"yt-dlp exited with status {result.returncode}",
                url=url,
            )
        return result.stdout
