"""Core stream service — resolves a page URL into a direct stream URL."""

from __future__ import annotations

from streamgrab.core.command_builder import CommandBuilder, validate_url
from streamgrab.core.models import ExtractionMode
from streamgrab.core.parsers import resolve_stream_url
from streamgrab.core.protocols import ProcessRunner
from streamgrab.exceptions import (
    StreamgrabError,
    StreamResolutionError,
    StreamURLNotFoundError,
    append_ytdlp_upgrade_suggestion,
)


class StreamService:
    """Stateless service driving ``yt-dlp --get-url``.

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

    def resolve(
        self,
        url: str,
        *,
        format_selector: str | None = None,
        timeout: float | None = None,
    ) -> str:
        """Return a direct playable URL for *url*.

        No deadline is imposed unless the caller passes *timeout*.

        Raises
        ------
        InvalidURLError
            If *url* is empty or malformed.
        StreamURLNotFoundError
            If the extractor printed no URL.
        StreamResolutionError
            If the extractor process failed.
        """
        url = validate_url(url)
        command = self._builder.build_for(
            ExtractionMode.RESOLVE_STREAM_URL, url, format_selector=format_selector,
        )

        try:
            result = self._runner.run(command.args, timeout=timeout)
        except StreamgrabError as exc:
            raise StreamResolutionError(
                f"failed to resolve stream URL for {url!r}: {exc}",
                url=url,
                hint=append_ytdlp_upgrade_suggestion(
                    exc.hint or "Check that the URL points to playable media.",
                ),
            ) from exc
        except Exception as exc:
            raise StreamResolutionError(
                f"Unexpected error resolving stream URL for {url!r}: {exc}",
                url=url,
            ) from exc

        if not result.ok:
            raise StreamResolutionError(
                f"failed to resolve stream URL for {url!r}: "
                f"yt-dlp exited with status {result.returncode}",
                url=url,
            )

        try:
            return resolve_stream_url(result.stdout)
        except StreamURLNotFoundError as exc:
            raise StreamURLNotFoundError(f"{exc} for {url!r}", url=url) from exc
