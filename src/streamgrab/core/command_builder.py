"""Pure assembly of yt-dlp command lines.

:class:`CommandBuilder` turns an :class:`ExtractionRequest` into the
argument vector for a single extractor invocation.  It performs no I/O:
the cookie file path is handed in at construction time and the wall
clock is injectable so generated templates are deterministic in tests.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from streamgrab.core.models import Command, ExtractionMode, ExtractionRequest
from streamgrab.exceptions import InvalidRequestError, InvalidURLError

TIMESTAMP_FORMAT: str = "%Y%m%d_%H%M%S"
"""Second-resolution token used for output names (``YYYYMMDD_HHMMSS``)."""

DEFAULT_AUDIO_FORMAT: str = "bestaudio"


def validate_url(url: str) -> str:
    """Return *url* stripped, or raise :class:`InvalidURLError`."""
    stripped = url.strip()
    if not stripped:
        raise InvalidURLError("URL must not be empty.")
    if not stripped.startswith(("http://", "https://")):
        raise InvalidURLError(
            f"Invalid URL: {stripped}",
            hint="URL must start with http:// or https://",
        )
    return stripped


class CommandBuilder:
    """Build extractor arguments for each :class:`ExtractionMode`.

    Parameters
    ----------
    cookie_path:
        Cookie file produced by the credential provisioner, or ``None``
        to run unauthenticated.
    clock:
        Zero-argument callable returning the current time.
    """

    def __init__(
        self,
        cookie_path: Path | str | None = None,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._cookie_path: str | None = str(cookie_path) if cookie_path else None
        self._clock: Callable[[], datetime] = clock

    @property
    def cookie_path(self) -> str | None:
        return self._cookie_path

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, request: ExtractionRequest) -> Command:
        """Return the :class:`Command` for *request*.

        Raises
        ------
        InvalidURLError
            If the request URL is empty or not HTTP(S).
        InvalidRequestError
            If a download request carries no output path.
        """
        url = validate_url(request.url)

        args: list[str] = []
        if self._cookie_path:
            args += ["--cookies", self._cookie_path]

        if request.mode is ExtractionMode.RESOLVE_STREAM_URL:
            args += self._stream_url_args(request)
        elif request.mode is ExtractionMode.DUMP_METADATA:
            args += self._metadata_args(request)
        elif request.mode is ExtractionMode.DOWNLOAD:
            args += self._download_args(request)
        else:  # pragma: no cover
            raise InvalidRequestError(f"Unsupported extraction mode: {request.mode!r}")

        args += ["--", url]
        return Command(args=tuple(args))

    def build_for(
        self,
        mode: ExtractionMode,
        url: str,
        *,
        format_selector: str | None = None,
        output_template: str | None = None,
    ) -> Command:
        """Shorthand for ``build(ExtractionRequest(...))``."""
        return self.build(
            ExtractionRequest(
                url=url,
                mode=mode,
                format_selector=format_selector,
                output_template=output_template,
            )
        )

    def timestamp(self) -> str:
        """Current clock reading formatted as ``YYYYMMDD_HHMMSS``."""
        return self._clock().strftime(TIMESTAMP_FORMAT)

    # ------------------------------------------------------------------
    # Per-mode argument groups
    # ------------------------------------------------------------------

    @staticmethod
    def _stream_url_args(request: ExtractionRequest) -> list[str]:
        args = ["--get-url"]
        if request.format_selector:
            args += ["-f", request.format_selector]
        return args

    def _metadata_args(self, request: ExtractionRequest) -> list[str]:
        template = request.output_template or f"{self.timestamp()}.%(ext)s"
        args = ["--dump-json", "--skip-download", "-o", template]
        if request.format_selector:
            args += ["-f", request.format_selector]
        return args

    @staticmethod
    def _download_args(request: ExtractionRequest) -> list[str]:
        if not request.output_template:
            raise InvalidRequestError(
                "Download requests require an explicit output path.",
            )
        return [
            "--no-part",
            "--no-playlist",
            "--no-overwrites",
            "--no-keep-video",
            "-f",
            request.format_selector or DEFAULT_AUDIO_FORMAT,
            "-o",
            request.output_template,
        ]
