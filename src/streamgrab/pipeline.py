"""Composition root and consumer-facing API.

:class:`MediaPipeline` is what an embedding application (a chat bot, the
CLI) talks to.  It exposes three synchronous operations and owns the
cache area, which it tears down exactly once on :meth:`close`.

Usage::

    with create_pipeline() as pipeline:
        stream = pipeline.resolve_stream_url("https://...")
        meta = pipeline.fetch_metadata("https://...")
        path = pipeline.download_to_cache("https://...")
"""

from __future__ import annotations

import logging
from pathlib import Path

from streamgrab.config import Settings, load_settings
from streamgrab.core.command_builder import CommandBuilder
from streamgrab.core.download_service import DownloadService
from streamgrab.core.metadata_service import MetadataService
from streamgrab.core.models import Meta
from streamgrab.core.protocols import CacheStore, ProcessRunner
from streamgrab.core.stream_service import StreamService
from streamgrab.infra.cache_area import CacheArea
from streamgrab.infra.credentials import CredentialProvisioner
from streamgrab.infra.process_invoker import SubprocessInvoker

logger = logging.getLogger(__name__)


class MediaPipeline:
    """Resolve, describe and download media through one set of services.

    Parameters
    ----------
    runner:
        Extractor process runner shared by all operations.
    builder:
        Command builder carrying the provisioned cookie path.
    cache:
        Cache area used for downloads and removed on :meth:`close`.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        builder: CommandBuilder,
        cache: CacheStore,
    ) -> None:
        self._cache: CacheStore = cache
        self._streams = StreamService(runner, builder)
        self._metadata = MetadataService(runner, builder)
        self._downloads = DownloadService(runner, builder, cache)
        self._closed: bool = False

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> MediaPipeline:
        return self

    def __exit__(self, *_args: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve_stream_url(self, url: str, *, timeout: float | None = None) -> str:
        """Return a direct playable URL for *url*."""
        return self._streams.resolve(url, timeout=timeout)

    def fetch_metadata(self, url: str, *, timeout: float | None = None) -> Meta:
        """Return structured metadata for *url*."""
        return self._metadata.fetch(url, timeout=timeout)

    def download_to_cache(self, url: str) -> Path:
        """Download best audio for *url* and return its absolute path."""
        return self._downloads.download(url)

    def close(self) -> None:
        """Remove the cache area (idempotent)."""
        if self._closed:
            return
        self._closed = True
        self._cache.teardown()


def create_pipeline(
    settings: Settings | None = None,
    *,
    runner: ProcessRunner | None = None,
) -> MediaPipeline:
    """Wire a :class:`MediaPipeline` from *settings*.

    The cookie blob is decoded and written once, here.  *runner*
    overrides the subprocess invoker (useful in tests).
    """
    if settings is None:
        settings = load_settings()

    cookie_path = CredentialProvisioner(settings.cookie_path).provision(
        settings.cookies_blob,
    )
    builder = CommandBuilder(cookie_path)
    if runner is None:
        runner = SubprocessInvoker(preferred=settings.extractor_path)
    cache = CacheArea(settings.cache_dir)

    logger.debug(
        "Pipeline ready (cookies=%s, cache=%s)",
        cookie_path or "none",
        settings.cache_dir,
    )
    return MediaPipeline(runner, builder, cache)
