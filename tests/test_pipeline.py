"""End-to-end tests for the consumer API (pipeline.py).

The extractor is replaced by a fake runner; credentials and the cache
area are real and rooted in ``tmp_path``.
"""

from __future__ import annotations

import base64
from pathlib import Path

import pytest

from streamgrab.config import Settings
from streamgrab.core.models import Meta
from streamgrab.exceptions import DownloadFailedError, ExtractorProcessError
from streamgrab.pipeline import MediaPipeline, create_pipeline

URL = "https://example.com/watch?id=1"


def _settings(tmp_path: Path, cookies: str = "") -> Settings:
    return Settings(
        cookies_blob=cookies,
        cookie_path=tmp_path / "cookies.txt",
        cache_dir=tmp_path / "cache",
    )


def _write_output(args: tuple[str, ...]) -> None:
    Path(args[args.index("-o") + 1]).write_bytes(b"audio")


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

class TestScenarios:
    def test_resolve_stream_url(self, tmp_path: Path, make_runner) -> None:
        runner = make_runner("WARNING: foo\nhttps://cdn.example.com/stream.m3u8\n")
        with create_pipeline(_settings(tmp_path), runner=runner) as pipeline:
            assert pipeline.resolve_stream_url(URL) == "https://cdn.example.com/stream.m3u8"

    def test_fetch_metadata(self, tmp_path: Path, make_runner) -> None:
        runner = make_runner('{"title":"Song","duration":120}')
        with create_pipeline(_settings(tmp_path), runner=runner) as pipeline:
            meta = pipeline.fetch_metadata(URL)
        assert meta == Meta(title="Song", duration=120, parser="yt-dlp")

    def test_download_then_close_removes_cache(self, tmp_path: Path, make_runner) -> None:
        runner = make_runner(on_run=_write_output)
        pipeline = create_pipeline(_settings(tmp_path), runner=runner)

        paths = [pipeline.download_to_cache(URL) for _ in range(3)]
        assert all(p.is_absolute() and p.exists() for p in paths)
        assert all(p.parent == tmp_path / "cache" for p in paths)

        pipeline.close()
        assert not (tmp_path / "cache").exists()

    def test_download_failure_leaves_no_file(self, tmp_path: Path, make_runner) -> None:
        runner = make_runner(
            on_run=_write_output,
            error=ExtractorProcessError("exit 1", returncode=1),
        )
        with create_pipeline(_settings(tmp_path), runner=runner) as pipeline:
            with pytest.raises(DownloadFailedError, match=r"example\.com"):
                pipeline.download_to_cache(URL)
            assert list((tmp_path / "cache").iterdir()) == []


# ---------------------------------------------------------------------------
# Credentials wiring
# ---------------------------------------------------------------------------

class TestCredentials:
    def test_cookie_file_written_and_passed(self, tmp_path: Path, make_runner) -> None:
        blob = base64.b64encode(b"# Netscape HTTP Cookie File\n").decode()
        runner = make_runner("https://cdn/x")
        with create_pipeline(_settings(tmp_path, blob), runner=runner) as pipeline:
            pipeline.resolve_stream_url(URL)

        cookie_file = tmp_path / "cookies.txt"
        assert cookie_file.read_bytes() == b"# Netscape HTTP Cookie File\n"
        assert runner.last_args[:2] == ("--cookies", str(cookie_file))

    def test_no_cookies_runs_unauthenticated(self, tmp_path: Path, make_runner) -> None:
        runner = make_runner("https://cdn/x")
        with create_pipeline(_settings(tmp_path), runner=runner) as pipeline:
            pipeline.resolve_stream_url(URL)
        assert "--cookies" not in runner.last_args
        assert not (tmp_path / "cookies.txt").exists()

    def test_unwritable_cookie_path_degrades(self, tmp_path: Path, make_runner) -> None:
        settings = Settings(
            cookies_blob="a=b",
            cookie_path=tmp_path / "missing" / "cookies.txt",
            cache_dir=tmp_path / "cache",
        )
        runner = make_runner("https://cdn/x")
        with create_pipeline(settings, runner=runner) as pipeline:
            pipeline.resolve_stream_url(URL)
        assert "--cookies" not in runner.last_args


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

class TestLifecycle:
    def test_close_is_idempotent(self, make_runner) -> None:
        class _Cache:
            teardowns = 0

            def teardown(self) -> None:
                self.teardowns += 1

        cache = _Cache()
        pipeline = MediaPipeline(make_runner(), object(), cache)  # type: ignore[arg-type]
        pipeline.close()
        pipeline.close()
        assert cache.teardowns == 1

    def test_context_manager_closes_on_error(self, tmp_path: Path, make_runner) -> None:
        (tmp_path / "cache").mkdir()
        with pytest.raises(RuntimeError):
            with create_pipeline(_settings(tmp_path), runner=make_runner()):
                raise RuntimeError("bot crashed")
        assert not (tmp_path / "cache").exists()
