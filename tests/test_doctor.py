"""Tests for the ``streamgrab doctor`` command (cli/doctor.py).

Extractor detection is mocked — no system dependency, no internet.

Coverage:
* Doctor returns SUCCESS when yt-dlp is present.
* Doctor returns GENERAL_ERROR when yt-dlp is missing.
* A missing cookie blob is a warning, not a failure.
* Individual check functions return correct tuples.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

from streamgrab.cli import exit_codes
from streamgrab.cli.doctor import (
    _cookies_check,
    _python_version_check,
    _ytdlp_check,
    collect_checks,
    run_doctor,
)
from streamgrab.config import Settings
from streamgrab.infra.extractor_detector import ExtractorStatus

_DETECT = "streamgrab.cli.doctor.detect_extractor"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _found() -> ExtractorStatus:
    return ExtractorStatus(
        found=True,
        argv=("/usr/local/bin/yt-dlp",),
        version_hint="found at /usr/local/bin/yt-dlp",
        install_commands=(),
    )


def _missing() -> ExtractorStatus:
    return ExtractorStatus(
        found=False,
        argv=(),
        version_hint="not found",
        install_commands=("pip install yt-dlp",),
    )


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestPythonVersionCheck:
    def test_returns_tuple(self) -> None:
        label, value, status = _python_version_check()
        assert label == "Python"
        assert isinstance(value, str)
        assert "OK" in status or "FAIL" in status


class TestYtdlpCheck:
    @patch(_DETECT)
    def test_found(self, mock_detect: MagicMock) -> None:
        mock_detect.return_value = _found()
        label, value, status = _ytdlp_check(Settings())
        assert label == "yt-dlp"
        assert "/usr/local/bin/yt-dlp" in value
        assert "OK" in status

    @patch(_DETECT)
    def test_missing(self, mock_detect: MagicMock) -> None:
        mock_detect.return_value = _missing()
        _, value, status = _ytdlp_check(Settings())
        assert value == "NOT INSTALLED"
        assert "FAIL" in status

    @patch(_DETECT)
    def test_preferred_path_forwarded(self, mock_detect: MagicMock) -> None:
        mock_detect.return_value = _found()
        _ytdlp_check(Settings(extractor_path="/opt/yt-dlp"))
        mock_detect.assert_called_once_with("/opt/yt-dlp")


class TestCookiesCheck:
    def test_unset_is_warning(self) -> None:
        _, value, status = _cookies_check(Settings())
        assert "YOUTUBE_COOKIES" in value
        assert "WARN" in status

    def test_set_shows_destination(self) -> None:
        settings = Settings(cookies_blob="Zm9v", cookie_path=Path("/tmp/c.txt"))
        _, value, status = _cookies_check(settings)
        assert str(Path("/tmp/c.txt")) in value
        assert "OK" in status


class TestCollectChecks:
    @patch(_DETECT)
    def test_rows(self, mock_detect: MagicMock) -> None:
        mock_detect.return_value = _found()
        labels = [row[0] for row in collect_checks(Settings())]
        assert labels == ["streamgrab", "Python", "yt-dlp", "cookies", "cache", "OS"]


# ---------------------------------------------------------------------------
# run_doctor integration
# ---------------------------------------------------------------------------

class TestRunDoctor:
    @patch(_DETECT)
    def test_all_ok(self, mock_detect: MagicMock) -> None:
        mock_detect.return_value = _found()
        assert run_doctor(Settings(cookies_blob="Zm9v")) == exit_codes.SUCCESS

    @patch(_DETECT)
    def test_missing_cookies_still_succeeds(self, mock_detect: MagicMock) -> None:
        mock_detect.return_value = _found()
        assert run_doctor(Settings()) == exit_codes.SUCCESS

    @patch(_DETECT)
    def test_missing_extractor_fails(self, mock_detect: MagicMock) -> None:
        mock_detect.return_value = _missing()
        assert run_doctor(Settings()) == exit_codes.GENERAL_ERROR
