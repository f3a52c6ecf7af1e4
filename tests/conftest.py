"""Shared pytest fixtures and configuration for the streamgrab test suite.

Guidelines
----------
* No internet access in any test.
* The yt-dlp process is faked at the ``ProcessRunner`` boundary, or
  ``subprocess.run`` is patched for invoker tests.
* Filesystem effects are confined to ``tmp_path``.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

import pytest

from streamgrab.core.models import ExtractionResult

FIXED_NOW = datetime(2024, 3, 9, 14, 5, 7)


class FakeRunner:
    """Records calls and replays a canned stdout or exception."""

    def __init__(
        self,
        stdout: str = "",
        *,
        error: Exception | None = None,
        returncode: int = 0,
        on_run=None,
    ) -> None:
        self.stdout = stdout
        self.returncode = returncode
        self.error = error
        self.on_run = on_run
        self.calls: list[tuple[tuple[str, ...], float | None]] = []

    def run(
        self,
        args: Sequence[str],
        *,
        timeout: float | None = None,
    ) -> ExtractionResult:
        self.calls.append((tuple(args), timeout))
        if self.on_run is not None:
            self.on_run(tuple(args))
        if self.error is not None:
            raise self.error
        return ExtractionResult(stdout=self.stdout, returncode=self.returncode)

    @property
    def last_args(self) -> tuple[str, ...]:
        return self.calls[-1][0]


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def make_runner():
    """Factory fixture: ``make_runner(stdout, error=..., returncode=..., on_run=...)``."""
    return FakeRunner
