"""``streamgrab doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising whether
the runtime environment can run the extraction pipeline.  Nothing here
executes yt-dlp; detection is purely static.
"""

from __future__ import annotations

import platform
import sys

from streamgrab.cli import exit_codes
from streamgrab.cli.console import console
from streamgrab.config import COOKIES_ENV, Settings, load_settings
from streamgrab.infra.extractor_detector import detect_extractor
from streamgrab.version import __version__

_OK = "[green]OK[/green]"
_WARN = "[yellow]WARN[/yellow]"
_FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = _OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _ytdlp_check(settings: Settings) -> tuple[str, str, str]:
    """Return (label, value, status) for the yt-dlp row."""
    status = detect_extractor(settings.extractor_path)
    if not status.found:
        return "yt-dlp", "NOT INSTALLED", _FAIL

    try:
        from yt_dlp.version import __version__ as ydl_ver
    except ImportError:
        ydl_ver = None

    value = status.version_hint if ydl_ver is None else f"{ydl_ver} ({status.version_hint})"
    return "yt-dlp", value, _OK


def _cookies_check(settings: Settings) -> tuple[str, str, str]:
    """Return (label, value, status) for the cookies row."""
    if not settings.cookies_blob:
        return "cookies", f"{COOKIES_ENV} not set", _WARN
    return "cookies", f"-> {settings.cookie_path}", _OK


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, _OK


def collect_checks(settings: Settings | None = None) -> list[tuple[str, str, str]]:
    """Run every diagnostic and return its rows."""
    if settings is None:
        settings = load_settings()
    return [
        ("streamgrab", __version__, _OK),
        _python_version_check(),
        _ytdlp_check(settings),
        _cookies_check(settings),
        ("cache", str(settings.cache_dir), _OK),
        _os_check(),
    ]


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(settings: Settings | None = None) -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    from rich.table import Table

    checks = collect_checks(settings)
    has_failure = any("FAIL" in status for _, _, status in checks)

    table = Table(
        title="streamgrab doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
