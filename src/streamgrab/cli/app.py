"""CLI application entry point and command routing for streamgrab.

This module is the **sole error boundary** for the entire application.
It catches :class:`~streamgrab.exceptions.StreamgrabError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to
  :class:`~streamgrab.pipeline.MediaPipeline`.
* Results go to stdout (one value per line); everything else goes to
  stderr through the Rich console.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict

from streamgrab.cli import exit_codes
from streamgrab.cli.console import configure_logging, console
from streamgrab.core.models import Meta
from streamgrab.exceptions import StreamgrabError
from streamgrab.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Sub-commands:
    * ``streamgrab url <url>``       — print a direct stream URL
    * ``streamgrab meta <url>``      — print metadata
    * ``streamgrab download <url>``  — download best audio into the cache
    * ``streamgrab doctor``          — environment diagnostics
    """
    parser = argparse.ArgumentParser(
        prog="streamgrab",
        description="Resolve media URLs into stream URLs, metadata and cached audio.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    url_cmd = commands.add_parser("url", help="Print a direct playable stream URL.")
    url_cmd.add_argument("url", help="Media page URL.")
    url_cmd.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Give up after this many seconds (default: no limit).",
    )

    meta_cmd = commands.add_parser("meta", help="Print metadata for a media URL.")
    meta_cmd.add_argument("url", help="Media page URL.")
    meta_cmd.add_argument("--json", action="store_true", help="Emit JSON instead of a table.")
    meta_cmd.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Give up after this many seconds (default: no limit).",
    )

    dl_cmd = commands.add_parser(
        "download",
        help="Download best audio into the cache.",
        description=(
            "Download best audio into the cache directory and print its path. "
            "The cache directory, including the new file, is removed when the "
            "command exits unless --keep-cache is given."
        ),
    )
    dl_cmd.add_argument("url", help="Media page URL.")
    dl_cmd.add_argument(
        "--keep-cache",
        action="store_true",
        help="Keep the cache directory and the downloaded file after exit.",
    )

    commands.add_parser("doctor", help="Run environment diagnostics.")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_url(url: str, timeout: float | None) -> int:
    from streamgrab.pipeline import create_pipeline

    # Not closed: the cache area belongs to ``download``.
    stream_url = create_pipeline().resolve_stream_url(url, timeout=timeout)
    console.out(stream_url)
    return exit_codes.SUCCESS


def _handle_meta(url: str, timeout: float | None, as_json: bool) -> int:
    from streamgrab.pipeline import create_pipeline

    meta = create_pipeline().fetch_metadata(url, timeout=timeout)

    if as_json:
        console.out(json.dumps(asdict(meta), ensure_ascii=False))
    else:
        _display_meta(meta)
    return exit_codes.SUCCESS


def _handle_download(url: str, keep_cache: bool) -> int:
    """Download into the cache; tear the cache down unless *keep_cache*."""
    from streamgrab.pipeline import create_pipeline

    pipeline = create_pipeline()
    try:
        console.print(f"\n[bold]Downloading…[/bold]  {url}\n")
        path = pipeline.download_to_cache(url)
        console.out(str(path))
        if not keep_cache:
            console.print(
                "[dim]The file is removed on exit; pass --keep-cache to keep it.[/dim]",
            )
    finally:
        if not keep_cache:
            pipeline.close()
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from streamgrab.cli.doctor import run_doctor

    return run_doctor()


def _format_duration(duration: float | None) -> str:
    """Render seconds as ``"3m 5s"``, or ``"Unknown"``."""
    if duration is None:
        return "Unknown"
    minutes, seconds = divmod(int(duration), 60)
    return f"{minutes}m {seconds}s"


def _display_meta(meta: Meta) -> None:
    from rich.table import Table

    table = Table(show_header=False, border_style="dim")
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    table.add_row("Title", meta.title or "Unknown")
    table.add_row("Duration", _format_duration(meta.duration))
    table.add_row("Uploader", meta.uploader or "Unknown")
    if meta.webpage_url:
        table.add_row("URL", meta.webpage_url)
    table.add_row("Parser", meta.parser)
    console.print(table)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the streamgrab CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(args.verbose)

    if args.command == "doctor":
        return _handle_doctor()
    if args.command == "url":
        return _handle_url(args.url, args.timeout)
    if args.command == "meta":
        return _handle_meta(args.url, args.timeout, args.json)
    return _handle_download(args.url, args.keep_cache)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point."""
    try:
        code = main()
        sys.exit(code)
    except StreamgrabError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
