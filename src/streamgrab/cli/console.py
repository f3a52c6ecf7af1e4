"""CLI console and logging setup.

Rich is imported lazily so that ``--help`` and ``--version`` keep
working in a broken environment; rendering without Rich falls back to
plain stderr output.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from streamgrab.exceptions import EnvironmentError

LOG_FORMAT: str = "%(name)s: %(message)s"


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


def configure_logging(verbose: bool = False) -> None:
	"""Route ``streamgrab`` log records through a Rich handler on stderr."""
	from rich.logging import RichHandler

	handler = RichHandler(
		console=get_rich_console(),
		show_path=False,
		markup=False,
		rich_tracebacks=verbose,
	)
	handler.setFormatter(logging.Formatter(LOG_FORMAT))

	root = logging.getLogger("streamgrab")
	root.handlers[:] = [handler]
	root.setLevel(logging.DEBUG if verbose else logging.INFO)
	root.propagate = False


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)

	def out(self, text: str) -> None:
		"""Write a result line to stdout, unstyled, for piping."""
		sys.stdout.write(f"{text}\n")
		sys.stdout.flush()


console = _ConsoleProxy()
