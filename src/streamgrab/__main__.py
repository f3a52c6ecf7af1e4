"""Allow ``python -m streamgrab`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m streamgrab`` behaves identically to the ``streamgrab``
console script.
"""

from __future__ import annotations

from streamgrab.cli.app import cli

if __name__ == "__main__":
    cli()
