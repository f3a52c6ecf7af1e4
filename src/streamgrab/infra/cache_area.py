"""Infrastructure: the process-owned download cache directory.

Satisfies :class:`~streamgrab.core.protocols.CacheStore`.  The directory
is created on first download and removed wholesale by :meth:`teardown`
at shutdown.  Cleanup paths log and continue; they never raise.
"""

from __future__ import annotations

import logging
import os
import secrets
import shutil
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from streamgrab.core.command_builder import TIMESTAMP_FORMAT
from streamgrab.exceptions import CacheDirectoryError

logger = logging.getLogger(__name__)

CACHE_DIR_MODE: int = 0o755


def random_suffix() -> str:
    """Six hex characters distinguishing same-second downloads."""
    return secrets.token_hex(3)


class CacheArea:
    """Cache directory lifecycle and per-download output paths.

    Parameters
    ----------
    root:
        Cache directory.  Relative paths are kept relative until
        :meth:`resolve` is called.
    clock:
        Zero-argument callable returning the current time.
    suffix:
        Zero-argument callable returning the uniqueness suffix appended
        to the timestamp, or ``None`` for the bare timestamp.
    """

    def __init__(
        self,
        root: Path | str,
        *,
        clock: Callable[[], datetime] = datetime.now,
        suffix: Callable[[], str] | None = random_suffix,
    ) -> None:
        self._root: Path = Path(root)
        self._clock: Callable[[], datetime] = clock
        self._suffix: Callable[[], str] | None = suffix

    @property
    def root(self) -> Path:
        return self._root

    # ------------------------------------------------------------------
    # CacheStore
    # ------------------------------------------------------------------

    def ensure(self) -> Path:
        try:
            self._root.mkdir(mode=CACHE_DIR_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheDirectoryError(
                f"failed to create cache directory {str(self._root)!r}: {exc}",
                hint="Check permissions, or point STREAMGRAB_CACHE_DIR elsewhere.",
            ) from exc
        return self._root

    def new_output_path(self) -> Path:
        stem = self._clock().strftime(TIMESTAMP_FORMAT)
        if self._suffix is not None:
            stem = f"{stem}_{self._suffix()}"
        return self._root / stem

    def discard(self, path: Path) -> None:
        """Remove *path* and any ``<path>.*`` siblings left by the extractor."""
        path = Path(path)
        candidates = [path, *path.parent.glob(f"{path.name}.*")]
        for candidate in candidates:
            try:
                candidate.unlink()
            except FileNotFoundError:
                continue
            except OSError as exc:
                logger.warning("Failed to remove partial file %s: %s", candidate, exc)
            else:
                logger.debug("Removed partial file %s", candidate)

    def resolve(self, path: Path) -> Path:
        return Path(os.path.abspath(path))

    def teardown(self) -> None:
        if not self._root.exists():
            return
        try:
            shutil.rmtree(self._root)
        except OSError as exc:
            logger.error("Failed to remove cache folder %s: %s", self._root, exc)
        else:
            logger.info("Removed cache folder %s", self._root)
