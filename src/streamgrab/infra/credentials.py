"""Infrastructure: materialise the cookie blob as a file yt-dlp can read.

Every failure here degrades to "no credential" — the pipeline then runs
unauthenticated.  Nothing is raised; outcomes are logged.
"""

from __future__ import annotations

import base64
import binascii
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

COOKIE_FILE_MODE: int = 0o644


def decode_credential(value: str) -> bytes:
    """Decode base64 *value*, or return it verbatim when it is not base64.

    Line breaks are ignored, so wrapped output of ``base64 cookies.txt``
    decodes; any other non-alphabet character falls back to plain text.
    """
    compact = value.replace("\r", "").replace("\n", "")
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError):
        logger.warning(
            "Failed to decode cookies (is it Base64?), using the value as plain text",
        )
        return value.encode("utf-8")


class CredentialProvisioner:
    """Write the decoded credential blob to a fixed path.

    Parameters
    ----------
    cookie_path:
        Destination file.  Overwritten on every :meth:`provision` call.
    """

    def __init__(self, cookie_path: Path | str) -> None:
        self._cookie_path: Path = Path(cookie_path)

    @property
    def cookie_path(self) -> Path:
        return self._cookie_path

    def provision(self, env_value: str | None) -> Path | None:
        """Materialise *env_value* and return the cookie file path.

        Returns ``None`` when *env_value* is empty or the file cannot be
        written.
        """
        if not env_value:
            logger.debug("No cookies configured, running unauthenticated")
            return None

        payload = decode_credential(env_value)
        try:
            self._write(payload)
        except OSError as exc:
            logger.error("Error writing %s: %s", self._cookie_path, exc)
            return None

        logger.info("Loaded cookies into %s", self._cookie_path)
        return self._cookie_path

    def _write(self, payload: bytes) -> None:
        self._cookie_path.write_bytes(payload)
        os.chmod(self._cookie_path, COOKIE_FILE_MODE)
