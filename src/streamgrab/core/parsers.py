"""Parsers for raw yt-dlp standard output.

Every function in this module is a **pure** transformation of captured
stdout text — no I/O, no side effects.
"""

from __future__ import annotations

import json
from typing import Any

from streamgrab.core.models import Meta
from streamgrab.exceptions import MalformedMetadataError, StreamURLNotFoundError

PARSER_NAME: str = "yt-dlp"
"""Origin tag stamped on every :class:`Meta` this module produces."""


# ---------------------------------------------------------------------------
# --get-url output
# ---------------------------------------------------------------------------

def resolve_stream_url(stdout: str) -> str:
    """Return the last line of *stdout* that starts with ``http``.

    Warnings may be interleaved ahead of the URL, so lines are scanned
    from the end.  Surrounding whitespace is stripped.

    Raises
    ------
    StreamURLNotFoundError
        If *stdout* is empty or holds no ``http`` line.
    """
    for line in reversed(stdout.split("\n")):
        candidate = line.strip()
        if candidate.startswith("http"):
            return candidate
    raise StreamURLNotFoundError("no valid URL found in output")


# ---------------------------------------------------------------------------
# --dump-json output
# ---------------------------------------------------------------------------

def parse_metadata(stdout: str) -> Meta:
    """Parse a single JSON document into :class:`Meta`.

    The ``parser`` field is always set to :data:`PARSER_NAME`, whatever
    the document itself contains.

    Raises
    ------
    MalformedMetadataError
        If *stdout* is not one JSON object.
    """
    try:
        info: Any = json.loads(stdout)
    except json.JSONDecodeError as exc:
        raise MalformedMetadataError(f"failed to unmarshal JSON: {exc}") from exc

    if not isinstance(info, dict):
        raise MalformedMetadataError(
            f"expected a JSON object, got {type(info).__name__}",
        )
    return _meta_from_info(info)


def _meta_from_info(info: dict[str, Any]) -> Meta:
    raw_duration = info.get("duration")
    duration: float | None = (
        raw_duration
        if isinstance(raw_duration, (int, float)) and not isinstance(raw_duration, bool)
        else None
    )
    return Meta(
        title=str(info.get("title") or ""),
        duration=duration,
        uploader=_optional_str(info.get("uploader")),
        webpage_url=_optional_str(info.get("webpage_url")),
        thumbnail=_optional_str(info.get("thumbnail")),
        parser=PARSER_NAME,
    )


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    return str(value)
