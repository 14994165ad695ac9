"""Map wallabag entries to Karakeep bookmarks.

Everything here is pure: no I/O, no shared state.  ``map_entry`` builds
the flat bookmark record and ``to_export_bookmark`` reshapes it into
Karakeep's own export format.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from urllib.parse import urlparse

from wb2kk.errors import MissingUrlError
from wb2kk.models import (
    KarakeepBookmark,
    KarakeepExportBookmark,
    KarakeepLinkContent,
    WallabagEntry,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Timestamp helpers
# ---------------------------------------------------------------------------

WALLABAG_FORMATS = [
    "%Y-%m-%dT%H:%M:%S%z",  # ISO 8601 with timezone
    "%Y-%m-%dT%H:%M:%S.%f%z",  # ISO 8601 with fraction and timezone
    "%Y-%m-%d %H:%M:%S",  # Space-separated, no TZ (assume UTC)
    "%Y-%m-%dT%H:%M:%S",  # ISO 8601 without timezone
    "%Y-%m-%dT%H:%M:%S.%f",  # ISO 8601 with fraction, no timezone
]


def parse_wallabag_datetime(value: str | None) -> datetime | None:
    """Parse a wallabag datetime string into a timezone-aware datetime.

    Supports ``2025-03-15 09:08:33`` (no TZ, assumed UTC) as well as
    ISO 8601 with or without an offset (``+0000``, ``+02:00``, ``Z``).

    Returns ``None`` if *value* is falsy.  Raises ``ValueError`` if *value*
    cannot be parsed by any known format.
    """
    if not value:
        return None
    for fmt in WALLABAG_FORMATS:
        try:
            dt = datetime.strptime(value.strip(), fmt)
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            return dt
        except ValueError:
            continue
    raise ValueError(f"Cannot parse datetime: {value!r}")


def to_karakeep_iso(dt: datetime | None) -> str:
    """Format a datetime as ISO 8601 UTC with milliseconds and ``Z`` suffix.

    Raises ``OverflowError`` if shifting to UTC leaves the supported range.
    """
    if dt is None:
        return ""
    utc = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return utc.isoformat(timespec="milliseconds") + "Z"


def _from_epoch(value: float) -> datetime | None:
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def normalize_timestamp(value: str | int | float | None) -> str:
    """Normalize a wallabag ``created_at`` value for Karakeep.

    Numbers are read as Unix epoch seconds.  Strings in a known wallabag
    format become ISO 8601 UTC; any other string, or one that falls out of
    range once shifted to UTC, is returned unchanged.  A missing value
    gives ``""``.
    """
    if value is None or value == "":
        return ""
    if isinstance(value, (int, float)):
        dt = _from_epoch(value)
        return to_karakeep_iso(dt) if dt else str(value)
    try:
        return to_karakeep_iso(parse_wallabag_datetime(value))
    except (ValueError, OverflowError):
        logger.debug("Keeping unrecognised timestamp as-is: %r", value)
        return value


def to_epoch_seconds(value: str) -> int | None:
    """Return Unix epoch seconds for a timestamp string, or ``None``."""
    try:
        dt = parse_wallabag_datetime(value)
        return int(dt.timestamp()) if dt else None
    except (ValueError, OverflowError):
        return None


# ---------------------------------------------------------------------------
# Tag helpers
# ---------------------------------------------------------------------------


def merge_tags(
    source_tags: Iterable[str],
    extra_tags: Iterable[str] = (),
) -> list[str]:
    """Merge entry tags with the extra tags of the run.

    Source tags come first in their original order, then any extra tags
    not already present.  Matching is exact and case-sensitive; blank
    tags are dropped, other tags are kept verbatim.
    """
    seen: set[str] = set()
    merged: list[str] = []
    for tag in (*source_tags, *extra_tags):
        if not tag.strip() or tag in seen:
            continue
        seen.add(tag)
        merged.append(tag)
    return merged


# ---------------------------------------------------------------------------
# URL helpers
# ---------------------------------------------------------------------------


def is_valid_url(url: str | None) -> bool:
    """Return ``True`` if *url* is a valid HTTP(S) URL."""
    if not url:
        return False
    try:
        result = urlparse(url)
    except ValueError:
        return False
    return bool(result.scheme in ("http", "https") and result.netloc)


def has_usable_url(url: str | None, *, require_http: bool = False) -> bool:
    """Return ``True`` if *url* can be used as a bookmark URL."""
    if url is None or not url.strip():
        return False
    return is_valid_url(url) if require_http else True


# ---------------------------------------------------------------------------
# Conversion functions
# ---------------------------------------------------------------------------


def map_entry(
    entry: WallabagEntry,
    extra_tags: Iterable[str] = (),
    *,
    require_http_url: bool = False,
) -> KarakeepBookmark:
    """Convert a wallabag entry to a Karakeep bookmark.

    The URL is copied verbatim.  Missing optional fields fall back to
    empty strings and ``False``.

    Raises:
        MissingUrlError: If the entry has no usable URL.
    """
    if not has_usable_url(entry.url, require_http=require_http_url):
        raise MissingUrlError(entry.id, entry.url)

    return KarakeepBookmark(
        title=entry.title or "",
        url=entry.url,  # type: ignore[arg-type]
        tags=merge_tags(entry.tags, extra_tags),
        archived=entry.is_archived,
        favourited=entry.is_starred,
        created=normalize_timestamp(entry.created_at),
    )


def to_export_bookmark(bookmark: KarakeepBookmark) -> KarakeepExportBookmark:
    """Reshape a bookmark into Karakeep's export format.

    ``createdAt`` is ``None`` when the creation time is unknown or not in
    a recognised format.
    """
    return KarakeepExportBookmark(
        createdAt=to_epoch_seconds(bookmark.created),
        title=bookmark.title,
        tags=list(bookmark.tags),
        content=KarakeepLinkContent(url=bookmark.url),
        archived=bookmark.archived,
        favourited=bookmark.favourited,
    )
