"""Convert a whole wallabag export document into a Karakeep import document.

The input must be a JSON array of entry objects.  The output is a JSON
object with a single ``bookmarks`` key.  Structural problems abort the
conversion; entries without a usable URL are skipped or rejected
according to :class:`~wb2kk.config.MissingUrlPolicy`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from wb2kk.config import ConversionConfig, MissingUrlPolicy, OutputFormat
from wb2kk.converter import map_entry, to_export_bookmark
from wb2kk.errors import InvalidInputFormatError, MissingUrlError
from wb2kk.models import KarakeepBookmark, WallabagEntry

logger = logging.getLogger(__name__)

BOOKMARKS_KEY = "bookmarks"


@dataclass(frozen=True)
class ConversionResult:
    """Serialized output document plus per-run counts."""

    data: bytes
    total: int
    converted: int
    skipped: int


def _load_array(raw_input: bytes) -> list[Any]:
    try:
        document: Any = json.loads(raw_input)
    except UnicodeDecodeError as exc:
        raise InvalidInputFormatError(f"input is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise InvalidInputFormatError(f"input is not valid JSON: {exc}") from exc
    except RecursionError as exc:
        raise InvalidInputFormatError("input is nested too deeply") from exc

    if not isinstance(document, list):
        raise InvalidInputFormatError(
            f"expected a JSON array of entries, got {type(document).__name__}"
        )
    return document


def _field_name(loc: tuple[int | str, ...]) -> str | None:
    # Union members appear in loc as type names; keep the field and indexes.
    parts = [str(p) for i, p in enumerate(loc) if i == 0 or isinstance(p, int)]
    return ".".join(parts) or None


def _parse_entry(index: int, raw: Any) -> WallabagEntry:
    if not isinstance(raw, dict):
        raise InvalidInputFormatError(
            f"expected a JSON object, got {type(raw).__name__}", index=index
        )
    try:
        return WallabagEntry.model_validate(raw)
    except ValidationError as exc:
        error = exc.errors()[0]
        field = _field_name(error["loc"])
        raise InvalidInputFormatError(error["msg"], index=index, field=field) from exc


def _serialize(bookmarks: list[KarakeepBookmark], config: ConversionConfig) -> bytes:
    if config.output_format == OutputFormat.karakeep_export:
        items = [to_export_bookmark(b).model_dump() for b in bookmarks]
    else:
        items = [b.model_dump() for b in bookmarks]
    text = json.dumps({BOOKMARKS_KEY: items}, ensure_ascii=False, indent=config.indent)
    return (text + "\n").encode("utf-8")


def convert_document(raw_input: bytes, config: ConversionConfig) -> ConversionResult:
    """Convert a wallabag export into a Karakeep import document.

    Args:
        raw_input: The wallabag export as raw bytes.
        config: Settings for this run.

    Returns:
        The serialized document with entry counts.

    Raises:
        InvalidInputFormatError: If the input is not a JSON array of
            well-formed entries, or if an entry lacks a URL under the
            ``fail`` policy.
    """
    raw_entries = _load_array(raw_input)

    bookmarks: list[KarakeepBookmark] = []
    skipped = 0
    for idx, raw in enumerate(raw_entries):
        entry = _parse_entry(idx, raw)
        try:
            bookmark = map_entry(
                entry,
                config.extra_tags,
                require_http_url=config.require_http_url,
            )
        except MissingUrlError as exc:
            if config.missing_url_policy == MissingUrlPolicy.fail:
                raise InvalidInputFormatError(
                    str(exc), index=idx, field="url"
                ) from exc
            skipped += 1
            logger.warning(
                "Skipping entry %d (id=%s): no usable URL (%r)",
                idx,
                entry.id,
                entry.url,
            )
            continue
        bookmarks.append(bookmark)

    logger.info(
        "Converted %d of %d entries (%d skipped)",
        len(bookmarks),
        len(raw_entries),
        skipped,
    )
    return ConversionResult(
        data=_serialize(bookmarks, config),
        total=len(raw_entries),
        converted=len(bookmarks),
        skipped=skipped,
    )


def convert(raw_input: bytes, extra_tags: Iterable[str] = ()) -> bytes:
    """Convert a wallabag export with default settings and the given tags."""
    config = ConversionConfig(extra_tags=tuple(extra_tags))
    return convert_document(raw_input, config).data
