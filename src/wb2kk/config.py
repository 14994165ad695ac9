"""Run configuration, built once from the command line."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class OutputFormat(str, Enum):
    """Supported output formats."""

    bookmarks = "bookmarks"
    karakeep_export = "karakeep-export"


class MissingUrlPolicy(str, Enum):
    """What to do with an entry that has no usable URL."""

    skip = "skip"
    fail = "fail"


class ConversionConfig(BaseModel):
    """Immutable settings for one conversion run."""

    extra_tags: tuple[str, ...] = ()
    output_format: OutputFormat = OutputFormat.bookmarks
    missing_url_policy: MissingUrlPolicy = MissingUrlPolicy.skip
    require_http_url: bool = False
    indent: int | None = Field(default=2, ge=0)

    model_config = {"frozen": True}
