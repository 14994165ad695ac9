"""Pydantic v2 models for wallabag entries and Karakeep bookmarks."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import (
    BaseModel,
    Field,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
)


# ---------------------------------------------------------------------------
# Wallabag model (permissive input)
# ---------------------------------------------------------------------------


class WallabagEntry(BaseModel):
    """A single entry from a wallabag JSON export.

    Only the fields needed for conversion are declared; everything else
    in the export is ignored.  ``null`` is treated the same as a missing
    key.  A present field of the wrong JSON type fails validation.
    """

    id: StrictInt | StrictStr | None = None
    title: StrictStr | None = None
    url: StrictStr | None = None
    content: StrictStr | None = None
    tags: tuple[StrictStr, ...] = ()
    is_archived: bool = False
    is_starred: bool = False
    created_at: StrictStr | StrictInt | StrictFloat | None = None

    model_config = {"extra": "ignore", "frozen": True}

    @field_validator("is_archived", "is_starred", mode="before")
    @classmethod
    def coerce_int_bool(cls, v: Any) -> bool:
        """Accept wallabag's 0/1 integers as well as booleans and ``None``."""
        if v is None:
            return False
        if isinstance(v, bool):
            return v
        if isinstance(v, int) and v in (0, 1):
            return bool(v)
        raise ValueError(f"expected a boolean or 0/1, got {v!r}")

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags(cls, v: Any) -> Any:
        """Treat ``"tags": null`` as an empty tag list."""
        return () if v is None else v


# ---------------------------------------------------------------------------
# Karakeep models (output)
# ---------------------------------------------------------------------------


class KarakeepBookmark(BaseModel):
    """A bookmark in the flat Karakeep import format.

    Field order is the serialization order.
    """

    title: str = ""
    url: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list)
    archived: bool = False
    favourited: bool = False
    created: str = ""

    model_config = {"frozen": True}


class KarakeepLinkContent(BaseModel):
    """The ``content`` object of a Karakeep link bookmark."""

    type: Literal["link"] = "link"
    url: str


class KarakeepExportBookmark(BaseModel):
    """A bookmark in Karakeep's own export format, which it also imports."""

    createdAt: int | None = None  # noqa: N815
    title: str = ""
    tags: list[str] = Field(default_factory=list)
    content: KarakeepLinkContent
    archived: bool = False
    favourited: bool = False
    note: str | None = None

    model_config = {"frozen": True}
