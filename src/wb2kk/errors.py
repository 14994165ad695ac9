"""Exceptions raised while converting a wallabag export."""

from __future__ import annotations


class ConversionError(Exception):
    """Base exception for fatal conversion errors."""


class InvalidInputFormatError(ConversionError):
    """The input document, or one of its entries, has the wrong shape."""

    def __init__(
        self,
        message: str,
        index: int | None = None,
        field: str | None = None,
    ) -> None:
        location = ""
        if index is not None:
            location = f"entry {index}"
            if field:
                location += f", field {field!r}"
            location += ": "
        super().__init__(f"{location}{message}")
        self.index = index
        self.field = field


class MappingError(ValueError):
    """A single entry could not be mapped to a Karakeep bookmark."""


class MissingUrlError(MappingError):
    """The entry has no usable URL."""

    def __init__(self, entry_id: int | str | None, url: str | None) -> None:
        super().__init__(f"Entry id={entry_id} has no usable URL: {url!r}")
        self.entry_id = entry_id
        self.url = url
