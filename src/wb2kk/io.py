"""Read wallabag exports and write Karakeep documents.

Input comes from a file or, for ``-``, from standard input; output goes
to a file or standard output.  Both sides deal in raw bytes so the
conversion core never touches a stream.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"


def read_input(source: str) -> bytes:
    """Read the whole wallabag export.

    Args:
        source: A file path, or ``"-"`` for standard input.

    Raises:
        OSError: If the file cannot be read.
    """
    if source == STDIN_MARKER:
        logger.debug("Reading wallabag export from stdin")
        return typer.get_binary_stream("stdin").read()
    logger.debug("Reading wallabag export from %s", source)
    return Path(source).read_bytes()


def write_output(data: bytes, path: Path | None = None) -> None:
    """Write the converted document.

    Args:
        data: Serialized output document.
        path: Destination file (parent dirs are created automatically),
              or ``None`` for standard output.
    """
    if path is None:
        stream = typer.get_binary_stream("stdout")
        stream.write(data)
        stream.flush()
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
