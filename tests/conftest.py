"""Shared test fixtures for wb2kk tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from wb2kk.models import WallabagEntry


@pytest.fixture()
def full_entry_dict() -> dict[str, Any]:
    """A wallabag entry as written by a full wallabag export."""
    return {
        "is_archived": 1,
        "is_starred": 1,
        "tags": ["docker", "devops", "containers"],
        "is_public": False,
        "id": 100,
        "title": "How to Use Docker Compose for Development",
        "url": "https://docs.docker.com/compose/gettingstarted/",
        "given_url": "https://docs.docker.com/compose/gettingstarted/",
        "content": "<article><h1>Get started</h1><p>Docker Compose is a tool...</p></article>",
        "created_at": "2025-01-15T08:30:00+00:00",
        "updated_at": "2025-02-01T10:00:00+00:00",
        "published_by": ["Docker Inc."],
        "annotations": [],
        "mimetype": "text/html",
        "language": "en",
        "reading_time": 7,
        "domain_name": "docs.docker.com",
        "preview_picture": "https://docs.docker.com/compose/images/compose.png",
    }


@pytest.fixture()
def minimal_entry_dict() -> dict[str, Any]:
    """A wallabag entry with nothing but a URL."""
    return {"url": "https://example.com"}


@pytest.fixture()
def no_url_entry_dict() -> dict[str, Any]:
    """A well-formed wallabag entry whose URL is missing."""
    return {
        "id": 7,
        "title": "Lost link",
        "url": None,
        "is_archived": 0,
        "is_starred": 0,
        "tags": ["orphan"],
    }


@pytest.fixture()
def full_entry(full_entry_dict: dict[str, Any]) -> WallabagEntry:
    """Parsed WallabagEntry from full_entry_dict."""
    return WallabagEntry.model_validate(full_entry_dict)


@pytest.fixture()
def minimal_entry(minimal_entry_dict: dict[str, Any]) -> WallabagEntry:
    """Parsed WallabagEntry from minimal_entry_dict."""
    return WallabagEntry.model_validate(minimal_entry_dict)


@pytest.fixture()
def tmp_wallabag_json(
    tmp_path: Path,
    full_entry_dict: dict[str, Any],
    minimal_entry_dict: dict[str, Any],
    no_url_entry_dict: dict[str, Any],
) -> Path:
    """Write a temporary wallabag JSON export with one entry lacking a URL."""
    data = [full_entry_dict, no_url_entry_dict, minimal_entry_dict]
    path = tmp_path / "wallabag_export.json"
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path
