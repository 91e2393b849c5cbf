"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import json
import threading
import time
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest
from mediacheck.catalog.models import MediaRecord
from mediacheck.catalog.service import JsonCatalogService, JsonReferenceService
from mediacheck.core.config import AuditConfig
from mediacheck.core.context import AuditContext
from mediacheck.storage.store import LocalFileStore

BASE_TIME = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


@pytest.fixture
def media_node() -> Callable[..., dict[str, Any]]:
    """Factory for media nodes in a catalog export."""

    def _node(
        node_id: int,
        path: str | None,
        size: int | str | None = 1024,
        *,
        name: str | None = None,
        created_minutes: int = 0,
        node_type: str = "Image",
        key: str | None = None,
    ) -> dict[str, Any]:
        created = BASE_TIME.replace(minute=created_minutes).isoformat()
        node: dict[str, Any] = {
            "id": node_id,
            "key": key or f"key-{node_id}",
            "name": name if name is not None else f"Media {node_id}",
            "type": node_type,
            "created": created,
        }
        if path is not None:
            node["file"] = json.dumps({"src": path})
        if size is not None:
            node["bytes"] = str(size)
        return node

    return _node


@pytest.fixture
def folder_node() -> Callable[..., dict[str, Any]]:
    """Factory for folder nodes in a catalog export."""

    def _folder(
        node_id: int, children: list[dict[str, Any]], name: str = "Folder"
    ) -> dict[str, Any]:
        return {
            "id": node_id,
            "key": f"folder-{node_id}",
            "name": name,
            "type": "Folder",
            "created": BASE_TIME.isoformat(),
            "children": children,
        }

    return _folder


@pytest.fixture
def write_catalog(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a catalog export JSON file and returning its path."""

    def _write(
        nodes: list[dict[str, Any]],
        references: dict[str, list[int]] | None = None,
    ) -> Path:
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"root": nodes, "references": references or {}}))
        return path

    return _write


@pytest.fixture
def media_dir(tmp_path: Path) -> Path:
    """Empty media store directory."""
    root = tmp_path / "media"
    root.mkdir()
    return root


@pytest.fixture
def write_files(media_dir: Path) -> Callable[[dict[str, int]], None]:
    """Factory creating files of the given sizes below the media store."""

    def _write(files: dict[str, int]) -> None:
        for relative, size in files.items():
            target = media_dir / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(b"x" * size)

    return _write


@pytest.fixture
def make_context(
    media_dir: Path,
    write_catalog: Callable[..., Path],
    write_files: Callable[[dict[str, int]], None],
) -> Callable[..., AuditContext]:
    """Factory for an AuditContext over a temporary store and catalog export."""

    def _make(
        nodes: list[dict[str, Any]],
        *,
        files: dict[str, int] | None = None,
        references: dict[str, list[int]] | None = None,
        config: AuditConfig | None = None,
        cancel: threading.Event | None = None,
        clock: Callable[[], float] = time.monotonic,
        with_references: bool = True,
    ) -> AuditContext:
        write_files(files or {})
        catalog = JsonCatalogService(write_catalog(nodes, references))
        return AuditContext(
            catalog=catalog,
            store=LocalFileStore(media_dir),
            config=config or AuditConfig(),
            references=JsonReferenceService(catalog) if with_references else None,
            cancel=cancel,
            clock=clock,
        )

    return _make


@pytest.fixture
def make_record() -> Callable[..., MediaRecord]:
    """Factory for decoded media records."""

    def _record(
        record_id: int,
        file_path: str = "",
        size_bytes: int = 1024,
        *,
        created_minutes: int = 0,
        key: str | None = None,
    ) -> MediaRecord:
        return MediaRecord(
            id=record_id,
            key=key or f"key-{record_id}",
            name=f"Media {record_id}",
            file_name=file_path.rpartition("/")[2],
            file_path=file_path,
            size_bytes=size_bytes,
            created_at=BASE_TIME.replace(minute=created_minutes),
        )

    return _record
