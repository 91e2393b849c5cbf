"""Content catalog and reference services.

The catalog is owned by the host application. This module defines the
interfaces the audit reads it through, plus implementations backed by
a JSON export of the media tree:

.. code-block:: json

    {
      "root": [
        {"id": 1050, "key": "...", "name": "Photos", "type": "Folder",
         "created": "2024-03-01T09:00:00Z", "children": [
            {"id": 1051, "key": "...", "name": "Beach", "type": "Image",
             "file": "{\\"src\\": \\"/media/1051/beach.jpg\\"}",
             "bytes": "482113", "created": "2024-03-01T09:02:00Z"}
         ]}
      ],
      "references": {"<media key>": [1203, 1207]}
    }
"""

import json
import logging
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from pathlib import Path
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)

from mediacheck.catalog.models import CatalogEntry, CatalogPage

logger = logging.getLogger(__name__)

# Parent identifier denoting the top of the media tree
CATALOG_ROOT = -1


class CatalogError(Exception):
    """Base exception for catalog errors."""


class CatalogAccessError(CatalogError):
    """Raised when the catalog cannot be reached at all."""


class CatalogEntryDecodeError(CatalogError):
    """Raised when a single entry's stored attribute is malformed."""


class CatalogService(ABC):
    """Abstract paged view of the content catalog."""

    @abstractmethod
    def get_page(self, parent_root: int, page_index: int, page_size: int) -> CatalogPage:
        """Return one page of descendants of a catalog node.

        Ordering must be stable across calls so that consecutive pages
        cover every descendant exactly once.

        Args:
            parent_root: Identifier of the node whose descendants to list.
            page_index: Zero-based page number.
            page_size: Number of entries per page.

        Returns:
            CatalogPage with the entries and the total descendant count.

        Raises:
            CatalogAccessError: If the catalog cannot be reached.
        """


class ReferenceService(ABC):
    """Abstract lookup of content items referencing a media item."""

    def is_available(self) -> bool:
        """Check if reference data can be looked up.

        Returns:
            True by default; implementations without reference data
            return False.
        """
        return True

    @abstractmethod
    def count_references(self, key: str) -> int:
        """Return how many content items reference the media item."""


class CatalogNode(BaseModel):
    """A node of the exported media tree."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    key: str
    name: str | None = None
    content_type: Annotated[str, Field(alias="type")] = "File"
    file: str | dict[str, object] | None = None
    size: Annotated[str | int | None, Field(alias="bytes")] = None
    created: datetime | None = None
    children: Annotated[list["CatalogNode"], Field(default_factory=list)]

    @field_validator("file", "size", "created", mode="wrap")
    @classmethod
    def drop_malformed(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> Any:
        """Replace a malformed per-node attribute with None.

        A bad stored value on one node must not invalidate the export;
        the reader then falls back to an empty path, zero size or the
        epoch for that node.
        """
        try:
            return handler(value)
        except ValidationError:
            logger.warning(
                "Ignoring malformed %s attribute of media %s: %r",
                info.field_name,
                info.data.get("key", "?"),
                value,
            )
            return None


CatalogNode.model_rebuild()


class CatalogExport(BaseModel):
    """Top-level layout of a catalog export file.

    ``references`` is None when the export carries no reference map, in
    which case reference tracking is unavailable.
    """

    model_config = ConfigDict(extra="ignore")

    root: Annotated[list[CatalogNode], Field(default_factory=list)]
    references: dict[str, list[int]] | None = None


def load_catalog_export(path: Path) -> CatalogExport:
    """Load and validate a catalog export file.

    Args:
        path: Path to the JSON export.

    Returns:
        Validated CatalogExport.

    Raises:
        CatalogAccessError: If the file is missing, unreadable or invalid.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogAccessError(f"Cannot read catalog export {path}: {e}") from e

    try:
        return CatalogExport.model_validate(json.loads(raw))
    except json.JSONDecodeError as e:
        raise CatalogAccessError(f"Invalid JSON in catalog export {path}: {e}") from e
    except ValidationError as e:
        raise CatalogAccessError(f"Invalid catalog export content in {path}: {e}") from e


def _to_entry(node: CatalogNode) -> CatalogEntry:
    created = node.created or datetime.fromtimestamp(0, tz=UTC)
    file_value = json.dumps(node.file) if isinstance(node.file, dict) else node.file
    return CatalogEntry(
        id=node.id,
        key=node.key,
        name=node.name,
        content_type=node.content_type,
        file_value=file_value,
        bytes_value=node.size,
        created_at=created,
    )


class JsonCatalogService(CatalogService):
    """CatalogService over a JSON export of the media tree.

    The export is loaded lazily on the first page request and the
    descendants of each requested root are flattened depth-first,
    parents before children.

    Args:
        path: Path to the JSON export.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._export: CatalogExport | None = None
        self._flattened: dict[int, list[CatalogEntry]] = {}

    @property
    def export(self) -> CatalogExport:
        """The loaded export (loads it on first access)."""
        if self._export is None:
            self._export = load_catalog_export(self._path)
            logger.debug("Loaded catalog export from %s", self._path)
        return self._export

    def get_page(self, parent_root: int, page_index: int, page_size: int) -> CatalogPage:
        if page_size <= 0:
            msg = f"Page size must be positive, got {page_size}"
            raise ValueError(msg)

        entries = self._descendants(parent_root)
        start = page_index * page_size
        return CatalogPage(
            entries=tuple(entries[start : start + page_size]),
            total_count=len(entries),
        )

    def _descendants(self, parent_root: int) -> list[CatalogEntry]:
        if parent_root in self._flattened:
            return self._flattened[parent_root]

        if parent_root == CATALOG_ROOT:
            start_nodes = self.export.root
        else:
            parent = self._find(self.export.root, parent_root)
            start_nodes = parent.children if parent is not None else []

        flattened: list[CatalogEntry] = []
        stack = list(reversed(start_nodes))
        while stack:
            node = stack.pop()
            flattened.append(_to_entry(node))
            stack.extend(reversed(node.children))

        self._flattened[parent_root] = flattened
        return flattened

    @staticmethod
    def _find(nodes: list[CatalogNode], node_id: int) -> CatalogNode | None:
        stack = list(nodes)
        while stack:
            node = stack.pop()
            if node.id == node_id:
                return node
            stack.extend(node.children)
        return None


class JsonReferenceService(ReferenceService):
    """ReferenceService over the ``references`` map of a catalog export.

    Args:
        catalog: Catalog service whose export holds the reference map.
    """

    def __init__(self, catalog: JsonCatalogService) -> None:
        self._catalog = catalog

    def is_available(self) -> bool:
        return self._catalog.export.references is not None

    def count_references(self, key: str) -> int:
        references = self._catalog.export.references or {}
        return len(references.get(key, []))
