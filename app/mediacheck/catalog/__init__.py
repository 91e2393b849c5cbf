"""Content catalog access.

This module provides the catalog service interfaces, the JSON export
backed implementations and the paged reader producing MediaRecords.
"""

from mediacheck.catalog.models import CatalogEntry, CatalogPage, MediaRecord
from mediacheck.catalog.reader import CatalogReader, decode_entry, resolve_file_path
from mediacheck.catalog.service import (
    CATALOG_ROOT,
    CatalogAccessError,
    CatalogEntryDecodeError,
    CatalogError,
    CatalogService,
    JsonCatalogService,
    JsonReferenceService,
    ReferenceService,
)

__all__ = [
    "CATALOG_ROOT",
    "CatalogAccessError",
    "CatalogEntry",
    "CatalogEntryDecodeError",
    "CatalogError",
    "CatalogPage",
    "CatalogReader",
    "CatalogService",
    "JsonCatalogService",
    "JsonReferenceService",
    "MediaRecord",
    "ReferenceService",
    "decode_entry",
    "resolve_file_path",
]
