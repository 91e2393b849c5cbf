"""Physical media store access.

This module provides the file store interface, path normalization and
the budgeted walker over the store.
"""

from mediacheck.storage.models import (
    AbortReason,
    PhysicalFile,
    ScanBudget,
    ScanResult,
    WalkStatus,
)
from mediacheck.storage.paths import (
    extension_of,
    file_name_of,
    is_system_artifact,
    normalize_path,
    to_store_path,
)
from mediacheck.storage.store import (
    FileStore,
    LocalFileStore,
    StoreDirectoryAccessError,
    StoreError,
)
from mediacheck.storage.walker import FileStoreWalker

__all__ = [
    "AbortReason",
    "FileStore",
    "FileStoreWalker",
    "LocalFileStore",
    "PhysicalFile",
    "ScanBudget",
    "ScanResult",
    "StoreDirectoryAccessError",
    "StoreError",
    "WalkStatus",
    "extension_of",
    "file_name_of",
    "is_system_artifact",
    "normalize_path",
    "to_store_path",
]
