"""Audit context shared by the analyzers of one run.

The context bundles the collaborators (catalog, store, reference
lookup) with the configuration. It holds no results; every analyzer
reads the catalog and walks the store afresh.
"""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from mediacheck.catalog.models import MediaRecord
from mediacheck.catalog.reader import CatalogReader
from mediacheck.catalog.service import (
    CatalogService,
    JsonCatalogService,
    JsonReferenceService,
    ReferenceService,
)
from mediacheck.core.config import AuditConfig, ConfigError
from mediacheck.core.ignore import IgnorePolicy
from mediacheck.storage.models import ScanBudget
from mediacheck.storage.store import FileStore, LocalFileStore
from mediacheck.storage.walker import FileStoreWalker


@dataclass(frozen=True, slots=True)
class AuditContext:
    """Collaborators and configuration for one audit.

    Attributes:
        catalog: Content catalog service.
        store: Physical media store.
        config: Audit configuration.
        references: Reference lookup for the unused-media check (optional).
        cancel: Event a caller sets to stop the audit cooperatively.
        clock: Monotonic clock used for scan budgets.
    """

    catalog: CatalogService
    store: FileStore
    config: AuditConfig
    references: ReferenceService | None = None
    cancel: threading.Event | None = None
    clock: Callable[[], float] = time.monotonic

    @property
    def root_segments(self) -> tuple[str, ...]:
        """Storage-root segments from the configuration."""
        return self.config.root_segments

    def ignore_policy(self) -> IgnorePolicy:
        """Build the configured IgnorePolicy."""
        return self.config.ignore_policy()

    def catalog_reader(self) -> CatalogReader:
        """Create a reader over the catalog."""
        return CatalogReader(
            self.catalog,
            page_size=self.config.catalog.page_size,
            cancel=self.cancel,
        )

    def read_records(self) -> list[MediaRecord]:
        """Read all non-folder records from the catalog."""
        return list(self.catalog_reader().read_all())

    def walker(self, budget: ScanBudget | None = None) -> FileStoreWalker:
        """Create a walker over the store with the given budget."""
        return FileStoreWalker(
            self.store,
            budget,
            root_segments=self.root_segments,
            cancel=self.cancel,
            clock=self.clock,
        )


def build_context(
    config: AuditConfig,
    *,
    media_root: Path | None = None,
    catalog_path: Path | None = None,
    cancel: threading.Event | None = None,
) -> AuditContext:
    """Build an AuditContext for a local media directory and JSON catalog.

    Explicit arguments take precedence over the configuration.

    Args:
        config: Audit configuration.
        media_root: Media store directory (overrides [storage].root).
        catalog_path: Catalog export file (overrides [catalog].path).
        cancel: Optional cancellation event.

    Returns:
        AuditContext over a LocalFileStore and a JsonCatalogService.

    Raises:
        ConfigError: If the media root or catalog export is not configured,
            or the media root is not a directory.
    """
    root = media_root or config.storage.root
    if root is None:
        msg = "No media store configured; set [storage].root or pass --media-root"
        raise ConfigError(msg)
    if not root.is_dir():
        msg = f"Media store is not a directory: {root}"
        raise ConfigError(msg)

    export = catalog_path or config.catalog.path
    if export is None:
        msg = "No catalog export configured; set [catalog].path or pass --catalog"
        raise ConfigError(msg)

    catalog = JsonCatalogService(export)
    return AuditContext(
        catalog=catalog,
        store=LocalFileStore(root),
        config=config,
        references=JsonReferenceService(catalog),
        cancel=cancel,
    )
