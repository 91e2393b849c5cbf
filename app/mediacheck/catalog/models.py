"""Catalog domain models.

This module defines the raw entries a catalog service returns and the
decoded media records the analyzers consume.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """One undecoded entry from the content catalog.

    Attributes:
        id: Numeric identifier of the entry.
        key: Stable unique identifier (GUID string).
        name: Display name of the item.
        content_type: Content type alias (e.g. "Image", "File", "Folder").
        file_value: Raw stored file attribute; a path or a serialized
            object with a ``src`` field.
        bytes_value: Raw stored size attribute.
        created_at: Creation timestamp.
    """

    id: int
    key: str
    name: str | None
    content_type: str
    file_value: str | None
    bytes_value: str | int | None
    created_at: datetime


@dataclass(frozen=True, slots=True)
class CatalogPage:
    """A page of catalog entries.

    Attributes:
        entries: Entries on this page.
        total_count: Total number of entries below the requested root.
    """

    entries: tuple[CatalogEntry, ...]
    total_count: int


@dataclass(frozen=True, slots=True)
class MediaRecord:
    """A decoded media item from the catalog.

    Attributes:
        id: Numeric identifier.
        key: Stable unique identifier.
        name: Display name ("(unnamed)" when the catalog has none).
        file_name: Final component of file_path ("" when unknown).
        file_path: Resolved stored path ("" when absent or undecodable).
        size_bytes: Stored size in bytes (0 when absent or unparsable).
        created_at: Timezone-aware creation timestamp.
        is_folder: Whether the entry is a folder.
        content_type: Content type alias.
    """

    id: int
    key: str
    name: str
    file_name: str
    file_path: str
    size_bytes: int
    created_at: datetime
    is_folder: bool = False
    content_type: str = ""

    @property
    def identifiers(self) -> tuple[str, str]:
        """Identifiers an ignore rule may match (key and numeric id)."""
        return (self.key, str(self.id))
