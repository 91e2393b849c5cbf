"""Finding models produced by the analyzers.

Each finding is an immutable value describing one reported item,
with a ``to_dict`` for JSON export.
"""

from dataclasses import dataclass
from typing import Any

from mediacheck.catalog.models import MediaRecord


def _record_to_dict(record: MediaRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "key": record.key,
        "name": record.name,
        "file_name": record.file_name,
        "file_path": record.file_path,
        "size_bytes": record.size_bytes,
        "created_at": record.created_at.isoformat(),
    }


@dataclass(frozen=True, slots=True)
class DuplicateGroup:
    """Media records sharing a file name (case-insensitive) and size.

    Attributes:
        file_name: File name as stored on the first record.
        size_bytes: Shared size in bytes.
        items: Records ordered by creation time; the first is the original.
    """

    file_name: str
    size_bytes: int
    items: tuple[MediaRecord, ...]

    def __post_init__(self) -> None:
        """Validate group data after initialization."""
        if len(self.items) < 2:
            msg = f"A duplicate group needs at least 2 items, got {len(self.items)}"
            raise ValueError(msg)

    @property
    def count(self) -> int:
        """Number of records in the group."""
        return len(self.items)

    @property
    def original(self) -> MediaRecord:
        """Earliest created record."""
        return self.items[0]

    @property
    def duplicates(self) -> tuple[MediaRecord, ...]:
        """Records created after the original."""
        return self.items[1:]

    @property
    def wasted_bytes(self) -> int:
        """Bytes taken by the duplicates."""
        return self.size_bytes * (self.count - 1)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "file_name": self.file_name,
            "size_bytes": self.size_bytes,
            "count": self.count,
            "wasted_bytes": self.wasted_bytes,
            "original": _record_to_dict(self.original),
            "duplicates": [_record_to_dict(r) for r in self.duplicates],
        }


@dataclass(frozen=True, slots=True)
class LargeFile:
    """A media record above the size threshold."""

    record: MediaRecord
    excess_bytes: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {**_record_to_dict(self.record), "excess_bytes": self.excess_bytes}


@dataclass(frozen=True, slots=True)
class MissingFile:
    """A media record whose physical file cannot be found.

    Attributes:
        record: The catalog record.
        expected_path: Path the record points at, as stored.
    """

    record: MediaRecord
    expected_path: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.record.id,
            "key": self.record.key,
            "name": self.record.name,
            "expected_path": self.expected_path,
        }


@dataclass(frozen=True, slots=True)
class OrphanFile:
    """A physical file with no catalog record."""

    path: str
    size_bytes: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"path": self.path, "size_bytes": self.size_bytes}


@dataclass(frozen=True, slots=True)
class DisallowedFile:
    """A physical file with a disallowed extension."""

    path: str
    extension: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"path": self.path, "extension": self.extension}


@dataclass(frozen=True, slots=True)
class UnusedMedia:
    """A media record no content item references."""

    record: MediaRecord

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return _record_to_dict(self.record)


Finding = DuplicateGroup | LargeFile | MissingFile | OrphanFile | DisallowedFile | UnusedMedia
