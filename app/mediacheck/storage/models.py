"""Physical store domain models.

This module defines the values produced by walking the physical media
store: visited files, traversal budgets and the outcome of a walk.
"""

from dataclasses import dataclass, field
from enum import Enum


class WalkStatus(str, Enum):
    """Lifecycle of a single store walk.

    Attributes:
        RUNNING: Traversal in progress.
        COMPLETED: All reachable entries were visited.
        ABORTED: Traversal stopped early; see AbortReason.
    """

    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


class AbortReason(str, Enum):
    """Reason a walk stopped before visiting every entry."""

    FILE_LIMIT = "file-count limit reached"
    TIME_BUDGET = "time budget exceeded"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class PhysicalFile:
    """A file found in the physical store.

    Attributes:
        path: Path as returned by the store (relative to its root).
        normalized_path: Canonical form used for catalog comparison.
        size_bytes: File size in bytes.
    """

    path: str
    normalized_path: str
    size_bytes: int

    def __post_init__(self) -> None:
        """Validate physical file data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.size_bytes < 0:
            msg = f"Size cannot be negative, got {self.size_bytes}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ScanBudget:
    """Limits bounding a store traversal.

    Attributes:
        max_files: Maximum number of files to visit (None = unbounded).
        max_duration: Maximum wall-clock seconds (None = unbounded).
    """

    max_files: int | None = None
    max_duration: float | None = None

    def __post_init__(self) -> None:
        """Validate budget limits after initialization."""
        if self.max_files is not None and self.max_files < 0:
            msg = f"max_files cannot be negative, got {self.max_files}"
            raise ValueError(msg)
        if self.max_duration is not None and self.max_duration < 0:
            msg = f"max_duration cannot be negative, got {self.max_duration}"
            raise ValueError(msg)

    @classmethod
    def unbounded(cls) -> "ScanBudget":
        """Create a budget without limits."""
        return cls()


@dataclass(slots=True)
class ScanState:
    """Mutable bookkeeping for one walk in progress.

    Owned by a single walk and discarded when it finishes.
    """

    started_at: float
    scanned: int = 0
    status: WalkStatus = WalkStatus.RUNNING
    abort_reason: AbortReason | None = None
    abort_detail: str | None = None

    @property
    def aborted(self) -> bool:
        """Check if the walk was aborted."""
        return self.status == WalkStatus.ABORTED

    def abort(self, reason: AbortReason, detail: str) -> None:
        """Move the walk into the terminal aborted state."""
        self.status = WalkStatus.ABORTED
        self.abort_reason = reason
        self.abort_detail = detail


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Outcome of walking the physical store.

    Attributes:
        files: Collected files, in visit order.
        scanned_count: Number of files visited (including skipped artifacts).
        aborted: Whether the walk stopped on a budget or cancellation.
        abort_reason: Why the walk stopped, if it did.
        abort_detail: Human-readable abort description including the limit.
        failed_directories: Directories that could not be listed.
    """

    files: tuple[PhysicalFile, ...]
    scanned_count: int
    aborted: bool = False
    abort_reason: AbortReason | None = None
    abort_detail: str | None = None
    failed_directories: tuple[str, ...] = field(default_factory=tuple)

    @property
    def total_bytes(self) -> int:
        """Sum of the sizes of all collected files."""
        return sum(f.size_bytes for f in self.files)
