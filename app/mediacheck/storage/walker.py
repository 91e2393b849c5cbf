"""Budgeted recursive walk over the physical media store.

The walker visits every file below a store directory depth-first,
files before subdirectories, and stops early once either limit of its
ScanBudget is reached. Files collected before the stop are kept.
"""

import logging
import threading
import time
from collections.abc import Callable

from mediacheck.storage.models import (
    AbortReason,
    PhysicalFile,
    ScanBudget,
    ScanResult,
    ScanState,
    WalkStatus,
)
from mediacheck.storage.paths import (
    DEFAULT_ROOT_SEGMENTS,
    file_name_of,
    is_system_artifact,
    normalize_path,
)
from mediacheck.storage.store import FileStore, StoreDirectoryAccessError

logger = logging.getLogger(__name__)


class FileStoreWalker:
    """Enumerates files in a FileStore under a count and time budget.

    Budget checks happen before each file, so a limit is honored
    promptly even inside a very large directory. Directories that
    cannot be listed are logged and treated as empty.

    Args:
        store: Store to walk.
        budget: Traversal limits. Defaults to unbounded.
        root_segments: Storage-root segments stripped during normalization.
        cancel: Optional event; when set the walk aborts at the next file.
        clock: Monotonic clock in seconds (injectable for tests).

    Example:
        >>> walker = FileStoreWalker(store, ScanBudget(max_files=50_000, max_duration=5))
        >>> result = walker.walk()
        >>> result.aborted, result.scanned_count
        (False, 1234)
    """

    def __init__(
        self,
        store: FileStore,
        budget: ScanBudget | None = None,
        *,
        root_segments: tuple[str, ...] = DEFAULT_ROOT_SEGMENTS,
        cancel: threading.Event | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._store = store
        self._budget = budget or ScanBudget.unbounded()
        self._root_segments = root_segments
        self._cancel = cancel
        self._clock = clock

    @property
    def budget(self) -> ScanBudget:
        """Budget applied to each walk."""
        return self._budget

    def walk(self, root: str = "") -> ScanResult:
        """Walk the store from a directory and collect its files.

        Args:
            root: Store-relative directory to start from ("" for the root).

        Returns:
            ScanResult with the collected files and abort status.
        """
        state = ScanState(started_at=self._clock())
        files: list[PhysicalFile] = []
        failed: list[str] = []

        # Subdirectories are pushed reversed so they pop in listed order.
        stack: list[str] = [root]
        while stack and not state.aborted:
            directory = stack.pop()
            subdirectories = self._visit_directory(directory, state, files, failed)
            stack.extend(reversed(subdirectories))

        if not state.aborted:
            state.status = WalkStatus.COMPLETED

        logger.debug(
            "Walk %s: %d scanned, %d collected, %d unreadable directories",
            state.status.value,
            state.scanned,
            len(files),
            len(failed),
        )

        return ScanResult(
            files=tuple(files),
            scanned_count=state.scanned,
            aborted=state.aborted,
            abort_reason=state.abort_reason,
            abort_detail=state.abort_detail,
            failed_directories=tuple(failed),
        )

    def _visit_directory(
        self,
        directory: str,
        state: ScanState,
        files: list[PhysicalFile],
        failed: list[str],
    ) -> list[str]:
        """Visit the files of one directory and return its subdirectories.

        Returns an empty list when the directory cannot be listed or
        the walk aborted while visiting it.
        """
        try:
            file_paths = self._store.list_files(directory)
        except (StoreDirectoryAccessError, OSError) as e:
            logger.warning("Skipping unreadable directory %s: %s", directory or "/", e)
            failed.append(directory)
            return []

        for file_path in file_paths:
            if self._should_stop(state):
                return []

            state.scanned += 1

            if is_system_artifact(file_name_of(file_path)):
                continue

            try:
                size = self._store.get_size(file_path)
            except OSError as e:
                logger.debug("Cannot read size of %s, recording 0: %s", file_path, e)
                size = 0

            files.append(
                PhysicalFile(
                    path=file_path,
                    normalized_path=normalize_path(file_path, self._root_segments),
                    size_bytes=size,
                )
            )

        try:
            return self._store.list_directories(directory)
        except (StoreDirectoryAccessError, OSError) as e:
            logger.warning("Cannot list subdirectories of %s: %s", directory or "/", e)
            failed.append(directory)
            return []

    def _should_stop(self, state: ScanState) -> bool:
        """Check the budget and cancellation before visiting a file.

        Moves the state to aborted and returns True when a limit is hit.
        """
        budget = self._budget

        if budget.max_files is not None and state.scanned >= budget.max_files:
            state.abort(
                AbortReason.FILE_LIMIT,
                f"scan limit of {budget.max_files:,} files reached",
            )
            return True

        if budget.max_duration is not None:
            elapsed = self._clock() - state.started_at
            if elapsed >= budget.max_duration:
                state.abort(
                    AbortReason.TIME_BUDGET,
                    f"time budget of {budget.max_duration:g}s exceeded",
                )
                return True

        if self._cancel is not None and self._cancel.is_set():
            state.abort(AbortReason.CANCELLED, "scan cancelled")
            return True

        return False
