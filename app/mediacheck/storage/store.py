"""Physical file store access.

This module defines the FileStore interface the walker and analyzers
read through, and a local-directory implementation. All paths are
relative to the store root and use ``/`` separators, with ``""``
denoting the root itself.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Base exception for file store errors."""


class StoreDirectoryAccessError(StoreError):
    """Raised when a directory in the store cannot be listed."""


class FileStore(ABC):
    """Abstract read-only view of a physical media store.

    Example:
        >>> store = LocalFileStore(Path("/srv/site/wwwroot/media"))
        >>> for path in store.list_files(""):
        ...     print(path, store.get_size(path))
    """

    @abstractmethod
    def list_files(self, directory: str) -> list[str]:
        """List files directly inside a directory.

        Args:
            directory: Store-relative directory path ("" for the root).

        Returns:
            Store-relative file paths.

        Raises:
            StoreDirectoryAccessError: If the directory cannot be listed.
        """

    @abstractmethod
    def list_directories(self, directory: str) -> list[str]:
        """List subdirectories directly inside a directory.

        Args:
            directory: Store-relative directory path ("" for the root).

        Returns:
            Store-relative directory paths.

        Raises:
            StoreDirectoryAccessError: If the directory cannot be listed.
        """

    @abstractmethod
    def get_size(self, path: str) -> int:
        """Return the size of a file in bytes.

        Raises:
            OSError: If the file cannot be read.
        """

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Check whether a file exists in the store."""


class LocalFileStore(FileStore):
    """FileStore backed by a directory on the local filesystem.

    Entries are returned sorted by name so walks are deterministic.
    Symlinked directories are not followed.

    Args:
        root: Directory holding the media files.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        """Root directory of the store."""
        return self._root

    def _resolve(self, path: str) -> Path:
        relative = path.replace("\\", "/").strip("/")
        return self._root / relative if relative else self._root

    @staticmethod
    def _join(directory: str, name: str) -> str:
        prefix = directory.replace("\\", "/").strip("/")
        return f"{prefix}/{name}" if prefix else name

    def _entries(self, directory: str) -> list[Path]:
        target = self._resolve(directory)
        try:
            return sorted(target.iterdir(), key=lambda p: p.name)
        except OSError as e:
            msg = f"Cannot list directory '{directory or '/'}': {e}"
            raise StoreDirectoryAccessError(msg) from e

    def list_files(self, directory: str) -> list[str]:
        files: list[str] = []
        for entry in self._entries(directory):
            try:
                if entry.is_file():
                    files.append(self._join(directory, entry.name))
            except OSError:
                logger.debug("Cannot determine type of: %s", entry)
        return files

    def list_directories(self, directory: str) -> list[str]:
        directories: list[str] = []
        for entry in self._entries(directory):
            try:
                if entry.is_dir() and not entry.is_symlink():
                    directories.append(self._join(directory, entry.name))
            except OSError:
                logger.debug("Cannot determine type of: %s", entry)
        return directories

    def get_size(self, path: str) -> int:
        return self._resolve(path).stat().st_size

    def exists(self, path: str) -> bool:
        if not path:
            return False
        try:
            return self._resolve(path).is_file()
        except OSError:
            return False
