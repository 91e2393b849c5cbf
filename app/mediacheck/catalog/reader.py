"""Paged catalog reader.

Pages through the content catalog and decodes each entry into a flat
MediaRecord. Folders are dropped, and malformed per-entry attributes
degrade to an empty path or a zero size instead of failing the scan.
"""

import json
import logging
import threading
from collections.abc import Iterator
from datetime import UTC

from mediacheck.catalog.models import CatalogEntry, MediaRecord
from mediacheck.catalog.service import (
    CATALOG_ROOT,
    CatalogAccessError,
    CatalogEntryDecodeError,
    CatalogService,
)
from mediacheck.core.cancellation import check_cancelled
from mediacheck.storage.paths import file_name_of

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 500

FOLDER_CONTENT_TYPE = "folder"

UNNAMED = "(unnamed)"


def decode_file_value(raw: str | None) -> str:
    """Decode a stored file attribute into a path.

    The attribute is either a plain path or a serialized object whose
    ``src`` field (matched case-insensitively) holds the path.

    Args:
        raw: Raw stored attribute.

    Returns:
        The stored path, or "" when the attribute is empty or the object
        has no ``src`` field.

    Raises:
        CatalogEntryDecodeError: If a serialized object cannot be parsed.
    """
    if not raw:
        return ""

    value = raw.strip()
    if not value.startswith("{"):
        return value

    try:
        data = json.loads(value)
    except json.JSONDecodeError as e:
        msg = f"Malformed file attribute: {e}"
        raise CatalogEntryDecodeError(msg) from e

    if not isinstance(data, dict):
        msg = f"File attribute is not an object: {type(data).__name__}"
        raise CatalogEntryDecodeError(msg)

    for field_name, field_value in data.items():
        if str(field_name).lower() != "src":
            continue
        if field_value is None:
            return ""
        if not isinstance(field_value, str):
            msg = f"File attribute 'src' is not a string: {field_value!r}"
            raise CatalogEntryDecodeError(msg)
        return field_value

    return ""


def resolve_file_path(raw: str | None, key: str = "") -> str:
    """Resolve a stored file attribute, returning "" on any decode failure.

    Args:
        raw: Raw stored attribute.
        key: Identifier of the entry, used in the log message.

    Returns:
        The stored path, or "" when it cannot be decoded.
    """
    try:
        return decode_file_value(raw)
    except CatalogEntryDecodeError as e:
        logger.warning("Cannot decode file path of media %s: %s", key or "?", e)
        return ""


def parse_size(raw: str | int | None) -> int:
    """Parse a stored size attribute, defaulting to 0.

    Missing, unparsable and negative values all yield 0.
    """
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, int):
        return max(raw, 0)
    try:
        return max(int(raw.strip()), 0)
    except ValueError:
        return 0


def is_folder(entry: CatalogEntry) -> bool:
    """Check if a catalog entry is a folder."""
    return entry.content_type.strip().lower() == FOLDER_CONTENT_TYPE


def decode_entry(entry: CatalogEntry) -> MediaRecord:
    """Decode a raw catalog entry into a MediaRecord.

    Naive creation timestamps are treated as UTC so records from
    different sources stay comparable.
    """
    folder = is_folder(entry)
    file_path = "" if folder else resolve_file_path(entry.file_value, entry.key)
    created_at = entry.created_at
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)

    return MediaRecord(
        id=entry.id,
        key=entry.key,
        name=entry.name or UNNAMED,
        file_name=file_name_of(file_path),
        file_path=file_path,
        size_bytes=0 if folder else parse_size(entry.bytes_value),
        created_at=created_at,
        is_folder=folder,
        content_type=entry.content_type,
    )


class CatalogReader:
    """Reads every media record below a catalog root, page by page.

    Args:
        service: Catalog service to page through.
        page_size: Entries requested per page.
        root: Catalog node whose descendants are read.
        cancel: Optional cancellation event checked between pages.

    Example:
        >>> reader = CatalogReader(JsonCatalogService(Path("catalog.json")))
        >>> sum(r.size_bytes for r in reader.read_all())
        73400320
    """

    def __init__(
        self,
        service: CatalogService,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        root: int = CATALOG_ROOT,
        cancel: threading.Event | None = None,
    ) -> None:
        if page_size <= 0:
            msg = f"Page size must be positive, got {page_size}"
            raise ValueError(msg)
        self._service = service
        self._page_size = page_size
        self._root = root
        self._cancel = cancel

    @property
    def page_size(self) -> int:
        """Entries requested per page."""
        return self._page_size

    def read_all(self, skip_folders: bool = True) -> Iterator[MediaRecord]:
        """Yield every media record below the catalog root.

        Paging stops when a page comes back empty or the number of
        consumed entries reaches the total the catalog reported.

        Args:
            skip_folders: If True, folder entries are never yielded.

        Yields:
            MediaRecord for each catalog entry.

        Raises:
            CatalogAccessError: If the catalog cannot be reached.
            AuditCancelledError: If cancellation is requested between pages.
        """
        page_index = 0
        consumed = 0

        while True:
            check_cancelled(self._cancel, "while reading the catalog")

            try:
                page = self._service.get_page(self._root, page_index, self._page_size)
            except CatalogAccessError:
                raise
            except OSError as e:
                msg = f"Cannot reach the catalog: {e}"
                raise CatalogAccessError(msg) from e

            if not page.entries:
                break

            for entry in page.entries:
                consumed += 1
                if skip_folders and is_folder(entry):
                    continue
                yield decode_entry(entry)

            if consumed >= page.total_count:
                break
            page_index += 1

        logger.debug("Read %d catalog entries in %d page(s)", consumed, page_index + 1)
