"""Path canonicalization for cross-referencing catalog and store paths.

The catalog stores media paths as the host application writes them
(e.g. ``/media/1042/Photo.JPG``) while the file store returns paths
relative to its own root (e.g. ``1042/photo.jpg`` or ``1042\\Photo.JPG``
on Windows shares). Everything in this module is pure string work so
both sides can be compared by plain equality.
"""

import re

# Storage-root segments stripped from the front of a path
DEFAULT_ROOT_SEGMENTS: tuple[str, ...] = ("media",)

# OS-generated sidecar files that never belong to the catalog
SYSTEM_ARTIFACT_NAMES: frozenset[str] = frozenset({"thumbs.db", "desktop.ini"})

_SLASH_RUN = re.compile(r"/{2,}")


def _fold_slashes(path: str) -> str:
    """Convert backslashes, collapse slash runs and trim leading slashes."""
    folded = _SLASH_RUN.sub("/", path.replace("\\", "/"))
    return folded.lstrip("/")


def _strip_root(path: str, root_segments: tuple[str, ...]) -> str:
    """Strip leading storage-root segments (case-insensitive).

    Stripping repeats until no root segment prefixes the path, which
    keeps normalization idempotent for paths like ``media/media/x``.
    """
    prefixes = tuple(
        f"{segment.strip('/').lower()}/" for segment in root_segments if segment.strip("/")
    )
    stripped = True
    while stripped:
        stripped = False
        lowered = path.lower()
        for prefix in prefixes:
            if lowered.startswith(prefix):
                path = path[len(prefix) :].lstrip("/")
                stripped = True
                break
    return path


def normalize_path(path: str, root_segments: tuple[str, ...] = DEFAULT_ROOT_SEGMENTS) -> str:
    """Canonicalize a storage path for equality comparison.

    Args:
        path: Raw path from the catalog or the file store.
        root_segments: Storage-root segments to strip from the front.

    Returns:
        Lowercase path with forward slashes, no leading slash and no
        leading storage-root segment.

    Example:
        >>> normalize_path("/media/1042\\\\Photo.JPG")
        '1042/photo.jpg'
    """
    if not path:
        return ""
    return _strip_root(_fold_slashes(path).lower(), root_segments)


def to_store_path(path: str, root_segments: tuple[str, ...] = DEFAULT_ROOT_SEGMENTS) -> str:
    """Convert a catalog path to a store-relative path, preserving case.

    Same steps as :func:`normalize_path` except lowercasing, so the
    result can be used to query a case-sensitive store.
    """
    if not path:
        return ""
    return _strip_root(_fold_slashes(path), root_segments)


def file_name_of(path: str) -> str:
    """Return the final component of a path in either slash style."""
    return path.replace("\\", "/").rstrip("/").rpartition("/")[2]


def extension_of(path: str) -> str:
    """Return the lowercased extension of a path without its dot.

    The extension is the substring after the last ``.`` of the file
    name. Names without a dot yield an empty string.
    """
    name = file_name_of(path)
    _, dot, ext = name.rpartition(".")
    if not dot:
        return ""
    return ext.lstrip(".").lower()


def is_system_artifact(name: str) -> bool:
    """Check if a file name is a hidden file or an OS sidecar file.

    Args:
        name: File name (basename, not a path).

    Returns:
        True for dot-files and names like ``Thumbs.db``/``desktop.ini``.
    """
    return name.startswith(".") or name.lower() in SYSTEM_ARTIFACT_NAMES
