"""Byte size helpers shared by reports and CLI output."""

MEGABYTE = 1024 * 1024


def to_megabytes(size_bytes: int) -> float:
    """Convert bytes to megabytes rounded to two decimals."""
    return round(size_bytes / MEGABYTE, 2)


def format_size(size_bytes: int | None) -> str:
    """Return human-readable size string."""
    if size_bytes is None:
        return "unknown"

    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


def plural(count: int, word: str) -> str:
    """Return "1 file" / "2 files" style text."""
    return f"{count} {word}" if count == 1 else f"{count} {word}s"
