"""Unit tests for byte size helpers."""

import pytest
from mediacheck.utils.sizes import MEGABYTE, format_size, plural, to_megabytes


class TestSizes:
    """Tests for size formatting helpers."""

    def test_to_megabytes(self) -> None:
        """Bytes convert to megabytes rounded to two decimals."""
        assert to_megabytes(MEGABYTE) == 1.0
        assert to_megabytes(1536 * 1024) == 1.5
        assert to_megabytes(0) == 0.0

    @pytest.mark.parametrize(
        ("size", "expected"),
        [(None, "unknown"), (512, "512.0 B"), (2048, "2.0 KB"), (5 * MEGABYTE, "5.0 MB")],
    )
    def test_format_size(self, size: int | None, expected: str) -> None:
        """Sizes are shown with the largest fitting unit."""
        assert format_size(size) == expected

    def test_plural(self) -> None:
        """Words are pluralized for counts other than one."""
        assert plural(1, "file") == "1 file"
        assert plural(0, "file") == "0 files"
        assert plural(3, "group") == "3 groups"
