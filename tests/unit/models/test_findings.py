"""Unit tests for finding models."""

from collections.abc import Callable

import pytest
from mediacheck.catalog.models import MediaRecord
from mediacheck.models.findings import DuplicateGroup, LargeFile, MissingFile


class TestDuplicateGroup:
    """Tests for DuplicateGroup class."""

    def test_requires_two_items(self, make_record: Callable[..., MediaRecord]) -> None:
        """A group with fewer than two items is rejected."""
        with pytest.raises(ValueError, match="at least 2"):
            DuplicateGroup(file_name="a.jpg", size_bytes=10, items=(make_record(1, "a.jpg", 10),))

    def test_properties(self, make_record: Callable[..., MediaRecord]) -> None:
        """original, duplicates and wasted_bytes derive from the items."""
        items = tuple(make_record(i, "a.jpg", 10) for i in range(3))
        group = DuplicateGroup(file_name="a.jpg", size_bytes=10, items=items)

        assert group.original.id == 0
        assert [r.id for r in group.duplicates] == [1, 2]
        assert group.wasted_bytes == 20

    def test_to_dict(self, make_record: Callable[..., MediaRecord]) -> None:
        """to_dict nests the original and duplicates."""
        items = (make_record(1, "/media/1/a.jpg", 10), make_record(2, "/media/2/a.jpg", 10))
        data = DuplicateGroup(file_name="a.jpg", size_bytes=10, items=items).to_dict()

        assert data["count"] == 2
        assert data["original"]["id"] == 1
        assert [d["id"] for d in data["duplicates"]] == [2]


class TestRecordFindings:
    """Tests for record-based finding serialization."""

    def test_large_file_to_dict(self, make_record: Callable[..., MediaRecord]) -> None:
        """LargeFile includes the record and its excess."""
        data = LargeFile(record=make_record(1, "/media/1/a.jpg", 100), excess_bytes=40).to_dict()

        assert data["size_bytes"] == 100
        assert data["excess_bytes"] == 40
        assert data["file_path"] == "/media/1/a.jpg"

    def test_missing_file_to_dict(self, make_record: Callable[..., MediaRecord]) -> None:
        """MissingFile exposes the expected path."""
        record = make_record(3, "/media/3/gone.jpg")
        data = MissingFile(record=record, expected_path=record.file_path).to_dict()

        assert data == {
            "id": 3,
            "key": "key-3",
            "name": "Media 3",
            "expected_path": "/media/3/gone.jpg",
        }
