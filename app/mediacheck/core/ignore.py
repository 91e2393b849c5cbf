"""Record-level ignore rules.

Media items can be excluded from the record-based analyzers by key,
by path fragment or by file name. Which of the three rules an analyzer
consults is configurable per analyzer.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from mediacheck.catalog.models import MediaRecord
from mediacheck.storage.paths import DEFAULT_ROOT_SEGMENTS, normalize_path


class IgnoreRule(str, Enum):
    """Individual ignore predicates.

    Attributes:
        IDS: Match the record key or numeric id.
        PATHS: Match a fragment of the record's file path.
        FILE_NAMES: Match the record's file name.
    """

    IDS = "ids"
    PATHS = "paths"
    FILE_NAMES = "file_names"


ALL_RULES: frozenset[IgnoreRule] = frozenset(IgnoreRule)


def _fold(value: str) -> str:
    return value.replace("\\", "/").lower()


@dataclass(frozen=True, slots=True)
class IgnorePolicy:
    """Decides whether a media record is excluded from analysis.

    All matching is case-insensitive. An empty set means the
    corresponding rule never matches.

    Attributes:
        ids: Ignored identifiers (keys or numeric ids).
        path_fragments: Ignored path fragments, matched as substrings.
        file_names: Ignored file names, matched exactly.
        root_segments: Storage-root segments stripped when normalizing paths.
    """

    ids: frozenset[str] = field(default_factory=frozenset)
    path_fragments: tuple[str, ...] = ()
    file_names: frozenset[str] = field(default_factory=frozenset)
    root_segments: tuple[str, ...] = DEFAULT_ROOT_SEGMENTS

    @classmethod
    def create(
        cls,
        ids: Iterable[str] = (),
        path_fragments: Iterable[str] = (),
        file_names: Iterable[str] = (),
        root_segments: tuple[str, ...] = DEFAULT_ROOT_SEGMENTS,
    ) -> "IgnorePolicy":
        """Create a policy, folding case and dropping empty entries."""
        return cls(
            ids=frozenset(i.strip().lower() for i in ids if i.strip()),
            path_fragments=tuple(_fold(p) for p in path_fragments if p.strip()),
            file_names=frozenset(n.strip().lower() for n in file_names if n.strip()),
            root_segments=root_segments,
        )

    def is_id_ignored(self, identifier: str) -> bool:
        """Check if an identifier is in the ignore set."""
        return bool(identifier) and identifier.strip().lower() in self.ids

    def is_path_ignored(self, path: str) -> bool:
        """Check if a path contains any ignored fragment.

        A fragment matches either the slash-folded raw path (so
        "/media/legacy/" matches "/media/legacy/a.jpg") or, in
        normalized form, the normalized path (so it also matches the
        store-relative "legacy/a.jpg").
        """
        if not path or not self.path_fragments:
            return False

        folded = _fold(path)
        normalized = normalize_path(path, self.root_segments)
        for fragment in self.path_fragments:
            if fragment in folded:
                return True
            normalized_fragment = normalize_path(fragment, self.root_segments)
            if normalized_fragment and normalized_fragment in normalized:
                return True
        return False

    def is_file_name_ignored(self, file_name: str) -> bool:
        """Check if a file name is in the ignore set."""
        return bool(file_name) and file_name.lower() in self.file_names

    def should_ignore(
        self,
        identifier: str,
        path: str,
        file_name: str,
        rules: frozenset[IgnoreRule] = ALL_RULES,
    ) -> bool:
        """Check if an item is excluded by any of the selected rules.

        Args:
            identifier: Record key or id.
            path: Record file path as stored.
            file_name: Record file name.
            rules: Which rules to consult.

        Returns:
            True if any selected rule matches.
        """
        if IgnoreRule.IDS in rules and self.is_id_ignored(identifier):
            return True
        if IgnoreRule.PATHS in rules and self.is_path_ignored(path):
            return True
        return IgnoreRule.FILE_NAMES in rules and self.is_file_name_ignored(file_name)

    def ignores_record(
        self,
        record: MediaRecord,
        rules: frozenset[IgnoreRule] = ALL_RULES,
    ) -> bool:
        """Check if a media record is excluded, matching its key or id."""
        if IgnoreRule.IDS in rules and any(self.is_id_ignored(i) for i in record.identifiers):
            return True
        return self.should_ignore(
            "", record.file_path, record.file_name, rules - {IgnoreRule.IDS}
        )
