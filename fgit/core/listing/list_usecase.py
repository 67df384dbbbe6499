"""List use case: snapshot the working tree and label every change.

A snapshot is the unit every command works against: one VCS query, one
set of records, one assignment. Nothing is cached between snapshots; the
watch loop simply takes a new one and drops the old.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from fgit.core.changes import Summary, build_records, first_actionable, order_records, summarize
from fgit.core.ids import AssignmentMap, assign, resolve_or_raise
from fgit.domain.config import FgitConfig
from fgit.domain.entities import FileRecord
from fgit.domain.exceptions import NoChangedFilesError
from fgit.domain.value_objects import CodeAlphabet
from fgit.ports.vcs import VCS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingEntry:
    """One line of the file listing.

    Attributes:
        code: The record's assigned ID.
        record: The changed file.
        summary: Inline diff or line counts.
    """

    code: str
    record: FileRecord
    summary: Summary


def build_listing(
    records: Iterable[FileRecord],
    alphabet: CodeAlphabet,
    max_length: int,
) -> list[ListingEntry]:
    """Assign IDs and summaries to records, in listing order.

    Args:
        records: Records of one snapshot.
        alphabet: ID alphabet.
        max_length: ID length bound.

    Returns:
        One entry per distinct path; empty for an empty record set.
    """
    ordered = order_records(records)
    assignment = assign(ordered, alphabet, max_length)
    return [
        ListingEntry(
            code=assignment.code_for(record),
            record=record,
            summary=summarize(record.diff_hunks),
        )
        for record in ordered
    ]


@dataclass(frozen=True)
class Snapshot:
    """Immutable view of the working tree at one point in time.

    Attributes:
        records: Records in listing order.
        assignment: ID -> record map over the same records.
        entries: Listing entries in listing order.
        alphabet: Alphabet the IDs were rendered with.
    """

    records: tuple[FileRecord, ...]
    assignment: AssignmentMap
    entries: tuple[ListingEntry, ...]
    alphabet: CodeAlphabet

    @property
    def is_empty(self) -> bool:
        """True if the working tree has no changes."""
        return not self.records

    def resolve(self, code: str) -> FileRecord:
        """Resolve a typed ID against this snapshot.

        Raises:
            NoChangedFilesError: If there are no changes at all.
            CodeNotFoundError: If nothing matches.
            AmbiguousCodeError: If several files match.
        """
        if self.is_empty:
            raise NoChangedFilesError("No changed files", hint="The working tree is clean")
        return resolve_or_raise(code, self.assignment)

    def target(self, code: str | None, staged: bool = False) -> FileRecord:
        """Resolve an optional ID, defaulting to the first actionable file.

        Args:
            code: Typed ID, or None to pick a default.
            staged: Pick the default among files with staged changes.

        Raises:
            NoChangedFilesError: If no default exists.
            CodeNotFoundError: If the ID matches nothing.
            AmbiguousCodeError: If the ID matches several files.
        """
        if code is not None:
            return self.resolve(code)
        record = first_actionable(self.records, staged=staged)
        if record is None:
            if staged:
                raise NoChangedFilesError(
                    "No staged changes", hint="Stage a file first with 'f add <ID>'"
                )
            raise NoChangedFilesError(
                "No unstaged or untracked changes", hint="The working tree is clean"
            )
        logger.debug("No ID given, defaulting to %s", record.path)
        return record


def take_snapshot(vcs: VCS, config: FgitConfig) -> Snapshot:
    """Query the VCS and build a snapshot.

    Args:
        vcs: VCS adapter for the repository.
        config: Loaded configuration (ID alphabet and length bound).

    Returns:
        Fresh Snapshot.

    Raises:
        RuntimeError: If the VCS query fails.
    """
    records = build_records(vcs.list_changes())
    alphabet = config.ids.code_alphabet
    entries = build_listing(records, alphabet, config.ids.max_length)
    assignment = AssignmentMap({entry.code: entry.record for entry in entries})
    logger.debug("Snapshot: %d changed files", len(records))
    return Snapshot(
        records=tuple(records),
        assignment=assignment,
        entries=tuple(entries),
        alphabet=alphabet,
    )
