"""Change set model: records from VCS output, grouping and ordering.

Listing order is unstaged -> untracked -> staged. Within a group the
least recently touched file comes first, so the newest edits sink to the
bottom of the list, next to the prompt.
"""

import logging
from collections.abc import Iterable

from fgit.domain.entities import ChangeGroup, FileRecord, FileStatus
from fgit.ports.vcs import RawChange

logger = logging.getLogger(__name__)

# Porcelain status letters -> FileStatus
_STATUS_LETTERS: dict[str, FileStatus] = {
    "M": FileStatus.MODIFIED,
    "T": FileStatus.MODIFIED,  # Type change (e.g., file -> symlink)
    "U": FileStatus.MODIFIED,  # Unmerged
    "A": FileStatus.ADDED,
    "C": FileStatus.ADDED,  # Copy: treat as added
    "D": FileStatus.DELETED,
    "R": FileStatus.RENAMED,
}

# Index letters that describe the file better than the worktree letter
_INDEX_PREFERRED = frozenset({"A", "C", "R"})

_GROUP_ORDER = {group: rank for rank, group in enumerate(ChangeGroup)}


def build_record(raw: RawChange) -> FileRecord | None:
    """Build the record for one path.

    A path with both index and worktree changes is represented once, from
    its worktree side, and flagged as partially staged.

    Args:
        raw: VCS output for the path.

    Returns:
        FileRecord, or None if the status letters are not recognised.
    """
    if raw.is_untracked:
        return FileRecord(
            path=raw.path,
            status=FileStatus.UNTRACKED,
            modified_time=raw.modified_time,
            diff_hunks=raw.unstaged_hunks,
        )

    index_changed = raw.index_code in _STATUS_LETTERS
    worktree_changed = raw.worktree_code in _STATUS_LETTERS

    if worktree_changed:
        letter = raw.index_code if raw.index_code in _INDEX_PREFERRED else raw.worktree_code
        return FileRecord(
            path=raw.path,
            status=_STATUS_LETTERS[letter],
            staged=False,
            modified_time=raw.modified_time,
            diff_hunks=raw.unstaged_hunks,
            original_path=raw.original_path,
            partially_staged=index_changed,
        )

    if index_changed:
        return FileRecord(
            path=raw.path,
            status=_STATUS_LETTERS[raw.index_code],
            staged=True,
            modified_time=raw.modified_time,
            diff_hunks=raw.staged_hunks,
            original_path=raw.original_path,
        )

    logger.warning(
        "Unknown git status '%s%s' for path '%s'. Skipping.",
        raw.index_code,
        raw.worktree_code,
        raw.path,
    )
    return None


def build_records(raw_changes: Iterable[RawChange]) -> list[FileRecord]:
    """Build one record per path from VCS output.

    Args:
        raw_changes: VCS output. If a path is reported twice, the last
            report wins.

    Returns:
        Records in listing order.
    """
    by_path: dict[str, FileRecord] = {}
    for raw in raw_changes:
        record = build_record(raw)
        if record is not None:
            by_path[record.path] = record
    return order_records(by_path.values())


def order_records(records: Iterable[FileRecord]) -> list[FileRecord]:
    """Sort records into listing order.

    Groups come unstaged, untracked, staged; each group is sorted by
    modified_time ascending with ties broken by path.
    """
    return sorted(
        records,
        key=lambda r: (_GROUP_ORDER[r.group], r.modified_time, r.path),
    )


def first_actionable(records: Iterable[FileRecord], staged: bool = False) -> FileRecord | None:
    """Pick the default target for a command run without an ID.

    Args:
        records: Records of the current snapshot.
        staged: Look for a record with staged changes instead of an
            unstaged or untracked one.

    Returns:
        The first matching record in listing order, or None.
    """
    for record in order_records(records):
        if staged and (record.staged or record.partially_staged):
            return record
        if not staged and record.group is not ChangeGroup.STAGED:
            return record
    return None
