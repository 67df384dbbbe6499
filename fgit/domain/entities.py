"""Domain entities.

Core models for one snapshot of the working tree: the changed files and
their parsed diffs. These are plain dataclasses with no dependencies on
git or the terminal; they are built fresh on every invocation and never
mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class FileStatus(str, Enum):
    """Kind of change recorded for a path."""

    MODIFIED = "modified"
    ADDED = "added"
    DELETED = "deleted"
    RENAMED = "renamed"
    UNTRACKED = "untracked"


class ChangeGroup(str, Enum):
    """Listing group a record belongs to.

    Listing order is the declaration order: unstaged work first, then new
    files, then what is already staged.
    """

    UNSTAGED = "unstaged"
    UNTRACKED = "untracked"
    STAGED = "staged"

    @property
    def title(self) -> str:
        """Header text for the group."""
        return self.value.capitalize()


@dataclass(frozen=True)
class DiffLine:
    """One line of a hunk.

    Attributes:
        kind: "+" for added, "-" for removed, " " for context.
        text: Line content without the marker or trailing newline.
    """

    kind: str
    text: str

    def __post_init__(self) -> None:
        """Validate the line marker."""
        if self.kind not in ("+", "-", " "):
            raise ValueError(f"Invalid diff line kind: {self.kind!r}")

    @property
    def is_change(self) -> bool:
        """True for added or removed lines."""
        return self.kind != " "

    def __str__(self) -> str:
        return f"{self.kind}{self.text}"


@dataclass(frozen=True)
class DiffHunk:
    """A contiguous block of changed lines with line numbers.

    Attributes:
        old_start: First line in the old file (0 for a new file).
        old_count: Number of old lines covered.
        new_start: First line in the new file (0 for a deleted file).
        new_count: Number of new lines covered.
        lines: Lines of the hunk in original order.
    """

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    lines: tuple[DiffLine, ...] = ()

    def __post_init__(self) -> None:
        """Validate line numbers."""
        if min(self.old_start, self.old_count, self.new_start, self.new_count) < 0:
            raise ValueError("Hunk line numbers cannot be negative")

    @property
    def added(self) -> int:
        """Number of added lines."""
        return sum(1 for line in self.lines if line.kind == "+")

    @property
    def removed(self) -> int:
        """Number of removed lines."""
        return sum(1 for line in self.lines if line.kind == "-")


@dataclass(frozen=True, eq=False)
class FileRecord:
    """One changed path at a point in time.

    ``path`` is the only identity-bearing field: two records are the same
    logical file iff their paths are equal.

    Attributes:
        path: Repository-relative path with forward slashes.
        status: Kind of change.
        staged: True if the record is listed from the index side.
        modified_time: Worktree mtime in seconds (0 if the file is gone).
            Only used for ordering.
        diff_hunks: Parsed hunks; untracked files carry one all-added hunk.
        original_path: Source path of a rename, else None.
        partially_staged: True if the path also has staged changes while
            being listed from its worktree side.
    """

    path: str
    status: FileStatus
    staged: bool = False
    modified_time: float = 0.0
    diff_hunks: tuple[DiffHunk, ...] = field(default=())
    original_path: str | None = None
    partially_staged: bool = False

    def __post_init__(self) -> None:
        """Validate record data."""
        if not self.path:
            raise ValueError("path cannot be empty")
        if self.staged and self.status is FileStatus.UNTRACKED:
            raise ValueError(f"Untracked file cannot be staged: {self.path}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileRecord):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    @property
    def group(self) -> ChangeGroup:
        """Listing group for this record."""
        if self.status is FileStatus.UNTRACKED:
            return ChangeGroup.UNTRACKED
        if self.staged:
            return ChangeGroup.STAGED
        return ChangeGroup.UNSTAGED

    @property
    def added(self) -> int:
        """Total added lines across hunks."""
        return sum(h.added for h in self.diff_hunks)

    @property
    def removed(self) -> int:
        """Total removed lines across hunks."""
        return sum(h.removed for h in self.diff_hunks)

    @property
    def first_changed_line(self) -> int:
        """Line to open an editor at: start of the first hunk, or 1."""
        for hunk in self.diff_hunks:
            if hunk.new_start > 0:
                return hunk.new_start
        return 1
