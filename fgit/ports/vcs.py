"""Version Control System (VCS) port interface.

Defines the interface the core uses to read the working tree state and to
run git actions on a resolved file.
"""

from dataclasses import dataclass
from typing import Protocol

from fgit.domain.entities import DiffHunk, FileRecord


@dataclass(frozen=True)
class RawChange:
    """One path as reported by the VCS, before records are built.

    Attributes:
        path: Repository-relative path (new path for renames).
        index_code: Porcelain status letter for the index ("?" if untracked).
        worktree_code: Porcelain status letter for the worktree.
        modified_time: Worktree mtime in seconds, 0 if the file is gone.
        staged_hunks: Parsed hunks of the index diff.
        unstaged_hunks: Parsed hunks of the worktree diff (whole-file
            additions for untracked files).
        original_path: Rename source, if any.
    """

    path: str
    index_code: str
    worktree_code: str
    modified_time: float = 0.0
    staged_hunks: tuple[DiffHunk, ...] = ()
    unstaged_hunks: tuple[DiffHunk, ...] = ()
    original_path: str | None = None

    @property
    def is_untracked(self) -> bool:
        """True for paths git does not track yet."""
        return self.index_code == "?" and self.worktree_code == "?"


class VCS(Protocol):
    """Protocol for version control system operations (Git)."""

    def list_changes(self) -> list[RawChange]:
        """Query changed, staged and untracked paths with their diffs.

        Returns:
            One RawChange per path, in no particular order.

        Raises:
            RuntimeError: If the status or diff query fails.
        """
        ...

    def stage(self, record: FileRecord) -> int:
        """Stage a file. Returns the git exit code."""
        ...

    def show_diff(self, record: FileRecord) -> int:
        """Show the worktree diff of a file on the terminal.

        Untracked files are diffed against /dev/null.

        Returns:
            Git exit code.
        """
        ...

    def show_staged_diff(self, record: FileRecord) -> int:
        """Show the index diff of a file on the terminal. Returns the exit code."""
        ...

    def commit(self, message: str) -> int:
        """Commit staged changes. Returns the git exit code."""
        ...

    def push(self) -> int:
        """Push to the default remote. Returns the git exit code."""
        ...
