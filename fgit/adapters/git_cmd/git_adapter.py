"""Git adapter implementing the VCS protocol with subprocess git commands."""

import io
import logging
import os
import subprocess
from pathlib import Path

from fgit.adapters.git_cmd.diff_parser import (
    NULL_PATH,
    parse_porcelain_status,
    parse_unified_diff,
    untracked_hunks,
)
from fgit.domain.entities import DiffHunk, FileRecord, FileStatus
from fgit.ports.vcs import RawChange

logger = logging.getLogger(__name__)

# Plain, machine-readable diff regardless of user config
_DIFF_ARGS = ["diff", "--no-color", "--no-ext-diff", "--no-prefix", "-U0"]

# Keep non-ASCII paths readable instead of octal-quoted
_QUOTE_PATH_OFF = ["-c", "core.quotePath=false"]


class GitAdapter:
    """Git VCS adapter using subprocess calls to git CLI."""

    def __init__(self, repo_root: Path) -> None:
        """Initialize Git adapter.

        Args:
            repo_root: Absolute path to the git work tree root.

        Raises:
            RuntimeError: If repo_root is not a git repository.
        """
        self.repo_root = repo_root.resolve()
        if not self._is_git_repo():
            raise RuntimeError(f"Not a git repository: {self.repo_root}")

    def _is_git_repo(self) -> bool:
        """Check if repo_root is a git repository."""
        try:
            self._run_git(["rev-parse", "--git-dir"], check=True)
            return True
        except (subprocess.CalledProcessError, FileNotFoundError):
            return False

    def _run_git(
        self,
        args: list[str],
        check: bool = True,
        capture_output: bool = True,
    ) -> subprocess.CompletedProcess[bytes]:
        """Run a git command in the repository.

        Args:
            args: Git command arguments (without 'git' prefix).
            check: Whether to raise CalledProcessError on non-zero exit.
            capture_output: Whether to capture stdout/stderr. Actions shown
                to the user run uncaptured so git can use the terminal.

        Returns:
            CompletedProcess with command results.

        Raises:
            subprocess.CalledProcessError: If check=True and command fails.
        """
        cmd = ["git", "-C", str(self.repo_root)] + args
        logger.debug("Running: %s", " ".join(cmd))
        return subprocess.run(cmd, capture_output=capture_output, check=check)

    def _format_git_error(
        self,
        error: subprocess.CalledProcessError,
        context: str,
    ) -> str:
        """Format git error with exit code and stderr."""
        stderr = error.stderr.decode("utf-8", errors="replace").strip() if error.stderr else ""

        msg = f"{context} (git exit code {error.returncode})"
        if stderr:
            msg += f": {stderr}"
        else:
            msg += " (no error output from git)"
        return msg

    def _query(self, args: list[str], context: str) -> str:
        """Run a read-only git query and return its decoded stdout.

        Raises:
            RuntimeError: If git fails or is not installed.
        """
        try:
            result = self._run_git(args)
        except subprocess.CalledProcessError as e:
            raise RuntimeError(self._format_git_error(e, context)) from e
        except FileNotFoundError as e:
            raise RuntimeError("git executable not found") from e
        return result.stdout.decode("utf-8", errors="replace")

    def _run_action(self, args: list[str]) -> int:
        """Run a user-facing git command on the terminal; return its exit code.

        Raises:
            RuntimeError: If git is not installed.
        """
        try:
            result = self._run_git(args, check=False, capture_output=False)
        except FileNotFoundError as e:
            raise RuntimeError("git executable not found") from e
        return result.returncode

    def _modified_time(self, path: str) -> float:
        """Worktree mtime of a path, 0.0 if it no longer exists."""
        try:
            return os.lstat(self.repo_root / path).st_mtime
        except OSError:
            return 0.0

    def _untracked_hunks(self, path: str) -> tuple[DiffHunk, ...]:
        """Hunks of an untracked path (symlink target for links)."""
        full_path = self.repo_root / path
        try:
            if full_path.is_symlink():
                target = os.readlink(full_path).encode("utf-8", errors="surrogateescape")
                return untracked_hunks(io.BytesIO(target))
            with full_path.open("rb") as stream:
                return untracked_hunks(stream)
        except OSError as e:
            logger.debug("Cannot read untracked path %s: %s", path, e)
            return ()

    def list_changes(self) -> list[RawChange]:
        """Query changed, staged and untracked paths with their diffs.

        Returns:
            One RawChange per path reported by git status.

        Raises:
            RuntimeError: If a git query fails.
        """
        status_output = self._query(
            ["status", "--porcelain=v1", "-z", "--untracked-files=all"],
            "Failed to get git status",
        )
        entries = parse_porcelain_status(status_output)
        if not entries:
            return []

        unstaged = parse_unified_diff(
            self._query(_QUOTE_PATH_OFF + _DIFF_ARGS, "Failed to diff working tree")
        )
        staged = parse_unified_diff(
            self._query(_QUOTE_PATH_OFF + _DIFF_ARGS + ["--cached"], "Failed to diff index")
        )

        changes: list[RawChange] = []
        for entry in entries:
            if entry.index_code == "?":
                unstaged_hunks = self._untracked_hunks(entry.path)
            else:
                unstaged_hunks = unstaged.get(entry.path, ())
            changes.append(
                RawChange(
                    path=entry.path,
                    index_code=entry.index_code,
                    worktree_code=entry.worktree_code,
                    modified_time=self._modified_time(entry.path),
                    staged_hunks=staged.get(entry.path, ()),
                    unstaged_hunks=unstaged_hunks,
                    original_path=entry.original_path,
                )
            )
        logger.debug("git status reported %d paths", len(changes))
        return changes

    def stage(self, record: FileRecord) -> int:
        """Stage a file (including deletions). Returns git's exit code."""
        return self._run_action(["add", "--", record.path])

    def show_diff(self, record: FileRecord) -> int:
        """Show the worktree diff of a file.

        Untracked files are diffed against /dev/null. ``git diff --no-index``
        exits 1 when the files differ, which is the expected case, so it is
        reported as success.
        """
        if record.status is FileStatus.UNTRACKED:
            code = self._run_action(["diff", "--no-index", "--", NULL_PATH, record.path])
            return 0 if code == 1 else code
        return self._run_action(["diff", "--", record.path])

    def show_staged_diff(self, record: FileRecord) -> int:
        """Show the index diff of a file (both sides of a staged rename)."""
        paths = [record.path]
        if record.original_path:
            paths.insert(0, record.original_path)
        return self._run_action(["diff", "--cached", "--", *paths])

    def commit(self, message: str) -> int:
        """Commit staged changes with a message."""
        return self._run_action(["commit", "-m", message])

    def push(self) -> int:
        """Push the current branch to its upstream."""
        return self._run_action(["push"])
