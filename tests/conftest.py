"""Pytest configuration and shared fixtures."""

import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

from fgit.domain.entities import DiffHunk, DiffLine, FileRecord, FileStatus

# ============================================================================
# Environment Isolation
# ============================================================================
# Keep the user's real config and editor out of every test.


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path_factory, monkeypatch):
    """Point the global config at an empty directory and unset editors."""
    config_home = tmp_path_factory.mktemp("xdg_config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("VISUAL", raising=False)
    monkeypatch.delenv("EDITOR", raising=False)
    return config_home


# ============================================================================
# Git Repository Helpers
# ============================================================================
# These helpers consolidate git setup code to avoid duplication across tests.


def run_git(path: Path, *args: str) -> str:
    """Run a git command in ``path`` and return its stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=path,
        check=True,
        capture_output=True,
        text=True,
        timeout=5,
    )
    return result.stdout


def init_git_repo(
    path: Path,
    user_name: str = "Test User",
    user_email: str = "test@example.com",
) -> None:
    """Initialize a git repository with user configuration.

    Args:
        path: Directory to initialize as a git repository.
        user_name: Git user.name configuration value.
        user_email: Git user.email configuration value.

    Raises:
        subprocess.CalledProcessError: If git commands fail.
    """
    run_git(path, "init")
    run_git(path, "config", "user.name", user_name)
    run_git(path, "config", "user.email", user_email)
    run_git(path, "config", "commit.gpgsign", "false")


def git_add_and_commit(
    path: Path,
    message: str = "Initial commit",
    add_all: bool = True,
) -> None:
    """Stage files and create a git commit.

    Args:
        path: Git repository root directory.
        message: Commit message.
        add_all: If True, stages all files with 'git add .'.

    Raises:
        subprocess.CalledProcessError: If git commands fail.
    """
    if add_all:
        run_git(path, "add", ".")
    run_git(path, "commit", "-m", message)


def create_test_files(path: Path, files: dict[str, str]) -> None:
    """Create multiple files in a directory.

    Args:
        path: Base directory for file creation.
        files: Mapping of relative file paths to file contents.
               Parent directories are created automatically.
    """
    for file_path, content in files.items():
        full_path = path / file_path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content)


def create_git_repo(
    path: Path,
    files: dict[str, str] | None = None,
    commit: bool = True,
) -> Path:
    """Create a git repository with optional files and initial commit.

    Args:
        path: Directory to create the repository in.
        files: Optional mapping of file paths to contents.
        commit: If True and files provided, creates an initial commit.

    Returns:
        Path to the repository root.
    """
    path.mkdir(parents=True, exist_ok=True)
    init_git_repo(path)
    if files:
        create_test_files(path, files)
        if commit:
            git_add_and_commit(path)
    return path


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Git repository with a few committed files and no changes."""
    return create_git_repo(
        tmp_path / "repo",
        files={
            "README.md": "# Project\n",
            "src/main.py": "def main():\n    return 1\n",
            "src/util.py": "VALUE = 1\n",
        },
    )


# ============================================================================
# Record Factories
# ============================================================================


def make_hunk(*lines: str, new_start: int = 1) -> DiffHunk:
    """Build a hunk from marker-prefixed lines like "+added" or "-removed"."""
    diff_lines = tuple(DiffLine(line[0], line[1:]) for line in lines)
    added = sum(1 for line in diff_lines if line.kind != "-")
    removed = sum(1 for line in diff_lines if line.kind != "+")
    return DiffHunk(
        old_start=new_start if removed else max(new_start - 1, 0),
        old_count=removed,
        new_start=new_start,
        new_count=added,
        lines=diff_lines,
    )


@pytest.fixture
def make_record() -> Callable[..., FileRecord]:
    """Factory for FileRecord with sensible defaults."""

    def _make(
        path: str = "src/main.py",
        status: FileStatus = FileStatus.MODIFIED,
        staged: bool = False,
        modified_time: float = 0.0,
        diff_hunks: tuple[DiffHunk, ...] = (),
        **kwargs,
    ) -> FileRecord:
        return FileRecord(
            path=path,
            status=status,
            staged=staged,
            modified_time=modified_time,
            diff_hunks=diff_hunks,
            **kwargs,
        )

    return _make
