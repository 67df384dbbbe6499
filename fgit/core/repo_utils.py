"""Repository discovery utilities."""

import subprocess
from pathlib import Path


def find_git_root(start_path: Path | None = None) -> Path | None:
    """Find git repository root using git rev-parse.

    Args:
        start_path: Directory to start searching from. Defaults to CWD.

    Returns:
        Absolute path to the work tree root, or None if not in a git repo
        (or git is not installed).
    """
    if start_path is None:
        start_path = Path.cwd()

    try:
        result = subprocess.run(
            ["git", "-C", str(start_path), "rev-parse", "--show-toplevel"],
            capture_output=True,
            check=True,
            text=True,
        )
        return Path(result.stdout.strip()).resolve()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None


def find_repo_root(start_path: Path | None = None) -> Path:
    """Find the git work tree containing ``start_path``.

    Raises:
        RuntimeError: If not inside a git work tree.
    """
    repo_root = find_git_root(start_path)
    if repo_root is None:
        raise RuntimeError("Not in a git repository (or any parent directory)")
    return repo_root
