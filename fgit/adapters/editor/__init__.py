"""Editor adapter for opening changed files in an external editor.

Implements the Editor port with subprocess. The editor command may carry
its own arguments (``code --wait``); the line-number syntax is chosen by
the executable name.
"""

import os
import shlex
import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

from fgit.domain.config import DEFAULT_EDITOR
from fgit.ports.editor import (
    EditorExecutionError,
    EditorFileNotFoundError,
    EditorNotFoundError,
)


def get_editor(configured: str | None = None) -> str:
    """Get the user's preferred editor command.

    Precedence: $VISUAL, then $EDITOR, then the configured command, then
    the built-in default.

    Args:
        configured: Editor command from the [editor] config section.
    """
    return (
        os.environ.get("VISUAL")
        or os.environ.get("EDITOR")
        or configured
        or DEFAULT_EDITOR
    )


CommandBuilder = Callable[[list[str], Path, int], list[str]]

# Editor command patterns for opening files at specific line numbers
EDITOR_PATTERNS: dict[str, tuple[frozenset[str], CommandBuilder]] = {
    # +line before the file (vim, emacs, nano, helix, kakoune, micro)
    "plus-line": (
        frozenset({"vim", "vi", "nvim", "gvim", "emacs", "emacsclient", "nano", "hx", "kak", "micro"}),
        lambda argv, fp, ln: [*argv, f"+{ln}", str(fp)],
    ),
    # VS Code and forks: --goto file:line
    "goto": (
        frozenset({"code", "code-insiders", "codium", "cursor"}),
        lambda argv, fp, ln: [*argv, "--goto", f"{fp}:{ln}"],
    ),
    # file:line (Sublime Text, Zed)
    "colon": (
        frozenset({"subl", "zed"}),
        lambda argv, fp, ln: [*argv, f"{fp}:{ln}"],
    ),
}


def get_editor_command(editor: str, file_path: Path, line_num: int) -> list[str]:
    """Build the argv to open ``file_path`` at ``line_num``.

    Unknown editors get vim-style ``+line`` syntax.

    Raises:
        ValueError: If the command is empty or cannot be parsed.
    """
    argv = shlex.split(editor)
    if not argv:
        raise ValueError("empty editor command")
    editor_name = Path(argv[0]).name.lower()

    for names, build in EDITOR_PATTERNS.values():
        if editor_name in names:
            return build(argv, file_path, line_num)

    return [*argv, f"+{line_num}", str(file_path)]


class SubprocessEditor:
    """Editor port implementation that runs the editor in the foreground."""

    def __init__(self, editor: str | None = None, configured: str | None = None) -> None:
        """Initialize the editor adapter.

        Args:
            editor: Explicit editor command, bypassing the environment.
            configured: Editor command from config, used when neither
                $VISUAL nor $EDITOR is set.
        """
        self._editor = editor or get_editor(configured)

    def get_editor_name(self) -> str:
        """Get the executable name of the editor (e.g. "vim", "code")."""
        argv = shlex.split(self._editor)
        return Path(argv[0]).name if argv else self._editor

    def open_file(self, file_path: Path, line_num: int = 1) -> None:
        """Open a file in the editor at a specific line.

        Raises:
            EditorFileNotFoundError: If the file doesn't exist.
            EditorNotFoundError: If the editor executable is not on PATH.
            EditorExecutionError: If the editor exits non-zero.
        """
        if not file_path.exists():
            raise EditorFileNotFoundError(
                f"File not found: {file_path}",
                hint="The file may have been deleted; nothing to edit",
            )

        try:
            cmd = get_editor_command(self._editor, file_path, line_num)
        except ValueError as e:
            raise EditorNotFoundError(
                f"Invalid editor command '{self._editor}': {e}",
                hint="Check $VISUAL, $EDITOR or [editor] command in your config",
            ) from e

        if not shutil.which(cmd[0]):
            raise EditorNotFoundError(
                f"Editor '{self._editor}' not found",
                hint="Set $EDITOR or $VISUAL, or [editor] command in your config",
            )

        try:
            subprocess.run(cmd, check=True)
        except subprocess.CalledProcessError as e:
            raise EditorExecutionError(
                f"Editor failed with exit code {e.returncode}",
                hint="Check if the file is accessible and try again",
            ) from e
