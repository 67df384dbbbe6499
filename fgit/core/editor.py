"""Editor integration for the CLI.

Wraps the editor adapter and converts its port exceptions into click
exceptions so commands can let them propagate to the user unchanged.
"""

from pathlib import Path

import click

from fgit.adapters.editor import SubprocessEditor
from fgit.ports.editor import (
    Editor,
    EditorError,
    EditorExecutionError,
    EditorFileNotFoundError,
    EditorNotFoundError,
)


def open_file_in_editor(
    file_path: Path,
    line_num: int = 1,
    configured: str | None = None,
    editor: Editor | None = None,
) -> None:
    """Open a file in the user's editor at a specific line.

    Uses $VISUAL, then $EDITOR, then the configured editor, then vim.

    Args:
        file_path: Absolute path to file to open.
        line_num: Line number to jump to.
        configured: Editor command from config.
        editor: Editor implementation (defaults to SubprocessEditor).

    Raises:
        click.ClickException: If file not found, editor not found, or editor fails.
    """
    if editor is None:
        editor = SubprocessEditor(configured=configured)
    try:
        editor.open_file(file_path, line_num)
    except EditorFileNotFoundError as e:
        raise click.ClickException(e.message) from e
    except EditorNotFoundError as e:
        msg = e.message
        if e.hint:
            msg = f"{msg}. {e.hint}"
        raise click.ClickException(msg) from e
    except EditorExecutionError as e:
        raise click.ClickException(f"Editor failed: {e.message}") from e
    except EditorError as e:
        raise click.ClickException(e.message) from e
