"""Centralized color definitions for all fgit output.

Provides a consistent color scheme for the listing, the interactive picker
and error output. Supports both click-style colors and prompt_toolkit styles.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Literal

import click

from fgit.domain.entities import ChangeGroup, DiffLine

if TYPE_CHECKING:
    from pygments.lexer import Lexer
    from pygments.token import _TokenType

# Type aliases for color values
ClickColor = Literal["black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"]


class AnsiCodes:
    """ANSI escape codes for terminal coloring.

    Uses the standard 16-color palette so output adapts to terminal themes.
    """

    RESET = "\x1b[0m"
    DIM = "\x1b[2m"

    DARK_GRAY = "\x1b[90m"
    GREEN = "\x1b[92m"
    BLUE = "\x1b[94m"
    MAGENTA = "\x1b[95m"
    CYAN = "\x1b[96m"
    WHITE = "\x1b[97m"


# File extension to Pygments lexer name mapping
EXTENSION_TO_LEXER: dict[str, str] = {
    ".py": "python",
    ".js": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".jsx": "javascript",
    ".go": "go",
    ".rs": "rust",
    ".java": "java",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cs": "csharp",
    ".rb": "ruby",
    ".sh": "bash",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".json": "json",
    ".toml": "toml",
    ".md": "markdown",
    ".sql": "sql",
}


class FgitColors:
    """Centralized color palette for consistent output across fgit."""

    # === Listing ===
    CODE_FG: ClickColor = "cyan"  # File IDs

    GROUP_FG: dict[ChangeGroup, ClickColor] = {
        ChangeGroup.UNSTAGED: "yellow",
        ChangeGroup.UNTRACKED: "green",
        ChangeGroup.STAGED: "cyan",
    }

    ADDED_FG: ClickColor = "green"
    REMOVED_FG: ClickColor = "red"

    # === Status Messages ===
    SUCCESS_FG: ClickColor = "green"

    @staticmethod
    def get_prompt_toolkit_style() -> dict[str, str]:
        """Get style dictionary for prompt_toolkit Style.from_dict().

        Uses ANSI color names instead of hex codes so colors adapt to the
        user's terminal theme.
        """
        return {
            "separator": "fg:ansibrightblack",
            "dimmed": "fg:ansibrightblack",
            "header.unstaged": "fg:ansiyellow",
            "header.untracked": "fg:ansigreen",
            "header.staged": "fg:ansicyan",
            "code.typed": "fg:ansicyan bold underline",
            "code": "fg:ansicyan bold",
            "selected": "reverse",
            "added": "fg:ansigreen",
            "removed": "fg:ansired",
            "status": "bold",
            "error": "fg:ansired",
        }

    @staticmethod
    def click_code(text: str) -> str:
        """Style a file ID."""
        return click.style(text, fg=FgitColors.CODE_FG, bold=True)

    @staticmethod
    def click_header(group: ChangeGroup) -> str:
        """Render a group header like ``── Unstaged ──``."""
        return click.style(f"── {group.title} ──", fg=FgitColors.GROUP_FG[group])

    @staticmethod
    def click_counts(added: int, removed: int) -> str:
        """Render ``+added/-removed`` with each side colored."""
        return click.style(f"+{added}", fg=FgitColors.ADDED_FG) + click.style(
            f"/-{removed}", fg=FgitColors.REMOVED_FG
        )

    @staticmethod
    def click_diff_marker(kind: str) -> str:
        """Style a diff line marker (+ or -)."""
        fg = FgitColors.ADDED_FG if kind == "+" else FgitColors.REMOVED_FG
        return click.style(kind, fg=fg, bold=True)

    @staticmethod
    def click_success(text: str) -> str:
        return click.style(text, fg=FgitColors.SUCCESS_FG)

    @staticmethod
    def click_dimmed(text: str) -> str:
        return click.style(text, dim=True)


def _get_lexer(file_path: Path | None) -> "Lexer":
    """Get the Pygments lexer for a file, falling back to plain text."""
    from pygments.lexers import get_lexer_by_name
    from pygments.util import ClassNotFound

    lexer_name = "text"
    if file_path is not None:
        lexer_name = EXTENSION_TO_LEXER.get(file_path.suffix.lower(), "text")

    try:
        return get_lexer_by_name(lexer_name)
    except ClassNotFound:
        return get_lexer_by_name("text")


def _get_token_color_map() -> dict["_TokenType", str]:
    """Get the mapping from Pygments token types to ANSI color codes."""
    from pygments.token import Token

    return {
        Token.Keyword: AnsiCodes.MAGENTA,
        Token.Name.Function: AnsiCodes.BLUE,
        Token.Name.Class: AnsiCodes.BLUE,
        Token.String: AnsiCodes.GREEN,
        Token.Comment: AnsiCodes.DARK_GRAY,
        Token.Number: AnsiCodes.CYAN,
    }


def _find_token_color(
    token_type: "_TokenType", color_map: dict["_TokenType", str]
) -> str | None:
    """Find the color for a token, checking parent token types.

    Pygments tokens form a hierarchy (e.g., Token.Keyword.Namespace), so the
    token and each of its ancestors are tried in turn.
    """
    for ttype in [token_type] + list(token_type.split()):
        if ttype in color_map:
            return color_map[ttype]
    return None


def highlight_code(text: str, file_path: Path | None) -> str:
    """Syntax-highlight a single line of code with ANSI colors.

    Args:
        text: Line content (no trailing newline).
        file_path: Path used to pick the lexer by extension.

    Returns:
        The line with ANSI color codes; unchanged for unknown file types.
    """
    from pygments import lex

    lexer = _get_lexer(file_path)
    color_map = _get_token_color_map()

    parts: list[str] = []
    for token_type, value in lex(text, lexer):
        # lex() always appends a trailing newline
        value = value.rstrip("\n")
        if not value:
            continue
        color = _find_token_color(token_type, color_map)
        parts.append(f"{color}{value}{AnsiCodes.RESET}" if color else value)
    return "".join(parts)


def render_diff_line(line: DiffLine, file_path: Path | None = None, highlight: bool = True) -> str:
    """Render one inline diff line with a colored marker.

    Args:
        line: Added or removed line.
        file_path: Path of the changed file, for syntax highlighting.
        highlight: Apply syntax highlighting to the line content.

    Returns:
        Marker plus content, ready for click.echo.
    """
    text = highlight_code(line.text, file_path) if highlight else line.text
    return f"{FgitColors.click_diff_marker(line.kind)}{text}"
