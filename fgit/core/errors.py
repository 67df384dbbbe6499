"""CLI error handling with actionable hints.

Provides consistent error formatting and common error factory functions
for all fgit CLI commands.
"""

from typing import NoReturn

import click


class FgitCliError(click.ClickException):
    """CLI error with actionable hint for users.

    Attributes:
        message: The primary error message.
        hint: Optional actionable suggestion for the user.

    Example:
        raise FgitCliError(
            "Not in a git repository",
            hint="Run f from inside a git work tree",
        )
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def format_message(self) -> str:
        """Format the error message with hint if present."""
        msg = self.message
        if self.hint:
            msg += f"\nHint: {self.hint}"
        return msg


def repo_not_found_error() -> NoReturn:
    """Raise error when not inside a git work tree.

    Raises:
        FgitCliError: Always.
    """
    raise FgitCliError(
        "Not in a git repository",
        hint="Run f from inside a git work tree",
    )


def commit_message_required_error() -> NoReturn:
    """Raise error when commit is called without a message.

    Raises:
        FgitCliError: Always.
    """
    raise FgitCliError(
        "Commit message required",
        hint="Usage: f commit <message>",
    )
