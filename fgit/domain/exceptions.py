"""Domain exceptions for fgit.

These exceptions represent rule violations and expected lookup failures.
They are caught at the application boundary (CLI) and converted to
user-facing error messages.
"""


class FgitDomainError(Exception):
    """Base exception for all domain errors.

    Attributes:
        message: User-facing error message.
        hint: Optional actionable suggestion.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class ConfigurationError(FgitDomainError):
    """Raised at startup when configuration cannot be used (e.g. alphabet too small)."""

    pass


class CodeNotFoundError(FgitDomainError):
    """Raised when a code matches no changed file."""

    def __init__(self, code: str) -> None:
        super().__init__(
            f"No file matches ID: {code}",
            hint="Run 'f list' to see current IDs",
        )
        self.code = code


class AmbiguousCodeError(FgitDomainError):
    """Raised when a code is a prefix of several file codes.

    Attributes:
        code: The code the user typed.
        candidates: Paths of all files the code could refer to.
    """

    def __init__(self, code: str, candidates: list[str]) -> None:
        super().__init__(
            f"ID '{code}' matches {len(candidates)} files - be more specific",
            hint="Candidates: " + ", ".join(candidates),
        )
        self.code = code
        self.candidates = candidates


class NoChangedFilesError(FgitDomainError):
    """Raised when a command needs a file but the working tree is clean."""

    pass
