"""Compact diff summaries for the file listing.

Small changes are shown inline under the file; anything larger collapses to
added/removed counts. The threshold is a fixed policy, not configuration.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from fgit.domain.entities import DiffHunk, DiffLine

INLINE_THRESHOLD = 6


@dataclass(frozen=True)
class Inline:
    """Changed lines to print verbatim, in original order."""

    lines: tuple[DiffLine, ...]

    @property
    def added(self) -> int:
        return sum(1 for line in self.lines if line.kind == "+")

    @property
    def removed(self) -> int:
        return sum(1 for line in self.lines if line.kind == "-")


@dataclass(frozen=True)
class Counts:
    """Line counts for a change too large to show inline."""

    added: int
    removed: int


Summary = Inline | Counts


def summarize(diff_hunks: Iterable[DiffHunk]) -> Summary:
    """Summarize a file's hunks.

    Args:
        diff_hunks: Hunks in file order.

    Returns:
        Inline with the added/removed lines (context dropped, hunks neither
        merged nor reordered) when there are at most INLINE_THRESHOLD of
        them, otherwise Counts.
    """
    changed = [line for hunk in diff_hunks for line in hunk.lines if line.is_change]
    if len(changed) <= INLINE_THRESHOLD:
        return Inline(tuple(changed))
    added = sum(1 for line in changed if line.kind == "+")
    return Counts(added=added, removed=len(changed) - added)
