"""Text rendering of the file listing.

Layout::

    ── Unstaged ──
      fk    src/main.py +1/-1
             -old line
             +new line

    ── Staged ──
      s     README.md +10/-2
"""

from collections.abc import Iterable
from pathlib import Path

from fgit.core.changes import Inline
from fgit.core.listing import ListingEntry
from fgit.core.presentation.colors import FgitColors, render_diff_line
from fgit.domain.entities import ChangeGroup, FileStatus

CODE_WIDTH = 5
INLINE_INDENT = " " * 9

# Inline diffs are only shown for work that has not been staged yet
_INLINE_GROUPS = frozenset({ChangeGroup.UNSTAGED, ChangeGroup.UNTRACKED})


def _path_label(entry: ListingEntry) -> str:
    record = entry.record
    if record.status is FileStatus.RENAMED and record.original_path:
        label = f"{record.original_path} -> {record.path}"
    else:
        label = record.path
    if record.status is FileStatus.DELETED:
        label += " (deleted)"
    if record.partially_staged:
        label += " (partially staged)"
    return label


def _counts_label(entry: ListingEntry) -> str:
    summary = entry.summary
    if summary.added == 0 and summary.removed == 0:
        return ""
    return " " + FgitColors.click_counts(summary.added, summary.removed)


def render_entry(entry: ListingEntry, syntax_highlighting: bool = True) -> list[str]:
    """Render one entry: the ID line plus any inline diff lines."""
    code = FgitColors.click_code(f"{entry.code:<{CODE_WIDTH}}")
    lines = [f"  {code} {_path_label(entry)}{_counts_label(entry)}"]

    summary = entry.summary
    if entry.record.group in _INLINE_GROUPS and isinstance(summary, Inline):
        path = Path(entry.record.path)
        for diff_line in summary.lines:
            rendered = render_diff_line(diff_line, path, highlight=syntax_highlighting)
            lines.append(f"{INLINE_INDENT}{rendered}")
    return lines


def render_listing(entries: Iterable[ListingEntry], syntax_highlighting: bool = True) -> list[str]:
    """Render the whole listing as output lines.

    Args:
        entries: Entries in listing order.
        syntax_highlighting: Highlight inline diff content.

    Returns:
        Lines for click.echo (no trailing newlines).
    """
    lines: list[str] = []
    last_group: ChangeGroup | None = None

    for entry in entries:
        group = entry.record.group
        if group is not last_group:
            if last_group is not None:
                lines.append("")
            lines.append(FgitColors.click_header(group))
            last_group = group
        lines.extend(render_entry(entry, syntax_highlighting))

    if not lines:
        lines.append(FgitColors.click_dimmed("No changed files"))
    return lines
