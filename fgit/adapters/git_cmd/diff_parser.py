"""Parsers for git's machine-readable output.

- ``git status --porcelain=v1 -z``: NUL-separated status entries.
- ``git diff --no-prefix``: unified diff split into per-file hunks.
- New files: one all-added hunk read from an open binary file.

All are pure functions over text or streams, so they can be tested without a
repository.
"""

import io
import itertools
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import BinaryIO

from fgit.domain.entities import DiffHunk, DiffLine

logger = logging.getLogger(__name__)

NULL_PATH = "/dev/null"

# Same window git uses to decide a file is binary
BINARY_SNIFF_BYTES = 8000

_HUNK_HEADER = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")

# C-style escapes git uses in quoted paths
_ESCAPES = {
    "a": 0x07,
    "b": 0x08,
    "t": 0x09,
    "n": 0x0A,
    "v": 0x0B,
    "f": 0x0C,
    "r": 0x0D,
    '"': 0x22,
    "\\": 0x5C,
}


@dataclass(frozen=True)
class StatusEntry:
    """One entry of ``git status --porcelain=v1 -z``.

    Attributes:
        index_code: X column (index status).
        worktree_code: Y column (worktree status).
        path: Current path.
        original_path: Rename/copy source, if any.
    """

    index_code: str
    worktree_code: str
    path: str
    original_path: str | None = None


def parse_porcelain_status(output: str) -> list[StatusEntry]:
    """Parse ``git status --porcelain=v1 -z`` output.

    Renames and copies are followed by an extra NUL-terminated field
    holding the source path.

    Args:
        output: Raw command output.

    Returns:
        Entries in git's order. Ignored files ("!!") are skipped.
    """
    fields = output.split("\0")
    entries: list[StatusEntry] = []
    i = 0
    while i < len(fields):
        field = fields[i]
        i += 1
        if not field:
            continue
        if len(field) < 4 or field[2] != " ":
            logger.warning("Unexpected git status entry: %r", field)
            continue

        index_code, worktree_code, path = field[0], field[1], field[3:]
        if index_code == "!":
            continue

        original_path = None
        if index_code in ("R", "C") or worktree_code in ("R", "C"):
            if i < len(fields):
                original_path = fields[i] or None
                i += 1

        entries.append(StatusEntry(index_code, worktree_code, path, original_path))
    return entries


def unquote_path(raw: str) -> str:
    """Undo git's C-style path quoting.

    Unquoted paths are returned unchanged. Octal escapes are bytes of the
    UTF-8 encoded path.
    """
    if len(raw) < 2 or not (raw.startswith('"') and raw.endswith('"')):
        return raw

    body = raw[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        char = body[i]
        if char != "\\" or i + 1 >= len(body):
            out.extend(char.encode("utf-8", errors="surrogateescape"))
            i += 1
            continue
        nxt = body[i + 1]
        if nxt in _ESCAPES:
            out.append(_ESCAPES[nxt])
            i += 2
        elif body[i + 1 : i + 4].isdigit():
            out.append(int(body[i + 1 : i + 4], 8) & 0xFF)
            i += 4
        else:
            out.extend(nxt.encode("utf-8", errors="surrogateescape"))
            i += 2
    return out.decode("utf-8", errors="replace")


def _header_path(line: str, marker: str) -> str | None:
    """Path from a ``--- path`` / ``+++ path`` line, or None for /dev/null."""
    raw = line[len(marker) :]
    # git appends a tab when the path contains spaces
    if raw.endswith("\t"):
        raw = raw[:-1]
    path = unquote_path(raw)
    return None if path == NULL_PATH else path


class _HunkBuilder:
    """Accumulates lines for one hunk until its counts are used up."""

    def __init__(self, old_start: int, old_count: int, new_start: int, new_count: int) -> None:
        self.old_start = old_start
        self.old_count = old_count
        self.new_start = new_start
        self.new_count = new_count
        self.old_left = old_count
        self.new_left = new_count
        self.lines: list[DiffLine] = []

    @property
    def is_open(self) -> bool:
        return self.old_left > 0 or self.new_left > 0

    def add(self, line: str) -> None:
        kind, text = line[:1] or " ", line[1:]
        if kind == "+":
            self.new_left -= 1
        elif kind == "-":
            self.old_left -= 1
        else:
            kind = " "
            self.old_left -= 1
            self.new_left -= 1
        self.lines.append(DiffLine(kind, text))

    def build(self) -> DiffHunk:
        return DiffHunk(
            self.old_start,
            self.old_count,
            self.new_start,
            self.new_count,
            tuple(self.lines),
        )


def parse_unified_diff(output: str) -> dict[str, tuple[DiffHunk, ...]]:
    """Split ``git diff --no-prefix`` output into hunks per file.

    Args:
        output: Raw diff text.

    Returns:
        Mapping of path to hunks in file order. A file is keyed by its new
        path, or its old path when deleted. Binary files and pure mode
        changes have no entry.
    """
    result: dict[str, list[DiffHunk]] = {}
    current_path: str | None = None
    old_path: str | None = None
    hunk: _HunkBuilder | None = None

    def close_hunk() -> None:
        nonlocal hunk
        if hunk is not None and current_path is not None:
            result.setdefault(current_path, []).append(hunk.build())
        hunk = None

    for line in output.split("\n"):
        if hunk is not None and hunk.is_open:
            if line.startswith("\\"):
                # "\ No newline at end of file"
                continue
            hunk.add(line)
            continue
        if hunk is not None and line.startswith("\\"):
            continue

        if line.startswith("diff --git "):
            close_hunk()
            current_path = None
            old_path = None
        elif line.startswith("--- "):
            old_path = _header_path(line, "--- ")
        elif line.startswith("+++ "):
            new_path = _header_path(line, "+++ ")
            current_path = new_path or old_path
            if current_path is not None:
                result.setdefault(current_path, [])
        elif line.startswith("@@"):
            close_hunk()
            match = _HUNK_HEADER.match(line)
            if match is None:
                logger.warning("Malformed hunk header: %r", line)
                continue
            old_start, old_count, new_start, new_count = match.groups()
            hunk = _HunkBuilder(
                int(old_start),
                1 if old_count is None else int(old_count),
                int(new_start),
                1 if new_count is None else int(new_count),
            )
            if not hunk.is_open:
                close_hunk()

    close_hunk()
    return {path: tuple(hunks) for path, hunks in result.items()}


def _stream_lines(head: bytes, stream: BinaryIO) -> Iterator[str]:
    """Lines of a file whose first bytes were already consumed into head."""
    # Finish the line head was cut in, then carry on with the stream
    buffered = io.BytesIO(head + stream.readline())
    for raw in itertools.chain(buffered, stream):
        if raw.endswith(b"\n"):
            raw = raw[:-1]
        yield raw.decode("utf-8", errors="replace").rstrip("\r")


def untracked_hunks(stream: BinaryIO) -> tuple[DiffHunk, ...]:
    """Represent a new file as one all-added hunk.

    Only the first BINARY_SNIFF_BYTES are read to detect binary content;
    binary files are not read further.

    Args:
        stream: File opened in binary mode.

    Returns:
        One hunk (empty tuple for empty or binary content).
    """
    head = stream.read(BINARY_SNIFF_BYTES)
    if not head or b"\0" in head:
        return ()
    lines = tuple(DiffLine("+", text) for text in _stream_lines(head, stream))
    return (
        DiffHunk(
            old_start=0,
            old_count=0,
            new_start=1,
            new_count=len(lines),
            lines=lines,
        ),
    )
