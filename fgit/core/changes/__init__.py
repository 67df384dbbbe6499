"""Change set construction, ordering and diff summaries."""

from fgit.core.changes.changeset import (
    build_record,
    build_records,
    first_actionable,
    order_records,
)
from fgit.core.changes.diff_summary import (
    INLINE_THRESHOLD,
    Counts,
    Inline,
    Summary,
    summarize,
)

__all__ = [
    "build_record",
    "build_records",
    "first_actionable",
    "order_records",
    "INLINE_THRESHOLD",
    "Counts",
    "Inline",
    "Summary",
    "summarize",
]
