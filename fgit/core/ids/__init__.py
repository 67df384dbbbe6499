"""File ID assignment and resolution.

Components:
- fingerprint, secondary_fingerprint: stable path hashes
- assign: collision-aware shortest-code assignment
- resolve: typed lookup of a user-supplied code
"""

from fgit.core.ids.assigner import AssignmentMap, assign, iter_digits
from fgit.core.ids.hasher import fingerprint, secondary_fingerprint
from fgit.core.ids.resolver import (
    Ambiguous,
    Found,
    NotFound,
    Resolution,
    resolve,
    resolve_or_raise,
)

__all__ = [
    "AssignmentMap",
    "assign",
    "iter_digits",
    "fingerprint",
    "secondary_fingerprint",
    "Ambiguous",
    "Found",
    "NotFound",
    "Resolution",
    "resolve",
    "resolve_or_raise",
]
