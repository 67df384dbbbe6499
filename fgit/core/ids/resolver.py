"""Resolution of user-typed codes.

A code resolves by exact match or as a prefix of exactly one assigned
code. Anything else is reported, never guessed: there is no fuzzy or
nearest match, so a memorised code can fail loudly but cannot silently
land on a different file.
"""

from dataclasses import dataclass

from fgit.core.ids.assigner import AssignmentMap
from fgit.domain.entities import FileRecord
from fgit.domain.exceptions import AmbiguousCodeError, CodeNotFoundError


@dataclass(frozen=True)
class Found:
    """The input identifies exactly one record.

    Attributes:
        record: The matched record.
        code: The record's full assigned code.
    """

    record: FileRecord
    code: str


@dataclass(frozen=True)
class NotFound:
    """The input matches no code and is a prefix of none."""

    code: str


@dataclass(frozen=True)
class Ambiguous:
    """The input is a strict prefix of several codes.

    Attributes:
        code: The input.
        candidates: Matching records, in code order.
    """

    code: str
    candidates: tuple[FileRecord, ...]


Resolution = Found | NotFound | Ambiguous


def resolve(code: str, assignment: AssignmentMap) -> Resolution:
    """Resolve a typed code against the current assignment.

    Args:
        code: User input.
        assignment: Code map of the current snapshot.

    Returns:
        Found, NotFound or Ambiguous.
    """
    if code in assignment:
        return Found(assignment[code], code)

    matches = [assigned for assigned in assignment if assigned.startswith(code)]
    if not matches:
        return NotFound(code)
    if len(matches) == 1:
        return Found(assignment[matches[0]], matches[0])
    return Ambiguous(code, tuple(assignment[m] for m in matches))


def resolve_or_raise(code: str, assignment: AssignmentMap) -> FileRecord:
    """Resolve a code, raising domain errors for the failure cases.

    Raises:
        CodeNotFoundError: If nothing matches.
        AmbiguousCodeError: If several files match.
    """
    result = resolve(code, assignment)
    if isinstance(result, Found):
        return result.record
    if isinstance(result, Ambiguous):
        raise AmbiguousCodeError(code, [record.path for record in result.candidates])
    raise CodeNotFoundError(code)
