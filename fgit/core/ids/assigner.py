"""Collision-aware code assignment.

Every changed path gets the shortest code that no other path in the same
snapshot shares. Codes are read off the path fingerprint most-significant
digit first, so the code of length n is always a prefix of the code of
length n+1: a code typed from memory either still points at the same file
or has become ambiguous, never at a different file.

Assignment is iterative refinement: start everyone at length 1, and only
the members of a colliding group move to the next length, re-partitioned
among themselves. Past the length bound, digits come from a second path
fingerprint, so every code is still a prefix of one fixed per-path digit
sequence. Only paths agreeing on both fingerprints fall back to ordinal
suffixes, so assignment is total.
"""

import logging
from collections import defaultdict
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from itertools import islice

from fgit.core.ids.hasher import fingerprint, secondary_fingerprint
from fgit.domain.entities import FileRecord
from fgit.domain.exceptions import ConfigurationError
from fgit.domain.value_objects import FINGERPRINT_BITS, CodeAlphabet

logger = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 12

_MASK = (1 << FINGERPRINT_BITS) - 1


def iter_digits(fp: int, base: int) -> Iterator[int]:
    """Yield the digits of a fingerprint, most significant first.

    The fingerprint is read as the fraction fp / 2**64 and expanded in the
    given base. Every digit is roughly uniform regardless of base, and the
    sequence is unbounded (it turns to zeros once the 64 bits run out).

    Args:
        fp: Fingerprint in [0, 2**64).
        base: Alphabet size (>= 2).

    Yields:
        Digit values in [0, base).
    """
    scaled = fp & _MASK
    while True:
        scaled *= base
        yield scaled >> FINGERPRINT_BITS
        scaled &= _MASK


def code_for(fp: int, alphabet: CodeAlphabet, length: int) -> str:
    """Render the first ``length`` digits of a fingerprint as a code."""
    return alphabet.render(tuple(islice(iter_digits(fp, alphabet.base), length)))


class AssignmentMap(Mapping[str, FileRecord]):
    """Immutable code -> record mapping for one snapshot.

    Iterates in code order. Every record appears under exactly one code.
    """

    def __init__(self, codes: Mapping[str, FileRecord] | None = None) -> None:
        self._codes: dict[str, FileRecord] = dict(sorted((codes or {}).items()))
        self._by_path: dict[str, str] = {
            record.path: code for code, record in self._codes.items()
        }
        if len(self._by_path) != len(self._codes):
            raise ValueError("A record cannot be assigned more than one code")

    def __getitem__(self, code: str) -> FileRecord:
        return self._codes[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._codes)

    def __len__(self) -> int:
        return len(self._codes)

    def __repr__(self) -> str:
        pairs = ", ".join(f"{code}={record.path}" for code, record in self._codes.items())
        return f"AssignmentMap({pairs})"

    def code_for(self, record: FileRecord | str) -> str:
        """Look up the code of a record (or path).

        Raises:
            KeyError: If the path is not part of this snapshot.
        """
        path = record if isinstance(record, str) else record.path
        return self._by_path[path]


@dataclass(frozen=True)
class _Candidate:
    """A record with its full digit sequence (primary, then secondary)."""

    record: FileRecord
    fingerprint: int
    digits: tuple[int, ...]


def _partition(
    members: list[_Candidate], length: int
) -> dict[tuple[int, ...], list[_Candidate]]:
    """Group candidates by their code of the given length."""
    groups: dict[tuple[int, ...], list[_Candidate]] = defaultdict(list)
    for member in members:
        groups[member.digits[:length]].append(member)
    return groups


def _break_tie(
    prefix: tuple[int, ...],
    members: list[_Candidate],
    alphabet: CodeAlphabet,
) -> dict[str, FileRecord]:
    """Give each member of an exhausted collision group a distinct code.

    Only reached when members agree on both fingerprints. Members are
    ordered by fingerprint, then path, and member k gets the
    shared prefix followed by k written in the alphabet (fixed width, so
    the resulting codes stay prefix-free).
    """
    width = 1
    while alphabet.base**width < len(members):
        width += 1

    ordered = sorted(members, key=lambda m: (m.fingerprint, m.record.path))
    logger.debug(
        "IDs exhausted at length %d for %d paths; using ordinal suffixes",
        len(prefix),
        len(ordered),
    )

    codes: dict[str, FileRecord] = {}
    for index, member in enumerate(ordered):
        suffix = []
        value = index
        for _ in range(width):
            suffix.append(value % alphabet.base)
            value //= alphabet.base
        codes[alphabet.render(prefix + tuple(reversed(suffix)))] = member.record
    return codes


def assign(
    records: Iterable[FileRecord],
    alphabet: CodeAlphabet,
    max_length: int = DEFAULT_MAX_LENGTH,
    hasher: Callable[[str], int] = fingerprint,
    secondary_hasher: Callable[[str], int] = secondary_fingerprint,
) -> AssignmentMap:
    """Assign the shortest unambiguous code to every record.

    Args:
        records: Records of the current snapshot. Records sharing a path
            are the same file; the last one wins.
        alphabet: Symbols to render codes with.
        max_length: Number of primary fingerprint digits to use. Clamped
            to the number of digits a fingerprint can supply in this
            alphabet. Codes still colliding there continue with digits of
            the secondary fingerprint.
        hasher: Path fingerprint function.
        secondary_hasher: Fingerprint supplying digits past max_length.

    Returns:
        AssignmentMap covering every distinct path. Calling twice with the
        same input gives an identical map.

    Raises:
        ConfigurationError: If max_length is less than 1.
    """
    if max_length < 1:
        raise ConfigurationError(f"max_length must be at least 1, got {max_length}")
    bound = min(max_length, alphabet.capacity)

    unique = {record.path: record for record in records}
    candidates = []
    for path in sorted(unique):
        fp = hasher(path)
        digits = tuple(islice(iter_digits(fp, alphabet.base), bound)) + tuple(
            islice(iter_digits(secondary_hasher(path), alphabet.base), alphabet.capacity)
        )
        candidates.append(_Candidate(unique[path], fp, digits))

    codes: dict[str, FileRecord] = {}
    pending: list[tuple[int, list[_Candidate]]] = [(1, candidates)] if candidates else []

    while pending:
        length, members = pending.pop()
        for prefix, group in _partition(members, length).items():
            if len(group) == 1:
                codes[alphabet.render(prefix)] = group[0].record
            elif length < len(group[0].digits):
                pending.append((length + 1, group))
            else:
                codes.update(_break_tie(prefix, group, alphabet))

    return AssignmentMap(codes)
