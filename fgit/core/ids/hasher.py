"""Path fingerprints.

A fingerprint is a pure function of the path bytes: no seed, no salt, no
process or environment state, so the same path yields the same number in
every process on every machine. Accidental collisions are expected and are
resolved by the assigner.
"""

import xxhash


def fingerprint(path: str) -> int:
    """Compute the 64-bit fingerprint of a repository-relative path.

    Args:
        path: Path string as listed (forward slashes).

    Returns:
        Unsigned integer in [0, 2**64).
    """
    # surrogateescape keeps undecodable file names hashable
    return xxhash.xxh64(path.encode("utf-8", errors="surrogateescape")).intdigest()


def secondary_fingerprint(path: str) -> int:
    """Compute an independent 64-bit fingerprint of the same path.

    Supplies further digits for paths whose primary fingerprints agree up to
    the length bound. Fixed seed, so it is as stable as ``fingerprint``.
    """
    return xxhash.xxh64(path.encode("utf-8", errors="surrogateescape"), seed=1).intdigest()
