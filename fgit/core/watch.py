"""Periodic refresh loop for watch mode."""

import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


def watch_loop(
    refresh: Callable[[], None],
    interval: float,
    sleep: Callable[[float], None] = time.sleep,
    max_iterations: int | None = None,
) -> int:
    """Call ``refresh`` every ``interval`` seconds until interrupted.

    Each refresh is expected to take a whole new snapshot; nothing is
    carried over between iterations.

    Args:
        refresh: Takes and renders one snapshot.
        interval: Seconds to sleep between refreshes.
        sleep: Sleep function (injectable for tests).
        max_iterations: Stop after this many refreshes (None runs forever).

    Returns:
        Number of refreshes performed.

    Raises:
        ValueError: If interval is not positive.
    """
    if interval <= 0:
        raise ValueError(f"interval must be positive, got {interval}")

    count = 0
    while max_iterations is None or count < max_iterations:
        refresh()
        count += 1
        logger.debug("Watch refresh %d done, sleeping %.1fs", count, interval)
        if max_iterations is not None and count >= max_iterations:
            break
        sleep(interval)
    return count
