"""Time sources for the acquisition loop."""

from __future__ import annotations

import time


class SystemClock:
    """Process clock: :func:`time.monotonic` for intervals, :func:`time.time` for stamps."""

    def monotonic(self) -> float:
        return time.monotonic()

    def now(self) -> float:
        return time.time()


__all__ = ["SystemClock"]
