"""Millisecond wall-clock helpers."""

from __future__ import annotations

import time

_POLL_SECONDS = 0.0005


def now_ms() -> int:
    """Return the current Unix time in whole milliseconds."""
    return time.time_ns() // 1_000_000


def elapsed_ms(now: int, start: int) -> int:
    """Return the milliseconds from *start* to *now*."""
    return now - start


def sleep_ms(duration_ms: int) -> None:
    """Block for at least *duration_ms* milliseconds, polling in short steps."""
    start = now_ms()
    while elapsed_ms(now_ms(), start) < duration_ms:
        time.sleep(_POLL_SECONDS)