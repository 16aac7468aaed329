"""Formatting of the lines the simulation writes to the console."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

_RESET = "\x1b[0m"
_PALETTE_SIZE = 255


class MessageKind(Enum):
    """An event a philosopher reports, valued by its printed text."""

    FORK = "has taken a fork"
    EATING = "is eating"
    SLEEPING = "is sleeping"
    THINKING = "is thinking"
    DIED = "died"
    SIM_START = "simulation start"


def _clock(time_ms: int, separator: str) -> str:
    seconds, millis = divmod(time_ms, 1000)
    return f"{seconds}{separator}{millis:03d}"


def format_event(time_ms: int, idx: int, kind: MessageKind, separator: str = "") -> str:
    """Return the coloured line reporting *kind* for philosopher *idx* (zero based).

    The background colour is picked from the 256-colour palette by the index,
    and the philosopher is shown numbered from one.
    """
    colour = idx % _PALETTE_SIZE
    return (
        f"\x1b[48;5;{colour:03d}m{_clock(time_ms, separator)} "
        f"{idx + 1} {kind.value}{_RESET}"
    )


def format_start(
    time_ms: int,
    label: str = MessageKind.SIM_START.value,
    separator: str = "",
) -> str:
    """Return the uncoloured line announcing the start of the simulation."""
    return f"{_clock(time_ms, separator)} {label}"


def format_eat_counts(counts: Iterable[int]) -> str:
    """Return a summary line of how many times each philosopher started eating."""
    return "start_eating times:" + ", ".join(str(count) for count in counts)


def format_timestamp(time_ms: int) -> str:
    """Return *time_ms* as seconds and milliseconds, e.g. ``12:005(ms)``."""
    return f"{_clock(time_ms, ':')}(ms)"