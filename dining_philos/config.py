"""Command-line settings for the simulation and their validation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from dining_philos.numparse import parse_long_long

MAX_PHILOSOPHERS = 200
MIN_TIME_MS = 60


class ArgumentErrorKind(Enum):
    """What went wrong while reading the arguments."""

    ARG_COUNT = "arg_count"
    NUM_OF_PHILOS = "num_of_philos"
    TIME_TO_DIE = "time_to_die"
    TIME_TO_EAT = "time_to_eat"
    TIME_TO_SLEEP = "time_to_sleep"
    MUST_EAT_TIMES = "must_eat_times"
    PROCESS = "process"


_MESSAGES = {
    ArgumentErrorKind.ARG_COUNT: (
        "[Error] Invalid argument. Input as following:\n"
        "$>./philo NumOfPhilos[1,200] TimeToDie[60,LLMAX] "
        "TimeToEat[60,LLMAX] TimeToSleep[60,LLMAX] (MustEatTimes[1,LLMAX])"
    ),
    ArgumentErrorKind.NUM_OF_PHILOS: "[Error] Invalid argument. 1 <= NumOfPhilos <= 200",
    ArgumentErrorKind.TIME_TO_DIE: "[Error] Invalid argument. 60 <= TimeToDie",
    ArgumentErrorKind.TIME_TO_EAT: "[Error] Invalid argument. 60 <= TimeToEat",
    ArgumentErrorKind.TIME_TO_SLEEP: "[Error] Invalid argument. 60 <= TimeToSleep",
    ArgumentErrorKind.MUST_EAT_TIMES: "[Error] Invalid argument. 1 <= MustEatTimes",
    ArgumentErrorKind.PROCESS: "[Error] Process abort",
}


def error_message(kind: ArgumentErrorKind) -> str:
    """Return the user-facing message for *kind*, without a trailing newline."""
    return _MESSAGES[kind]


class ArgumentError(ValueError):
    """Raised when the command-line arguments are invalid."""

    def __init__(self, kind: ArgumentErrorKind) -> None:
        super().__init__(error_message(kind))
        self.kind = kind


@dataclass(frozen=True)
class Settings:
    """Parameters of one simulation run; times are in milliseconds."""

    num_of_philos: int
    time_to_die: int
    time_to_eat: int
    time_to_sleep: int
    must_eat_times: int | None = None


def _read(text: str, kind: ArgumentErrorKind, low: int, high: int | None = None) -> int:
    try:
        value = parse_long_long(text)
    except ValueError:
        raise ArgumentError(kind) from None
    if value < low or (high is not None and value > high):
        raise ArgumentError(kind)
    return value


def parse_arguments(args: Sequence[str]) -> Settings:
    """Build Settings from the arguments that follow the program name.

    Four or five arguments are expected. Raises ArgumentError naming the
    first argument found invalid.
    """
    if not 4 <= len(args) <= 5:
        raise ArgumentError(ArgumentErrorKind.ARG_COUNT)
    num_of_philos = _read(args[0], ArgumentErrorKind.NUM_OF_PHILOS, 1, MAX_PHILOSOPHERS)
    time_to_die = _read(args[1], ArgumentErrorKind.TIME_TO_DIE, MIN_TIME_MS)
    time_to_eat = _read(args[2], ArgumentErrorKind.TIME_TO_EAT, MIN_TIME_MS)
    time_to_sleep = _read(args[3], ArgumentErrorKind.TIME_TO_SLEEP, MIN_TIME_MS)
    must_eat_times = None
    if len(args) == 5:
        must_eat_times = _read(args[4], ArgumentErrorKind.MUST_EAT_TIMES, 1)
    return Settings(num_of_philos, time_to_die, time_to_eat, time_to_sleep, must_eat_times)