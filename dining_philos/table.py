"""Shared state of the threaded simulation: philosophers, forks and death."""

from __future__ import annotations

import sys
import threading
import time
from enum import Enum
from typing import TextIO

from dining_philos.config import Settings
from dining_philos.console import MessageKind, format_event, format_start
from dining_philos.timing import elapsed_ms, now_ms

_POLL_SECONDS = 0.0005
_NOBODY = -1


class ForkOutcome(Enum):
    """Result of trying to take both forks."""

    TAKEN = "taken"
    RETRY = "retry"
    DIED = "died"


class Philosopher:
    """One philosopher: its forks, last meal time and meal count."""

    def __init__(self, idx: int, first_take: int, second_take: int, start_time: int = 0) -> None:
        self.idx = idx
        self.first_take = first_take
        self.second_take = second_take
        self._start_time = start_time
        self._eat_times = 0
        self._satisfied = False
        self._lock = threading.Lock()

    @property
    def start_time(self) -> int:
        """Millisecond time at which the philosopher last started eating."""
        with self._lock:
            return self._start_time

    @start_time.setter
    def start_time(self, value: int) -> None:
        with self._lock:
            self._start_time = value

    @property
    def eat_times(self) -> int:
        with self._lock:
            return self._eat_times

    @property
    def satisfied(self) -> bool:
        """True once the philosopher has eaten as often as required."""
        with self._lock:
            return self._satisfied

    def mark_eating(self, now: int) -> None:
        """Record that a meal starts at *now*."""
        self.start_time = now

    def record_meal(self, must_eat_times: int | None) -> bool:
        """Count a finished meal; return whether the philosopher is satisfied.

        Meals are not counted when no required number is set.
        """
        if must_eat_times is None:
            return False
        with self._lock:
            self._eat_times += 1
            if self._eat_times >= must_eat_times:
                self._satisfied = True
            return self._satisfied

    def __repr__(self) -> str:
        return (
            f"Philosopher(idx={self.idx}, first_take={self.first_take}, "
            f"second_take={self.second_take})"
        )


def _fork_order(idx: int, count: int) -> tuple[int, int]:
    left, right = idx, (idx + 1) % count
    return (right, left) if idx % 2 == 1 else (left, right)


class Table:
    """Forks, philosophers and the shared death flag of one simulation."""

    def __init__(self, settings: Settings, out: TextIO | None = None) -> None:
        self.settings = settings
        self.out = out if out is not None else sys.stdout
        count = settings.num_of_philos
        self.philosophers = [Philosopher(idx, *_fork_order(idx, count)) for idx in range(count)]
        self.forks = [threading.Lock() for _ in range(count)]
        self._prev_used_by = [_NOBODY] * count
        self._prev_used_locks = [threading.Lock() for _ in range(count)]
        self._print_lock = threading.Lock()
        self._died_lock = threading.Lock()
        self._died_idx: int | None = None
        self.start_time = 0
        self.set_start_time(now_ms())

    def set_start_time(self, time_ms: int) -> None:
        """Start every philosopher's hunger clock at *time_ms*."""
        for philo in self.philosophers:
            philo.start_time = time_ms
        self.start_time = time_ms

    def _check_died_locked(self, idx: int, now: int) -> bool:
        philo = self.philosophers[idx]
        if not philo.satisfied and elapsed_ms(now, philo.start_time) >= self.settings.time_to_die:
            self._died_idx = idx
            return True
        return False

    def check_and_update_died(self, idx: int, now: int) -> bool:
        """Return True if someone is dead, marking philosopher *idx* dead if starved."""
        with self._died_lock:
            if self._died_idx is not None:
                return True
            return self._check_died_locked(idx, now)

    def is_someone_dead(self) -> bool:
        """Check every philosopher against the clock; return True if any is dead."""
        now = now_ms()
        with self._died_lock:
            if self._died_idx is not None:
                return True
            return any(self._check_died_locked(idx, now) for idx in range(len(self.philosophers)))

    def death_status(self) -> int | None:
        """Return the index of the philosopher who died, or None while all live."""
        with self._died_lock:
            return self._died_idx

    def wait_while_alive(self) -> None:
        """Block until some philosopher has died."""
        while not self.is_someone_dead():
            time.sleep(_POLL_SECONDS)

    def _prev_used(self, fork: int) -> int:
        with self._prev_used_locks[fork]:
            return self._prev_used_by[fork]

    def _set_prev_used(self, fork: int, idx: int) -> None:
        with self._prev_used_locks[fork]:
            self._prev_used_by[fork] = idx

    def take_forks(self, philo: Philosopher) -> ForkOutcome:
        """Try to take both forks of *philo*, first then second.

        A philosopher who was the last to use either fork yields and gets
        RETRY. A lone philosopher holds the only fork until death.
        """
        first_prev = self._prev_used(philo.first_take)
        second_prev = self._prev_used(philo.second_take)
        if self.is_someone_dead():
            return ForkOutcome.DIED
        if philo.idx in (first_prev, second_prev):
            return ForkOutcome.RETRY
        first = self.forks[philo.first_take]
        first.acquire()
        if self.is_someone_dead() or not self.print_event(philo.idx, MessageKind.FORK):
            first.release()
            return ForkOutcome.DIED
        if philo.first_take == philo.second_take:
            first.release()
            self.wait_while_alive()
            return ForkOutcome.DIED
        second = self.forks[philo.second_take]
        second.acquire()
        if not self.print_event(philo.idx, MessageKind.FORK):
            first.release()
            second.release()
            return ForkOutcome.DIED
        return ForkOutcome.TAKEN

    def put_forks(self, philo: Philosopher) -> None:
        """Release both forks of *philo*, remembering it as their last user."""
        self._set_prev_used(philo.first_take, philo.idx)
        self.forks[philo.first_take].release()
        self._set_prev_used(philo.second_take, philo.idx)
        self.forks[philo.second_take].release()

    def all_satisfied(self) -> bool:
        """Return True when a meal count is required and everyone has reached it."""
        if self.settings.must_eat_times is None:
            return False
        return all(philo.satisfied for philo in self.philosophers)

    def print_event(self, idx: int, kind: MessageKind) -> bool:
        """Write an event line; return False, writing nothing, once someone has died.

        Deaths are always written, stamped with the moment the philosopher
        starved rather than the moment it was noticed.
        """
        if kind is not MessageKind.DIED and self.death_status() is not None:
            return False
        if kind is MessageKind.DIED:
            philo = self.philosophers[idx]
            stamp = philo.start_time + self.settings.time_to_die
        else:
            stamp = now_ms()
        if kind is MessageKind.SIM_START:
            line = format_start(stamp)
        else:
            line = format_event(stamp, idx, kind)
        with self._print_lock:
            self.out.write(line + "\n")
            self.out.flush()
        return True

    def eat_counts(self) -> list[int]:
        """Return how many meals each philosopher has counted."""
        return [philo.eat_times for philo in self.philosophers]