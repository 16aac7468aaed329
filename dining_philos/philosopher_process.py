"""One philosopher run as its own process, sharing forks through semaphores."""

from __future__ import annotations

import sys
import threading
import time
from typing import Protocol, TextIO

from dining_philos.config import Settings
from dining_philos.console import MessageKind, format_event, format_start
from dining_philos.timing import elapsed_ms, now_ms, sleep_ms

EXIT_SUCCESS = 0
EXIT_ERROR = 2
EXIT_DIED = 6

SIM_START_LABEL = "<SIMULATION START>"
SEPARATOR = ":"

_MONITOR_POLL_SECONDS = 0.0001
_WAIT_POLL_SECONDS = 0.0005


class _Synchronizer(Protocol):
    def acquire(self, *args: object, **kwargs: object) -> bool: ...

    def release(self) -> None: ...


class ProcessPhilosopher:
    """A philosopher with its own routine and monitor threads.

    *forks* is a counting semaphore holding every fork on the table,
    *waiter* lets one philosopher at a time pick up its pair, and
    *print_lock* serialises output. After a death is printed the print
    lock is kept, so nobody else writes another line.
    """

    def __init__(
        self,
        idx: int,
        settings: Settings,
        forks: _Synchronizer,
        waiter: _Synchronizer,
        print_lock: _Synchronizer,
        out: TextIO | None = None,
    ) -> None:
        self.idx = idx
        self.settings = settings
        self.forks = forks
        self.waiter = waiter
        self.print_lock = print_lock
        self.out = out if out is not None else sys.stdout
        self._lock = threading.Lock()
        self._start_time = now_ms()
        self._eat_count = 0
        self._satisfied = False
        self._died = False
        self._died_printed = False

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
    def eat_count(self) -> int:
        with self._lock:
            return self._eat_count

    @property
    def satisfied(self) -> bool:
        with self._lock:
            return self._satisfied

    @property
    def died_printed(self) -> bool:
        with self._lock:
            return self._died_printed

    def is_dead(self) -> bool:
        """Return True once this philosopher has been found starved."""
        with self._lock:
            return self._died

    def check_died(self, now: int) -> bool:
        """Return True if this call finds the philosopher starved at *now*.

        The death is recorded and printed here. A philosopher already known
        to be dead gives False.
        """
        with self._lock:
            if self._died or elapsed_ms(now, self._start_time) < self.settings.time_to_die:
                return False
            self._died = True
            self.print_event(MessageKind.DIED)
            self._died_printed = True
            return True

    def check_continue(self) -> int | None:
        """Return None while the routine should go on, else its exit status."""
        with self._lock:
            died = self._died
            satisfied = self._satisfied
        if died:
            return EXIT_DIED
        if satisfied:
            return EXIT_SUCCESS
        return None

    def _print_death_once(self) -> None:
        with self._lock:
            if self._died_printed:
                return
            self._died_printed = True
        self.print_event(MessageKind.DIED)

    def print_event(self, kind: MessageKind) -> bool:
        """Write an event line; return False, writing nothing, once dead.

        A death line is always written, and the print lock is then held for
        good so that it is the last line.
        """
        if kind is not MessageKind.DIED and self.is_dead():
            return False
        self.print_lock.acquire()
        stamp = now_ms()
        if kind is MessageKind.SIM_START:
            line = format_start(stamp, SIM_START_LABEL, SEPARATOR)
        else:
            line = format_event(stamp, self.idx, kind, SEPARATOR)
        self.out.write(line + "\n")
        self.out.flush()
        if kind is not MessageKind.DIED:
            self.print_lock.release()
        return True

    def print_event_checked(self, kind: MessageKind) -> bool:
        """Check for starvation first, then write the event.

        Returns False if the philosopher is or has just become dead.
        """
        if self.check_died(now_ms()):
            self._print_death_once()
            return False
        return self.print_event(kind)

    def _wait_while_alive(self) -> None:
        while not self.is_dead():
            time.sleep(_WAIT_POLL_SECONDS)

    def take_forks(self) -> bool:
        """Take two forks through the waiter; return False if death came first.

        A lone philosopher has only one fork and waits there until it dies.
        """
        self.waiter.acquire()
        self.forks.acquire()
        if not self.print_event_checked(MessageKind.FORK):
            return False
        if self.settings.num_of_philos == 1:
            self._wait_while_alive()
            self._print_death_once()
            return False
        self.forks.acquire()
        if not self.print_event_checked(MessageKind.FORK):
            return False
        self.waiter.release()
        return True

    def put_forks(self) -> None:
        """Return both forks and count the meal just finished."""
        self.forks.release()
        self.forks.release()
        must_eat = self.settings.must_eat_times
        with self._lock:
            self._eat_count += 1
            if must_eat is not None and self._eat_count >= must_eat:
                self._satisfied = True

    def _eat(self) -> bool:
        if not self.print_event_checked(MessageKind.EATING):
            return False
        self.start_time = now_ms()
        sleep_ms(self.settings.time_to_eat)
        return True

    def _sleep_and_think(self) -> bool:
        if not self.print_event_checked(MessageKind.SLEEPING):
            return False
        sleep_ms(self.settings.time_to_sleep)
        return self.print_event_checked(MessageKind.THINKING)

    def monitor(self) -> int:
        """Watch this philosopher until it dies or is satisfied; return the exit status."""
        while True:
            time.sleep(_MONITOR_POLL_SECONDS)
            if self.check_died(now_ms()):
                return EXIT_DIED
            status = self.check_continue()
            if status is not None:
                return status

    def routine(self) -> int:
        """Eat, sleep and think until dead or satisfied; return the exit status."""
        while True:
            if not self.take_forks() or not self._eat():
                return EXIT_DIED
            self.put_forks()
            if not self._sleep_and_think():
                return EXIT_DIED
            status = self.check_continue()
            if status is not None:
                return status

    def run(self) -> int:
        """Run the routine in a thread while monitoring; return the exit status.

        After a death the routine thread is left behind rather than joined.
        """
        worker = threading.Thread(
            target=self.routine, name=f"philosopher-{self.idx + 1}", daemon=True
        )
        try:
            worker.start()
            status = self.monitor()
            if status != EXIT_DIED:
                worker.join()
        except (OSError, RuntimeError):
            return EXIT_ERROR
        return status