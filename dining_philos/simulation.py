"""The threaded simulation: one thread per philosopher plus a monitor."""

from __future__ import annotations

import sys
import threading
import time
from collections.abc import Sequence
from typing import TextIO

from dining_philos.config import ArgumentError, Settings, parse_arguments
from dining_philos.console import MessageKind
from dining_philos.table import ForkOutcome, Philosopher, Table
from dining_philos.timing import now_ms, sleep_ms

_POLL_SECONDS = 0.0005
_STAGGER_SECONDS = 0.00001
_RETRY_SECONDS = 0.0001

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def _eat(table: Table, philo: Philosopher) -> bool:
    now = now_ms()
    if table.check_and_update_died(philo.idx, now):
        return False
    if not table.print_event(philo.idx, MessageKind.EATING):
        return False
    philo.mark_eating(now)
    sleep_ms(table.settings.time_to_eat)
    return True


def _sleep(table: Table, philo: Philosopher) -> bool:
    if table.check_and_update_died(philo.idx, now_ms()):
        return False
    if not table.print_event(philo.idx, MessageKind.SLEEPING):
        return False
    sleep_ms(table.settings.time_to_sleep)
    return True


def _think(table: Table, philo: Philosopher) -> bool:
    if table.check_and_update_died(philo.idx, now_ms()):
        return False
    return table.print_event(philo.idx, MessageKind.THINKING)


def run_philosopher(table: Table, philo: Philosopher) -> bool:
    """Run the eat-sleep-think cycle of *philo* until death or satisfaction.

    Returns True if the cycle stopped because some philosopher died. The
    philosopher who died reports its own death on the way out.
    """
    while True:
        outcome = table.take_forks(philo)
        if outcome is ForkOutcome.RETRY:
            time.sleep(_RETRY_SECONDS)
            continue
        if outcome is ForkOutcome.DIED:
            break
        ate = _eat(table, philo)
        table.put_forks(philo)
        if not ate:
            break
        philo.record_meal(table.settings.must_eat_times)
        if not _sleep(table, philo) or not _think(table, philo):
            break
        if table.death_status() is not None or philo.satisfied:
            break
    died_idx = table.death_status()
    if died_idx is not None and died_idx == philo.idx:
        table.print_event(philo.idx, MessageKind.DIED)
    return died_idx is not None


def run_monitor(table: Table) -> bool:
    """Watch the table until someone dies or everyone is satisfied.

    Returns True if the watch ended with a death.
    """
    while True:
        time.sleep(_POLL_SECONDS)
        if table.is_someone_dead():
            return True
        if table.all_satisfied():
            return False


def run(settings: Settings, out: TextIO | None = None) -> Table:
    """Run a whole simulation and return its table once every thread is done."""
    table = Table(settings, out)
    table.set_start_time(now_ms())
    table.print_event(0, MessageKind.SIM_START)

    count = settings.num_of_philos
    threads: list[threading.Thread] = []

    def start(indices: range) -> None:
        for idx in indices:
            thread = threading.Thread(
                target=run_philosopher,
                args=(table, table.philosophers[idx]),
                name=f"philosopher-{idx + 1}",
                daemon=True,
            )
            thread.start()
            threads.append(thread)

    start(range(1, count, 2))
    time.sleep(_STAGGER_SECONDS)
    start(range(0, count, 2))

    monitor = threading.Thread(target=run_monitor, args=(table,), name="monitor", daemon=True)
    monitor.start()

    for thread in threads:
        thread.join()
    monitor.join()
    return table


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point: parse the arguments, run, and return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        settings = parse_arguments(args)
    except ArgumentError as exc:
        print(str(exc))
        return EXIT_FAILURE
    run(settings)
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())