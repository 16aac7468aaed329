"""The multi-process simulation: one process per philosopher around shared forks."""

from __future__ import annotations

import multiprocessing
import sys
from collections.abc import Sequence
from multiprocessing import connection

from dining_philos.config import ArgumentError, ArgumentErrorKind, Settings, error_message, parse_arguments
from dining_philos.console import MessageKind
from dining_philos.philosopher_process import EXIT_DIED, EXIT_ERROR, ProcessPhilosopher
from dining_philos.timing import now_ms

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def _context() -> multiprocessing.context.BaseContext:
    methods = multiprocessing.get_all_start_methods()
    return multiprocessing.get_context("fork" if "fork" in methods else "spawn")


def _philosopher_main(idx, settings, forks, waiter, print_lock, start_time):
    philo = ProcessPhilosopher(idx, settings, forks, waiter, print_lock)
    philo.start_time = start_time
    sys.exit(philo.run())


def _stop(processes) -> None:
    for proc in processes:
        if proc.is_alive():
            proc.terminate()
    for proc in processes:
        proc.join()


def run(settings: Settings) -> bool:
    """Run one process per philosopher until a death or until all are satisfied.

    Returns True if a philosopher died. Raises RuntimeError if a process
    could not be started or ended with an error.
    """
    ctx = _context()
    forks = ctx.Semaphore(settings.num_of_philos)
    waiter = ctx.Semaphore(1)
    print_lock = ctx.Semaphore(1)

    start_time = now_ms()
    announcer = ProcessPhilosopher(0, settings, forks, waiter, print_lock)
    announcer.print_event(MessageKind.SIM_START)

    processes = []
    try:
        for idx in range(settings.num_of_philos):
            proc = ctx.Process(
                target=_philosopher_main,
                args=(idx, settings, forks, waiter, print_lock, start_time),
                name=f"philosopher-{idx + 1}",
            )
            try:
                proc.start()
            except OSError as exc:
                raise RuntimeError(error_message(ArgumentErrorKind.PROCESS)) from exc
            processes.append(proc)

        pending = {proc.sentinel: proc for proc in processes}
        while pending:
            for sentinel in connection.wait(list(pending)):
                proc = pending.pop(sentinel)
                proc.join()
                code = proc.exitcode
                if code == EXIT_DIED:
                    return True
                if code == EXIT_ERROR or code is None or code < 0:
                    raise RuntimeError(error_message(ArgumentErrorKind.PROCESS))
        return False
    finally:
        _stop(processes)


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point: parse the arguments, run, and return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        settings = parse_arguments(args)
    except ArgumentError as exc:
        print(str(exc))
        return EXIT_FAILURE
    try:
        run(settings)
    except RuntimeError:
        print(error_message(ArgumentErrorKind.PROCESS))
        return EXIT_FAILURE
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())