# dining-philos

A simulation of the dining philosophers problem. Philosophers sit around a
table and repeatedly take forks, eat, sleep and think. Eating needs two forks,
and a philosopher who goes too long without starting a meal dies, which ends
the simulation.

Two variants are included:

- `dining-philos` runs each philosopher as a thread, with a separate monitor
  thread. Forks lie between neighbours and are guarded by locks. Odd and even
  philosophers reach for their two forks in opposite orders, and a philosopher
  who was the last to put down either of its forks steps back and tries again
  later, so the forks circulate fairly.
- `dining-philos-processes` runs each philosopher as a separate process. All
  forks lie in the middle of the table and are counted by a semaphore, with a
  waiter semaphore letting one philosopher pick up forks at a time. Each
  process runs its philosopher in one thread and watches it for death in
  another. The parent waits for the processes and stops the rest as soon as
  one reports a death.

## Installation

```
pip install .
```

## Usage

```
dining-philos NUMBER_OF_PHILOSOPHERS TIME_TO_DIE TIME_TO_EAT TIME_TO_SLEEP [MUST_EAT_TIMES]
dining-philos-processes NUMBER_OF_PHILOSOPHERS TIME_TO_DIE TIME_TO_EAT TIME_TO_SLEEP [MUST_EAT_TIMES]
```

All times are in milliseconds. The arguments must be whole numbers, optionally
preceded by whitespace and a single sign, with nothing after the digits:

| Argument                  | Allowed range       |
|---------------------------|---------------------|
| `NUMBER_OF_PHILOSOPHERS`  | 1 to 200            |
| `TIME_TO_DIE`             | 60 or more          |
| `TIME_TO_EAT`             | 60 or more          |
| `TIME_TO_SLEEP`           | 60 or more          |
| `MUST_EAT_TIMES`          | 1 or more, optional |

Without `MUST_EAT_TIMES` the simulation runs until a philosopher dies. With
it, the simulation also stops once every philosopher has eaten that many
times.

A wrong number of arguments, or an invalid one, prints a message starting with
`[Error]` that names the first bad argument, and the command exits with
status 1. Otherwise the command exits with status 0.

Example:

```
dining-philos 5 800 200 200 7
```

### Output

The first line announces the start: `simulation start` for the threaded
variant, `<SIMULATION START>` for the process variant. Every following line
gives a millisecond timestamp, the philosopher's number (counted from 1) and
what happened: `has taken a fork`, `is eating`, `is sleeping`, `is thinking`
or `died`. Each line is drawn on a background colour picked by the
philosopher's number, using ANSI 256-colour escapes.

The threaded variant prints the Unix time in milliseconds as one number; the
process variant prints it as seconds and milliseconds separated by a colon
(`1700000000:042`). In the threaded variant a death is stamped with the moment
the philosopher starved. Once a death has been printed, no further events are
written.

A single philosopher has only one fork and so always dies.

## Using it from Python

`dining_philos.config.parse_arguments` turns the command-line values (without
the program name) into a `Settings` object, raising `ArgumentError` for
invalid input; the error's `kind` is an `ArgumentErrorKind`.
`dining_philos.simulation.run(settings, out)` runs the threaded simulation,
writing its log to the given text stream, and returns the `Table` it used:

```python
import io

from dining_philos.config import parse_arguments
from dining_philos.console import format_eat_counts
from dining_philos.simulation import run

settings = parse_arguments(["4", "410", "200", "200", "3"])
log = io.StringIO()
table = run(settings, log)
print(log.getvalue())
print(format_eat_counts(table.eat_counts()))
print("died:", table.death_status())
```

Meals are only counted when `must_eat_times` is set. `Table.death_status()`
gives the zero-based index of the philosopher who died, or `None`.

`dining_philos.process_simulation.run(settings)` runs the process-based
variant, writing to standard output. It returns `True` if a philosopher died
and raises `RuntimeError` if a process could not be started or ended with an
error. It uses the `fork` start method where the platform offers it, and
`spawn` otherwise.

## Running the tests

```
pip install ".[test]"
pytest
```