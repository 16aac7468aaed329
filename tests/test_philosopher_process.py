import io
import re
import threading

from dining_philos.config import Settings
from dining_philos.console import MessageKind
from dining_philos.philosopher_process import (
    EXIT_DIED,
    EXIT_SUCCESS,
    ProcessPhilosopher,
)
from dining_philos.timing import now_ms


def make(num=2, die=1000, eat=10, sleep=10, must=None, forks=None, idx=0):
    settings = Settings(num, die, eat, sleep, must)
    out = io.StringIO()
    forks = forks if forks is not None else threading.Semaphore(num)
    waiter = threading.Lock()
    print_lock = threading.Lock()
    philo = ProcessPhilosopher(idx, settings, forks, waiter, print_lock, out)
    return philo, out, forks, waiter, print_lock


def test_print_event_format():
    philo, out, *_ = make()
    assert philo.print_event(MessageKind.FORK) is True
    assert re.fullmatch(r"\x1b\[48;5;000m\d+:\d{3} 1 has taken a fork\x1b\[0m\n", out.getvalue())


def test_print_sim_start_format():
    philo, out, *_ = make()
    assert philo.print_event(MessageKind.SIM_START) is True
    assert re.fullmatch(r"\d+:\d{3} <SIMULATION START>\n", out.getvalue())


def test_check_died_when_starved():
    philo, out, _, _, print_lock = make(die=100)
    philo.start_time = now_ms() - 1000
    assert philo.check_died(now_ms()) is True
    assert philo.is_dead() is True
    assert philo.died_printed is True
    assert out.getvalue().count("died") == 1
    assert print_lock.locked()
    assert philo.check_died(now_ms()) is False


def test_check_died_alive():
    philo, out, *_ = make(die=1000)
    assert philo.check_died(now_ms()) is False
    assert philo.is_dead() is False
    assert out.getvalue() == ""


def test_no_output_after_death():
    philo, out, *_ = make(die=100)
    philo.start_time = now_ms() - 500
    philo.check_died(now_ms())
    before = out.getvalue()
    assert philo.print_event(MessageKind.EATING) is False
    assert out.getvalue() == before


def test_print_event_checked_reports_death_once():
    philo, out, *_ = make(die=100)
    philo.start_time = now_ms() - 500
    assert philo.print_event_checked(MessageKind.EATING) is False
    assert out.getvalue().count("died") == 1
    assert "is eating" not in out.getvalue()


def test_take_and_put_forks():
    philo, out, forks, waiter, _ = make()
    assert philo.take_forks() is True
    assert out.getvalue().count("has taken a fork") == 2
    assert forks.acquire(blocking=False) is False
    assert waiter.acquire(blocking=False) is True
    waiter.release()
    philo.put_forks()
    assert philo.eat_count == 1
    assert forks.acquire(blocking=False) is True
    assert forks.acquire(blocking=False) is True


def test_check_continue_states():
    philo, *_ = make(must=1)
    assert philo.check_continue() is None
    philo.take_forks()
    philo.put_forks()
    assert philo.satisfied is True
    assert philo.check_continue() == EXIT_SUCCESS


def test_check_continue_dead():
    philo, *_ = make(die=100)
    philo.start_time = now_ms() - 500
    philo.check_died(now_ms())
    assert philo.check_continue() == EXIT_DIED


def test_meals_counted_without_requirement():
    philo, *_ = make(must=None)
    philo.take_forks()
    philo.put_forks()
    assert philo.eat_count == 1
    assert philo.satisfied is False
    assert philo.check_continue() is None


def test_run_until_satisfied():
    philo, out, *_ = make(num=2, die=5000, eat=10, sleep=10, must=2)
    assert philo.run() == EXIT_SUCCESS
    assert philo.eat_count == 2
    assert out.getvalue().count("is eating") == 2
    assert "died" not in out.getvalue()


def test_run_dies_while_eating():
    philo, out, *_ = make(num=2, die=50, eat=300, sleep=10)
    assert philo.run() == EXIT_DIED
    assert philo.is_dead() is True
    assert out.getvalue().count("died") == 1


def test_lone_philosopher_dies():
    philo, out, *_ = make(num=1, die=50)
    assert philo.run() == EXIT_DIED
    text = out.getvalue()
    assert text.count("has taken a fork") == 1
    assert text.count("1 died") == 1


def test_monitor_returns_success_when_satisfied():
    philo, *_ = make(must=1)
    philo.take_forks()
    philo.put_forks()
    assert philo.monitor() == EXIT_SUCCESS