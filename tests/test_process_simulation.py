import re

from dining_philos.config import ArgumentErrorKind, Settings, error_message
from dining_philos.process_simulation import main, run

_ANSI = re.compile(r"\x1b\[[0-9;]*m")


def _lines(text):
    return [_ANSI.sub("", line) for line in text.splitlines() if line.strip()]


def test_main_rejects_wrong_argument_count(capsys):
    assert main(["1", "200"]) == 1
    out = capsys.readouterr().out
    assert error_message(ArgumentErrorKind.ARG_COUNT) in out


def test_main_rejects_too_many_philosophers(capsys):
    assert main(["201", "800", "200", "200"]) == 1
    out = capsys.readouterr().out
    assert out.strip() == error_message(ArgumentErrorKind.NUM_OF_PHILOS)


def test_main_rejects_short_time_to_sleep(capsys):
    assert main(["2", "800", "200", "59"]) == 1
    out = capsys.readouterr().out
    assert out.strip() == error_message(ArgumentErrorKind.TIME_TO_SLEEP)


def test_lone_philosopher_dies(capfd):
    died = run(Settings(1, 200, 60, 60))
    lines = _lines(capfd.readouterr().out)
    assert died is True
    assert lines[0].endswith("<SIMULATION START>")
    assert lines[-1].endswith("1 died")
    assert sum(line.endswith("died") for line in lines) == 1
    assert any(line.endswith("1 has taken a fork") for line in lines)


def test_two_philosophers_reach_meal_count(capfd):
    died = run(Settings(2, 800, 100, 100, 2))
    lines = _lines(capfd.readouterr().out)
    assert died is False
    assert not any(line.endswith("died") for line in lines)
    for number in (1, 2):
        meals = [line for line in lines if line.endswith(f" {number} is eating")]
        assert len(meals) >= 2


def test_main_runs_lone_philosopher_to_death(capfd):
    assert main(["1", "200", "60", "60"]) == 0
    lines = _lines(capfd.readouterr().out)
    assert lines[0].endswith("<SIMULATION START>")
    assert lines[-1].endswith("1 died")


def test_timestamps_use_colon_separator(capfd):
    died = run(Settings(1, 200, 60, 60))
    lines = _lines(capfd.readouterr().out)
    assert died is True
    assert lines
    assert all(re.match(r"^\d+:\d{3} ", line) for line in lines)