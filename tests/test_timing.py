import time

import pytest

from dining_philos.timing import elapsed_ms, now_ms, sleep_ms


def test_now_ms_tracks_wall_clock():
    before = time.time() * 1000
    value = now_ms()
    after = time.time() * 1000
    assert before - 1 <= value <= after + 1


def test_now_ms_does_not_go_backwards():
    first = now_ms()
    second = now_ms()
    assert second >= first


@pytest.mark.parametrize("start, now", [(0, 0), (100, 250), (500, 400)])
def test_elapsed_ms_inverts_addition(start, now):
    assert elapsed_ms(now, start) + start == now


def test_elapsed_ms_is_antisymmetric():
    assert elapsed_ms(300, 1000) == -elapsed_ms(1000, 300)


def test_sleep_ms_waits_at_least_duration():
    start = now_ms()
    sleep_ms(30)
    assert elapsed_ms(now_ms(), start) >= 30


def test_sleep_ms_zero_returns_promptly():
    start = now_ms()
    sleep_ms(0)
    waited = elapsed_ms(now_ms(), start)
    assert 0 <= waited < 500