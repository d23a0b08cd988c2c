# tests/test_rate_gate.py
from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from eoapi.fetch.throttle import RateGate

# ------------------------------ basic politeness gap ----------------------------------


def test_first_request_goes_through_immediately(clock):
    gate = RateGate(2.0)
    assert gate.wait_turn() == 0.0
    assert clock.slept() == 0.0
    assert gate.last_request_at == clock.now()


def test_second_request_waits_full_cooldown(clock):
    gate = RateGate(2.0)
    gate.wait_turn()
    slept = gate.wait_turn()
    assert slept == pytest.approx(2.0, rel=0, abs=1e-9)
    assert clock.slept() == pytest.approx(2.0, rel=0, abs=1e-9)


def test_partial_wait_after_elapsed_time(clock):
    gate = RateGate(2.0)
    gate.wait_turn()
    clock.advance(1.25)
    assert gate.wait_turn() == pytest.approx(0.75, rel=0, abs=1e-9)


def test_no_wait_once_cooldown_elapsed(clock):
    gate = RateGate(2.0)
    gate.wait_turn()
    clock.advance(5.0)
    assert gate.wait_turn() == 0.0
    assert clock.slept() == 0.0


def test_k_requests_take_at_least_k_minus_one_cooldowns(clock):
    gate = RateGate(1.5)
    start = clock.now()
    starts = []
    for _ in range(5):
        gate.wait_turn()
        starts.append(clock.now())

    assert clock.now() - start == pytest.approx(4 * 1.5, rel=0, abs=1e-9)
    gaps = [b - a for a, b in zip(starts, starts[1:])]
    assert all(g >= 1.5 - 1e-9 for g in gaps)


def test_zero_cooldown_never_sleeps(clock):
    gate = RateGate(0)
    for _ in range(3):
        assert gate.wait_turn() == 0.0
    assert clock.slept() == 0.0


def test_reset_forgets_last_request(clock):
    gate = RateGate(2.0)
    gate.wait_turn()
    gate.reset()
    assert gate.last_request_at is None
    assert gate.wait_turn() == 0.0


def test_negative_interval_is_clamped():
    assert RateGate(-3).min_interval == 0.0


# ------------------------------ real threads ------------------------------------------


def test_concurrent_callers_are_spaced_globally():
    interval = 0.05
    callers = 6
    gate = RateGate(interval)
    barrier = threading.Barrier(callers)
    starts: list[float] = []
    lock = threading.Lock()

    def worker():
        barrier.wait()
        gate.wait_turn()
        with lock:
            starts.append(time.monotonic())

    with ThreadPoolExecutor(max_workers=callers) as pool:
        for f in [pool.submit(worker) for _ in range(callers)]:
            f.result(timeout=5)

    starts.sort()
    # Timestamps are taken just after leaving the gate; allow scheduler jitter
    assert starts[-1] - starts[0] >= (callers - 1) * interval - 0.02
    gaps = [b - a for a, b in zip(starts, starts[1:])]
    assert all(gap >= interval - 0.025 for gap in gaps), gaps
