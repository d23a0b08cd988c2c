# tests/conftest.py
from __future__ import annotations

import contextlib
import sys
import types
from collections.abc import Iterator
from pathlib import Path

import pytest

# Ensure project root importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@contextlib.contextmanager
def fake_clock(monkeypatch) -> Iterator[types.SimpleNamespace]:
    """
    Freeze time and capture sleeps.

    - Overrides time.monotonic() so the rate gate's _now() sees our clock.
    - Overrides time.sleep(dt) to *advance* the frozen clock by dt and accumulate total slept time.

    Exposes:
      now() -> float            current monotonic time
      advance(dt)               manually advance without calling sleep()
      slept() -> float          total seconds 'slept'
      reset_slept()             zero the sleep accumulator
    """
    t = {"now": 1_000_000.0, "slept": 0.0}

    def monotonic():
        return t["now"]

    def sleep(dt):
        dt = float(dt)
        if dt <= 0:
            return
        t["slept"] += dt
        # advance our monotonic clock as real sleep would
        t["now"] += dt

    monkeypatch.setattr("time.monotonic", monotonic)
    monkeypatch.setattr("time.sleep", sleep)

    ns = types.SimpleNamespace(
        now=lambda: t["now"],
        advance=lambda dt: t.__setitem__("now", t["now"] + float(dt)),
        slept=lambda: t["slept"],
        reset_slept=lambda: t.__setitem__("slept", 0.0),
    )
    yield ns


@pytest.fixture
def clock(monkeypatch):
    with fake_clock(monkeypatch) as clk:
        yield clk


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    # Sessions read config at construction; keep a developer's .env/env out of tests
    for name in (
        "EO_V1_BASE_URL",
        "EO_V2_BASE_URL",
        "EO_REQUEST_COOLDOWN_SEC",
        "EO_REQUEST_TIMEOUT_SEC",
        "EO_CONNECT_TIMEOUT_SEC",
        "EO_USER_AGENT",
        "EO_WARN_NON_200",
        "EO_USERNAME",
        "EO_PASSWORD",
        "EO_CLIENT_DATA",
        "EO_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
