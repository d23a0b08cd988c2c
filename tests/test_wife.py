# tests/test_wife.py
from __future__ import annotations

import math

import pytest

from eoapi.scoring import J1, J4, J7, J9, JUDGES, WIFE2, WIFE3, Judge, Wifescore


def test_judge_scales():
    assert [j.timing_scale for j in JUDGES] == [1.50, 1.33, 1.16, 1.00, 0.84, 0.66, 0.50, 0.33, 0.20]
    assert [j.name for j in JUDGES] == [f"J{i}" for i in range(1, 10)]


@pytest.mark.parametrize("name,judge", [("J4", J4), ("j7", J7), (" Justice ", J9), ("J1", J1)])
def test_judge_by_name(name, judge):
    assert Judge.by_name(name) is judge


def test_unknown_judge_name():
    with pytest.raises(ValueError):
        Judge.by_name("J10")


# ------------------------------ wife3 -------------------------------------------------


def test_wife3_anchor_points_at_j4():
    assert WIFE3.calc(0.0, J4) == 2.0
    # inside the 5ms "ridiculous" window
    assert WIFE3.calc(0.004, J4) == 2.0
    # zero point: 65ms
    assert WIFE3.calc(0.065, J4) == pytest.approx(0.0, abs=1e-9)
    # erf curve between the two
    assert WIFE3.calc(0.03, J4) == pytest.approx(2.0 * math.erf(35.0 / 22.7))
    # linear ramp to the miss weight at 180ms
    assert WIFE3.calc(0.18, J4) == pytest.approx(-5.5)
    assert WIFE3.calc(0.5, J4) == -5.5


def test_wife3_is_symmetric_and_non_increasing():
    samples = [i / 1000.0 for i in range(0, 200, 5)]
    points = [WIFE3.calc(s, J4) for s in samples]
    assert points == [WIFE3.calc(-s, J4) for s in samples]
    assert all(a >= b for a, b in zip(points, points[1:]))


def test_stricter_judge_gives_fewer_points():
    assert WIFE3.calc(0.03, J7) < WIFE3.calc(0.03, J4) < WIFE3.calc(0.03, J1)


def test_wife3_weights():
    assert (WIFE3.MISS_WEIGHT, WIFE3.MINE_HIT_WEIGHT, WIFE3.HOLD_DROP_WEIGHT) == (-5.5, -7.0, -4.5)


# ------------------------------ wife2 -------------------------------------------------


def test_wife2_curve():
    assert WIFE2.calc(0.0, J4) == 2.0
    assert WIFE2.calc(1.0, J4) == pytest.approx(-8.0)
    assert WIFE2.calc(-0.05, J4) == WIFE2.calc(0.05, J4)
    assert (WIFE2.MISS_WEIGHT, WIFE2.MINE_HIT_WEIGHT, WIFE2.HOLD_DROP_WEIGHT) == (-8.0, -8.0, -6.0)


# ------------------------------ wifescore ---------------------------------------------


def test_wifescore_display_and_conversion():
    score = Wifescore.from_percent(93.25)
    assert score.proportion == pytest.approx(0.9325)
    assert score.as_percent() == pytest.approx(93.25)
    assert str(Wifescore(0.5)) == "50.00%"
    assert Wifescore(0.9) < Wifescore(0.95)
