# eoapi/scoring/wife.py
"""
Wife accuracy curves and timing judges.

A wife curve turns one hit's timing deviation into points on a 2-point scale
(2 = perfectly on time, negative = penalty). The judge's timing scale stretches
or squeezes the curve: J4 is the reference (1.0), higher judges are stricter.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

# Beyond this many seconds a hit can no longer belong to a note
MISS_WINDOW_S = 0.18


@dataclass(frozen=True, order=True)
class Wifescore:
    """Accuracy as a proportion: 1.0 is 100%. Can go negative on very bad plays."""

    proportion: float

    @classmethod
    def from_percent(cls, percent: float) -> Wifescore:
        return cls(percent / 100.0)

    def as_percent(self) -> float:
        return self.proportion * 100.0

    def __str__(self) -> str:
        return f"{self.as_percent():.2f}%"


@dataclass(frozen=True)
class Judge:
    name: str
    timing_scale: float

    @classmethod
    def by_name(cls, name: str) -> Judge:
        """Look up "J4", "j7", "Justice" ... (case-insensitive)."""
        key = name.strip().lower()
        for judge in JUDGES:
            if judge.name.lower() == key:
                return judge
        if key == "justice":
            return J9
        raise ValueError(f"unknown judge {name!r}")


J1 = Judge("J1", 1.50)
J2 = Judge("J2", 1.33)
J3 = Judge("J3", 1.16)
J4 = Judge("J4", 1.00)
J5 = Judge("J5", 0.84)
J6 = Judge("J6", 0.66)
J7 = Judge("J7", 0.50)
J8 = Judge("J8", 0.33)
J9 = Judge("J9", 0.20)
JUDGES: tuple[Judge, ...] = (J1, J2, J3, J4, J5, J6, J7, J8, J9)


class WifeCurve(Protocol):
    MAX_POINTS: float
    MISS_WEIGHT: float
    MINE_HIT_WEIGHT: float
    HOLD_DROP_WEIGHT: float

    def calc(self, deviation: float, judge: Judge) -> float: ...


class Wife2:
    MAX_POINTS = 2.0
    MISS_WEIGHT = -8.0
    MINE_HIT_WEIGHT = -8.0
    HOLD_DROP_WEIGHT = -6.0

    def calc(self, deviation: float, judge: Judge) -> float:
        ms = deviation * 1000.0
        ave_deviation = 95.0 * judge.timing_scale
        y = 1.0 - 2.0 ** (-(ms * ms) / (ave_deviation * ave_deviation))
        y = y * y
        return (self.MAX_POINTS - self.MISS_WEIGHT) * (1.0 - y) + self.MISS_WEIGHT


class Wife3:
    MAX_POINTS = 2.0
    MISS_WEIGHT = -5.5
    MINE_HIT_WEIGHT = -7.0
    HOLD_DROP_WEIGHT = -4.5

    # judge scaling is softened by this power so high judges aren't so extreme
    JUDGE_POWER = 0.75

    def calc(self, deviation: float, judge: Judge) -> float:
        ts = judge.timing_scale
        ms = abs(deviation * 1000.0)
        ridiculous = 5.0 * ts
        if ms <= ridiculous:
            return self.MAX_POINTS

        zero = 65.0 * ts**self.JUDGE_POWER
        dev = 22.7 * ts**self.JUDGE_POWER
        if ms <= zero:
            return self.MAX_POINTS * math.erf((zero - ms) / dev)

        max_boo = MISS_WINDOW_S * 1000.0
        if ms <= max_boo:
            return (ms - zero) * self.MISS_WEIGHT / (max_boo - zero)
        return self.MISS_WEIGHT


WIFE2 = Wife2()
WIFE3 = Wife3()

__all__ = [
    "MISS_WINDOW_S",
    "Wifescore",
    "Judge",
    "JUDGES",
    "J1",
    "J2",
    "J3",
    "J4",
    "J5",
    "J6",
    "J7",
    "J8",
    "J9",
    "WifeCurve",
    "Wife2",
    "Wife3",
    "WIFE2",
    "WIFE3",
]
