# eoapi/scoring/rating.py
"""
Overall rating from per-skillset values.

The idea: try candidate ratings until the lowest one that still "fits" is found.
Each skillset value gets a power level that grows as it exceeds the candidate;
the candidate fits ("is okay") while the summed power stays under 2^(candidate/10).
The search steps upwards with a resolution that halves every iteration.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

INITIAL_RESOLUTION = 10.24

# (iterations, add_bias, final_multiplier, delta_multiplier)
CHART_PARAMS = (11, True, 1.11, 0.25)
PLAYER_PARAMS = (11, True, 1.0, 0.1)


def is_rating_okay(rating: float, values: Sequence[float], delta_multiplier: float) -> bool:
    max_power_sum = 2.0 ** (rating / 10.0)
    power_sum = 0.0
    for value in values:
        tail = math.erfc(delta_multiplier * (value - rating))
        if tail == 0.0:
            # value far above the candidate: unbounded power, never okay
            return False
        power = 2.0 / tail - 2.0
        if power > 0.0:
            power_sum += power
    return power_sum < max_power_sum


def calculate_overall(
    values: Sequence[float],
    final_multiplier: float,
    delta_multiplier: float,
    iterations: int,
    add_bias: bool = True,
) -> float:
    rating = 0.0
    resolution = INITIAL_RESOLUTION
    for _ in range(iterations):
        while not is_rating_okay(rating + resolution, values, delta_multiplier):
            rating += resolution
        resolution /= 2.0

    if add_bias:
        rating += resolution * 2.0
    return rating * final_multiplier


def calculate_chart_overall(values: Sequence[float]) -> float:
    """Chart MSD/SSR overall; a single standout skillset can exceed the blend."""
    iterations, add_bias, final_multiplier, delta_multiplier = CHART_PARAMS
    aggregate = calculate_overall(
        values, final_multiplier, delta_multiplier, iterations, add_bias=add_bias
    )
    return max(aggregate, max(values))


def calculate_player_overall(values: Sequence[float]) -> float:
    iterations, add_bias, final_multiplier, delta_multiplier = PLAYER_PARAMS
    return calculate_overall(
        values, final_multiplier, delta_multiplier, iterations, add_bias=add_bias
    )


__all__ = [
    "is_rating_okay",
    "calculate_overall",
    "calculate_chart_overall",
    "calculate_player_overall",
]
