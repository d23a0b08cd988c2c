# eoapi/scoring/__init__.py
"""
Offline score math: wife curves and judges, replay rescoring, and overall ratings.

Public entry points:
  - rescore(replay, num_hit_mines, num_dropped_holds, judge, scoring_system, wife)
  - split_into_lanes(replay)
  - calculate_overall / calculate_chart_overall / calculate_player_overall
"""

from .rating import (
    calculate_chart_overall,
    calculate_overall,
    calculate_player_overall,
    is_rating_okay,
)
from .rescore import (
    MATCHING,
    NAIVE,
    MatchingScorer,
    NaiveScorer,
    ScoringSystem,
    rescore,
    split_into_lanes,
)
from .wife import (
    J1,
    J2,
    J3,
    J4,
    J5,
    J6,
    J7,
    J8,
    J9,
    JUDGES,
    WIFE2,
    WIFE3,
    Judge,
    Wife2,
    Wife3,
    WifeCurve,
    Wifescore,
)

__all__ = [
    # rating
    "is_rating_okay",
    "calculate_overall",
    "calculate_chart_overall",
    "calculate_player_overall",
    # rescore
    "split_into_lanes",
    "rescore",
    "ScoringSystem",
    "MatchingScorer",
    "NaiveScorer",
    "MATCHING",
    "NAIVE",
    # wife
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
