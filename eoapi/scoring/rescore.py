# eoapi/scoring/rescore.py
from __future__ import annotations

import math
from bisect import bisect_left
from collections.abc import Sequence
from typing import Protocol

from eoapi.replay.models import Hit, LaneSeries, NoteType, Replay

from .wife import MISS_WINDOW_S, WIFE3, Judge, WifeCurve, Wifescore

NUM_LANES = 4
SCORED_NOTE_TYPES = frozenset({NoteType.TAP, NoteType.HOLD_HEAD})


def split_into_lanes(replay: Replay) -> list[LaneSeries] | None:
    """
    Split a replay into four per-lane (note_seconds, hit_seconds) series.

    Returns None when the replay's format carries no lane or note type information.
    Only taps and hold heads are kept; lanes past the fourth are dropped (4k only).
    Misses add a note time but no hit time.
    """
    if not replay.has_lane_data:
        return None

    lanes = [LaneSeries() for _ in range(NUM_LANES)]
    for note in replay.notes:
        if note.note_type not in SCORED_NOTE_TYPES:
            continue
        if note.lane >= NUM_LANES:
            continue
        lane = lanes[note.lane]
        lane.note_seconds.append(note.time)
        if isinstance(note.hit, Hit):
            lane.hit_seconds.append(note.time + note.hit.deviation)
    return lanes


# --------------------------------------------------------------------------------------
# Scoring systems
# --------------------------------------------------------------------------------------


class ScoringSystem(Protocol):
    def evaluate(
        self,
        note_seconds: Sequence[float],
        hit_seconds: Sequence[float],
        judge: Judge,
        wife: WifeCurve,
    ) -> float:
        """Return the summed wife points of one lane (both inputs sorted ascending)."""
        ...


class MatchingScorer:
    """
    Pair every hit with the nearest still-unpaired note inside the miss window.

    Hits are processed in time order; stray hits (no note in range) are ignored and
    notes left unpaired count as misses.
    """

    def __init__(self, window_s: float = MISS_WINDOW_S) -> None:
        self.window_s = window_s

    def evaluate(
        self,
        note_seconds: Sequence[float],
        hit_seconds: Sequence[float],
        judge: Judge,
        wife: WifeCurve,
    ) -> float:
        paired = [False] * len(note_seconds)
        points = 0.0
        for hit in hit_seconds:
            i = bisect_left(note_seconds, hit)
            left = i - 1
            while left >= 0 and paired[left]:
                left -= 1
            right = i
            while right < len(note_seconds) and paired[right]:
                right += 1

            best = None
            best_dist = self.window_s
            for idx in (left, right):
                if 0 <= idx < len(note_seconds):
                    dist = abs(hit - note_seconds[idx])
                    if dist <= best_dist:
                        best, best_dist = idx, dist
            if best is None:
                continue
            paired[best] = True
            points += wife.calc(hit - note_seconds[best], judge)

        points += paired.count(False) * wife.MISS_WEIGHT
        return points


class NaiveScorer:
    """
    Walk notes and hits side by side: the next hit belongs to the current note if it
    lands inside the window, otherwise the note is a miss (or the hit is a stray).
    """

    def __init__(self, window_s: float = MISS_WINDOW_S) -> None:
        self.window_s = window_s

    def evaluate(
        self,
        note_seconds: Sequence[float],
        hit_seconds: Sequence[float],
        judge: Judge,
        wife: WifeCurve,
    ) -> float:
        points = 0.0
        i = j = 0
        while i < len(note_seconds):
            note = note_seconds[i]
            if j < len(hit_seconds) and abs(hit_seconds[j] - note) <= self.window_s:
                points += wife.calc(hit_seconds[j] - note, judge)
                i += 1
                j += 1
            elif j < len(hit_seconds) and hit_seconds[j] < note:
                # stray hit before this note's window
                j += 1
            else:
                points += wife.MISS_WEIGHT
                i += 1
        return points


MATCHING = MatchingScorer()
NAIVE = NaiveScorer()


def _sorted_checked(values: list[float]) -> list[float]:
    for v in values:
        if math.isnan(v):
            raise ValueError("replay contains NaN times; the parser let a bad value through")
    return sorted(values)


def rescore(
    replay: Replay,
    num_hit_mines: int,
    num_dropped_holds: int,
    judge: Judge,
    scoring_system: ScoringSystem = MATCHING,
    wife: WifeCurve = WIFE3,
) -> Wifescore | None:
    """
    Recompute the wifescore of a 4k replay under the given judge and scoring policy.

    Returns None if the replay lacks lane/note type data ("cannot rescore"), which
    is not the same as a zero score. Raises ValueError on NaN times.
    """
    lanes = split_into_lanes(replay)
    if lanes is None:
        return None

    total = 0.0
    num_notes = 0
    for lane in lanes:
        # Sorted independently on purpose: scorers match by time, not by index
        note_seconds = _sorted_checked(lane.note_seconds)
        hit_seconds = _sorted_checked(lane.hit_seconds)
        total += scoring_system.evaluate(note_seconds, hit_seconds, judge, wife)
        num_notes += len(note_seconds)

    total += wife.MINE_HIT_WEIGHT * num_hit_mines
    total += wife.HOLD_DROP_WEIGHT * num_dropped_holds

    if num_notes == 0:
        return Wifescore(0.0)
    return Wifescore(total / (wife.MAX_POINTS * num_notes))


__all__ = [
    "NUM_LANES",
    "split_into_lanes",
    "ScoringSystem",
    "MatchingScorer",
    "NaiveScorer",
    "MATCHING",
    "NAIVE",
    "rescore",
]
