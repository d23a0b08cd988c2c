# tests/test_rescore.py
from __future__ import annotations

import math

import pytest

from eoapi.replay import MISS, Hit, NoteType, Replay, ReplayNote
from eoapi.scoring import J4, MATCHING, NAIVE, WIFE2, WIFE3, Wifescore, rescore, split_into_lanes


def _tap(time, hit, lane, note_type=NoteType.TAP):
    return ReplayNote(time=time, hit=hit, lane=lane, note_type=note_type)


# ------------------------------ lane split --------------------------------------------


def test_two_note_lane_split():
    replay = Replay((_tap(0.0, Hit(0.15), 0), _tap(1.0, MISS, 1)))
    lanes = split_into_lanes(replay)

    assert len(lanes) == 4
    assert lanes[0].note_seconds == [0.0]
    assert lanes[0].hit_seconds == [0.15]
    assert lanes[1].note_seconds == [1.0]
    assert lanes[1].hit_seconds == []
    assert lanes[2].note_seconds == [] and lanes[3].note_seconds == []


def test_lane_split_filters_types_and_wide_lanes():
    replay = Replay(
        (
            _tap(0.0, Hit(0.0), 0, NoteType.MINE),
            _tap(0.5, Hit(0.0), 1, NoteType.HOLD_TAIL),
            _tap(1.0, Hit(0.01), 2, NoteType.HOLD_HEAD),
            _tap(1.5, Hit(0.0), 5),
        )
    )
    lanes = split_into_lanes(replay)
    assert [lane.note_seconds for lane in lanes] == [[], [], [1.0], []]
    assert lanes[2].hit_seconds == [pytest.approx(1.01)]


def test_lane_split_needs_lanes_and_types():
    laneless = Replay((ReplayNote(time=0.0, hit=Hit(0.0), tick=0),))
    assert split_into_lanes(laneless) is None
    assert rescore(laneless, 0, 0, J4) is None


# ------------------------------ rescore -----------------------------------------------


def test_perfect_play_is_100_percent():
    replay = Replay(tuple(_tap(i * 0.5, Hit(0.0), i % 4) for i in range(8)))
    assert rescore(replay, 0, 0, J4) == Wifescore(1.0)
    assert rescore(replay, 0, 0, J4, NAIVE) == Wifescore(1.0)
    assert rescore(replay, 0, 0, J4, wife=WIFE2) == Wifescore(1.0)


def test_all_misses():
    replay = Replay(tuple(_tap(float(i), MISS, 0) for i in range(3)))
    assert rescore(replay, 0, 0, J4).proportion == pytest.approx(-5.5 / 2.0)


def test_mine_and_hold_penalties():
    replay = Replay(tuple(_tap(float(i), Hit(0.0), i) for i in range(4)))
    # 4 notes worth 8 points
    assert rescore(replay, 1, 0, J4).proportion == pytest.approx((8.0 - 7.0) / 8.0)
    assert rescore(replay, 0, 1, J4).proportion == pytest.approx((8.0 - 4.5) / 8.0)


def test_no_scoreable_notes_is_zero_not_none():
    replay = Replay((_tap(0.0, Hit(0.0), 0, NoteType.MINE),))
    assert rescore(replay, 3, 0, J4) == Wifescore(0.0)


def test_unsorted_input_is_sorted_per_lane():
    in_order = Replay((_tap(0.0, Hit(0.01), 0), _tap(1.0, Hit(-0.02), 0)))
    shuffled = Replay(tuple(reversed(in_order.notes)))
    assert rescore(shuffled, 0, 0, J4) == rescore(in_order, 0, 0, J4)


def test_nan_time_is_rejected():
    replay = Replay((_tap(math.nan, Hit(0.0), 0),))
    with pytest.raises(ValueError):
        rescore(replay, 0, 0, J4)


# ------------------------------ scoring systems ---------------------------------------


def test_matching_pairs_nearest_note():
    # The lone hit is exactly on the second note; naive pairs it with the first
    notes, hits = [0.0, 0.1], [0.1]
    matching = MATCHING.evaluate(notes, hits, J4, WIFE3)
    naive = NAIVE.evaluate(notes, hits, J4, WIFE3)

    assert matching == pytest.approx(2.0 - 5.5)
    assert naive == pytest.approx(WIFE3.calc(0.1, J4) - 5.5)
    assert naive < matching


@pytest.mark.parametrize("scorer", [MATCHING, NAIVE])
def test_stray_hits_are_ignored(scorer):
    assert scorer.evaluate([1.0], [0.0, 1.0], J4, WIFE3) == pytest.approx(2.0)


@pytest.mark.parametrize("scorer", [MATCHING, NAIVE])
def test_unpaired_notes_are_misses(scorer):
    assert scorer.evaluate([0.0, 1.0], [1.0], J4, WIFE3) == pytest.approx(2.0 - 5.5)
