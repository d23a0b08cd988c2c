# eoapi/replay/parse.py
"""
Decode the note log embedded in score payloads.

The service ships the log as a JSON-encoded string of rows, wrapped in an outer
value whose shape depends on the endpoint and its age:

  outer:  null | "<rows>" | ["<rows>"]       anything else is a placeholder → no replay
  rows:   [[time, deviation_ms, lane, note_type, tick?], ...]   canonical (4-5 wide)
          [[time, deviation_ms, tick], ...]                      legacy (3 wide)
          [[time, deviation_ms], ...]                            bare (2 wide)

A deviation of exactly 180ms is the service's miss sentinel. A lane of -1 means
"unknown" and decodes to None, same as an absent lane.
"""

from __future__ import annotations

import enum
import json
import math
from typing import Any

from eoapi.exceptions import InvalidReplayEncoding

from .models import MISS, Hit, Miss, NoteType, Replay, ReplayNote

MISS_SENTINEL_S = 0.18
MISS_EPSILON = 1e-7
UNKNOWN_LANE = -1


class RowShape(enum.Enum):
    BARE = "bare"  # [time, dev]
    LEGACY = "legacy"  # [time, dev, tick]
    CANONICAL = "canonical"  # [time, dev, lane, note_type, tick?]


def row_shape(width: int) -> RowShape:
    """Pick the row layout from its width alone; the service sends no version flag."""
    if width < 2:
        raise ValueError(f"replay rows need at least 2 entries, got {width}")
    if width == 2:
        return RowShape.BARE
    if width == 3:
        return RowShape.LEGACY
    return RowShape.CANONICAL


# --------------------------------------------------------------------------------------
# Field decoders
# --------------------------------------------------------------------------------------


def _number(value: Any, what: str, index: int) -> float:
    # bool is an int subclass; the service never sends booleans in rows
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidReplayEncoding(f"row {index}: {what} must be a number, got {value!r}")
    out = float(value)
    if not math.isfinite(out):
        raise InvalidReplayEncoding(f"row {index}: {what} is not finite")
    return out


def _integer(value: Any, what: str, index: int) -> int:
    out = _number(value, what, index)
    if not out.is_integer():
        raise InvalidReplayEncoding(f"row {index}: {what} must be an integer, got {value!r}")
    return int(out)


def decode_hit(deviation_ms: float) -> Hit | Miss:
    deviation = deviation_ms / 1000.0
    if abs(deviation - MISS_SENTINEL_S) < MISS_EPSILON:
        return MISS
    return Hit(deviation)


def _decode_lane(value: Any, index: int) -> int | None:
    lane = _integer(value, "lane", index)
    if lane == UNKNOWN_LANE:
        return None
    if lane < 0:
        raise InvalidReplayEncoding(f"row {index}: lane {lane} out of range")
    return lane


def _decode_note_type(value: Any, index: int) -> NoteType:
    code = _integer(value, "note type", index)
    try:
        return NoteType(code)
    except ValueError as exc:
        raise InvalidReplayEncoding(f"row {index}: unexpected note type integer {code}") from exc


def _decode_tick(value: Any, index: int) -> int:
    tick = _integer(value, "tick", index)
    if tick < 0:
        raise InvalidReplayEncoding(f"row {index}: negative tick {tick}")
    return tick


def decode_row(row: Any, index: int) -> tuple[RowShape, ReplayNote]:
    if not isinstance(row, list):
        raise InvalidReplayEncoding(f"row {index}: expected an array, got {row!r:.50}")
    try:
        shape = row_shape(len(row))
    except ValueError as exc:
        raise InvalidReplayEncoding(f"row {index}: {exc}") from exc

    time_s = _number(row[0], "time", index)
    hit = decode_hit(_number(row[1], "deviation", index))

    if shape is RowShape.BARE:
        return shape, ReplayNote(time=time_s, hit=hit)
    if shape is RowShape.LEGACY:
        return shape, ReplayNote(time=time_s, hit=hit, tick=_decode_tick(row[2], index))
    return shape, ReplayNote(
        time=time_s,
        hit=hit,
        lane=_decode_lane(row[2], index),
        note_type=_decode_note_type(row[3], index),
        tick=_decode_tick(row[4], index) if len(row) > 4 else None,
    )


# --------------------------------------------------------------------------------------
# Entry points
# --------------------------------------------------------------------------------------


def unwrap_outer(outer: Any) -> str | None:
    """Return the embedded rows string, or None for null / placeholder shapes."""
    if outer is None:
        return None
    if isinstance(outer, str):
        return outer
    if isinstance(outer, list) and outer and isinstance(outer[0], str):
        return outer[0]
    return None


def parse_replay(outer: Any) -> Replay | None:
    """
    Decode an already-JSON-decoded replay field.

    Returns None for "no usable replay" (null, placeholder shapes, or zero notes).
    Raises InvalidReplayEncoding when a replay string is present but broken.
    """
    inner = unwrap_outer(outer)
    if inner is None:
        return None

    try:
        rows = json.loads(inner)
    except json.JSONDecodeError as exc:
        raise InvalidReplayEncoding(f"replay is not valid JSON ({exc})") from exc
    if not isinstance(rows, list):
        raise InvalidReplayEncoding(f"replay is not an array of rows: {rows!r:.50}")

    notes: list[ReplayNote] = []
    schema: RowShape | None = None
    for index, row in enumerate(rows):
        shape, note = decode_row(row, index)
        if schema is None:
            schema = shape
        elif shape is not schema:
            raise InvalidReplayEncoding(
                f"row {index}: {shape.value} row in a {schema.value} replay"
            )
        notes.append(note)

    # Some invalid scores carry a syntactically valid but empty log
    if not notes:
        return None
    return Replay(notes=tuple(notes))


__all__ = [
    "RowShape",
    "row_shape",
    "decode_hit",
    "decode_row",
    "unwrap_outer",
    "parse_replay",
    "MISS_SENTINEL_S",
]
