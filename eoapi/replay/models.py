# eoapi/replay/models.py
from __future__ import annotations

import enum
from dataclasses import dataclass, field


class NoteType(enum.IntEnum):
    """Note types, numbered the way the service encodes them in replays."""

    TAP = 1
    HOLD_HEAD = 2
    HOLD_TAIL = 3
    MINE = 4
    LIFT = 5
    KEYSOUND = 6
    FAKE = 7


@dataclass(frozen=True)
class Hit:
    """A judged hit. `deviation` is in seconds; a 50ms early hit is -0.05."""

    deviation: float


@dataclass(frozen=True)
class Miss:
    pass


MISS = Miss()


@dataclass(frozen=True)
class ReplayNote:
    """
    A single note of a replay.

    time:      position of the note in the chart, in seconds (the service's values are
               slightly off for some charts)
    hit:       Hit(deviation) or Miss()
    lane:      column, 0-3 for 4k; None when the replay format has no lanes
    note_type: None when the replay format has no note types
    tick:      position in ticks (192nds); None when the row carries none
    """

    time: float
    hit: Hit | Miss
    lane: int | None = None
    note_type: NoteType | None = None
    tick: int | None = None

    @property
    def is_miss(self) -> bool:
        return isinstance(self.hit, Miss)

    @property
    def deviation(self) -> float | None:
        return None if isinstance(self.hit, Miss) else self.hit.deviation


@dataclass(frozen=True)
class Replay:
    """Notes in chart order. Built once per parse, never mutated."""

    notes: tuple[ReplayNote, ...]

    @property
    def has_lane_data(self) -> bool:
        """True when every note carries both a lane and a note type."""
        return all(n.lane is not None and n.note_type is not None for n in self.notes)

    def __len__(self) -> int:
        return len(self.notes)


@dataclass
class LaneSeries:
    """Per-lane note and hit times in seconds. The two lists may differ in length."""

    note_seconds: list[float] = field(default_factory=list)
    hit_seconds: list[float] = field(default_factory=list)


__all__ = ["NoteType", "Hit", "Miss", "MISS", "ReplayNote", "Replay", "LaneSeries"]
