from .models import MISS, Hit, LaneSeries, Miss, NoteType, Replay, ReplayNote
from .parse import RowShape, parse_replay, row_shape

__all__ = [
    "NoteType",
    "Hit",
    "Miss",
    "MISS",
    "ReplayNote",
    "Replay",
    "LaneSeries",
    "RowShape",
    "row_shape",
    "parse_replay",
]
