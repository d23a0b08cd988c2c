# eoapi/models.py
from __future__ import annotations

import abc
import enum
import math
from dataclasses import astuple, dataclass

from eoapi.scoring.rating import calculate_chart_overall, calculate_player_overall
from eoapi.scoring.wife import Wifescore

# --------------------------------------------------------------------------------------
# Skillsets
# --------------------------------------------------------------------------------------

_SKILLSET_ALIASES: dict[str, str] = {
    "overall": "overall",
    "stream": "stream",
    "js": "jumpstream",
    "jumpstream": "jumpstream",
    "hs": "handstream",
    "handstream": "handstream",
    "stam": "stamina",
    "stamina": "stamina",
    "jack": "jackspeed",
    "jacks": "jackspeed",
    "jackspeed": "jackspeed",
    "cj": "chordjack",
    "chordjack": "chordjack",
    "chordjacks": "chordjack",
    "tech": "technical",
    "technical": "technical",
}


class Skillset8(enum.Enum):
    OVERALL = "overall"
    STREAM = "stream"
    JUMPSTREAM = "jumpstream"
    HANDSTREAM = "handstream"
    STAMINA = "stamina"
    JACKSPEED = "jackspeed"
    CHORDJACK = "chordjack"
    TECHNICAL = "technical"

    @classmethod
    def from_user_input(cls, text: str) -> Skillset8 | None:
        """
        Case-insensitive parse of the community spellings ("js", "Jacks", "CJ" ...).

        Returns None for anything unrecognized.
        """
        key = _SKILLSET_ALIASES.get(text.strip().lower())
        return cls(key) if key else None

    def to_skillset7(self) -> Skillset7 | None:
        if self is Skillset8.OVERALL:
            return None
        return Skillset7(self.value)


class Skillset7(enum.Enum):
    STREAM = "stream"
    JUMPSTREAM = "jumpstream"
    HANDSTREAM = "handstream"
    STAMINA = "stamina"
    JACKSPEED = "jackspeed"
    CHORDJACK = "chordjack"
    TECHNICAL = "technical"

    @classmethod
    def from_user_input(cls, text: str) -> Skillset7 | None:
        ss = Skillset8.from_user_input(text)
        return ss.to_skillset7() if ss else None

    def to_skillset8(self) -> Skillset8:
        return Skillset8(self.value)

    @property
    def eo_name(self) -> str:
        """Spelling the service uses in JSON keys and query parameters."""
        if self is Skillset7.JACKSPEED:
            return "JackSpeed"
        return self.value.capitalize()


@dataclass(frozen=True)
class _Skillsets7(abc.ABC):
    stream: float = 0.0
    jumpstream: float = 0.0
    handstream: float = 0.0
    stamina: float = 0.0
    jackspeed: float = 0.0
    chordjack: float = 0.0
    technical: float = 0.0

    def values(self) -> tuple[float, ...]:
        return astuple(self)

    def get(self, skillset: Skillset7 | Skillset8) -> float:
        if skillset is Skillset8.OVERALL:
            return self.overall()
        return getattr(self, skillset.value)

    @abc.abstractmethod
    def overall(self) -> float: ...


@dataclass(frozen=True)
class ChartSkillsets(_Skillsets7):
    """Chart-specific difficulty (MSD) or score-specific rating (SSR)."""

    def overall(self) -> float:
        return calculate_chart_overall(self.values())


@dataclass(frozen=True)
class UserSkillsets(_Skillsets7):
    """Player ratings."""

    def overall(self) -> float:
        return calculate_player_overall(self.values())


@dataclass(frozen=True)
class Skillsets8:
    """Eight values as reported by the server, overall included."""

    overall: float
    stream: float
    jumpstream: float
    handstream: float
    stamina: float
    jackspeed: float
    chordjack: float
    technical: float

    def get(self, skillset: Skillset7 | Skillset8) -> float:
        return getattr(self, skillset.value)


# --------------------------------------------------------------------------------------
# Charts / scores
# --------------------------------------------------------------------------------------

_DIFFICULTY_SHORT = {"BG": "beginner", "EZ": "easy", "NM": "medium", "HD": "hard", "IN": "challenge", "ED": "edit"}
_DIFFICULTY_LONG = {
    "Beginner": "beginner",
    "Novice": "beginner",
    "Easy": "easy",
    "Medium": "medium",
    "Normal": "medium",
    "Hard": "hard",
    "Challenge": "challenge",
    "Expert": "challenge",
    "Insane": "challenge",
    "Edit": "edit",
}


class Difficulty(enum.Enum):
    BEGINNER = "beginner"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    CHALLENGE = "challenge"
    EDIT = "edit"

    @classmethod
    def from_short_string(cls, text: str) -> Difficulty | None:
        """Parse the evaluation-screen abbreviations (BG, IN ...). Uppercase only."""
        key = _DIFFICULTY_SHORT.get(text)
        return cls(key) if key else None

    @classmethod
    def from_long_string(cls, text: str) -> Difficulty | None:
        key = _DIFFICULTY_LONG.get(text)
        return cls(key) if key else None

    def to_short_string(self) -> str:
        for short, value in _DIFFICULTY_SHORT.items():
            if value == self.value:
                return short
        raise AssertionError(self)


@dataclass(frozen=True, order=True)
class Rate:
    """
    Music rate. Stored as 20x the real rate: every valid rate is a multiple of 0.05,
    so 1.15x is exactly 23.
    """

    x20: int = 20

    @classmethod
    def from_float(cls, rate: float) -> Rate | None:
        """Round to the nearest valid rate, halves away from zero; None for negative or non-finite input."""
        if not math.isfinite(rate) or rate < 0:
            return None
        return cls(math.floor(rate * 20 + 0.5))

    @classmethod
    def from_string(cls, text: str) -> Rate | None:
        try:
            value = float(text.strip().rstrip("xX"))
        except ValueError:
            return None
        return cls.from_float(value)

    def as_float(self) -> float:
        return self.x20 / 20

    def __str__(self) -> str:
        return f"{self.as_float():g}x"


@dataclass(frozen=True)
class Judgements:
    marvelouses: int = 0
    perfects: int = 0
    greats: int = 0
    goods: int = 0
    bads: int = 0
    misses: int = 0
    hit_mines: int = 0
    held_holds: int = 0
    let_go_holds: int = 0
    missed_holds: int = 0


# --------------------------------------------------------------------------------------
# File sizes (pack listings report "123.4 MB")
# --------------------------------------------------------------------------------------


class FileSizeParseError(ValueError):
    pass


_FILESIZE_UNITS = {
    "b": 1,
    "kb": 1000,
    "kib": 1024,
    "mb": 1000**2,
    "mib": 1024**2,
    "gb": 1000**3,
    "gib": 1024**3,
    "tb": 1000**4,
    "tib": 1024**4,
}


@dataclass(frozen=True, order=True)
class FileSize:
    bytes: int

    @classmethod
    def parse(cls, text: str) -> FileSize:
        tokens = text.split()
        if not tokens:
            raise FileSizeParseError("Given string was empty")
        try:
            number = float(tokens[0])
        except ValueError as err:
            raise FileSizeParseError(f"Error while parsing the filesize number {tokens[0]!r}") from err
        if len(tokens) < 2:
            raise FileSizeParseError("No KB/MB/... ending")
        unit = tokens[1].lower()
        multiplier = _FILESIZE_UNITS.get(unit)
        if multiplier is None:
            raise FileSizeParseError(f"Unknown ending {unit!r}")
        return cls(int(number * multiplier))

    @property
    def kb(self) -> int:
        return self.bytes // 1000

    @property
    def mb(self) -> int:
        return self.bytes // 1000**2

    @property
    def gb(self) -> int:
        return self.bytes // 1000**3


__all__ = [
    "Skillset7",
    "Skillset8",
    "ChartSkillsets",
    "UserSkillsets",
    "Skillsets8",
    "Difficulty",
    "Rate",
    "Judgements",
    "Wifescore",
    "FileSize",
    "FileSizeParseError",
]
