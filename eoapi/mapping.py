# eoapi/mapping.py
"""
Helpers for pulling typed fields out of decoded JSON.

Anything absent or of the wrong type raises UnexpectedResponse with the dotted path,
so endpoint code can stay a flat list of lookups.
"""

from __future__ import annotations

from typing import Any

from eoapi.exceptions import UnexpectedResponse
from eoapi.models import ChartSkillsets, Judgements, Rate, Skillset7, Skillsets8, UserSkillsets
from eoapi.scoring.wife import Wifescore

_MISSING = object()


def _get(d: Any, path: str) -> Any:
    """Safely get a dotted-path value; returns _MISSING instead of raising."""
    cur = d
    for part in path.split("."):
        if isinstance(cur, dict) and part in cur:
            cur = cur[part]
        elif isinstance(cur, list) and part.isdigit() and int(part) < len(cur):
            cur = cur[int(part)]
        else:
            return _MISSING
    return cur


def _fail(path: str, expected: str, got: Any) -> UnexpectedResponse:
    shown = repr(got)
    if len(shown) > 100:
        shown = shown[:100] + "..."
    return UnexpectedResponse(f"{path}: expected {expected}, found {shown}")


def raw(d: Any, path: str) -> Any:
    v = _get(d, path)
    if v is _MISSING:
        raise UnexpectedResponse(f"{path}: missing")
    return v


def string(d: Any, path: str) -> str:
    v = raw(d, path)
    if not isinstance(v, str):
        raise _fail(path, "string", v)
    return v


def string_maybe(d: Any, path: str) -> str | None:
    v = _get(d, path)
    if v is _MISSING or v is None:
        return None
    if not isinstance(v, str):
        raise _fail(path, "null or a string", v)
    return v


def number(d: Any, path: str) -> float:
    """Accept JSON numbers and numeric strings (v1 sends most numbers as strings)."""
    v = raw(d, path)
    if isinstance(v, bool):
        raise _fail(path, "number", v)
    if isinstance(v, (int, float)):
        return float(v)
    if isinstance(v, str):
        try:
            return float(v)
        except ValueError:
            pass
    raise _fail(path, "number", v)


def integer(d: Any, path: str) -> int:
    v = number(d, path)
    if not v.is_integer():
        raise _fail(path, "integer", v)
    return int(v)


def boolean(d: Any, path: str) -> bool:
    """true/false, 0/1 and "0"/"1" all occur depending on the endpoint."""
    v = raw(d, path)
    if isinstance(v, bool):
        return v
    if v in (0, 1, "0", "1"):
        return v in (1, "1")
    raise _fail(path, "boolean", v)


def rate(d: Any, path: str) -> Rate:
    v = number(d, path)
    out = Rate.from_float(v)
    if out is None:
        raise _fail(path, "rate", v)
    return out


def wifescore_percent(d: Any, path: str) -> Wifescore:
    return Wifescore.from_percent(number(d, path))


def wifescore_proportion(d: Any, path: str) -> Wifescore:
    return Wifescore(number(d, path))


def _join(path: str, key: str) -> str:
    # "" addresses the object itself (v1 puts skillsets next to everything else)
    return f"{path}.{key}" if path else key


def _seven(d: Any, path: str) -> dict[str, float]:
    return {ss.value: number(d, _join(path, ss.eo_name)) for ss in Skillset7}


def chart_skillsets(d: Any, path: str) -> ChartSkillsets:
    return ChartSkillsets(**_seven(d, path))


def user_skillsets(d: Any, path: str) -> UserSkillsets:
    return UserSkillsets(**_seven(d, path))


def skillsets8(d: Any, path: str, overall_path: str | None = None) -> Skillsets8:
    overall = number(d, overall_path or _join(path, "Overall"))
    return Skillsets8(overall=overall, **_seven(d, path))


def judgements(d: Any, path: str) -> Judgements:
    return Judgements(
        marvelouses=integer(d, f"{path}.marvelous"),
        perfects=integer(d, f"{path}.perfect"),
        greats=integer(d, f"{path}.great"),
        goods=integer(d, f"{path}.good"),
        bads=integer(d, f"{path}.bad"),
        misses=integer(d, f"{path}.miss"),
        hit_mines=integer(d, f"{path}.hitMines"),
        held_holds=integer(d, f"{path}.heldHold"),
        let_go_holds=integer(d, f"{path}.letGoHold"),
        missed_holds=integer(d, f"{path}.missedHold"),
    )


__all__ = [
    "raw",
    "string",
    "string_maybe",
    "number",
    "integer",
    "boolean",
    "rate",
    "wifescore_percent",
    "wifescore_proportion",
    "chart_skillsets",
    "user_skillsets",
    "skillsets8",
    "judgements",
]
