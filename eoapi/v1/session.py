# eoapi/v1/session.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from eoapi import config
from eoapi import mapping as m
from eoapi.exceptions import V1_ERROR_MESSAGES, UnexpectedResponse
from eoapi.fetch.pipeline import RequestPipeline
from eoapi.fetch.throttle import RateGate
from eoapi.fetch.transport import HttpxTransport, Transport
from eoapi.models import ChartSkillsets, Judgements, Rate, UserSkillsets
from eoapi.replay.models import Replay
from eoapi.replay.parse import parse_replay
from eoapi.scoring.wife import Wifescore


@dataclass(frozen=True)
class User:
    username: str
    avatar: str
    country_code: str
    rating: float


@dataclass(frozen=True)
class Song:
    name: str
    artist: str
    id: int


@dataclass(frozen=True)
class ScoreData:
    ssr: ChartSkillsets
    wifescore: Wifescore
    max_combo: int
    is_valid: bool
    modifiers: str
    judgements: Judgements
    datetime: str
    has_chord_cohesion: bool
    rate: Rate
    user: User
    replay: Replay | None
    song: Song


@dataclass(frozen=True)
class UserData:
    user_name: str
    about_me: str
    country_code: str
    is_moderator: bool
    avatar: str
    default_modifiers: str | None
    rating: UserSkillsets
    is_patreon: bool


def _judgements(d: Any) -> Judgements:
    # v1 spells these differently from v2
    return Judgements(
        marvelouses=m.integer(d, "marv"),
        perfects=m.integer(d, "perfect"),
        greats=m.integer(d, "great"),
        goods=m.integer(d, "good"),
        bads=m.integer(d, "bad"),
        misses=m.integer(d, "miss"),
        hit_mines=m.integer(d, "hitmine"),
        held_holds=m.integer(d, "held"),
        let_go_holds=m.integer(d, "letgo"),
        missed_holds=m.integer(d, "missedhold"),
    )


class Session:
    """
    v1 API session, authenticated by a static API key sent with every request.

    v1 reports most failures as {"error": "..."} inside a 200 response; those are
    mapped onto ApiError like v2's error titles. There is no login, so an
    Unauthorized is never retried here.
    """

    def __init__(
        self,
        api_key: str,
        *,
        cooldown: float | None = None,
        timeout: float | None = None,
        transport: Transport | None = None,
        base_url: str | None = None,
    ) -> None:
        self.api_key = api_key
        cfg = config.load_settings().client
        self.pipeline = RequestPipeline(
            base_url or cfg.v1_base_url,
            transport
            or HttpxTransport(user_agent=cfg.user_agent, connect_timeout_s=cfg.connect_timeout_sec),
            RateGate(cfg.cooldown_sec if cooldown is None else cooldown),
            timeout=cfg.timeout_sec if timeout is None else timeout,
            warn_non_200=cfg.warn_non_200,
            error_titles=V1_ERROR_MESSAGES,
            errors_in_body=True,
        )

    def _request(self, path: str, **params: str) -> Any:
        params["api_key"] = self.api_key
        return self.pipeline.get(path, params=params, authorize=False, unwrap_data=False)

    def score_data(self, scorekey: str) -> ScoreData:
        """Raises ApiError(SCORE_NOT_FOUND) for unknown keys."""
        json = self._request("score", key=scorekey)
        if not isinstance(json, list) or len(json) != 1:
            raise UnexpectedResponse(f"score: expected an array with a single item, found {json!r:.100}")
        d = json[0]
        return ScoreData(
            ssr=m.chart_skillsets(d, ""),
            wifescore=m.wifescore_proportion(d, "wifescore"),
            max_combo=m.integer(d, "maxcombo"),
            is_valid=m.boolean(d, "valid"),
            modifiers=m.string(d, "modifiers"),
            judgements=_judgements(d),
            datetime=m.string(d, "datetime"),
            has_chord_cohesion=not m.boolean(d, "nocc"),
            rate=m.rate(d, "user_chart_rate_rate"),
            user=User(
                username=m.string(d, "username"),
                avatar=m.string(d, "avatar"),
                country_code=m.string(d, "countrycode"),
                rating=m.number(d, "player_rating"),
            ),
            replay=parse_replay(d.get("replay") if isinstance(d, dict) else None),
            song=Song(
                name=m.string(d, "songname"),
                artist=m.string(d, "artist"),
                id=m.integer(d, "id"),
            ),
        )

    def user_data(self, username: str) -> UserData:
        """Raises ApiError(USER_NOT_FOUND) for unknown names."""
        d = self._request("user_data", username=username)
        patreon = d.get("Patreon") if isinstance(d, dict) else None
        return UserData(
            user_name=m.string(d, "username"),
            about_me=m.string(d, "aboutme"),
            country_code=m.string(d, "countrycode"),
            is_moderator=m.boolean(d, "moderator"),
            avatar=m.string(d, "avatar"),
            default_modifiers=m.string_maybe(d, "default_modifiers"),
            rating=m.user_skillsets(d, ""),
            is_patreon=False if patreon is None else m.boolean(d, "Patreon"),
        )


__all__ = ["Session", "ScoreData", "UserData", "User", "Song"]
