# eoapi/v2/session.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from eoapi import config
from eoapi import mapping as m
from eoapi.auth.manager import AuthorizationManager
from eoapi.exceptions import V2_ERROR_TITLES, UnexpectedResponse
from eoapi.fetch.pipeline import RequestPipeline
from eoapi.fetch.throttle import RateGate
from eoapi.fetch.transport import HttpxTransport, Transport
from eoapi.models import ChartSkillsets, Judgements, Rate, Skillsets8
from eoapi.replay.models import Replay
from eoapi.replay.parse import parse_replay
from eoapi.scoring.wife import Wifescore

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------------------------------
# Results
# --------------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class UserDetails:
    username: str
    about_me: str
    is_moderator: bool
    is_patreon: bool
    avatar_url: str
    country_code: str
    player_rating: float
    default_modifiers: str | None
    rating: Skillsets8


@dataclass(frozen=True)
class ScoreUser:
    username: str
    avatar: str
    country_code: str
    overall_rating: float


@dataclass(frozen=True)
class ScoreData:
    scorekey: str
    modifiers: str
    ssr: ChartSkillsets
    wifescore: Wifescore
    rate: Rate
    max_combo: int
    is_valid: bool
    has_chord_cohesion: bool
    judgements: Judgements
    replay: Replay | None
    user: ScoreUser
    song_name: str
    artist: str
    song_id: int


@dataclass(frozen=True)
class ChartLeaderboardScore:
    scorekey: str
    ssr: ChartSkillsets
    wifescore: Wifescore
    rate: Rate
    max_combo: int
    is_valid: bool
    has_chord_cohesion: bool
    datetime: str
    modifiers: str
    has_replay: bool
    judgements: Judgements
    user: ScoreUser


# --------------------------------------------------------------------------------------------------
# Session
# --------------------------------------------------------------------------------------------------


class Session:
    """
    v2 API session. Logs in with username/password and keeps the bearer token fresh.

    Expired tokens are handled transparently: the pipeline logs in again once and
    re-issues the request. Requests are spaced `cooldown` seconds apart across all
    threads using this session; the server is brittle, so keep that gap generous.

    Usage:
        from eoapi.v2 import Session
        session = Session.new_from_login("<USERNAME>", "<PASSWORD>", "<CLIENT_DATA>")
        details = session.user_details("kangalioo")
    """

    def __init__(
        self,
        username: str,
        password: str,
        client_data: str,
        *,
        cooldown: float | None = None,
        timeout: float | None = None,
        transport: Transport | None = None,
        base_url: str | None = None,
    ) -> None:
        # Needed again on every re-login
        self._username = username
        self._password = password
        self._client_data = client_data

        cfg = config.load_settings().client
        self.authorization = AuthorizationManager()
        self.pipeline = RequestPipeline(
            base_url or cfg.v2_base_url,
            transport
            or HttpxTransport(user_agent=cfg.user_agent, connect_timeout_s=cfg.connect_timeout_sec),
            RateGate(cfg.cooldown_sec if cooldown is None else cooldown),
            self.authorization,
            login_fn=self._login_request,
            timeout=cfg.timeout_sec if timeout is None else timeout,
            warn_non_200=cfg.warn_non_200,
            error_titles=V2_ERROR_TITLES,
        )

    @classmethod
    def new_from_login(
        cls,
        username: str,
        password: str,
        client_data: str,
        **kwargs: Any,
    ) -> Session:
        """Create a session and log in immediately (raises ApiError(INVALID_LOGIN) on bad credentials)."""
        session = cls(username, password, client_data, **kwargs)
        session.login()
        return session

    # ----------------------------------------------------------------------------------
    # Auth
    # ----------------------------------------------------------------------------------

    def _login_request(self) -> str:
        data = self.pipeline.post(
            "login",
            data={
                "username": self._username,
                "password": self._password,
                "clientData": self._client_data,
            },
            authorize=False,
        )
        logger.info("logged in as %s", self._username)
        return m.string(data, "attributes.accessToken")

    def login(self) -> None:
        self.authorization.refresh(self._login_request)

    # ----------------------------------------------------------------------------------
    # Endpoints
    # ----------------------------------------------------------------------------------

    def user_details(self, username: str) -> UserDetails:
        """Profile of the given user. Raises ApiError(USER_NOT_FOUND) for unknown names."""
        data = self.pipeline.get(f"user/{username}")
        a = m.raw(data, "attributes")
        return UserDetails(
            username=m.string(a, "userName"),
            about_me=m.string(a, "aboutMe"),
            is_moderator=m.boolean(a, "moderator"),
            is_patreon=m.boolean(a, "patreon"),
            avatar_url=m.string(a, "avatar"),
            country_code=m.string(a, "countryCode"),
            player_rating=m.number(a, "playerRating"),
            default_modifiers=m.string_maybe(a, "defaultModifiers") or None,
            rating=m.skillsets8(a, "skillsets", overall_path="playerRating"),
        )

    def score_data(self, scorekey: str) -> ScoreData:
        """
        Metadata and replay of one score. Raises ApiError(SCORE_NOT_FOUND) for unknown
        keys, InvalidReplayEncoding if the embedded replay is broken.
        """
        data = self.pipeline.get(f"score/{scorekey}")
        a = m.raw(data, "attributes")
        return ScoreData(
            scorekey=m.string(data, "id"),
            modifiers=m.string(a, "modifiers"),
            ssr=m.chart_skillsets(a, "skillsets"),
            wifescore=m.wifescore_proportion(a, "wife"),
            rate=m.rate(a, "rate"),
            max_combo=m.integer(a, "maxCombo"),
            is_valid=m.boolean(a, "valid"),
            has_chord_cohesion=not m.boolean(a, "nocc"),
            judgements=m.judgements(a, "judgements"),
            replay=parse_replay(a.get("replay") if isinstance(a, dict) else None),
            user=ScoreUser(
                username=m.string(a, "user.username"),
                avatar=m.string(a, "user.avatar"),
                country_code=m.string(a, "user.countryCode"),
                overall_rating=m.number(a, "user.Overall"),
            ),
            song_name=m.string(a, "song.songName"),
            artist=m.string(a, "song.artist"),
            song_id=m.integer(a, "song.id"),
        )

    def chart_leaderboard(self, chartkey: str) -> list[ChartLeaderboardScore]:
        """Leaderboard of a chart. Raises ApiError(CHART_NOT_TRACKED) for unknown charts."""
        data = self.pipeline.get(f"charts/{chartkey}/leaderboards")
        if not isinstance(data, list):
            raise UnexpectedResponse(f"leaderboard: expected an array, found {type(data).__name__}")
        out: list[ChartLeaderboardScore] = []
        for entry in data:
            a = m.raw(entry, "attributes")
            out.append(
                ChartLeaderboardScore(
                    scorekey=m.string(entry, "id"),
                    ssr=m.chart_skillsets(a, "skillsets"),
                    wifescore=m.wifescore_percent(a, "wife"),
                    rate=m.rate(a, "rate"),
                    max_combo=m.integer(a, "maxCombo"),
                    is_valid=m.boolean(a, "valid"),
                    has_chord_cohesion=not m.boolean(a, "noCC"),
                    datetime=m.string(a, "datetime"),
                    modifiers=m.string(a, "modifiers"),
                    has_replay=m.boolean(a, "hasReplay"),
                    judgements=m.judgements(a, "judgements"),
                    user=ScoreUser(
                        username=m.string(a, "user.userName"),
                        avatar=m.string(a, "user.avatar"),
                        country_code=m.string(a, "user.countryCode"),
                        overall_rating=m.number(a, "user.playerRating"),
                    ),
                )
            )
        return out


__all__ = [
    "Session",
    "UserDetails",
    "ScoreUser",
    "ScoreData",
    "ChartLeaderboardScore",
]
