"""
Client core for the EtternaOnline scoring service.

Sessions for the two API generations live in eoapi.v1 and eoapi.v2; the pieces
they are built from (rate gate, single-flight authorization, request pipeline,
replay parser, rescoring and rating math) are importable on their own.
"""

from .exceptions import (
    ApiError,
    EmptyResponse,
    ErrorKind,
    EtternaOnlineError,
    InvalidReplayEncoding,
    MalformedEnvelope,
    NetworkError,
    RequestTimeout,
    ServiceUnavailable,
    UnauthorizedExhausted,
    UnexpectedResponse,
    UnknownApiError,
)
from .models import (
    ChartSkillsets,
    Difficulty,
    FileSize,
    Judgements,
    Rate,
    Skillset7,
    Skillset8,
    Skillsets8,
    UserSkillsets,
    Wifescore,
)
from .replay import Replay, ReplayNote, parse_replay
from .scoring import rescore

__version__ = "0.3.0"

__all__ = [
    "__version__",
    "EtternaOnlineError",
    "RequestTimeout",
    "NetworkError",
    "ServiceUnavailable",
    "UnauthorizedExhausted",
    "EmptyResponse",
    "MalformedEnvelope",
    "InvalidReplayEncoding",
    "UnexpectedResponse",
    "ErrorKind",
    "ApiError",
    "UnknownApiError",
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
    "Replay",
    "ReplayNote",
    "parse_replay",
    "rescore",
]
