# eoapi/exceptions.py
"""
Shared exception classes used across the client.

Every failure the library raises derives from EtternaOnlineError so callers can
catch one type. Kinds map onto the situations a request or a replay parse can end in:

  - transport:   RequestTimeout, NetworkError
  - server:      ServiceUnavailable, EmptyResponse, MalformedEnvelope
  - auth:        UnauthorizedExhausted
  - domain:      ApiError (static title table), UnknownApiError
  - payload:     InvalidReplayEncoding, UnexpectedResponse
"""

from __future__ import annotations

import enum

# HTTP statuses the service (and its CDN) use when it is down for maintenance or overloaded
DEGRADED_STATUSES = frozenset({503, 521, 525})


class EtternaOnlineError(Exception):
    """Base class for every error raised by eoapi."""


class RequestTimeout(EtternaOnlineError):
    """The transport gave up waiting for the server. Never retried automatically."""

    def __init__(self, message: str = "Server timed out") -> None:
        super().__init__(message)


class NetworkError(EtternaOnlineError):
    """Any transport-level failure that is not a timeout (DNS, reset connection, TLS...)."""


class ServiceUnavailable(EtternaOnlineError):
    """
    The server answered with a 5xx status.

    `degraded` is True for the statuses the service uses for planned or CDN-level
    outages (503/521/525); other 5xx are plain internal errors.
    """

    def __init__(self, status: int) -> None:
        self.status = int(status)
        self.degraded = self.status in DEGRADED_STATUSES
        kind = "degraded" if self.degraded else "internal error"
        super().__init__(f"Internal web server error (HTTP {self.status}, {kind})")


class UnauthorizedExhausted(EtternaOnlineError):
    """The server rejected the credential again right after a fresh login."""

    def __init__(self, message: str = "Unauthorized after re-login") -> None:
        super().__init__(message)


class EmptyResponse(EtternaOnlineError):
    """The server responded with an empty body (distinct from an empty JSON object)."""

    def __init__(self, message: str = "Server response was empty") -> None:
        super().__init__(message)


class MalformedEnvelope(EtternaOnlineError):
    """The outer response body could not be parsed as the expected JSON envelope."""


class InvalidReplayEncoding(EtternaOnlineError):
    """A replay was present but its note log could not be decoded."""


class UnexpectedResponse(EtternaOnlineError):
    """A field the mapper needed was absent or had the wrong type."""


class ErrorKind(enum.Enum):
    USER_NOT_FOUND = "User not found"
    INVALID_LOGIN = "Username and password combination not found"
    SCORE_NOT_FOUND = "Score not found"
    SONG_NOT_FOUND = "Song not found"
    CHART_NOT_TRACKED = "Chart not tracked"
    CHART_ALREADY_FAVORITED = "Favorite already exists"
    DATABASE_ERROR = "Database error"
    GOAL_ALREADY_EXISTS = "Goal already exists"
    CHART_ALREADY_ADDED = "Chart already exists"
    INVALID_XML = "The uploaded file is not a valid XML file"
    NO_USERS_FOUND = "No users registered"


class ApiError(EtternaOnlineError):
    """A recognized error title from the service, mapped to an ErrorKind."""

    def __init__(self, kind: ErrorKind) -> None:
        self.kind = kind
        super().__init__(kind.value)


class UnknownApiError(EtternaOnlineError):
    """The service returned an error title that is not in the static table."""

    def __init__(self, title: str) -> None:
        self.title = title
        super().__init__(f"Server responded with an unrecognized error message ({title})")


# v2 envelopes: {"errors": [{"title": "..."}]}
V2_ERROR_TITLES: dict[str, ErrorKind] = {
    "Score not found": ErrorKind.SCORE_NOT_FOUND,
    "Chart not tracked": ErrorKind.CHART_NOT_TRACKED,
    "User not found": ErrorKind.USER_NOT_FOUND,
    "Favorite already exists": ErrorKind.CHART_ALREADY_FAVORITED,
    "Database error": ErrorKind.DATABASE_ERROR,
    "Goal already exist": ErrorKind.GOAL_ALREADY_EXISTS,
    "Chart already exists": ErrorKind.CHART_ALREADY_ADDED,
    "Malformed XML file": ErrorKind.INVALID_XML,
    "No users found": ErrorKind.NO_USERS_FOUND,
    "Username and password combination not found": ErrorKind.INVALID_LOGIN,
}

# v1 envelopes: {"error": "..."} (typos are the server's)
V1_ERROR_MESSAGES: dict[str, ErrorKind] = {
    "Chart not tracked": ErrorKind.CHART_NOT_TRACKED,
    "Sepcify a username": ErrorKind.USER_NOT_FOUND,
    "User not found": ErrorKind.USER_NOT_FOUND,
    "Could not find scores for that user": ErrorKind.USER_NOT_FOUND,
    "No users for specified country": ErrorKind.NO_USERS_FOUND,
    "Score not found": ErrorKind.SCORE_NOT_FOUND,
}


def dispatch_error_title(title: str, table: dict[str, ErrorKind]) -> EtternaOnlineError:
    """Map a server error title onto an exception instance (not raised)."""
    kind = table.get(title)
    if kind is None:
        return UnknownApiError(title)
    return ApiError(kind)


__all__ = [
    "DEGRADED_STATUSES",
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
    "V2_ERROR_TITLES",
    "V1_ERROR_MESSAGES",
    "dispatch_error_title",
]
