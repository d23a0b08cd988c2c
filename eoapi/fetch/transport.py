# eoapi/fetch/transport.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

import httpx

from eoapi import config

# --------------------------------------------------------------------------------------------------
# Results / Exceptions
# --------------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class TransportResponse:
    status: int
    body: bytes


class TransportError(RuntimeError):
    """Any failure below HTTP (connect, TLS, read) that is not a timeout."""


class TransportTimeout(TransportError):
    """The request did not complete within the configured timeout."""


class Transport(Protocol):
    def send(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        data: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> TransportResponse: ...


# --------------------------------------------------------------------------------------------------
# httpx implementation
# --------------------------------------------------------------------------------------------------


class HttpxTransport:
    """
    Small wrapper around httpx.Client that reduces responses to (status, body).

    Timeouts (connect, read, write, pool) surface as TransportTimeout; every other
    httpx.RequestError surfaces as TransportError. HTTP error statuses are not
    errors at this layer.
    """

    def __init__(
        self,
        *,
        user_agent: str | None = None,
        connect_timeout_s: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.user_agent = user_agent or config.EO_USER_AGENT
        self.connect_timeout_s = (
            config.EO_CONNECT_TIMEOUT_SEC if connect_timeout_s is None else connect_timeout_s
        )
        self._client = client or httpx.Client(
            headers={"User-Agent": self.user_agent, "Accept": "application/json"},
            follow_redirects=True,
        )

    def send(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        data: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> TransportResponse:
        try:
            resp = self._client.request(
                method,
                url,
                params=dict(params) if params else None,
                data=dict(data) if data else None,
                headers=dict(headers) if headers else None,
                timeout=httpx.Timeout(timeout, connect=self.connect_timeout_s),
            )
        except httpx.TimeoutException as exc:
            raise TransportTimeout(f"{method} {url} timed out") from exc
        except httpx.RequestError as exc:
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc
        return TransportResponse(status=int(resp.status_code), body=resp.content or b"")

    # ----------------------------------------------------------------------------------
    # Context manager
    # ----------------------------------------------------------------------------------

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = [
    "Transport",
    "TransportResponse",
    "TransportError",
    "TransportTimeout",
    "HttpxTransport",
]
