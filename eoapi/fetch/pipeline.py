# eoapi/fetch/pipeline.py
from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any

from eoapi import config
from eoapi.auth.manager import AuthorizationManager
from eoapi.exceptions import (
    V2_ERROR_TITLES,
    EmptyResponse,
    ErrorKind,
    MalformedEnvelope,
    NetworkError,
    RequestTimeout,
    ServiceUnavailable,
    UnauthorizedExhausted,
    dispatch_error_title,
)

from .throttle import RateGate
from .transport import Transport, TransportError, TransportTimeout

logger = logging.getLogger(__name__)

UNAUTHORIZED_TITLE = "Unauthorized"
# Fresh logins allowed per logical request before an Unauthorized is surfaced
REAUTH_BUDGET = 1


def _error_title(envelope: Any) -> str:
    # v1 sends {"error": "..."}, v2 {"errors": [{"title": "..."}]}
    if isinstance(envelope, dict) and isinstance(envelope.get("error"), str):
        return envelope["error"]
    try:
        title = envelope["errors"][0]["title"]
    except (KeyError, IndexError, TypeError) as exc:
        raise MalformedEnvelope(f"error response without errors[0].title: {envelope!r:.100}") from exc
    if not isinstance(title, str):
        raise MalformedEnvelope(f"error title is not a string: {title!r:.100}")
    return title


class RequestPipeline:
    """
    Executes one logical request against the API.

    Flow (per attempt):
      1) rate_gate.wait_turn()
      2) attach "Bearer <token>" from a credential snapshot (if authorize=True)
      3) transport.send
      4) timeout → RequestTimeout; other transport failure → NetworkError
         5xx → ServiceUnavailable; empty body → EmptyResponse; not JSON → MalformedEnvelope
      5) 4xx "Unauthorized" → refresh login once, back to (1); a second one raises
         UnauthorizedExhausted. Any other 4xx title (or v1 "error" member) → static
         ErrorKind table. With errors_in_body=True a 2xx {"error": ...} is dispatched too.

    The pipeline keeps no mutable state; share one RateGate/AuthorizationManager
    between threads and call request() from as many of them as needed.
    """

    def __init__(
        self,
        base_url: str,
        transport: Transport,
        rate_gate: RateGate,
        auth: AuthorizationManager | None = None,
        *,
        login_fn: Callable[[], str] | None = None,
        timeout: float | None = None,
        error_titles: Mapping[str, ErrorKind] = V2_ERROR_TITLES,
        warn_non_200: bool | None = None,
        errors_in_body: bool = False,
    ) -> None:
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.transport = transport
        self.rate_gate = rate_gate
        self.auth = auth
        self.login_fn = login_fn
        self.timeout = timeout
        self.error_titles = dict(error_titles)
        self.warn_non_200 = config.EO_WARN_NON_200 if warn_non_200 is None else warn_non_200
        self.errors_in_body = errors_in_body

    def url_for(self, path: str) -> str:
        return self.base_url + path.lstrip("/")

    # ----------------------------------------------------------------------------------
    # Core request
    # ----------------------------------------------------------------------------------

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        data: Mapping[str, str] | None = None,
        authorize: bool = True,
        unwrap_data: bool = True,
    ) -> Any:
        """
        Run one logical request and return the decoded payload.

        With unwrap_data=True (v2 envelopes) the envelope's "data" member is returned;
        otherwise the whole JSON document.
        """
        url = self.url_for(path)
        reauth_left = REAUTH_BUDGET
        while True:
            self.rate_gate.wait_turn()

            headers: dict[str, str] = {}
            seen_epoch = None
            if authorize:
                if self.auth is None:
                    raise RuntimeError("authorization requested but no AuthorizationManager set")
                credential, seen_epoch = self.auth.snapshot()
                if credential is None:
                    raise RuntimeError("authorization requested before any login")
                headers["Authorization"] = f"Bearer {credential}"

            logger.debug("%s %s", method, url)
            try:
                resp = self.transport.send(
                    method,
                    url,
                    params=params,
                    data=data,
                    headers=headers,
                    timeout=self.timeout,
                )
            except TransportTimeout as exc:
                raise RequestTimeout() from exc
            except TransportError as exc:
                raise NetworkError(str(exc)) from exc

            status = resp.status
            # On 5xx the server often sends an empty or HTML body; don't look at it
            if status >= 500:
                raise ServiceUnavailable(status)

            if not resp.body or not resp.body.strip():
                raise EmptyResponse()

            try:
                envelope = json.loads(resp.body)
            except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                raise MalformedEnvelope(f"response is not JSON ({exc})") from exc

            if status >= 400:
                title = _error_title(envelope)
                if title != UNAUTHORIZED_TITLE:
                    raise dispatch_error_title(title, self.error_titles)
                if not authorize or self.auth is None or self.login_fn is None or reauth_left <= 0:
                    raise UnauthorizedExhausted()
                reauth_left -= 1
                logger.warning("%s %s: token rejected; logging in again", method, path)
                self.auth.refresh(self.login_fn, seen_epoch=seen_epoch)
                continue

            # v1 reports most failures inside a 200 response
            if self.errors_in_body and isinstance(envelope, dict):
                if isinstance(envelope.get("error"), str):
                    raise dispatch_error_title(envelope["error"], self.error_titles)

            if status != 200 and self.warn_non_200:
                logger.warning("%s %s: unexpected status code %d", method, path, status)

            if not unwrap_data:
                return envelope
            if not isinstance(envelope, dict) or "data" not in envelope:
                raise MalformedEnvelope(f"response without a data member: {envelope!r:.100}")
            return envelope["data"]

    # ----------------------------------------------------------------------------------
    # Convenience methods
    # ----------------------------------------------------------------------------------

    def get(self, path: str, **kwargs: Any) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> Any:
        return self.request("POST", path, **kwargs)


__all__ = ["RequestPipeline", "REAUTH_BUDGET", "UNAUTHORIZED_TITLE"]
