# eoapi/fetch/__init__.py
"""
Request side of the client: politeness throttling, the transport seam, and the pipeline.

Public entry points:
  - RateGate               (global minimum spacing between request starts)
  - Transport, HttpxTransport, TransportResponse, TransportError, TransportTimeout
  - RequestPipeline        (rate limit → send → classify → re-login once on Unauthorized)
"""

from .pipeline import (
    REAUTH_BUDGET,
    RequestPipeline,
)
from .throttle import RateGate
from .transport import (
    HttpxTransport,
    Transport,
    TransportError,
    TransportResponse,
    TransportTimeout,
)

__all__ = [
    # throttle
    "RateGate",
    # transport
    "Transport",
    "TransportResponse",
    "TransportError",
    "TransportTimeout",
    "HttpxTransport",
    # pipeline
    "RequestPipeline",
    "REAUTH_BUDGET",
]
