from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _getenv_float(name: str, default: float) -> float:
    v = os.getenv(name, str(default)).strip()
    try:
        return float(v)
    except ValueError as err:
        raise ValueError(f"Environment variable {name} must be a number; got {v!r}") from err


def _getenv_str(name: str, default: str) -> str:
    return os.getenv(name, default).strip()


def _getenv_bool(name: str, default: bool) -> bool:
    """
    Read a loosely-typed boolean from the environment.

    Treats "1", "true", "yes", "on" (case-insensitive) as True;
    "0", "false", "no", "off", "" as False. If unset, returns default.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off", ""}:
        return False
    # Fallback: any other non-empty value -> True
    return True


# Load .env from project root if present
ROOT = Path(__file__).resolve().parents[1]
load_dotenv(ROOT / ".env", override=False)

CLIENT_NAME = "eoapi"
DEFAULT_USER_AGENT = f"{CLIENT_NAME}/0.3 (+https://etternaonline.com)"

# -------------------------------
# Endpoints
# -------------------------------
EO_V1_BASE_URL: str = _getenv_str("EO_V1_BASE_URL", "https://api.etternaonline.com/v1/")
EO_V2_BASE_URL: str = _getenv_str("EO_V2_BASE_URL", "https://api.etternaonline.com/v2/")

# -------------------------------
# Request pacing / timeouts (env-overridable)
# -------------------------------
# The EO server is brittle; 2s between requests is the documented courtesy gap
EO_REQUEST_COOLDOWN_SEC: float = _getenv_float("EO_REQUEST_COOLDOWN_SEC", 2.0)
# 0 disables the read timeout entirely
EO_REQUEST_TIMEOUT_SEC: float = _getenv_float("EO_REQUEST_TIMEOUT_SEC", 30.0)
EO_CONNECT_TIMEOUT_SEC: float = _getenv_float("EO_CONNECT_TIMEOUT_SEC", 5.0)
EO_USER_AGENT: str = _getenv_str("EO_USER_AGENT", DEFAULT_USER_AGENT)
# Log (warning) when a 2xx other than 200 comes back
EO_WARN_NON_200: bool = _getenv_bool("EO_WARN_NON_200", True)


@dataclass(frozen=True)
class ClientConfig:
    v1_base_url: str
    v2_base_url: str
    cooldown_sec: float
    timeout_sec: float | None  # None = wait forever
    connect_timeout_sec: float
    user_agent: str
    warn_non_200: bool


@dataclass(frozen=True)
class CredentialsConfig:
    """
    Login material for the two API generations.

    v2 logs in with username/password/client data and receives a bearer token;
    v1 authenticates every request with a static API key.
    """

    username: str
    password: str
    client_data: str
    api_key: str

    @property
    def has_login(self) -> bool:
        return bool(self.username and self.password)


@dataclass(frozen=True)
class AppConfig:
    client: ClientConfig
    credentials: CredentialsConfig


def _timeout_or_none(value: float) -> float | None:
    return value if value > 0 else None


def load_settings() -> AppConfig:
    """Re-read the environment and build a fresh AppConfig."""
    client = ClientConfig(
        v1_base_url=_getenv_str("EO_V1_BASE_URL", "https://api.etternaonline.com/v1/"),
        v2_base_url=_getenv_str("EO_V2_BASE_URL", "https://api.etternaonline.com/v2/"),
        cooldown_sec=max(0.0, _getenv_float("EO_REQUEST_COOLDOWN_SEC", 2.0)),
        timeout_sec=_timeout_or_none(_getenv_float("EO_REQUEST_TIMEOUT_SEC", 30.0)),
        connect_timeout_sec=_getenv_float("EO_CONNECT_TIMEOUT_SEC", 5.0),
        user_agent=_getenv_str("EO_USER_AGENT", DEFAULT_USER_AGENT),
        warn_non_200=_getenv_bool("EO_WARN_NON_200", True),
    )
    credentials = CredentialsConfig(
        username=_getenv_str("EO_USERNAME", ""),
        password=os.getenv("EO_PASSWORD", ""),
        client_data=_getenv_str("EO_CLIENT_DATA", ""),
        api_key=_getenv_str("EO_API_KEY", ""),
    )
    return AppConfig(client=client, credentials=credentials)


app_config: AppConfig = load_settings()

__all__ = [
    "ClientConfig",
    "CredentialsConfig",
    "AppConfig",
    "load_settings",
    "app_config",
    "DEFAULT_USER_AGENT",
    "EO_V1_BASE_URL",
    "EO_V2_BASE_URL",
    "EO_REQUEST_COOLDOWN_SEC",
    "EO_REQUEST_TIMEOUT_SEC",
    "EO_CONNECT_TIMEOUT_SEC",
    "EO_USER_AGENT",
    "EO_WARN_NON_200",
]
