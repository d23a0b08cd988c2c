# tests/test_config.py
from __future__ import annotations

import pytest

from eoapi import config


def test_defaults():
    cfg = config.load_settings()
    assert cfg.client.cooldown_sec == 2.0
    assert cfg.client.timeout_sec == 30.0
    assert cfg.client.v2_base_url.endswith("/v2/")
    assert "eoapi" in cfg.client.user_agent
    assert cfg.credentials.has_login is False


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("EO_REQUEST_COOLDOWN_SEC", "0.5")
    monkeypatch.setenv("EO_REQUEST_TIMEOUT_SEC", "0")
    monkeypatch.setenv("EO_WARN_NON_200", "off")
    monkeypatch.setenv("EO_USERNAME", "kangalioo")
    monkeypatch.setenv("EO_PASSWORD", "hunter2")

    cfg = config.load_settings()
    assert cfg.client.cooldown_sec == 0.5
    # 0 disables the timeout
    assert cfg.client.timeout_sec is None
    assert cfg.client.warn_non_200 is False
    assert cfg.credentials.has_login is True


def test_negative_cooldown_is_clamped(monkeypatch):
    monkeypatch.setenv("EO_REQUEST_COOLDOWN_SEC", "-1")
    assert config.load_settings().client.cooldown_sec == 0.0


def test_bad_number_is_reported(monkeypatch):
    monkeypatch.setenv("EO_REQUEST_COOLDOWN_SEC", "soon")
    with pytest.raises(ValueError, match="EO_REQUEST_COOLDOWN_SEC"):
        config.load_settings()


@pytest.mark.parametrize("raw,expected", [("1", True), ("YES", True), ("no", False), ("", False)])
def test_loose_booleans(monkeypatch, raw, expected):
    monkeypatch.setenv("EO_WARN_NON_200", raw)
    assert config.load_settings().client.warn_non_200 is expected
