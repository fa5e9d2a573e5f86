"""
Tests for environment-driven settings.
"""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from worktally import config


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda *a, **kw: False)
    for name in ("BOT_TOKEN", "OWNER_TELEGRAM_ID", "DB_PATH", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_load_settings_defaults(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    monkeypatch.setenv("OWNER_TELEGRAM_ID", "42")

    settings = config.load_settings()

    assert settings.owner_telegram_id == 42
    assert settings.db_path == Path("data/worktally.db")
    assert settings.log_level == logging.INFO


def test_log_level_from_env(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    monkeypatch.setenv("OWNER_TELEGRAM_ID", "42")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    assert config.load_settings().log_level == logging.DEBUG


@pytest.mark.parametrize(
    "env",
    [
        {"OWNER_TELEGRAM_ID": "42"},
        {"BOT_TOKEN": "123:abc"},
        {"BOT_TOKEN": "123:abc", "OWNER_TELEGRAM_ID": "nope"},
        {"BOT_TOKEN": "123:abc", "OWNER_TELEGRAM_ID": "42", "LOG_LEVEL": "LOUD"},
    ],
)
def test_missing_or_invalid_settings(monkeypatch, env):
    for k, v in env.items():
        monkeypatch.setenv(k, v)

    with pytest.raises(RuntimeError):
        config.load_settings()
