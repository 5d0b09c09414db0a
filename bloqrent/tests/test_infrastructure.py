from __future__ import annotations

import logging

import pytest
from sqlalchemy.pool import StaticPool

from bloqrent.infrastructure.config import Settings
from bloqrent.infrastructure.database import build_engine
from bloqrent.infrastructure.logging import configure_logging


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BLOQRENT_DATABASE_URL", "sqlite+pysqlite:///./bloqrent.db")
    monkeypatch.setenv("BLOQRENT_LOG_LEVEL", "DEBUG")

    settings = Settings()

    assert settings.database_url == "sqlite+pysqlite:///./bloqrent.db"
    assert settings.log_level == "DEBUG"
    assert settings.openapi_path.name == "openapi.yaml"
    assert settings.openapi_path.exists()


def test_sqlite_engine_shares_one_connection() -> None:
    engine = build_engine("sqlite+pysqlite:///:memory:")
    try:
        assert isinstance(engine.pool, StaticPool)
    finally:
        engine.dispose()


def test_configure_logging_sets_root_level_and_quiets_configured_loggers() -> None:
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("debug", ["bloqrent.tests.chatty"])

        assert root.level == logging.DEBUG
        assert logging.getLogger("bloqrent.tests.chatty").level == logging.WARNING
    finally:
        root.setLevel(previous)


def test_quiet_loggers_come_from_the_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BLOQRENT_QUIET_LOGGERS", '["httpx"]')

    assert Settings().quiet_loggers == ["httpx"]
    assert "sqlalchemy.engine" in Settings.model_fields["quiet_loggers"].default
