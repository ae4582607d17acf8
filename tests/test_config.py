# File: tests/test_config.py

import pytest
from sqlalchemy.pool import StaticPool

from auth_api.core.config import Settings, database_options


def test_test_environment_uses_memory_sqlite():
    opts = database_options(Settings(environment="test", database_url="postgresql+psycopg://u:p@db/x"))
    assert opts.url == "sqlite://"
    assert opts.engine_kwargs["poolclass"] is StaticPool
    assert opts.connect_args == {"check_same_thread": False}


def test_production_requires_tls():
    opts = database_options(
        Settings(environment="production", database_url="postgresql+psycopg://u:p@db/x")
    )
    assert opts.connect_args["sslmode"] == "require"
    assert opts.echo is False


def test_development_echoes_sql():
    opts = database_options(Settings(environment="development", database_url="sqlite:///./dev.db"))
    assert opts.echo is True
    assert opts.connect_args == {"check_same_thread": False}


def test_default_logs_masked_url(caplog):
    with caplog.at_level("INFO", logger="auth_api.core.config"):
        database_options(Settings(environment="", database_url="postgresql+psycopg://u:s3cret@db/x"))
    assert "db/x" in caplog.text
    assert "s3cret" not in caplog.text


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("SECRET", "env-secret")
    monkeypatch.setenv("APP_ENV", "Production")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example")
    monkeypatch.setenv("API_PREFIX", "api/")
    monkeypatch.setenv("TOKEN_EXPIRE_MINUTES", "5")

    s = Settings()
    assert s.require_secret() == "env-secret"
    assert s.environment == "production"
    assert s.backend_cors_origins == ["http://a.example", "http://b.example"]
    assert s.api_prefix == "/api"
    assert s.access_token_expire_minutes == 5


def test_missing_secret_refused(monkeypatch):
    monkeypatch.delenv("SECRET", raising=False)
    with pytest.raises(RuntimeError):
        Settings().require_secret()
