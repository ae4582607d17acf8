"""
Shared pytest fixtures.

Every app built here uses the `test` environment: a private in-memory
SQLite database per application, and a low hashing work factor.
"""

import base64

import pytest
from fastapi.testclient import TestClient

from auth_api.core.config import Settings
from auth_api.core.security import PasswordHasher, TokenIssuer
from auth_api.db.init_db import init_db
from auth_api.db.session import build_engine, build_session_factory
from auth_api.main import create_application

TEST_SECRET = "test-signing-secret-0123456789abcdef"


def basic_header(username: str, password: str) -> str:
    raw = f"{username}:{password}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="test",
        secret_key=TEST_SECRET,
        password_hash_rounds=1000,
        access_token_expire_minutes=60,
        backend_cors_origins="*",
        api_prefix="",
    )


@pytest.fixture
def hasher(settings) -> PasswordHasher:
    return PasswordHasher(rounds=settings.password_hash_rounds)


@pytest.fixture
def issuer() -> TokenIssuer:
    return TokenIssuer(TEST_SECRET, expires_minutes=60)


@pytest.fixture
def db(settings):
    engine = build_engine(settings)
    init_db(engine)
    SessionLocal = build_session_factory(engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def app(settings):
    return create_application(settings)


@pytest.fixture
def client(app):
    # Entering the context runs the lifespan, which creates the tables.
    with TestClient(app) as c:
        yield c
