# File: auth_api/core/config.py

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool

load_dotenv()

logger = logging.getLogger(__name__)


def _env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value not in (None, "") else default


def _env_secret() -> Optional[SecretStr]:
    value = os.getenv("SECRET")
    return SecretStr(value) if value else None


class Settings(BaseModel):
    model_config = ConfigDict(validate_default=True)

    # Basic app info
    PROJECT_NAME: str = "Auth API"
    VERSION: str = "0.1.0"

    environment: str = Field(default_factory=lambda: _env("APP_ENV", "").lower())
    api_prefix: str = Field(default_factory=lambda: _env("API_PREFIX", ""))
    log_level: str = Field(default_factory=lambda: _env("LOG_LEVEL", "INFO").upper())

    # CORS
    backend_cors_origins: List[str] = Field(
        default_factory=lambda: _env("CORS_ORIGINS", "*")
    )

    # Database
    database_url: str = Field(
        default_factory=lambda: _env("DATABASE_URL", "sqlite:///./auth.db")
    )

    # Security / auth. The signing secret has no in-code default.
    secret_key: Optional[SecretStr] = Field(default_factory=_env_secret)
    algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(
        default_factory=lambda: int(_env("TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    )
    password_hash_rounds: int = Field(
        default_factory=lambda: int(_env("PASSWORD_HASH_ROUNDS", "29000"))
    )

    @field_validator("backend_cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []

    @field_validator("api_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    def require_secret(self) -> str:
        """Return the raw signing secret, failing loudly when it is unset."""
        if self.secret_key is None or not self.secret_key.get_secret_value():
            raise RuntimeError("SECRET is not configured; refusing to sign tokens")
        return self.secret_key.get_secret_value()


@dataclass
class DatabaseOptions:
    """Everything `create_engine` needs, resolved from Settings."""

    url: str
    echo: bool = False
    connect_args: Dict[str, Any] = field(default_factory=dict)
    engine_kwargs: Dict[str, Any] = field(default_factory=dict)


def database_options(settings: Settings) -> DatabaseOptions:
    """
    Pick engine options for the configured environment.

      - test:        private in-memory SQLite shared across threads
      - production:  TLS to the remote database
      - development: SQL echo for debugging
      - anything else: log where we are connecting
    """
    env = settings.environment

    if env == "test":
        return DatabaseOptions(
            url="sqlite://",
            connect_args={"check_same_thread": False},
            engine_kwargs={"poolclass": StaticPool},
        )

    url = settings.database_url
    opts = DatabaseOptions(url=url)

    if url.startswith("sqlite"):
        opts.connect_args["check_same_thread"] = False

    if env == "production":
        if url.startswith("postgresql"):
            opts.connect_args["sslmode"] = "require"
    elif env == "development":
        opts.echo = True
    else:
        logger.info(
            "Connecting to %s",
            make_url(url).render_as_string(hide_password=True),
        )

    return opts


@lru_cache
def get_settings() -> Settings:
    return Settings()
