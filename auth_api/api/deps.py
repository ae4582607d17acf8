# File: auth_api/api/deps.py

import enum
import logging
from collections.abc import Generator
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from auth_api.core.errors import AuthError
from auth_api.core.security import PasswordHasher, TokenIssuer
from auth_api.models.user import User
from auth_api.services.auth_service import (
    BASIC_SCHEME,
    AuthResult,
    authenticate_basic,
    authenticate_bearer,
    split_scheme,
)

logger = logging.getLogger(__name__)

INVALID_LOGIN = "Invalid Login"


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


class GateState(str, enum.Enum):
    BASIC = "basic"
    BEARER = "bearer"
    REJECT = "reject"


def inspect_scheme(authorization: Optional[str]) -> GateState:
    """Choose a verifier from the Authorization header, before any decoding."""
    if not authorization or not authorization.strip():
        return GateState.REJECT
    scheme, _ = split_scheme(authorization)
    if scheme == BASIC_SCHEME:
        return GateState.BASIC
    # Bearer tokens are accepted with or without the scheme prefix.
    return GateState.BEARER


def _reject(request: Request, reason: str) -> HTTPException:
    logger.info(
        "Rejected %s %s: %s",
        request.method,
        request.url.path,
        reason,
    )
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=INVALID_LOGIN)


class BasicAuthGate:
    """Dependency that admits a request only with valid Basic credentials."""

    def __call__(
        self,
        request: Request,
        db: Session = Depends(get_db),
        hasher: PasswordHasher = Depends(get_password_hasher),
    ) -> User:
        authorization = request.headers.get("Authorization")
        state = inspect_scheme(authorization)
        if state is not GateState.BASIC:
            raise _reject(request, f"scheme_{state.value}")

        try:
            user = authenticate_basic(db, authorization, hasher=hasher)
        except AuthError as exc:
            raise _reject(request, exc.reason)

        request.state.user = user
        return user


class BearerAuthGate:
    """Dependency that admits a request only with a valid bearer token."""

    def __call__(
        self,
        request: Request,
        db: Session = Depends(get_db),
        tokens: TokenIssuer = Depends(get_token_issuer),
    ) -> AuthResult:
        authorization = request.headers.get("Authorization")
        state = inspect_scheme(authorization)
        if state is not GateState.BEARER:
            raise _reject(request, f"scheme_{state.value}")

        try:
            result = authenticate_bearer(db, authorization, tokens=tokens)
        except AuthError as exc:
            raise _reject(request, exc.reason)

        request.state.user = result.user
        request.state.token = result.token
        return result


basic_auth = BasicAuthGate()
bearer_auth = BearerAuthGate()
