# File: auth_api/services/auth_service.py

"""
Basic and Bearer credential verification.

Both verifiers raise a subclass of AuthError on any failure. Callers must
not expose which subclass it was: the gate in api/deps turns all of them
into one rejection.
"""

import base64
import binascii
from dataclasses import dataclass
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from auth_api.core.errors import (
    BadPassword,
    MalformedCredentials,
    MissingCredentials,
    UnknownUser,
)
from auth_api.core.security import PasswordHasher, TokenIssuer
from auth_api.models.user import User
from auth_api.services.user_store import get_user_by_username

BASIC_SCHEME = "basic"
BEARER_SCHEME = "bearer"


@dataclass(frozen=True)
class AuthResult:
    user: User
    token: str


def split_scheme(authorization: Optional[str]) -> Tuple[Optional[str], str]:
    """
    Split an Authorization header into (scheme, rest).

    The scheme is lower-cased and only returned when it is one we know;
    otherwise the whole stripped value comes back as `rest`.
    """
    value = (authorization or "").strip()
    head, _, tail = value.partition(" ")
    if head.lower() in (BASIC_SCHEME, BEARER_SCHEME):
        return head.lower(), tail.strip()
    return None, value


def parse_basic_credentials(authorization: Optional[str]) -> Tuple[str, str]:
    if not authorization or not authorization.strip():
        raise MissingCredentials()

    scheme, payload = split_scheme(authorization)
    if scheme != BASIC_SCHEME or not payload or " " in payload:
        raise MalformedCredentials("basic_payload_missing")

    try:
        decoded = base64.b64decode(payload, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise MalformedCredentials("basic_payload_undecodable")

    if decoded.count(":") != 1:
        raise MalformedCredentials("basic_payload_separator")
    username, password = decoded.split(":")
    if not username:
        raise MalformedCredentials("basic_payload_username_blank")
    return username, password


def extract_bearer_token(authorization: Optional[str]) -> str:
    if not authorization or not authorization.strip():
        raise MissingCredentials()

    scheme, token = split_scheme(authorization)
    if scheme == BASIC_SCHEME:
        raise MalformedCredentials("bearer_got_basic")
    if not token:
        raise MalformedCredentials("bearer_token_missing")
    return token


def authenticate_basic(
    db: Session,
    authorization: Optional[str],
    *,
    hasher: PasswordHasher,
) -> User:
    username, password = parse_basic_credentials(authorization)

    user = get_user_by_username(db, username)
    if user is None:
        hasher.dummy_verify(password)
        raise UnknownUser()

    if not hasher.verify(password, user.password_hash):
        raise BadPassword()
    return user


def authenticate_bearer(
    db: Session,
    authorization: Optional[str],
    *,
    tokens: TokenIssuer,
) -> AuthResult:
    token = extract_bearer_token(authorization)
    username = tokens.verify(token)

    user = get_user_by_username(db, username)
    if user is None:
        # Signed by us, but the account no longer resolves.
        raise UnknownUser("token_user_unknown")
    return AuthResult(user=user, token=token)


__all__ = [
    "AuthResult",
    "authenticate_basic",
    "authenticate_bearer",
    "extract_bearer_token",
    "parse_basic_credentials",
    "split_scheme",
]
