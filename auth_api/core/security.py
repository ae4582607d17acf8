# File: auth_api/core/security.py

"""
Password hashing and bearer token signing.

Both helpers are built once from Settings at application start and are safe
to share between requests: they hold configuration only, no mutable state.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from jwt.utils import base64url_decode, base64url_encode
from passlib.context import CryptContext

from auth_api.core.config import Settings
from auth_api.core.errors import InvalidDigest, InvalidToken


class PasswordHasher:
    """Salted, slow one-way hashing (pbkdf2_sha256 via passlib)."""

    def __init__(self, rounds: int = 29000):
        self._ctx = CryptContext(
            schemes=["pbkdf2_sha256"],
            deprecated="auto",
            pbkdf2_sha256__rounds=rounds,
        )
        # Used to burn the same CPU time on a username miss as on a hit.
        self._dummy_digest = self._ctx.hash("dummy-password-for-timing")

    def hash(self, password: str) -> str:
        if not password:
            raise ValueError("password_blank")
        return self._ctx.hash(password)

    def verify(self, password: str, digest: str) -> bool:
        """
        True iff `password` produced `digest`.

        A mismatch is never an error. A digest the context cannot identify
        raises InvalidDigest.
        """
        if not digest or not self._ctx.identify(digest):
            raise InvalidDigest("unrecognized password digest")
        # An empty password still pays for a full verification.
        try:
            return self._ctx.verify(password, digest)
        except ValueError as exc:
            raise InvalidDigest(str(exc)) from exc

    def dummy_verify(self, password: str) -> None:
        self._ctx.verify(password, self._dummy_digest)


class TokenIssuer:
    """Stateless HMAC-signed JWTs binding a username."""

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        expires_minutes: Optional[int] = None,
    ):
        if not secret:
            raise ValueError("jwt_secret_blank")
        self._secret = secret
        self._algorithm = algorithm
        self._expires = (
            timedelta(minutes=expires_minutes) if expires_minutes and expires_minutes > 0 else None
        )

    def __repr__(self) -> str:
        return f"TokenIssuer(algorithm={self._algorithm!r}, expires={self._expires!r})"

    def issue(self, username: str) -> str:
        if not username:
            raise ValueError("username_blank")

        now = datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "username": username,
            "iat": int(now.timestamp()),
        }
        if self._expires is not None:
            payload["exp"] = int((now + self._expires).timestamp())
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> str:
        """Return the username asserted by `token` or raise InvalidToken."""
        if not token:
            raise InvalidToken("token_blank")

        # base64url tolerates stray bits in the last character of a segment;
        # require the canonical encoding so every changed byte is rejected.
        segments = token.split(".")
        if len(segments) != 3:
            raise InvalidToken("token_malformed")
        for segment in segments:
            try:
                canonical = base64url_encode(base64url_decode(segment.encode("ascii")))
            except ValueError:
                raise InvalidToken("token_malformed")
            if canonical.decode("ascii") != segment:
                raise InvalidToken("token_malformed")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidToken("token_expired")
        except jwt.InvalidTokenError:
            raise InvalidToken("token_invalid")

        username = payload.get("username")
        if not isinstance(username, str) or not username:
            raise InvalidToken("token_missing_username")
        return username


def build_password_hasher(settings: Settings) -> PasswordHasher:
    return PasswordHasher(rounds=settings.password_hash_rounds)


def build_token_issuer(settings: Settings) -> TokenIssuer:
    return TokenIssuer(
        settings.require_secret(),
        algorithm=settings.algorithm,
        expires_minutes=settings.access_token_expire_minutes,
    )
