# File: auth_api/core/errors.py

"""
Error taxonomy for the credential core.

Every `AuthError` subclass reaches the client as the same rejection. The
subclass (and `reason`) exists only so the server log can say which stage
failed.
"""


class AuthApiError(Exception):
    """Base class for errors raised by this package."""


class AuthError(AuthApiError):
    reason = "auth_failed"

    def __init__(self, reason: str | None = None):
        if reason is not None:
            self.reason = reason
        super().__init__(self.reason)


class MissingCredentials(AuthError):
    reason = "missing_credentials"


class MalformedCredentials(AuthError):
    reason = "malformed_credentials"


class UnknownUser(AuthError):
    reason = "unknown_user"


class BadPassword(AuthError):
    reason = "bad_password"


class InvalidToken(AuthError):
    reason = "invalid_token"


class DuplicateUser(AuthApiError):
    def __init__(self, username: str):
        self.username = username
        super().__init__(f"username already exists: {username!r}")


class InvalidDigest(AuthApiError):
    """A stored password hash is not in a format the hasher understands."""
