# File: auth_api/api/v1/routes_auth.py

"""
Auth API routes.

    POST /signup   create a user, returns {user, token}
    POST /signin   Basic auth, returns {user, token} with a fresh token
    GET  /users    Bearer auth, returns every username
    GET  /secret   Bearer auth, returns a fixed message
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from auth_api.api.deps import (
    basic_auth,
    bearer_auth,
    get_db,
    get_password_hasher,
    get_token_issuer,
)
from auth_api.core.errors import DuplicateUser
from auth_api.core.security import PasswordHasher, TokenIssuer
from auth_api.models.user import User
from auth_api.schemas.user import AuthResponse, UserCreate, UserRead
from auth_api.services.auth_service import AuthResult
from auth_api.services.user_store import create_user, list_usernames

router = APIRouter()

SECRET_MESSAGE = "Welcome to the secret area!"


def _auth_response(user: User, tokens: TokenIssuer) -> AuthResponse:
    return AuthResponse(user=UserRead.model_validate(user), token=tokens.issue(user.username))


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
)
def signup(
    payload: UserCreate,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenIssuer = Depends(get_token_issuer),
):
    try:
        user = create_user(db, username=payload.username, password=payload.password, hasher=hasher)
    except DuplicateUser:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already exists",
        )
    return _auth_response(user, tokens)


@router.post("/signin", response_model=AuthResponse, summary="Sign in with Basic credentials")
def signin(
    user: User = Depends(basic_auth),
    tokens: TokenIssuer = Depends(get_token_issuer),
):
    return _auth_response(user, tokens)


@router.get("/users", response_model=list[str], summary="List usernames")
def get_users(
    _: AuthResult = Depends(bearer_auth),
    db: Session = Depends(get_db),
):
    return list_usernames(db)


@router.get("/secret", response_class=PlainTextResponse, summary="Protected content")
def secret(_: AuthResult = Depends(bearer_auth)):
    return SECRET_MESSAGE
