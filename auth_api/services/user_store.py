# File: auth_api/services/user_store.py

"""
Credential store: the only code that reads or writes the users table.

Uniqueness is enforced by the database index; the pre-insert lookup only
gives the common case a clean error without a failed transaction.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from auth_api.core.errors import DuplicateUser
from auth_api.core.security import PasswordHasher
from auth_api.models.user import User

logger = logging.getLogger(__name__)


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    if not username:
        return None
    return db.scalars(select(User).where(User.username == username)).first()


def list_usernames(db: Session) -> List[str]:
    return list(db.scalars(select(User.username).order_by(User.id)))


def create_user(
    db: Session,
    *,
    username: str,
    password: str,
    hasher: PasswordHasher,
) -> User:
    if not username:
        raise ValueError("username_blank")
    # Basic auth splits on the single colon; neither part may carry one.
    if ":" in username or ":" in password:
        raise ValueError("credentials_contain_colon")

    if get_user_by_username(db, username) is not None:
        raise DuplicateUser(username)

    # Hash before the row exists so no plaintext ever reaches the table.
    user = User(username=username, password_hash=hasher.hash(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent signup for the same name.
        db.rollback()
        raise DuplicateUser(username)

    db.refresh(user)
    logger.info("Created user id=%s username=%s", user.id, user.username)
    return user
