"""Create a user directly in the configured database.

Usage:
  python scripts/create_user.py --username alice --password '...'

Reads DATABASE_URL / APP_ENV / PASSWORD_HASH_ROUNDS like the API does.
"""

import argparse
import sys

from auth_api.core.config import get_settings
from auth_api.core.errors import DuplicateUser
from auth_api.core.security import build_password_hasher
from auth_api.db.init_db import init_db
from auth_api.db.session import build_engine, build_session_factory
from auth_api.services.user_store import create_user


def main(argv=None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--username", required=True)
    ap.add_argument("--password", required=True)
    args = ap.parse_args(argv)

    settings = get_settings()
    engine = build_engine(settings)
    init_db(engine)

    SessionLocal = build_session_factory(engine)
    with SessionLocal() as db:
        try:
            user = create_user(
                db,
                username=args.username,
                password=args.password,
                hasher=build_password_hasher(settings),
            )
        except DuplicateUser:
            print(f"User {args.username!r} already exists", file=sys.stderr)
            return 1

    print(f"Created user: id={user.id} username={user.username}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
