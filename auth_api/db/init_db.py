"""
Database initialization helpers.

Models are imported here so their tables get registered on Base.metadata.
"""

from sqlalchemy.engine import Engine

from auth_api.models.base import Base
from auth_api.models import user  # noqa: F401


def init_db(engine: Engine) -> None:
    """
    Create all tables based on SQLAlchemy models.
    """
    Base.metadata.create_all(bind=engine)
