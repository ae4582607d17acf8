from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from auth_api.core.config import Settings, database_options


def build_engine(settings: Settings) -> Engine:
    opts = database_options(settings)
    return create_engine(
        opts.url,
        echo=opts.echo,
        connect_args=opts.connect_args,
        **opts.engine_kwargs,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
