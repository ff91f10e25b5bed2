"""
Database engine, session factory, and base model.

Every model inherits from Base. There is no module-level engine:
the DebtStore builds one when it is opened and disposes of it when
it is closed.
"""

from datetime import datetime, timezone

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching the DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def create_db_engine(database_url: str) -> Engine:
    """
    Build an engine for the given URL.

    pool_pre_ping=True tests connections before using them, which
    handles a database that restarted or a connection that went
    stale. SQLite connections are shared across the threads of the
    web server, so the same-thread check is disabled for them.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    return create_engine(
        database_url,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def make_session_factory(engine: Engine) -> sessionmaker:
    """
    Session factory bound to an engine.

    autocommit=False means changes are saved only when the caller
    commits. expire_on_commit=False keeps row attributes readable
    after the commit so they can be copied into response schemas.
    """
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
