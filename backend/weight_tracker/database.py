"""
Database engine and session setup.

The engine is built per application by ``create_app`` and kept on
``app.state``; request handlers get a session through ``get_db``.
"""
import logging

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


def _is_memory_sqlite(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in database_url


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for the given URL with per-dialect connection settings."""
    engine_args = {"echo": echo}
    if database_url.startswith("sqlite"):
        engine_args["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(database_url):
            # Every connection must see the same in-memory database
            engine_args["poolclass"] = StaticPool
    else:
        # Production settings for PostgreSQL
        engine_args.update({
            "pool_size": 5,
            "max_overflow": 10,
            "pool_timeout": 30,
            "pool_recycle": 1800,
            "pool_pre_ping": True,
        })

    engine = create_engine(database_url, **engine_args)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create all tables that don't exist yet."""
    # Import models so they register with Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready (%s)", engine.url.render_as_string(hide_password=True))


def get_db(request: Request):
    """FastAPI dependency - yields a database session and closes it after use."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
