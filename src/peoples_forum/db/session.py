"""Engine and session factory for the forum database."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from peoples_forum.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base for every forum table."""


# Register the forum tables on Base.metadata before create_all or Alembic reads it.
import peoples_forum.models  # noqa: E402,F401


def _engine_options(url: str) -> dict[str, Any]:
    options: dict[str, Any] = {"pool_pre_ping": True, "echo": settings.sql_debug}
    if make_url(url).get_backend_name() == "sqlite":
        # Sessions are opened in FastAPI's threadpool and used on the event loop.
        options["connect_args"] = {"check_same_thread": False}
    return options


def build_engine(url: str, **overrides: Any) -> Engine:
    """Create an engine for ``url``; SQLite connections enforce foreign keys.

    ``overrides`` replace the default engine options, e.g. a test pool class.
    """
    built = create_engine(url, **{**_engine_options(url), **overrides})
    if built.dialect.name == "sqlite":

        @event.listens_for(built, "connect")
        def _enable_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return built


engine = build_engine(settings.effective_database_url)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db() -> Generator[Session, None, None]:
    """Yield one session per request and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create every forum table that does not exist yet."""
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """Drop every forum table."""
    Base.metadata.drop_all(bind=engine)
