import logging
import os

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


def normalize_database_url(url: str) -> str:
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _ensure_sqlite_dir(url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    database = make_url(url).database
    if not database or database == ":memory:":
        return
    parent = os.path.dirname(os.path.abspath(database))
    os.makedirs(parent, exist_ok=True)


def build_engine(database_url: str) -> AsyncEngine:
    url = normalize_database_url(database_url)

    engine_kwargs: dict = {"echo": False}
    if _is_sqlite(url):
        _ensure_sqlite_dir(url)
    else:
        engine_kwargs.update(pool_size=5, max_overflow=10, pool_pre_ping=True)

    engine = create_async_engine(url, **engine_kwargs)

    if _is_sqlite(url):
        @event.listens_for(engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


class Base(DeclarativeBase):
    pass


async def create_tables(engine: AsyncEngine) -> bool:
    """Create missing tables. Failures are logged and reported as False."""
    try:
        async with engine.begin() as conn:
            from app.models import user  # noqa: F401
            await conn.run_sync(Base.metadata.create_all)
    except SQLAlchemyError:
        logger.exception("Error creating database schema")
        return False
    return True
