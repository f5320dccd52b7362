"""
SQL store: schema and engine.

Artists are stored document-style: aliases, area, genres and metadata
live in JSON columns. Follows are a plain junction table whose
(user_id, artist_id) pair is unique at the database level.
"""

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
    create_engine,
    event,
    text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from bandpulse.core.config import settings

logger = logging.getLogger(__name__)

IN_MEMORY_SQLITE_URLS = frozenset({"sqlite://", "sqlite:///:memory:"})

metadata = MetaData()

artists = Table(
    "artists",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("name", String(512), nullable=False),
    Column("slug", String(512), nullable=False),
    Column("mbid", String(64), nullable=False),
    Column("aliases", JSON, nullable=False, default=list),
    Column("area", JSON),
    Column("image_url", String(1024)),
    Column("genres", JSON),
    Column("metadata", JSON),
    Column("fetch_source", String(32), nullable=False),
    Column("last_fetched_at", DateTime(timezone=True)),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    UniqueConstraint("slug", name="uq_artists_slug"),
    UniqueConstraint("mbid", name="uq_artists_mbid"),
    Index("ix_artists_name", "name"),
)

follows = Table(
    "follows",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", String(64), nullable=False),
    Column(
        "artist_id",
        String(32),
        ForeignKey("artists.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("followed_at", DateTime(timezone=True), nullable=False),
    Column("notifications_enabled", Boolean, nullable=False),
    UniqueConstraint("user_id", "artist_id", name="uq_follows_user_artist"),
    Index("ix_follows_artist_id", "artist_id"),
)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes read back from stores without tz support."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str) -> Engine:
    """Build a SQLAlchemy engine for the given URL.

    SQLite connections are shared with FastAPI's threadpool, so the
    same-thread check is disabled for them and foreign keys are switched
    on. An in-memory SQLite database lives on a single shared connection.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    options: dict = {"connect_args": {"check_same_thread": False}}
    if url in IN_MEMORY_SQLITE_URLS:
        options["poolclass"] = StaticPool
    engine = create_engine(url, **options)
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


@lru_cache
def get_engine() -> Engine:
    """Return the process-wide engine built from application settings."""
    return build_engine(settings.database_url)


def init_schema(engine: Engine) -> None:
    """Create missing tables and constraints."""
    metadata.create_all(engine)
    logger.info("Database schema ready (%s)", engine.url.render_as_string(hide_password=True))


def ping(engine: Engine) -> None:
    """Run a trivial query. Raises if the store is unreachable."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
