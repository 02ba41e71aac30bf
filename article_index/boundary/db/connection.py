"""
Database connection management.

Provides SQLAlchemy engine and session factory for the SQL document
collection.

Dependencies: sqlalchemy, article_index.configs
System role: Database connection lifecycle management
"""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool

from article_index.boundary.db.base import Base
from article_index.configs import get_settings
from article_index.configs.database import DatabaseSettings


def get_engine(db_config: DatabaseSettings | None = None) -> Engine:
    """
    Create SQLAlchemy engine with connection pooling and health checks.

    Configures QueuePool for server databases. pool_pre_ping=True verifies
    connections before use to detect stale/broken connections early.
    SQLite URLs keep SQLAlchemy's default pool.

    Args:
        db_config: Database settings (application settings if None)

    Returns:
        Engine: Configured SQLAlchemy engine
    """
    db_config = db_config or get_settings().database
    url = db_config.database_url

    if url.startswith("sqlite"):
        return create_engine(
            url,
            echo=db_config.echo_sql,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        url,
        echo=db_config.echo_sql,
        poolclass=QueuePool,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,  # Verify connections before using
    )


def get_session_factory(engine: Engine) -> sessionmaker:
    """
    Create session factory for database operations.

    autoflush=False and expire_on_commit=False keep transaction control
    explicit; callers open one transaction per batch with factory.begin().

    Args:
        engine: Engine to bind

    Returns:
        sessionmaker: Session factory
    """
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def create_tables(engine: Engine) -> None:
    """Create all registered tables that do not exist yet."""
    Base.metadata.create_all(engine)
