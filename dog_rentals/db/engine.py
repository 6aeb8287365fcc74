"""
SQLAlchemy engine singleton with production-ready connection pooling.

Server databases get a pooled engine sized for concurrent web requests.
SQLite (local runs and tests) gets a single shared connection so that an
in-memory database survives across checkouts.
"""

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

from dog_rentals.config import DATABASE_URL


def build_engine(url: str) -> Engine:
    """
    Create an engine for the given database URL.

    Args:
        url: SQLAlchemy database URL

    Returns:
        Engine: Configured SQLAlchemy engine

    Example:
        >>> engine = build_engine("sqlite+pysqlite:///:memory:")
        >>> engine.dialect.name
        'sqlite'
    """
    if make_url(url).get_backend_name() == "sqlite":
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )

    return create_engine(
        url,
        pool_size=10,  # Number of connections to maintain in the pool
        max_overflow=20,  # Additional connections when pool is exhausted
        pool_pre_ping=True,  # Detect stale connections before use
        pool_recycle=3600,  # Recycle connections after 1 hour
        echo=False,
    )


engine: Engine = build_engine(DATABASE_URL)


def check_engine_health(db_engine: Engine | None = None) -> bool:
    """
    Check if the database is reachable.

    Used by the /ready endpoint before allowing traffic to the service.

    Args:
        db_engine: Engine to probe (defaults to the module singleton)

    Returns:
        bool: True if database is reachable and healthy, False otherwise
    """
    try:
        with (db_engine or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
