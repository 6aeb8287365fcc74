"""
FastAPI dependency injection providers.

Dependencies can be overridden in tests using app.dependency_overrides, which
is how the route tests swap in an in-memory database.
"""

from __future__ import annotations

from typing import Generator, Optional

from fastapi import Header, HTTPException, status
from sqlalchemy.engine import Engine

from dog_rentals.db.engine import engine


def get_db_engine() -> Generator[Engine, None, None]:
    """
    Provide database engine for dependency injection.

    Yields:
        Engine: SQLAlchemy database engine

    Testing Example:
        >>> test_engine = build_engine("sqlite+pysqlite:///:memory:")
        >>> app.dependency_overrides[get_db_engine] = lambda: test_engine
    """
    yield engine


def get_current_user_id(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
) -> str:
    """
    Identity of the calling user, as asserted by the upstream auth layer.

    The header is set by the authentication gateway and trusted as-is.

    Raises:
        HTTPException: 401 if the header is missing or blank
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return x_user_id.strip()
