from typing import Any

from sqlalchemy import func, select
from sqlalchemy.engine import Connection

from dog_rentals.models.notifications import Notification


def list_notifications(
    conn: Connection, user_id: str, unread_only: bool = False
) -> list[dict[str, Any]]:
    """
    List a user's notifications, newest first.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        user_id (str): Recipient user id.
        unread_only (bool): Skip notifications already marked read.

    Returns:
        list[dict[str, Any]]: Notification rows.
    """
    stmt = select(Notification).where(Notification.recipient_user_id == user_id)
    if unread_only:
        stmt = stmt.where(Notification.read == False)  # noqa: E712
    stmt = stmt.order_by(Notification.created_at.desc())
    return [dict(row) for row in conn.execute(stmt).mappings()]


def count_unread(conn: Connection, user_id: str) -> int:
    """Return how many unread notifications a user has."""
    result = conn.execute(
        select(func.count())
        .select_from(Notification)
        .where(Notification.recipient_user_id == user_id)
        .where(Notification.read == False)  # noqa: E712
    )
    return int(result.scalar_one())
