from datetime import datetime
from typing import Any

from sqlalchemy import delete, insert, update
from sqlalchemy.engine import Connection

from dog_rentals.models.notifications import Notification


def insert_notification(conn: Connection, row: dict[str, Any]) -> None:
    """Insert a notification row."""
    conn.execute(insert(Notification).values(**row))


def mark_notification_read(conn: Connection, user_id: str, notification_id: str) -> bool:
    """
    Mark one of the user's notifications as read.

    Returns:
        bool: True if the notification exists and belongs to the user.
    """
    stmt = (
        update(Notification)
        .where(Notification.id == notification_id)
        .where(Notification.recipient_user_id == user_id)
        .values(read=True)
    )
    return conn.execute(stmt).rowcount == 1


def mark_all_notifications_read(conn: Connection, user_id: str) -> int:
    """
    Mark every unread notification of a user as read.

    Returns:
        int: Number of notifications updated.
    """
    stmt = (
        update(Notification)
        .where(Notification.recipient_user_id == user_id)
        .where(Notification.read == False)  # noqa: E712
        .values(read=True)
    )
    return conn.execute(stmt).rowcount


def delete_notification(conn: Connection, user_id: str, notification_id: str) -> bool:
    """Delete one of the user's notifications; False if not found or not theirs."""
    stmt = (
        delete(Notification)
        .where(Notification.id == notification_id)
        .where(Notification.recipient_user_id == user_id)
    )
    return conn.execute(stmt).rowcount == 1


def delete_expired_notifications(conn: Connection, now: datetime) -> int:
    """
    Delete notifications whose expires_at is in the past.

    Returns:
        int: Number of notifications deleted.
    """
    stmt = delete(Notification).where(Notification.expires_at.is_not(None)).where(
        Notification.expires_at < now
    )
    return conn.execute(stmt).rowcount
