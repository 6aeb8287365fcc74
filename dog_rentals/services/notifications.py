"""
Notification dispatch and the per-user notification inbox.

Dispatch is fire-and-forget: a failure to store a notification is logged and
counted but never raised, so losing a notification can never undo or block
the rental transition that triggered it.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Optional

import structlog
from sqlalchemy.engine import Engine

from dog_rentals.config import NOTIFICATION_RETENTION_DAYS
from dog_rentals.db.readers.notifications import count_unread, list_notifications
from dog_rentals.db.writers.notifications import (
    delete_expired_notifications,
    delete_notification,
    insert_notification,
    mark_all_notifications_read,
    mark_notification_read,
)
from dog_rentals.metrics import notifications_dispatched
from dog_rentals.models.enums import NotificationKind
from dog_rentals.utils.datetime import utc_now
from dog_rentals.utils.ids import new_id

logger = structlog.get_logger(__name__)

# Default title and message per kind, used when the caller supplies none
TEMPLATES: dict[NotificationKind, tuple[str, str]] = {
    NotificationKind.RENTAL_REQUEST: (
        "New Rental Request",
        "Someone wants to rent your dog! Check your requests.",
    ),
    NotificationKind.RENTAL_APPROVED: (
        "Rental Approved",
        "Your rental request has been approved!",
    ),
    NotificationKind.RENTAL_REJECTED: (
        "Rental Rejected",
        "Your rental request was not approved.",
    ),
    NotificationKind.RENTAL_CANCELLED: ("Rental Cancelled", "A rental has been cancelled."),
    NotificationKind.RENTAL_REMINDER: ("Rental Reminder", "Your dog rental starts tomorrow!"),
    NotificationKind.RENTAL_STARTED: ("Rental Started", "Your dog rental has begun!"),
    NotificationKind.RENTAL_COMPLETED: (
        "Rental Completed",
        "Your dog rental has been completed.",
    ),
    NotificationKind.WELCOME: (
        "Welcome to Dog Rentals!",
        "Thank you for joining our community of dog lovers.",
    ),
    NotificationKind.SYSTEM: ("System Update", "Important update about your account."),
}


def notify(
    engine: Engine,
    recipient_user_id: str,
    kind: NotificationKind,
    title: Optional[str] = None,
    message: Optional[str] = None,
    payload: Optional[dict[str, Any]] = None,
) -> Optional[str]:
    """
    Store a notification for a user without ever failing the caller.

    Args:
        engine: SQLAlchemy Engine
        recipient_user_id: User the notification is addressed to
        kind: Event kind; selects the default title and message
        title: Overrides the template title
        message: Overrides the template message
        payload: JSON-serialisable event details (ids, dates, cost)

    Returns:
        Optional[str]: The notification id, or None if dispatch failed.
    """
    default_title, default_message = TEMPLATES[kind]
    now = utc_now()
    notification_id = new_id("ntf")
    row = {
        "id": notification_id,
        "recipient_user_id": recipient_user_id,
        "kind": kind.value,
        "title": title or default_title,
        "message": message or default_message,
        "payload": payload or {},
        "read": False,
        "created_at": now,
        "expires_at": (
            now + timedelta(days=NOTIFICATION_RETENTION_DAYS)
            if NOTIFICATION_RETENTION_DAYS > 0
            else None
        ),
    }

    try:
        with engine.begin() as conn:
            insert_notification(conn, row)
    except Exception as e:
        notifications_dispatched.labels(kind=kind.value, status="failed").inc()
        logger.exception(
            "notification_dispatch_failed",
            recipient_user_id=recipient_user_id,
            kind=kind.value,
            error=str(e),
        )
        return None

    notifications_dispatched.labels(kind=kind.value, status="sent").inc()
    logger.info(
        "notification_dispatched",
        notification_id=notification_id,
        recipient_user_id=recipient_user_id,
        kind=kind.value,
    )
    return notification_id


def get_inbox(engine: Engine, user_id: str, unread_only: bool = False) -> list[dict[str, Any]]:
    with engine.connect() as conn:
        return list_notifications(conn, user_id, unread_only=unread_only)


def get_unread_count(engine: Engine, user_id: str) -> int:
    with engine.connect() as conn:
        return count_unread(conn, user_id)


def mark_read(engine: Engine, user_id: str, notification_id: str) -> bool:
    """Mark one notification read; False if it is not the user's."""
    with engine.begin() as conn:
        return mark_notification_read(conn, user_id, notification_id)


def mark_all_read(engine: Engine, user_id: str) -> int:
    with engine.begin() as conn:
        updated = mark_all_notifications_read(conn, user_id)
    logger.info("notifications_marked_read", user_id=user_id, count=updated)
    return updated


def remove_notification(engine: Engine, user_id: str, notification_id: str) -> bool:
    """Delete one notification; False if it is not the user's."""
    with engine.begin() as conn:
        return delete_notification(conn, user_id, notification_id)


def purge_expired_notifications(engine: Engine) -> int:
    """
    Delete every notification past its expiry.

    Returns:
        int: Number of notifications deleted.
    """
    with engine.begin() as conn:
        deleted = delete_expired_notifications(conn, utc_now())
    logger.info("expired_notifications_purged", count=deleted)
    return deleted
