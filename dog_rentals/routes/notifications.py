from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.engine import Engine

from dog_rentals.dependencies import get_current_user_id, get_db_engine
from dog_rentals.schemas.notifications import NotificationRecord, UnreadCount
from dog_rentals.services.notifications import (
    get_inbox,
    get_unread_count,
    mark_all_read,
    mark_read,
    remove_notification,
)

router = APIRouter(prefix="/notifications")


@router.get("", response_model=list[NotificationRecord])
def list_notifications_endpoint(
    unread_only: bool = Query(False),
    user_id: str = Depends(get_current_user_id),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    return get_inbox(engine, user_id, unread_only=unread_only)


@router.get("/unread-count", response_model=UnreadCount)
def unread_count_endpoint(
    user_id: str = Depends(get_current_user_id),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    return UnreadCount(unread=get_unread_count(engine, user_id))


@router.post("/read-all")
def mark_all_read_endpoint(
    user_id: str = Depends(get_current_user_id),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, int]:
    return {"updated": mark_all_read(engine, user_id)}


@router.post("/{notification_id}/read")
def mark_read_endpoint(
    notification_id: str,
    user_id: str = Depends(get_current_user_id),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, str]:
    if not mark_read(engine, user_id, notification_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    return {"message": f"Notification {notification_id} marked read"}


@router.delete("/{notification_id}")
def delete_notification_endpoint(
    notification_id: str,
    user_id: str = Depends(get_current_user_id),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, str]:
    if not remove_notification(engine, user_id, notification_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    return {"message": f"Notification {notification_id} deleted"}
