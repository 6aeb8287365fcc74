from datetime import datetime
from typing import Any, Iterable

from sqlalchemy import delete, insert, update
from sqlalchemy.engine import Connection

from dog_rentals.models.enums import RequestStatus
from dog_rentals.models.rental_requests import RentalRequest


def insert_request(conn: Connection, row: dict[str, Any]) -> None:
    """
    Insert a new pending rental request.

    Raises:
        sqlalchemy.exc.IntegrityError: if the listing already has a pending request.
    """
    conn.execute(insert(RentalRequest).values(**row))


def decide_request(
    conn: Connection, request_id: str, status: RequestStatus, now: datetime
) -> bool:
    """
    Move a pending request into a terminal state.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        request_id (str): Rental request id.
        status (RequestStatus): Terminal status to record.
        now (datetime): Decision timestamp.

    Returns:
        bool: True if the request was still pending and is now decided.
    """
    if not status.is_terminal:
        raise ValueError(f"{status.value} is not a terminal request status")

    stmt = (
        update(RentalRequest)
        .where(RentalRequest.id == request_id)
        .where(RentalRequest.status == RequestStatus.PENDING.value)
        .values(status=status.value, decision_at=now)
    )
    return conn.execute(stmt).rowcount == 1


def delete_requests(conn: Connection, request_ids: Iterable[str]) -> int:
    """
    Permanently delete rental requests.

    Returns:
        int: Number of rows deleted.
    """
    ids = list(request_ids)
    if not ids:
        return 0
    return conn.execute(delete(RentalRequest).where(RentalRequest.id.in_(ids))).rowcount
