from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection

from dog_rentals.models.enums import RequestStatus
from dog_rentals.models.rental_requests import RentalRequest


def get_request(
    conn: Connection, request_id: str, for_update: bool = False
) -> Optional[dict[str, Any]]:
    """
    Fetch a single rental request by id.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        request_id (str): Rental request id.
        for_update (bool): Lock the row for the rest of the transaction.

    Returns:
        Optional[dict[str, Any]]: Request columns, or None if it does not exist.
    """
    stmt = select(RentalRequest).where(RentalRequest.id == request_id)
    if for_update:
        stmt = stmt.with_for_update()
    row = conn.execute(stmt).mappings().fetchone()
    return dict(row) if row else None


def list_pending_requests(
    conn: Connection,
    owner_id: Optional[str] = None,
    renter_id: Optional[str] = None,
) -> list[dict[str, Any]]:
    """
    List pending requests, oldest first, optionally scoped to an owner or renter.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        owner_id (Optional[str]): Only requests addressed to this owner.
        renter_id (Optional[str]): Only requests made by this renter.

    Returns:
        list[dict[str, Any]]: Pending request rows.
    """
    stmt = select(RentalRequest).where(RentalRequest.status == RequestStatus.PENDING.value)
    if owner_id is not None:
        stmt = stmt.where(RentalRequest.owner_id == owner_id)
    if renter_id is not None:
        stmt = stmt.where(RentalRequest.renter_id == renter_id)
    stmt = stmt.order_by(RentalRequest.created_at)
    return [dict(row) for row in conn.execute(stmt).mappings()]
