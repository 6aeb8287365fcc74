from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection

from dog_rentals.models.rentals import Rental


def get_rental_for_request(conn: Connection, request_id: str) -> Optional[dict[str, Any]]:
    """
    Fetch the rental created from a request, if any.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        request_id (str): Id of the approved rental request.

    Returns:
        Optional[dict[str, Any]]: Rental columns, or None if no rental exists yet.
    """
    row = conn.execute(select(Rental).where(Rental.request_id == request_id)).mappings().fetchone()
    return dict(row) if row else None


def list_rentals(
    conn: Connection,
    owner_id: Optional[str] = None,
    renter_id: Optional[str] = None,
) -> list[dict[str, Any]]:
    """List rentals for an owner and/or renter, newest first."""
    stmt = select(Rental)
    if owner_id is not None:
        stmt = stmt.where(Rental.owner_id == owner_id)
    if renter_id is not None:
        stmt = stmt.where(Rental.renter_id == renter_id)
    stmt = stmt.order_by(Rental.created_at.desc())
    return [dict(row) for row in conn.execute(stmt).mappings()]
