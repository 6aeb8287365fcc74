"""Dashboard reads for rentals."""

from typing import Any

from sqlalchemy.engine import Engine

from dog_rentals.db.readers.rentals import list_rentals

ROLES = ("owner", "renter")


def list_rentals_for_user(engine: Engine, user_id: str, role: str) -> list[dict[str, Any]]:
    """
    List rentals where the user is the dog's owner or the renter.

    Args:
        engine: SQLAlchemy Engine
        user_id: User whose rentals to list
        role: "owner" or "renter"

    Returns:
        list[dict[str, Any]]: Rental rows, newest first.
    """
    if role not in ROLES:
        raise ValueError(f"role must be one of {ROLES}, got {role!r}")

    with engine.connect() as conn:
        if role == "owner":
            return list_rentals(conn, owner_id=user_id)
        return list_rentals(conn, renter_id=user_id)
