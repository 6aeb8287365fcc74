from typing import Any

from sqlalchemy import insert
from sqlalchemy.engine import Connection

from dog_rentals.models.rentals import Rental


def insert_rental(conn: Connection, row: dict[str, Any]) -> None:
    """
    Insert the rental record for an approved request.

    Raises:
        sqlalchemy.exc.IntegrityError: if a rental already exists for the request.
    """
    conn.execute(insert(Rental).values(**row))
