"""
Listing writers.

Every state change is a conditional UPDATE: the WHERE clause names the state
the caller expects, and the returned flag says whether the row was actually
in that state. A False return means another workflow got there first.
"""

from datetime import datetime
from typing import Any

import structlog
from sqlalchemy import delete, insert, update
from sqlalchemy.engine import Connection

from dog_rentals.models.enums import ListingStatus
from dog_rentals.models.listings import Listing

logger = structlog.get_logger(__name__)


def insert_listing(conn: Connection, row: dict[str, Any]) -> None:
    """
    Insert a new listing row.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        row (dict): Column values, including id and owner_id.
    """
    conn.execute(insert(Listing).values(**row))


def update_listing_details(
    conn: Connection, listing_id: str, data: dict[str, Any], now: datetime
) -> bool:
    """
    Update descriptive or pricing fields of a listing.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        listing_id (str): Listing id.
        data (dict): Fields to update (state fields must not be included).
        now (datetime): Timestamp for updated_at.

    Returns:
        bool: True if the listing existed and was updated.
    """
    stmt = update(Listing).where(Listing.id == listing_id).values(**data, updated_at=now)
    return conn.execute(stmt).rowcount == 1


def delete_available_listing(conn: Connection, listing_id: str) -> bool:
    """
    Delete a listing, but only while it is available.

    Returns:
        bool: True if the row was deleted.
    """
    stmt = (
        delete(Listing)
        .where(Listing.id == listing_id)
        .where(Listing.status == ListingStatus.AVAILABLE.value)
    )
    return conn.execute(stmt).rowcount == 1


def claim_listing(conn: Connection, listing_id: str, renter_id: str, now: datetime) -> bool:
    """
    Compare-and-swap an available listing into the requested state.

    Only one renter can win the claim; everyone else gets False.

    Args:
        conn (Connection): SQLAlchemy DB connection.
        listing_id (str): Listing id.
        renter_id (str): Renter making the request.
        now (datetime): Claim timestamp.

    Returns:
        bool: True if this call moved the listing from available to requested.
    """
    stmt = (
        update(Listing)
        .where(Listing.id == listing_id)
        .where(Listing.status == ListingStatus.AVAILABLE.value)
        .values(
            status=ListingStatus.REQUESTED.value,
            available=False,
            requested_by=renter_id,
            requested_at=now,
            updated_at=now,
        )
    )
    return conn.execute(stmt).rowcount == 1


def mark_listing_rented(conn: Connection, listing_id: str, renter_id: str, now: datetime) -> bool:
    """
    Move a listing requested by ``renter_id`` into the rented state.

    Returns:
        bool: True if the listing was requested by this renter and is now rented.
    """
    stmt = (
        update(Listing)
        .where(Listing.id == listing_id)
        .where(Listing.status == ListingStatus.REQUESTED.value)
        .where(Listing.requested_by == renter_id)
        .values(
            status=ListingStatus.RENTED.value,
            available=False,
            requested_by=None,
            requested_at=None,
            rented_by=renter_id,
            rented_at=now,
            updated_at=now,
        )
    )
    return conn.execute(stmt).rowcount == 1


def release_listing(conn: Connection, listing_id: str, renter_id: str, now: datetime) -> bool:
    """
    Return a listing requested by ``renter_id`` to the available state.

    Used when a pending request is rejected or cancelled.

    Returns:
        bool: True if the listing was requested by this renter and is now available.
    """
    stmt = (
        update(Listing)
        .where(Listing.id == listing_id)
        .where(Listing.status == ListingStatus.REQUESTED.value)
        .where(Listing.requested_by == renter_id)
        .values(
            status=ListingStatus.AVAILABLE.value,
            available=True,
            requested_by=None,
            requested_at=None,
            updated_at=now,
        )
    )
    return conn.execute(stmt).rowcount == 1
