from typing import Any, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection

from dog_rentals.models.enums import ListingStatus
from dog_rentals.models.listings import Listing


def get_listing(
    conn: Connection, listing_id: str, for_update: bool = False
) -> Optional[dict[str, Any]]:
    """
    Fetch a single listing by id.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        listing_id (str): Listing id.
        for_update (bool): Lock the row for the rest of the transaction.

    Returns:
        Optional[dict[str, Any]]: Listing columns, or None if it does not exist.
    """
    stmt = select(Listing).where(Listing.id == listing_id)
    if for_update:
        stmt = stmt.with_for_update()
    row = conn.execute(stmt).mappings().fetchone()
    return dict(row) if row else None


def list_listings(conn: Connection, available_only: bool = False) -> list[dict[str, Any]]:
    """
    List all listings, newest first.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        available_only (bool): Only return listings open for requests.

    Returns:
        list[dict[str, Any]]: Listing rows.
    """
    stmt = select(Listing).order_by(Listing.created_at.desc())
    if available_only:
        stmt = stmt.where(Listing.status == ListingStatus.AVAILABLE.value)
    return [dict(row) for row in conn.execute(stmt).mappings()]


def list_listings_for_owner(conn: Connection, owner_id: str) -> list[dict[str, Any]]:
    """List an owner's listings, newest first."""
    stmt = (
        select(Listing).where(Listing.owner_id == owner_id).order_by(Listing.created_at.desc())
    )
    return [dict(row) for row in conn.execute(stmt).mappings()]


def existing_listing_ids(conn: Connection, listing_ids: Iterable[str]) -> set[str]:
    """
    Return the subset of the given listing ids that still exist.

    Args:
        conn (Connection): An active SQLAlchemy database connection.
        listing_ids (Iterable[str]): Candidate listing ids.

    Returns:
        set[str]: Ids present in the listings table.
    """
    ids = set(listing_ids)
    if not ids:
        return set()
    result = conn.execute(select(Listing.id).where(Listing.id.in_(ids)))
    return set(result.scalars().all())
