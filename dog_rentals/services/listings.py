"""Owner-side listing management."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import structlog
from sqlalchemy.engine import Engine

from dog_rentals.db.readers.listings import get_listing, list_listings, list_listings_for_owner
from dog_rentals.db.writers.listings import (
    delete_available_listing,
    insert_listing,
    update_listing_details,
)
from dog_rentals.errors import Forbidden, NotAvailable, NotFound
from dog_rentals.models.enums import ListingStatus
from dog_rentals.utils.datetime import utc_now
from dog_rentals.utils.ids import new_id

logger = structlog.get_logger(__name__)

# State columns (status, available, requested_*, rented_*) are only ever
# written by the lifecycle services.
EDITABLE_FIELDS = frozenset(
    {"name", "breed", "age", "size", "description", "location", "image_url", "price_per_day"}
)
# Editable but never null
REQUIRED_FIELDS = frozenset({"name", "price_per_day"})

CENT = Decimal("0.01")


def _validate_price(price_per_day: Any) -> Decimal:
    try:
        price = Decimal(str(price_per_day))
    except InvalidOperation as e:
        raise ValueError(f"price_per_day is not a number: {price_per_day!r}") from e
    if not price.is_finite() or price != price.quantize(CENT):
        raise ValueError("price_per_day must have at most two decimal places")
    if price <= 0:
        raise ValueError("price_per_day must be positive")
    return price.quantize(CENT)


def create_listing(
    engine: Engine,
    owner_id: str,
    name: str,
    price_per_day: Decimal | int | float | str,
    breed: Optional[str] = None,
    age: Optional[int] = None,
    size: Optional[str] = None,
    description: Optional[str] = None,
    location: Optional[str] = None,
    image_url: Optional[str] = None,
) -> str:
    """
    Create an available listing for an owner's dog.

    Returns:
        str: The new listing id.

    Raises:
        ValueError: if price_per_day is not positive or has more than two decimal places.
    """
    now = utc_now()
    listing_id = new_id("lst")

    with engine.begin() as conn:
        insert_listing(
            conn,
            {
                "id": listing_id,
                "owner_id": owner_id,
                "name": name,
                "breed": breed,
                "age": age,
                "size": size,
                "description": description,
                "location": location,
                "image_url": image_url,
                "price_per_day": _validate_price(price_per_day),
                "available": True,
                "status": ListingStatus.AVAILABLE.value,
                "created_at": now,
                "updated_at": now,
            },
        )

    logger.info("listing_created", listing_id=listing_id, owner_id=owner_id)
    return listing_id


def fetch_listing(engine: Engine, listing_id: str) -> dict[str, Any]:
    """Return a listing or raise NotFound."""
    with engine.connect() as conn:
        listing = get_listing(conn, listing_id)
    if listing is None:
        raise NotFound("This dog listing no longer exists.")
    return listing


def browse_listings(engine: Engine, available_only: bool = False) -> list[dict[str, Any]]:
    with engine.connect() as conn:
        return list_listings(conn, available_only=available_only)


def list_owner_listings(engine: Engine, owner_id: str) -> list[dict[str, Any]]:
    with engine.connect() as conn:
        return list_listings_for_owner(conn, owner_id)


def update_listing(
    engine: Engine, listing_id: str, owner_id: str, data: dict[str, Any]
) -> dict[str, Any]:
    """
    Update descriptive or pricing fields of a listing.

    Edits are allowed in every state. A price change never alters the cost
    already frozen on a pending request or an active rental.

    Args:
        engine: SQLAlchemy Engine
        listing_id: Listing to edit
        owner_id: Caller; must own the listing
        data: Fields to change (subset of EDITABLE_FIELDS)

    Returns:
        dict[str, Any]: The updated listing.

    Raises:
        NotFound: listing does not exist
        Forbidden: caller does not own the listing
        ValueError: unknown/state fields, a null name or price, or an invalid price
    """
    unknown = set(data) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")
    nulled = sorted(field for field in REQUIRED_FIELDS if field in data and data[field] is None)
    if nulled:
        raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")

    changes = dict(data)
    if "price_per_day" in changes:
        changes["price_per_day"] = _validate_price(changes["price_per_day"])

    with engine.begin() as conn:
        listing = get_listing(conn, listing_id, for_update=True)
        if listing is None:
            raise NotFound("This dog listing no longer exists.")
        if listing["owner_id"] != owner_id:
            raise Forbidden("You may not edit this listing.")
        if changes:
            update_listing_details(conn, listing_id, changes, utc_now())
        updated = get_listing(conn, listing_id)

    logger.info("listing_updated", listing_id=listing_id, fields=sorted(changes))
    return updated  # type: ignore[return-value]


def delete_listing(engine: Engine, listing_id: str, owner_id: str) -> None:
    """
    Delete a listing, which is only allowed while it is available.

    Raises:
        NotFound: listing does not exist
        Forbidden: caller does not own the listing
        NotAvailable: listing has a pending request or an active rental
    """
    with engine.begin() as conn:
        listing = get_listing(conn, listing_id, for_update=True)
        if listing is None:
            raise NotFound("This dog listing no longer exists.")
        if listing["owner_id"] != owner_id:
            raise Forbidden("You may not delete this listing.")
        if not delete_available_listing(conn, listing_id):
            raise NotAvailable("Dogs with a pending request or active rental cannot be deleted.")

    logger.info("listing_deleted", listing_id=listing_id, owner_id=owner_id)
