"""Renter-side submission of rental requests."""

from __future__ import annotations

from datetime import date
from typing import Optional

import structlog
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from dog_rentals.db.readers.listings import get_listing
from dog_rentals.db.writers.listings import claim_listing
from dog_rentals.db.writers.rental_requests import insert_request
from dog_rentals.errors import Forbidden, NotAvailable, NotFound
from dog_rentals.models.enums import ListingStatus, NotificationKind, RequestStatus
from dog_rentals.services.lifecycle import (
    duration_in_days,
    total_cost,
    track_operation,
    validate_window,
)
from dog_rentals.services.notifications import notify
from dog_rentals.utils.datetime import utc_now, utc_today
from dog_rentals.utils.ids import new_id

logger = structlog.get_logger(__name__)


def submit_request(
    engine: Engine,
    listing_id: str,
    renter_id: str,
    start: date,
    end: date,
    contact_info: Optional[str] = None,
    notes: Optional[str] = None,
    today: Optional[date] = None,
) -> str:
    """
    Create a pending rental request and claim the listing for the renter.

    The request insert and the listing claim commit together. The claim is a
    compare-and-swap on the listing being available, and the database allows
    only one pending request per listing, so when two renters race for the
    same dog exactly one succeeds and the other gets NotAvailable with no
    request left behind. The owner is notified after the commit.

    Args:
        engine: SQLAlchemy Engine
        listing_id: Listing to rent
        renter_id: Requesting user
        start: First day of the rental
        end: Day the dog is returned (must be after start)
        contact_info: How the owner can reach the renter
        notes: Free-form special requests
        today: Reference date for the "not in the past" check (defaults to UTC today)

    Returns:
        str: The new request id.

    Raises:
        InvalidWindow: start in the past or end not after start
        NotFound: listing does not exist
        Forbidden: the renter owns the listing
        NotAvailable: listing is not available, or another renter claimed it first
    """
    with track_operation("submit"):
        validate_window(start, end, today or utc_today())

        now = utc_now()
        request_id = new_id("req")

        try:
            with engine.begin() as conn:
                listing = get_listing(conn, listing_id)
                if listing is None:
                    raise NotFound("This dog listing no longer exists.")
                if listing["owner_id"] == renter_id:
                    raise Forbidden("You cannot request your own dog.")
                if listing["status"] != ListingStatus.AVAILABLE.value:
                    raise NotAvailable()

                duration_days = duration_in_days(start, end)
                cost = total_cost(duration_days, listing["price_per_day"])

                insert_request(
                    conn,
                    {
                        "id": request_id,
                        "listing_id": listing_id,
                        "owner_id": listing["owner_id"],
                        "renter_id": renter_id,
                        "requested_start": start,
                        "requested_end": end,
                        "duration_days": duration_days,
                        "total_cost": cost,
                        "contact_info": contact_info,
                        "notes": notes,
                        "status": RequestStatus.PENDING.value,
                        "created_at": now,
                    },
                )

                if not claim_listing(conn, listing_id, renter_id, now):
                    raise NotAvailable()
        except IntegrityError as e:
            # Another pending request for this listing committed first
            logger.warning(
                "rental_request_conflict", listing_id=listing_id, renter_id=renter_id, error=str(e)
            )
            raise NotAvailable() from e

        logger.info(
            "rental_request_submitted",
            request_id=request_id,
            listing_id=listing_id,
            renter_id=renter_id,
            duration_days=duration_days,
            total_cost=str(cost),
        )

    dog_name = listing["name"]
    notify(
        engine,
        listing["owner_id"],
        NotificationKind.RENTAL_REQUEST,
        title=f"New Rental Request for {dog_name}",
        message=(
            f"{renter_id} wants to rent {dog_name} from {start.isoformat()} to "
            f"{end.isoformat()}. Check your requests to approve or reject."
        ),
        payload={
            "request_id": request_id,
            "listing_id": listing_id,
            "dog_name": dog_name,
            "renter_id": renter_id,
            "start": start.isoformat(),
            "end": end.isoformat(),
            "total_cost": str(cost),
        },
    )
    return request_id
