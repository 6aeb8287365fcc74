"""Owner-side decisions on pending rental requests."""

from __future__ import annotations

from typing import Any, Optional

import structlog
from sqlalchemy.engine import Engine

from dog_rentals.db.readers.listings import get_listing
from dog_rentals.db.readers.rentals import get_rental_for_request
from dog_rentals.db.writers.listings import mark_listing_rented
from dog_rentals.db.writers.rental_requests import decide_request
from dog_rentals.db.writers.rentals import insert_rental
from dog_rentals.errors import AlreadyDecided, NotAvailable, NotFound
from dog_rentals.models.enums import ListingStatus, NotificationKind, RentalStatus, RequestStatus
from dog_rentals.services.lifecycle import (
    ensure_pending,
    load_request,
    release_requested_listing,
    track_operation,
)
from dog_rentals.services.notifications import notify
from dog_rentals.utils.datetime import utc_now
from dog_rentals.utils.ids import new_id

logger = structlog.get_logger(__name__)


def approve_request(engine: Engine, request_id: str, owner_id: str) -> str:
    """
    Approve a pending request and create the rental.

    Steps run in one transaction, decision first: the request becomes
    approved, the listing becomes rented by the renter, and an active rental
    is created with the cost and window frozen on the request. The renter is
    notified after the commit.

    Approval is idempotent per request id. Calling it again for an approved
    request returns the existing rental without writing or notifying; an
    approved request that has no rental yet (left behind by an interrupted
    run) has its remaining steps completed.

    Args:
        engine: SQLAlchemy Engine
        request_id: Pending rental request id
        owner_id: Deciding user; must own the request's listing

    Returns:
        str: Id of the rental for this request.

    Raises:
        NotFound: request (or its listing) does not exist
        Forbidden: caller is not the owner of record
        AlreadyDecided: request was rejected or cancelled
        NotAvailable: listing is no longer requested by this renter
    """
    with track_operation("approve") as outcome:
        now = utc_now()
        existing_rental: Optional[dict[str, Any]] = None

        with engine.begin() as conn:
            request = load_request(conn, request_id, owner_id, "owner_id")
            status = RequestStatus(request["status"])

            if status is RequestStatus.APPROVED:
                existing_rental = get_rental_for_request(conn, request_id)
                if existing_rental is None:
                    logger.warning("approval_resumed", request_id=request_id)
            else:
                ensure_pending(request)
                if not decide_request(conn, request_id, RequestStatus.APPROVED, now):
                    raise AlreadyDecided()

            if existing_rental is None:
                listing_id = request["listing_id"]
                renter_id = request["renter_id"]

                if not mark_listing_rented(conn, listing_id, renter_id, now):
                    listing = get_listing(conn, listing_id)
                    if listing is None:
                        raise NotFound("This dog listing no longer exists.")
                    already_rented_by_renter = (
                        listing["status"] == ListingStatus.RENTED.value
                        and listing["rented_by"] == renter_id
                    )
                    if not already_rented_by_renter:
                        raise NotAvailable("This dog is no longer awaiting this request.")

                rental_id = new_id("rnt")
                insert_rental(
                    conn,
                    {
                        "id": rental_id,
                        "request_id": request_id,
                        "listing_id": listing_id,
                        "owner_id": request["owner_id"],
                        "renter_id": renter_id,
                        "start_date": request["requested_start"],
                        "end_date": request["requested_end"],
                        "total_cost": request["total_cost"],
                        "status": RentalStatus.ACTIVE.value,
                        "created_at": now,
                    },
                )

        if existing_rental is not None:
            outcome["outcome"] = "replayed"
            logger.info(
                "rental_approval_replayed",
                request_id=request_id,
                rental_id=existing_rental["id"],
            )
            return str(existing_rental["id"])

        logger.info(
            "rental_request_approved",
            request_id=request_id,
            rental_id=rental_id,
            listing_id=listing_id,
            renter_id=renter_id,
        )

    notify(
        engine,
        renter_id,
        NotificationKind.RENTAL_APPROVED,
        message=(
            f"Your request from {request['requested_start'].isoformat()} to "
            f"{request['requested_end'].isoformat()} has been approved!"
        ),
        payload={
            "request_id": request_id,
            "rental_id": rental_id,
            "listing_id": listing_id,
            "total_cost": str(request["total_cost"]),
        },
    )
    return rental_id


def reject_request(engine: Engine, request_id: str, owner_id: str) -> None:
    """
    Reject a pending request and put the listing back on the market.

    Args:
        engine: SQLAlchemy Engine
        request_id: Pending rental request id
        owner_id: Deciding user; must own the request's listing

    Raises:
        NotFound: request does not exist
        Forbidden: caller is not the owner of record
        AlreadyDecided: request is no longer pending
    """
    with track_operation("reject"):
        now = utc_now()

        with engine.begin() as conn:
            request = load_request(conn, request_id, owner_id, "owner_id")
            ensure_pending(request)
            if not decide_request(conn, request_id, RequestStatus.REJECTED, now):
                raise AlreadyDecided()
            release_requested_listing(conn, request, now)

        logger.info(
            "rental_request_rejected",
            request_id=request_id,
            listing_id=request["listing_id"],
            renter_id=request["renter_id"],
        )

    notify(
        engine,
        request["renter_id"],
        NotificationKind.RENTAL_REJECTED,
        payload={"request_id": request_id, "listing_id": request["listing_id"]},
    )
