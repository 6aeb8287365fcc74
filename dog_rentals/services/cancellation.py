"""Renter-side withdrawal of pending rental requests."""

from __future__ import annotations

import structlog
from sqlalchemy.engine import Engine

from dog_rentals.config import NOTIFY_OWNER_ON_CANCEL
from dog_rentals.db.writers.rental_requests import decide_request
from dog_rentals.errors import AlreadyDecided
from dog_rentals.models.enums import NotificationKind, RequestStatus
from dog_rentals.services.lifecycle import (
    ensure_pending,
    load_request,
    release_requested_listing,
    track_operation,
)
from dog_rentals.services.notifications import notify
from dog_rentals.utils.datetime import utc_now

logger = structlog.get_logger(__name__)


def cancel_request(engine: Engine, request_id: str, renter_id: str) -> None:
    """
    Cancel a pending request and return the listing to available.

    Args:
        engine: SQLAlchemy Engine
        request_id: Pending rental request id
        renter_id: Caller; must be the renter who made the request

    Raises:
        NotFound: request does not exist
        Forbidden: caller is not the renter of record
        AlreadyDecided: request is no longer pending
    """
    with track_operation("cancel"):
        now = utc_now()

        with engine.begin() as conn:
            request = load_request(conn, request_id, renter_id, "renter_id")
            ensure_pending(request)
            if not decide_request(conn, request_id, RequestStatus.CANCELLED, now):
                raise AlreadyDecided()
            release_requested_listing(conn, request, now)

        logger.info(
            "rental_request_cancelled",
            request_id=request_id,
            listing_id=request["listing_id"],
            renter_id=renter_id,
        )

    if NOTIFY_OWNER_ON_CANCEL:
        notify(
            engine,
            request["owner_id"],
            NotificationKind.RENTAL_CANCELLED,
            message=f"{renter_id} cancelled their rental request.",
            payload={"request_id": request_id, "listing_id": request["listing_id"]},
        )
