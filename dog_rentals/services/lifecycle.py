"""
State-machine and validation helpers shared by the lifecycle services.

The joint listing/request state machine:

    listing    request   operation  -> listing    request
    available  (none)    submit        requested  pending
    requested  pending   approve       rented     approved (+ rental)
    requested  pending   reject        available  rejected
    requested  pending   cancel        available  cancelled
"""

from __future__ import annotations

import math
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterator

import structlog
from sqlalchemy.engine import Connection

from dog_rentals.db.readers.rental_requests import get_request
from dog_rentals.db.writers.listings import release_listing
from dog_rentals.errors import AlreadyDecided, Forbidden, InvalidWindow, NotFound, RentalError
from dog_rentals.metrics import lifecycle_transitions, operation_duration
from dog_rentals.models.enums import RequestStatus

logger = structlog.get_logger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def validate_window(start: date, end: date, today: date) -> None:
    """
    Check a requested rental window.

    Raises:
        InvalidWindow: if start is in the past or end is not after start.
    """
    if start < today:
        raise InvalidWindow("Start date cannot be in the past.")
    if end <= start:
        raise InvalidWindow("End date must be after start date.")


def duration_in_days(start: date | datetime, end: date | datetime) -> int:
    """
    Number of billable days between start and end, rounding partial days up.

    Example:
        >>> duration_in_days(date(2024, 6, 1), date(2024, 6, 4))
        3
    """
    return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)


def total_cost(duration_days: int, price_per_day: Decimal | int | float | str) -> Decimal:
    """Price for the whole rental, frozen at submission time."""
    return Decimal(duration_days) * Decimal(str(price_per_day))


def load_request(
    conn: Connection, request_id: str, actor_id: str, actor_field: str
) -> dict[str, Any]:
    """
    Load and lock a request, checking the caller is its owner or renter of record.

    Args:
        conn: Connection inside the caller's transaction
        request_id: Rental request id
        actor_id: Caller's user id
        actor_field: "owner_id" for owner decisions, "renter_id" for renter actions

    Raises:
        NotFound: if the request does not exist.
        Forbidden: if the caller is not the party of record.
    """
    request = get_request(conn, request_id, for_update=True)
    if request is None:
        raise NotFound("This rental request no longer exists.")
    if request[actor_field] != actor_id:
        if actor_field == "owner_id":
            raise Forbidden("You may not decide on this request.")
        raise Forbidden("You may not cancel this request.")
    return request


def ensure_pending(request: dict[str, Any]) -> None:
    """Raise AlreadyDecided unless the request is still pending."""
    status = RequestStatus(request["status"])
    if status.is_terminal:
        raise AlreadyDecided(f"This request was already {status.value}.")


def release_requested_listing(conn: Connection, request: dict[str, Any], now: datetime) -> None:
    """
    Return the request's listing to available after a rejection or cancellation.

    A listing that is missing or no longer linked to this renter is left
    untouched; the decision on the request still stands.
    """
    if not release_listing(conn, request["listing_id"], request["renter_id"], now):
        logger.warning(
            "listing_not_released",
            request_id=request["id"],
            listing_id=request["listing_id"],
            renter_id=request["renter_id"],
        )


@contextmanager
def track_operation(operation: str) -> Iterator[dict[str, str]]:
    """
    Time a lifecycle operation and count its outcome.

    The yielded dict's "outcome" may be changed by the caller (e.g. to
    "replayed"); refused operations are counted under their error code.
    """
    state = {"outcome": "success"}
    with operation_duration.labels(operation=operation).time():
        try:
            yield state
        except RentalError as exc:
            lifecycle_transitions.labels(operation=operation, outcome=exc.code).inc()
            logger.info("rental_operation_refused", operation=operation, error=exc.code)
            raise
        except Exception:
            lifecycle_transitions.labels(operation=operation, outcome="error").inc()
            raise
    lifecycle_transitions.labels(operation=operation, outcome=state["outcome"]).inc()
