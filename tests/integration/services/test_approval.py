"""
Integration tests for owner decisions: approve and reject.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest
from sqlalchemy import func, select

from dog_rentals.db.readers.listings import get_listing
from dog_rentals.db.readers.notifications import list_notifications
from dog_rentals.db.readers.rental_requests import get_request
from dog_rentals.db.readers.rentals import get_rental_for_request
from dog_rentals.db.writers.listings import delete_available_listing, release_listing
from dog_rentals.db.writers.rental_requests import decide_request
from dog_rentals.errors import AlreadyDecided, Forbidden, NotAvailable, NotFound
from dog_rentals.models.enums import RequestStatus
from dog_rentals.models.rentals import Rental
from dog_rentals.services.approval import approve_request, reject_request
from dog_rentals.services.cancellation import cancel_request
from dog_rentals.services.listings import update_listing
from dog_rentals.services.submission import submit_request
from dog_rentals.utils.datetime import utc_now

OWNER = "owner-ada"
RENTER = "renter-bo"
OTHER_RENTER = "renter-cy"
TODAY = date(2024, 5, 20)
START = date(2024, 6, 1)
END = date(2024, 6, 4)


def _count_rentals(engine) -> int:
    with engine.connect() as conn:
        return conn.execute(select(func.count()).select_from(Rental)).scalar_one()


def _kinds(engine, user_id: str) -> list[str]:
    with engine.connect() as conn:
        return [n["kind"] for n in list_notifications(conn, user_id)]


@pytest.mark.integration
def test_approve_creates_active_rental(engine, pending_request):
    """Test that approval records the rental with the window and cost from the request."""
    listing_id, request_id = pending_request

    rental_id = approve_request(engine, request_id, OWNER)

    with engine.connect() as conn:
        rental = get_rental_for_request(conn, request_id)
        request = get_request(conn, request_id)
        listing = get_listing(conn, listing_id)

    assert rental_id.startswith("rnt_")
    assert rental["id"] == rental_id
    assert rental["status"] == "active"
    assert rental["listing_id"] == listing_id
    assert rental["owner_id"] == OWNER
    assert rental["renter_id"] == RENTER
    assert rental["start_date"] == START
    assert rental["end_date"] == END
    assert rental["total_cost"] == Decimal("150")

    assert request["status"] == "approved"
    assert request["decision_at"] is not None

    assert listing["status"] == "rented"
    assert listing["available"] is False
    assert listing["rented_by"] == RENTER
    assert listing["rented_at"] is not None
    assert listing["requested_by"] is None


@pytest.mark.integration
def test_approve_notifies_renter(engine, pending_request):
    """Test that the renter gets a rental_approved notification with the rental id."""
    _, request_id = pending_request

    rental_id = approve_request(engine, request_id, OWNER)

    with engine.connect() as conn:
        inbox = list_notifications(conn, RENTER)

    assert len(inbox) == 1
    assert inbox[0]["kind"] == "rental_approved"
    assert inbox[0]["payload"]["rental_id"] == rental_id
    assert "2024-06-01" in inbox[0]["message"]


@pytest.mark.integration
def test_approve_is_idempotent(engine, pending_request):
    """Test that approving twice returns the same rental and notifies once."""
    _, request_id = pending_request

    first = approve_request(engine, request_id, OWNER)
    second = approve_request(engine, request_id, OWNER)

    assert first == second
    assert _count_rentals(engine) == 1
    assert _kinds(engine, RENTER) == ["rental_approved"]


@pytest.mark.integration
def test_approve_resumes_interrupted_approval(engine, pending_request):
    """Test that an approved request without a rental gets its remaining steps completed."""
    listing_id, request_id = pending_request
    with engine.begin() as conn:
        decide_request(conn, request_id, RequestStatus.APPROVED, utc_now())

    rental_id = approve_request(engine, request_id, OWNER)

    with engine.connect() as conn:
        assert get_rental_for_request(conn, request_id)["id"] == rental_id
        assert get_listing(conn, listing_id)["status"] == "rented"


@pytest.mark.integration
def test_approve_keeps_frozen_cost_after_price_change(engine, pending_request):
    """Test that a price edit after submission does not change the rental cost."""
    listing_id, request_id = pending_request
    update_listing(engine, listing_id, OWNER, {"price_per_day": Decimal("80.00")})

    approve_request(engine, request_id, OWNER)

    with engine.connect() as conn:
        rental = get_rental_for_request(conn, request_id)
        listing = get_listing(conn, listing_id)

    assert rental["total_cost"] == Decimal("150")
    assert listing["price_per_day"] == Decimal("80")


@pytest.mark.integration
def test_approve_by_non_owner_is_forbidden(engine, pending_request):
    """Test that only the owner of record can approve."""
    listing_id, request_id = pending_request

    with pytest.raises(Forbidden) as exc_info:
        approve_request(engine, request_id, OTHER_RENTER)

    assert exc_info.value.message == "You may not decide on this request."
    with engine.connect() as conn:
        assert get_request(conn, request_id)["status"] == "pending"
        assert get_listing(conn, listing_id)["status"] == "requested"


@pytest.mark.integration
def test_approve_unknown_request_raises_not_found(engine):
    """Test that approving a missing request raises NotFound."""
    with pytest.raises(NotFound):
        approve_request(engine, "req_missing", OWNER)


@pytest.mark.integration
def test_approve_cancelled_request_raises_already_decided(engine, pending_request):
    """Test that a request cancelled by the renter can no longer be approved."""
    _, request_id = pending_request
    cancel_request(engine, request_id, RENTER)

    with pytest.raises(AlreadyDecided):
        approve_request(engine, request_id, OWNER)

    assert _count_rentals(engine) == 0


@pytest.mark.integration
def test_approve_rolls_back_when_listing_not_requested_by_renter(engine, pending_request):
    """Test that approval fails as a whole if the listing is no longer claimed by the renter."""
    listing_id, request_id = pending_request
    with engine.begin() as conn:
        release_listing(conn, listing_id, RENTER, utc_now())

    with pytest.raises(NotAvailable):
        approve_request(engine, request_id, OWNER)

    with engine.connect() as conn:
        assert get_request(conn, request_id)["status"] == "pending"
    assert _count_rentals(engine) == 0


@pytest.mark.integration
def test_approve_with_deleted_listing_raises_not_found(engine, pending_request):
    """Test that approving a request whose listing vanished raises NotFound."""
    listing_id, request_id = pending_request
    with engine.begin() as conn:
        release_listing(conn, listing_id, RENTER, utc_now())
        delete_available_listing(conn, listing_id)

    with pytest.raises(NotFound):
        approve_request(engine, request_id, OWNER)

    with engine.connect() as conn:
        assert get_request(conn, request_id)["status"] == "pending"


@pytest.mark.integration
def test_approve_succeeds_when_notification_fails(engine, pending_request):
    """Test that the rental stands even if the renter cannot be notified."""
    _, request_id = pending_request

    with patch(
        "dog_rentals.services.notifications.insert_notification",
        side_effect=RuntimeError("inbox offline"),
    ):
        rental_id = approve_request(engine, request_id, OWNER)

    with engine.connect() as conn:
        assert get_rental_for_request(conn, request_id)["id"] == rental_id


@pytest.mark.integration
def test_reject_releases_listing(engine, pending_request):
    """Test that rejection returns the listing to available and notifies the renter."""
    listing_id, request_id = pending_request

    reject_request(engine, request_id, OWNER)

    with engine.connect() as conn:
        request = get_request(conn, request_id)
        listing = get_listing(conn, listing_id)

    assert request["status"] == "rejected"
    assert request["decision_at"] is not None
    assert listing["status"] == "available"
    assert listing["available"] is True
    assert listing["requested_by"] is None
    assert listing["requested_at"] is None
    assert _kinds(engine, RENTER) == ["rental_rejected"]
    assert _count_rentals(engine) == 0


@pytest.mark.integration
def test_reject_then_new_request_is_allowed(engine, pending_request):
    """Test that a rejected listing can be requested again by another renter."""
    listing_id, request_id = pending_request
    reject_request(engine, request_id, OWNER)

    new_request_id = submit_request(engine, listing_id, OTHER_RENTER, START, END, today=TODAY)

    assert new_request_id != request_id


@pytest.mark.integration
def test_reject_twice_raises_already_decided(engine, pending_request):
    """Test that a second rejection is refused."""
    _, request_id = pending_request
    reject_request(engine, request_id, OWNER)

    with pytest.raises(AlreadyDecided):
        reject_request(engine, request_id, OWNER)


@pytest.mark.integration
def test_reject_approved_request_raises_already_decided(engine, pending_request):
    """Test that an approved request cannot be rejected afterwards."""
    listing_id, request_id = pending_request
    approve_request(engine, request_id, OWNER)

    with pytest.raises(AlreadyDecided):
        reject_request(engine, request_id, OWNER)

    with engine.connect() as conn:
        assert get_listing(conn, listing_id)["status"] == "rented"


@pytest.mark.integration
def test_reject_by_renter_is_forbidden(engine, pending_request):
    """Test that the renter cannot reject their own request."""
    _, request_id = pending_request

    with pytest.raises(Forbidden):
        reject_request(engine, request_id, RENTER)
