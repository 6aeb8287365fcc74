"""
Integration tests for listing state writers.

Each writer is a compare-and-swap: it reports False instead of overwriting
when the listing is not in the state the caller expects.
"""

from __future__ import annotations

import pytest

from dog_rentals.db.readers.listings import get_listing
from dog_rentals.db.writers.listings import (
    claim_listing,
    delete_available_listing,
    mark_listing_rented,
    release_listing,
    update_listing_details,
)
from dog_rentals.utils.datetime import utc_now

RENTER = "renter-bo"
OTHER_RENTER = "renter-cy"


@pytest.mark.integration
def test_claim_listing_only_succeeds_once(engine, listing_id):
    """Test that a second claim on the same listing loses."""
    with engine.begin() as conn:
        assert claim_listing(conn, listing_id, RENTER, utc_now()) is True
        assert claim_listing(conn, listing_id, OTHER_RENTER, utc_now()) is False
        listing = get_listing(conn, listing_id)

    assert listing["requested_by"] == RENTER
    assert listing["available"] is False


@pytest.mark.integration
def test_claim_missing_listing_returns_false(engine):
    """Test that claiming an unknown listing reports failure."""
    with engine.begin() as conn:
        assert claim_listing(conn, "lst_missing", RENTER, utc_now()) is False


@pytest.mark.integration
def test_mark_rented_requires_matching_renter(engine, listing_id):
    """Test that only the renter who claimed the listing can be recorded as renting it."""
    with engine.begin() as conn:
        claim_listing(conn, listing_id, RENTER, utc_now())

        assert mark_listing_rented(conn, listing_id, OTHER_RENTER, utc_now()) is False
        assert mark_listing_rented(conn, listing_id, RENTER, utc_now()) is True
        assert mark_listing_rented(conn, listing_id, RENTER, utc_now()) is False

        listing = get_listing(conn, listing_id)

    assert listing["status"] == "rented"
    assert listing["rented_by"] == RENTER
    assert listing["requested_by"] is None
    assert listing["requested_at"] is None


@pytest.mark.integration
def test_release_listing_requires_requested_state(engine, listing_id):
    """Test that release only applies to a listing requested by the given renter."""
    with engine.begin() as conn:
        assert release_listing(conn, listing_id, RENTER, utc_now()) is False

        claim_listing(conn, listing_id, RENTER, utc_now())
        assert release_listing(conn, listing_id, OTHER_RENTER, utc_now()) is False
        assert release_listing(conn, listing_id, RENTER, utc_now()) is True

        listing = get_listing(conn, listing_id)

    assert listing["status"] == "available"
    assert listing["available"] is True


@pytest.mark.integration
def test_delete_only_removes_available_listing(engine, listing_id):
    """Test that a claimed listing survives a delete attempt."""
    with engine.begin() as conn:
        claim_listing(conn, listing_id, RENTER, utc_now())
        assert delete_available_listing(conn, listing_id) is False

        release_listing(conn, listing_id, RENTER, utc_now())
        assert delete_available_listing(conn, listing_id) is True
        assert get_listing(conn, listing_id) is None


@pytest.mark.integration
def test_update_listing_details(engine, listing_id):
    """Test that detail updates touch only the given fields."""
    with engine.begin() as conn:
        assert update_listing_details(conn, listing_id, {"location": "Leeds"}, utc_now()) is True
        listing = get_listing(conn, listing_id)

    assert listing["location"] == "Leeds"
    assert listing["name"] == "Rex"
