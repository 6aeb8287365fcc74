"""
Integration tests for orphaned request cleanup.
"""

from __future__ import annotations

from datetime import date

import pytest
from prometheus_client import REGISTRY

from dog_rentals.db.readers.rental_requests import get_request
from dog_rentals.db.writers.listings import delete_available_listing, release_listing
from dog_rentals.services.approval import reject_request
from dog_rentals.services.reconciler import (
    list_pending_for_owner,
    list_pending_for_renter,
    reconcile_orphans,
)
from dog_rentals.services.submission import submit_request
from dog_rentals.utils.datetime import utc_now

OWNER = "owner-ada"
RENTER = "renter-bo"
OTHER_RENTER = "renter-cy"
TODAY = date(2024, 5, 20)
START = date(2024, 6, 1)
END = date(2024, 6, 4)


def _orphan(engine, listing_id: str) -> None:
    """Remove a listing out from under its pending request."""
    with engine.begin() as conn:
        release_listing(conn, listing_id, RENTER, utc_now())
        delete_available_listing(conn, listing_id)


@pytest.mark.integration
def test_owner_pending_list_returns_pending_requests_oldest_first(engine, make_listing):
    """Test that the owner sees every pending request in submission order."""
    first_listing = make_listing(name="Rex")
    second_listing = make_listing(name="Fido")
    first = submit_request(engine, first_listing, RENTER, START, END, today=TODAY)
    second = submit_request(engine, second_listing, OTHER_RENTER, START, END, today=TODAY)

    pending = list_pending_for_owner(engine, OWNER)

    assert [r["id"] for r in pending] == [first, second]


@pytest.mark.integration
def test_owner_pending_list_excludes_decided_requests(engine, pending_request):
    """Test that rejected requests drop off the pending list."""
    _, request_id = pending_request
    reject_request(engine, request_id, OWNER)

    assert list_pending_for_owner(engine, OWNER) == []


@pytest.mark.integration
def test_owner_pending_list_deletes_orphans(engine, make_listing):
    """Test that a request whose listing was deleted is removed, not returned."""
    orphaned_listing = make_listing(name="Ghost")
    live_listing = make_listing(name="Rex")
    orphan_id = submit_request(engine, orphaned_listing, RENTER, START, END, today=TODAY)
    live_id = submit_request(engine, live_listing, OTHER_RENTER, START, END, today=TODAY)
    _orphan(engine, orphaned_listing)

    pending = list_pending_for_owner(engine, OWNER)

    assert [r["id"] for r in pending] == [live_id]
    with engine.connect() as conn:
        assert get_request(conn, orphan_id) is None


@pytest.mark.integration
def test_renter_pending_list_deletes_orphans(engine, pending_request):
    """Test that the renter's view also prunes orphans."""
    listing_id, request_id = pending_request
    _orphan(engine, listing_id)

    assert list_pending_for_renter(engine, RENTER) == []
    with engine.connect() as conn:
        assert get_request(conn, request_id) is None


@pytest.mark.integration
def test_renter_pending_list_only_shows_own_requests(engine, make_listing):
    """Test that renters only see the requests they made."""
    mine = submit_request(engine, make_listing(name="Rex"), RENTER, START, END, today=TODAY)
    submit_request(engine, make_listing(name="Fido"), OTHER_RENTER, START, END, today=TODAY)

    assert [r["id"] for r in list_pending_for_renter(engine, RENTER)] == [mine]


@pytest.mark.integration
def test_reconcile_orphans_sweeps_all_owners(engine, make_listing):
    """Test that the sweep removes orphans regardless of owner and reports the count."""
    first = make_listing(owner_id="owner-1", name="Rex")
    second = make_listing(owner_id="owner-2", name="Fido")
    kept = make_listing(owner_id="owner-3", name="Bella")
    submit_request(engine, first, RENTER, START, END, today=TODAY)
    submit_request(engine, second, RENTER, START, END, today=TODAY)
    kept_id = submit_request(engine, kept, RENTER, START, END, today=TODAY)
    _orphan(engine, first)
    _orphan(engine, second)
    before = REGISTRY.get_sample_value("dog_rentals_orphaned_requests_removed_total") or 0

    removed = reconcile_orphans(engine)

    assert removed == 2
    assert [r["id"] for r in list_pending_for_renter(engine, RENTER)] == [kept_id]
    after = REGISTRY.get_sample_value("dog_rentals_orphaned_requests_removed_total")
    assert after == before + 2


@pytest.mark.integration
def test_reconcile_orphans_with_nothing_to_do(engine, pending_request):
    """Test that a clean database reports zero removals."""
    assert reconcile_orphans(engine) == 0
