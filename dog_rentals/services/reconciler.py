"""
Read-time cleanup of orphaned rental requests.

An orphan is a pending request whose listing no longer exists. Listing
deletion is refused unless the listing is available, but rows can still
disappear out of band (manual cleanup, data fixes), so every pending-request
read drops and deletes orphans before returning.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog
from sqlalchemy.engine import Connection, Engine

from dog_rentals.db.readers.listings import existing_listing_ids
from dog_rentals.db.readers.rental_requests import list_pending_requests
from dog_rentals.db.writers.rental_requests import delete_requests
from dog_rentals.metrics import orphaned_requests_removed

logger = structlog.get_logger(__name__)


def _prune_orphans(conn: Connection, requests: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Delete requests whose listing is gone and return the ones that remain.

    Args:
        conn: Connection inside the caller's transaction
        requests: Pending request rows

    Returns:
        list[dict[str, Any]]: Requests whose listing still exists, in input order.
    """
    live_ids = existing_listing_ids(conn, {r["listing_id"] for r in requests})
    orphans = [r for r in requests if r["listing_id"] not in live_ids]

    if orphans:
        delete_requests(conn, [r["id"] for r in orphans])
        orphaned_requests_removed.inc(len(orphans))
        for orphan in orphans:
            logger.warning(
                "orphaned_request_removed",
                request_id=orphan["id"],
                listing_id=orphan["listing_id"],
            )

    return [r for r in requests if r["listing_id"] in live_ids]


def _pending_without_orphans(
    engine: Engine, owner_id: Optional[str] = None, renter_id: Optional[str] = None
) -> list[dict[str, Any]]:
    with engine.begin() as conn:
        requests = list_pending_requests(conn, owner_id=owner_id, renter_id=renter_id)
        return _prune_orphans(conn, requests)


def list_pending_for_owner(engine: Engine, owner_id: str) -> list[dict[str, Any]]:
    """
    List the owner's pending requests, deleting any whose listing is gone.

    Args:
        engine: SQLAlchemy Engine
        owner_id: Owner whose incoming requests to list

    Returns:
        list[dict[str, Any]]: Pending requests that reference an existing listing.
    """
    return _pending_without_orphans(engine, owner_id=owner_id)


def list_pending_for_renter(engine: Engine, renter_id: str) -> list[dict[str, Any]]:
    """List the renter's own pending requests, deleting any whose listing is gone."""
    return _pending_without_orphans(engine, renter_id=renter_id)


def reconcile_orphans(engine: Engine) -> int:
    """
    Sweep every pending request and delete the orphans.

    Returns:
        int: Number of orphaned requests removed.
    """
    with engine.begin() as conn:
        requests = list_pending_requests(conn)
        remaining = _prune_orphans(conn, requests)

    removed = len(requests) - len(remaining)
    logger.info("orphan_reconciliation_completed", scanned=len(requests), removed=removed)
    return removed
