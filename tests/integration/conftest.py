"""
Shared fixtures for integration tests.

Every test gets its own in-memory SQLite database with the full schema, so
tests never see each other's rows and need no cleanup.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from dog_rentals.db.engine import build_engine
from dog_rentals.dependencies import get_db_engine
from dog_rentals.main import app
from dog_rentals.models.base import Base
from dog_rentals.models.listings import Listing  # noqa: F401
from dog_rentals.models.notifications import Notification  # noqa: F401
from dog_rentals.models.rental_requests import RentalRequest  # noqa: F401
from dog_rentals.models.rentals import Rental  # noqa: F401
from dog_rentals.services.listings import create_listing
from dog_rentals.services.submission import submit_request

OWNER = "owner-ada"
RENTER = "renter-bo"
OTHER_RENTER = "renter-cy"

# Fixed reference day so window checks do not depend on the wall clock
TODAY = date(2024, 5, 20)
START = date(2024, 6, 1)
END = date(2024, 6, 4)


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory database with all tables created."""
    test_engine = build_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def make_listing(engine: Engine) -> Callable[..., str]:
    """Factory that creates an available listing and returns its id."""

    def _make(owner_id: str = OWNER, name: str = "Rex", price: str = "50.00") -> str:
        return create_listing(
            engine, owner_id=owner_id, name=name, price_per_day=Decimal(price), breed="Beagle"
        )

    return _make


@pytest.fixture
def listing_id(make_listing: Callable[..., str]) -> str:
    """An available listing owned by OWNER at 50.00 per day."""
    return make_listing()


@pytest.fixture
def pending_request(engine: Engine, listing_id: str) -> tuple[str, str]:
    """
    A pending request by RENTER for listing_id, June 1 to June 4 2024.

    Returns tuple of (listing_id, request_id).
    """
    request_id = submit_request(engine, listing_id, RENTER, START, END, today=TODAY)
    return listing_id, request_id


@pytest.fixture
def client(engine: Engine) -> Generator[TestClient, None, None]:
    """API client wired to the per-test database."""
    app.dependency_overrides[get_db_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()
