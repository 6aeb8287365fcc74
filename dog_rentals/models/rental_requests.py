from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy import text as sql_text
from sqlalchemy.sql import func

from dog_rentals.models.base import Base


class RentalRequest(Base):
    """
    ORM model for a renter's proposal to rent a listing for a date range.

    ``duration_days`` and ``total_cost`` are frozen at submission and never
    recomputed. At most one request per listing may be pending; the partial
    unique index enforces that in the database.
    """

    __tablename__ = "rental_requests"
    __table_args__ = (
        CheckConstraint("requested_end > requested_start", name="ck_rental_requests_window"),
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'cancelled')",
            name="ck_rental_requests_status",
        ),
        Index(
            "uq_rental_requests_pending_listing",
            "listing_id",
            unique=True,
            postgresql_where=sql_text("status = 'pending'"),
            sqlite_where=sql_text("status = 'pending'"),
        ),
    )

    id = Column(String(40), primary_key=True)
    listing_id = Column(String(40), nullable=False, index=True)
    owner_id = Column(String(128), nullable=False, index=True)
    renter_id = Column(String(128), nullable=False, index=True)
    requested_start = Column(Date, nullable=False)
    requested_end = Column(Date, nullable=False)
    duration_days = Column(Integer, nullable=False)
    total_cost = Column(Numeric(10, 2), nullable=False)
    contact_info = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(String(16), nullable=False, default="pending", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    decision_at = Column(DateTime(timezone=True), nullable=True)
