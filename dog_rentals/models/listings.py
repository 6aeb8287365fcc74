from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.sql import func

from dog_rentals.models.base import Base


class Listing(Base):
    """
    ORM model for a dog offered for rent by its owner.

    ``available`` mirrors ``status``: it is true exactly when the listing is
    in the ``available`` state. The requested_* columns are set only while a
    request is pending and the rented_* columns only while a rental is active.
    """

    __tablename__ = "listings"
    __table_args__ = (
        CheckConstraint("price_per_day > 0", name="ck_listings_price_positive"),
        CheckConstraint(
            "status IN ('available', 'requested', 'rented')", name="ck_listings_status"
        ),
        CheckConstraint(
            "available = (status = 'available')", name="ck_listings_available_mirrors_status"
        ),
    )

    id = Column(String(40), primary_key=True)
    owner_id = Column(String(128), nullable=False, index=True)
    name = Column(String(120), nullable=False)
    breed = Column(String(120), nullable=True)
    age = Column(Integer, nullable=True)
    size = Column(String(16), nullable=True)  # small / medium / large
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    image_url = Column(String(1024), nullable=True)
    price_per_day = Column(Numeric(10, 2), nullable=False)
    available = Column(Boolean, nullable=False, default=True)
    status = Column(String(16), nullable=False, default="available", index=True)
    requested_by = Column(String(128), nullable=True)
    requested_at = Column(DateTime(timezone=True), nullable=True)
    rented_by = Column(String(128), nullable=True)
    rented_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
