from sqlalchemy import Column, Date, DateTime, Numeric, String
from sqlalchemy.sql import func

from dog_rentals.models.base import Base


class Rental(Base):
    """
    ORM model for a fulfilled booking.

    Created once per approved request; ``request_id`` is unique so a retried
    approval can never produce a second rental.
    """

    __tablename__ = "rentals"

    id = Column(String(40), primary_key=True)
    request_id = Column(String(40), nullable=False, unique=True)
    listing_id = Column(String(40), nullable=False, index=True)
    owner_id = Column(String(128), nullable=False, index=True)
    renter_id = Column(String(128), nullable=False, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    total_cost = Column(Numeric(10, 2), nullable=False)
    status = Column(String(16), nullable=False, default="active")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
