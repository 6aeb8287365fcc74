from datetime import date, datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field


class RentalRequestPayload(BaseModel):
    """
    Schema for a renter asking to rent a listing.
    """

    start: date = Field(..., description="First day of the rental")
    end: date = Field(..., description="Day the dog is returned")
    contact_info: Optional[str] = Field(None, description="How the owner can reach the renter")
    notes: Optional[str] = Field(None, description="Special requests")


class RequestSubmitted(BaseModel):
    request_id: str


class RequestApproved(BaseModel):
    rental_id: str


class RentalRequestRecord(BaseModel):
    id: str
    listing_id: str
    owner_id: str
    renter_id: str
    requested_start: date
    requested_end: date
    duration_days: int
    total_cost: Decimal
    contact_info: Optional[str] = None
    notes: Optional[str] = None
    status: Literal["pending", "approved", "rejected", "cancelled"]
    created_at: datetime
    decision_at: Optional[datetime] = None


class RentalRecord(BaseModel):
    id: str
    request_id: str
    listing_id: str
    owner_id: str
    renter_id: str
    start_date: date
    end_date: date
    total_cost: Decimal
    status: Literal["active", "completed"]
    created_at: datetime
