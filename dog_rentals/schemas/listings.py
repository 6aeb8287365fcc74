from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ListingCreatePayload(BaseModel):
    """
    Schema for listing a new dog for rent.
    """

    name: str = Field(..., min_length=1, description="Dog's name")
    price_per_day: Decimal = Field(
        ..., gt=0, max_digits=10, decimal_places=2, description="Daily rental price"
    )
    breed: Optional[str] = Field(None, description="Breed")
    age: Optional[int] = Field(None, ge=0, description="Age in years")
    size: Optional[Literal["small", "medium", "large"]] = Field(None, description="Size class")
    description: Optional[str] = Field(None, description="Free-form description")
    location: Optional[str] = Field(None, description="Where the dog is based")
    image_url: Optional[str] = Field(None, description="Photo URL from the asset store")


class ListingUpdatePayload(BaseModel):
    """
    Schema for editing a listing. All fields are optional.
    Note: availability and status are managed by the rental workflow.
    """

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1)
    price_per_day: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    breed: Optional[str] = None
    age: Optional[int] = Field(None, ge=0)
    size: Optional[Literal["small", "medium", "large"]] = None
    description: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None


class ListingRecord(BaseModel):
    id: str
    owner_id: str
    name: str
    breed: Optional[str] = None
    age: Optional[int] = None
    size: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None
    price_per_day: Decimal
    available: bool
    status: Literal["available", "requested", "rented"]
    requested_by: Optional[str] = None
    requested_at: Optional[datetime] = None
    rented_by: Optional[str] = None
    rented_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
