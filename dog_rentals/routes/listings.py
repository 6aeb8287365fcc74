from typing import Any, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.engine import Engine

from dog_rentals.dependencies import get_current_user_id, get_db_engine
from dog_rentals.errors import RentalError
from dog_rentals.routes._errors import raise_http_error
from dog_rentals.schemas.listings import ListingCreatePayload, ListingRecord, ListingUpdatePayload
from dog_rentals.schemas.rentals import RentalRequestPayload, RequestSubmitted
from dog_rentals.services.listings import (
    browse_listings,
    create_listing,
    delete_listing,
    fetch_listing,
    list_owner_listings,
    update_listing,
)
from dog_rentals.services.submission import submit_request

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/listings", status_code=status.HTTP_201_CREATED, response_model=ListingRecord)
def create_listing_endpoint(
    payload: ListingCreatePayload,
    user_id: str = Depends(get_current_user_id),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    """
    List a dog for rent. The caller becomes the listing's owner.

    Returns:
        ListingRecord: The new, available listing
    """
    try:
        listing_id = create_listing(engine, owner_id=user_id, **payload.model_dump())
        return fetch_listing(engine, listing_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("listing_creation_failed", owner_id=user_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/listings", response_model=list[ListingRecord])
def list_listings_endpoint(
    available_only: bool = Query(False, description="Only dogs open for requests"),
    owner_id: Optional[str] = Query(None, description="Only dogs of this owner"),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    """Browse listings, newest first."""
    if owner_id is not None:
        listings = list_owner_listings(engine, owner_id)
        if available_only:
            listings = [listing for listing in listings if listing["available"]]
        return listings
    return browse_listings(engine, available_only=available_only)


@router.get("/listings/{listing_id}", response_model=ListingRecord)
def get_listing_endpoint(listing_id: str, engine: Engine = Depends(get_db_engine)) -> Any:
    try:
        return fetch_listing(engine, listing_id)
    except RentalError as e:
        raise_http_error(e)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("listing_fetch_failed", listing_id=listing_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/listings/{listing_id}", response_model=ListingRecord)
def update_listing_endpoint(
    listing_id: str,
    payload: ListingUpdatePayload,
    user_id: str = Depends(get_current_user_id),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    """
    Edit a listing's descriptive or pricing fields (owner only).

    Only fields present in the payload are changed.
    """
    try:
        return update_listing(
            engine, listing_id, user_id, payload.model_dump(exclude_unset=True)
        )
    except RentalError as e:
        raise_http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("listing_update_failed", listing_id=listing_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/listings/{listing_id}", status_code=status.HTTP_200_OK)
def delete_listing_endpoint(
    listing_id: str,
    user_id: str = Depends(get_current_user_id),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, str]:
    """Delete an available listing (owner only)."""
    try:
        delete_listing(engine, listing_id, user_id)
        return {"message": f"Listing {listing_id} deleted"}
    except RentalError as e:
        raise_http_error(e)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("listing_deletion_failed", listing_id=listing_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post(
    "/listings/{listing_id}/requests",
    status_code=status.HTTP_201_CREATED,
    response_model=RequestSubmitted,
)
def submit_request_endpoint(
    listing_id: str,
    payload: RentalRequestPayload,
    user_id: str = Depends(get_current_user_id),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    """
    Ask to rent a listing for a date range. The caller is the renter.

    Returns:
        RequestSubmitted: Id of the new pending request
    """
    try:
        request_id = submit_request(
            engine,
            listing_id=listing_id,
            renter_id=user_id,
            start=payload.start,
            end=payload.end,
            contact_info=payload.contact_info,
            notes=payload.notes,
        )
        return RequestSubmitted(request_id=request_id)
    except RentalError as e:
        raise_http_error(e)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("rental_request_submission_failed", listing_id=listing_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")
