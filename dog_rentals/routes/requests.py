from typing import Any, Literal

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.engine import Engine

from dog_rentals.dependencies import get_current_user_id, get_db_engine
from dog_rentals.errors import RentalError
from dog_rentals.routes._errors import raise_http_error
from dog_rentals.schemas.rentals import RentalRecord, RentalRequestRecord, RequestApproved
from dog_rentals.services.approval import approve_request, reject_request
from dog_rentals.services.cancellation import cancel_request
from dog_rentals.services.reconciler import list_pending_for_owner, list_pending_for_renter
from dog_rentals.services.rentals import list_rentals_for_user

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.get("/requests/pending", response_model=list[RentalRequestRecord])
def list_pending_endpoint(
    role: Literal["owner", "renter"] = Query("owner", description="View as owner or renter"),
    user_id: str = Depends(get_current_user_id),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    """
    Pending requests addressed to the caller (owner) or made by the caller (renter).

    Requests whose listing has been deleted are removed, not returned.
    """
    if role == "owner":
        return list_pending_for_owner(engine, user_id)
    return list_pending_for_renter(engine, user_id)


@router.post("/requests/{request_id}/approve", response_model=RequestApproved)
def approve_endpoint(
    request_id: str,
    user_id: str = Depends(get_current_user_id),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    """
    Approve a pending request (listing owner only). Safe to retry.

    Returns:
        RequestApproved: Id of the rental created for the request
    """
    try:
        rental_id = approve_request(engine, request_id, user_id)
        return RequestApproved(rental_id=rental_id)
    except RentalError as e:
        raise_http_error(e)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("rental_approval_failed", request_id=request_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/requests/{request_id}/reject")
def reject_endpoint(
    request_id: str,
    user_id: str = Depends(get_current_user_id),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, str]:
    """Reject a pending request (listing owner only)."""
    try:
        reject_request(engine, request_id, user_id)
        return {"message": f"Request {request_id} rejected"}
    except RentalError as e:
        raise_http_error(e)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("rental_rejection_failed", request_id=request_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/requests/{request_id}/cancel")
def cancel_endpoint(
    request_id: str,
    user_id: str = Depends(get_current_user_id),
    engine: Engine = Depends(get_db_engine),
) -> dict[str, str]:
    """Withdraw a pending request (requesting renter only)."""
    try:
        cancel_request(engine, request_id, user_id)
        return {"message": f"Request {request_id} cancelled"}
    except RentalError as e:
        raise_http_error(e)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("rental_cancellation_failed", request_id=request_id, error=str(e))
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/rentals", response_model=list[RentalRecord])
def list_rentals_endpoint(
    role: Literal["owner", "renter"] = Query("renter", description="View as owner or renter"),
    user_id: str = Depends(get_current_user_id),
    engine: Engine = Depends(get_db_engine),
) -> Any:
    """Rentals where the caller is the owner or the renter, newest first."""
    return list_rentals_for_user(engine, user_id, role)
