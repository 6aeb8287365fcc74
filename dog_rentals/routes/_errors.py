"""
Translation of rental lifecycle errors into HTTP responses.

Each error kind keeps its own status code and message so clients can react
differently to "this dog is no longer available" and "you may not decide on
this request".
"""

from __future__ import annotations

from typing import NoReturn

from fastapi import HTTPException, status

from dog_rentals.errors import (
    AlreadyDecided,
    Forbidden,
    InvalidWindow,
    NotAvailable,
    NotFound,
    RentalError,
)

STATUS_BY_ERROR: dict[type[RentalError], int] = {
    NotFound: status.HTTP_404_NOT_FOUND,
    Forbidden: status.HTTP_403_FORBIDDEN,
    NotAvailable: status.HTTP_409_CONFLICT,
    AlreadyDecided: status.HTTP_409_CONFLICT,
    InvalidWindow: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def raise_http_error(exc: RentalError) -> NoReturn:
    """
    Raise the HTTPException matching a rental error.

    Raises:
        HTTPException: with detail {"error": <code>, "message": <user message>}
    """
    raise HTTPException(
        status_code=STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST),
        detail={"error": exc.code, "message": exc.message},
    ) from exc
