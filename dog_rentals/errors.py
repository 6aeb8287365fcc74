"""
Typed errors raised by the rental lifecycle services.

Every precondition failure maps to exactly one subclass of RentalError. Each
kind carries a stable machine-readable ``code`` and a user-facing message, so
callers can tell "this dog is no longer available" (browse elsewhere) apart
from "you may not decide on this request" (refresh) without string matching.
"""

from __future__ import annotations


class RentalError(Exception):
    """Base class for rental lifecycle precondition failures."""

    code = "rental_error"
    default_message = "The rental operation could not be completed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(RentalError):
    code = "not_found"
    default_message = "The listing or request no longer exists."


class InvalidWindow(RentalError):
    code = "invalid_window"
    default_message = "The requested rental dates are not valid."


class NotAvailable(RentalError):
    code = "not_available"
    default_message = "This dog is no longer available."


class Forbidden(RentalError):
    code = "forbidden"
    default_message = "You may not act on this request."


class AlreadyDecided(RentalError):
    code = "already_decided"
    default_message = "This request has already been decided."
