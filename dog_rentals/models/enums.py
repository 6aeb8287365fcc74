"""Status and kind vocabularies shared by the ORM models and services."""

from enum import Enum


class ListingStatus(str, Enum):
    AVAILABLE = "available"
    REQUESTED = "requested"
    RENTED = "rented"


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not RequestStatus.PENDING


class RentalStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class NotificationKind(str, Enum):
    RENTAL_REQUEST = "rental_request"
    RENTAL_APPROVED = "rental_approved"
    RENTAL_REJECTED = "rental_rejected"
    RENTAL_CANCELLED = "rental_cancelled"
    RENTAL_REMINDER = "rental_reminder"
    RENTAL_STARTED = "rental_started"
    RENTAL_COMPLETED = "rental_completed"
    WELCOME = "welcome"
    SYSTEM = "system"
